"""Supabase client construction and error translation.

A new client is built for every request and scoped to the caller's access
token, so row-level security sees the right user.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator

import httpx
import structlog
from postgrest.exceptions import APIError
from supabase import Client, create_client
from supabase_auth.errors import AuthError as SupabaseAuthError

from eduportal.config.app_config import BackendConfig
from eduportal.errors import AuthError, BackendConfigError, StoreError

logger = structlog.get_logger(__name__)


@dataclass
class AuthUser:
    """The authenticated user as reported by the auth provider."""

    id: str
    email: str | None = None


@dataclass
class AuthTokens:
    """Tokens issued on sign-in or sign-up."""

    access_token: str
    refresh_token: str
    user: AuthUser


def create_backend_client(config: BackendConfig) -> Client:
    """Create a Supabase client from configuration.

    Raises:
        BackendConfigError: If the URL or anon key is missing.
    """
    key = config.get_anon_key()
    if not config.url or not key:
        raise BackendConfigError(
            f"Supabase is not configured (url and ${config.anon_key_env} are required)"
        )
    return create_client(config.url, key)


def scope_to_user(client: Client, access_token: str) -> None:
    """Send the user's JWT on every table query."""
    client.postgrest.auth(access_token)


@contextmanager
def store_call(operation: str) -> Generator[None, None, None]:
    """Translate PostgREST and transport failures into StoreError."""
    try:
        yield
    except APIError as exc:
        message = exc.message or str(exc)
        logger.warning("store_error", operation=operation, code=exc.code, message=message)
        raise StoreError(message, code=exc.code) from exc
    except httpx.HTTPError as exc:
        logger.warning("store_unreachable", operation=operation, error=str(exc))
        raise StoreError(str(exc)) from exc


def _to_user(user) -> AuthUser:
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


def _to_tokens(response) -> AuthTokens | None:
    session = getattr(response, "session", None)
    if session is None:
        return None
    return AuthTokens(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=_to_user(session.user or response.user),
    )


def sign_in(client: Client, email: str, password: str) -> AuthTokens:
    """Sign in with email and password.

    Raises:
        AuthError: On bad credentials or any provider-side auth failure.
    """
    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except SupabaseAuthError as exc:
        logger.info("sign_in_failed", reason=exc.message)
        raise AuthError(exc.message) from exc

    tokens = _to_tokens(response)
    if tokens is None:
        raise AuthError("No session returned by the auth provider")

    logger.info("signed_in", user_id=tokens.user.id)
    return tokens


def sign_up(client: Client, email: str, password: str) -> AuthTokens | None:
    """Create an account.

    Returns:
        Tokens when the provider logs the user in immediately, None when
        email confirmation is pending.
    """
    try:
        response = client.auth.sign_up({"email": email, "password": password})
    except SupabaseAuthError as exc:
        logger.info("sign_up_failed", reason=exc.message)
        raise AuthError(exc.message) from exc

    tokens = _to_tokens(response)
    logger.info("signed_up", confirmed=tokens is not None)
    return tokens


def get_user(client: Client, access_token: str) -> AuthUser | None:
    """Resolve the user behind an access token.

    An invalid or expired token yields None rather than an error.
    """
    try:
        response = client.auth.get_user(access_token)
    except SupabaseAuthError as exc:
        logger.debug("session_invalid", reason=exc.message)
        return None

    if response is None or response.user is None:
        return None
    return _to_user(response.user)


def sign_out(client: Client, access_token: str, refresh_token: str) -> None:
    """Revoke the session held in the given tokens.

    Raises:
        AuthError: If the provider rejects the session.
    """
    try:
        client.auth.set_session(access_token, refresh_token)
        client.auth.sign_out()
    except SupabaseAuthError as exc:
        raise AuthError(exc.message) from exc
