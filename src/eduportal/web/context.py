"""Request-scoped context.

Each request builds its own backend client, scoped to the access token in
the request's cookies. Handlers receive everything through RequestContext;
nothing about the session is held at process level.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import Depends, Request
from fastapi.responses import RedirectResponse, Response
from supabase import Client

from eduportal.backend.client import (
    AuthTokens,
    AuthUser,
    create_backend_client,
    get_user,
    scope_to_user,
)
from eduportal.backend.repository import ContentRepository
from eduportal.config.app_config import AppConfig, SessionConfig

logger = structlog.get_logger(__name__)


@dataclass
class RequestContext:
    """Everything a handler needs to talk to the backend for one request."""

    client: Client
    repo: ContentRepository
    user: AuthUser | None = None
    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def has_tokens(self) -> bool:
        return bool(self.access_token and self.refresh_token)


def get_config(request: Request) -> AppConfig:
    """Configuration the app was created with."""
    return request.app.state.config


def get_backend_client(config: AppConfig = Depends(get_config)) -> Client:
    """A fresh Supabase client for this request."""
    return create_backend_client(config.backend)


def get_request_context(
    request: Request,
    client: Client = Depends(get_backend_client),
    config: AppConfig = Depends(get_config),
) -> RequestContext:
    """Resolve the session cookies into a user and a user-scoped client."""
    access_token = request.cookies.get(config.session.access_cookie)
    refresh_token = request.cookies.get(config.session.refresh_cookie)

    user = None
    if access_token:
        user = get_user(client, access_token)
        if user is not None:
            scope_to_user(client, access_token)

    return RequestContext(
        client=client,
        repo=ContentRepository(client),
        user=user,
        access_token=access_token,
        refresh_token=refresh_token,
    )


# =============================================================================
# RESPONSE HELPERS
# =============================================================================


def redirect(path: str, status_code: int = 307) -> RedirectResponse:
    """Redirect to a local path. 307 for page guards, 303 after a POST."""
    return RedirectResponse(url=path, status_code=status_code)


def safe_next(target: str | None, default: str) -> str:
    """Only allow local, non protocol-relative redirect targets."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return default
    if "\\" in target:
        return default
    return target


def set_session_cookies(
    response: Response, tokens: AuthTokens, session: SessionConfig
) -> None:
    for name, value in (
        (session.access_cookie, tokens.access_token),
        (session.refresh_cookie, tokens.refresh_token),
    ):
        response.set_cookie(
            key=name,
            value=value,
            max_age=session.max_age_seconds,
            httponly=True,
            secure=session.secure_cookies,
            samesite="lax",
        )


def clear_session_cookies(response: Response, session: SessionConfig) -> None:
    response.delete_cookie(session.access_cookie)
    response.delete_cookie(session.refresh_cookie)
