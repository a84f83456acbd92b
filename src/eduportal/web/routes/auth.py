"""Login, signup and logout endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from eduportal.backend.client import sign_in, sign_out, sign_up
from eduportal.config.app_config import AppConfig
from eduportal.errors import AuthError
from eduportal.web.context import (
    RequestContext,
    clear_session_cookies,
    get_config,
    get_request_context,
    redirect,
    safe_next,
    set_session_cookies,
)
from eduportal.web.schemas import AuthPageResponse, CredentialsRequest

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["auth"])

DEFAULT_NEXT = "/dashboard"
MIN_PASSWORD_LENGTH = 6


def _auth_failed(exc: AuthError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))


@router.get("/login", response_model=AuthPageResponse)
async def login_page(next: str | None = None) -> AuthPageResponse:
    """Describe the login form."""
    return AuthPageResponse(
        title="Welcome back",
        subtitle="Login to continue your learning.",
        submit_to="/login",
        next=safe_next(next, DEFAULT_NEXT),
    )


@router.post("/login")
def login(
    credentials: CredentialsRequest,
    next: str | None = None,
    ctx: RequestContext = Depends(get_request_context),
    config: AppConfig = Depends(get_config),
):
    """Sign in and go to `next` (default /dashboard)."""
    try:
        tokens = sign_in(ctx.client, credentials.email, credentials.password)
    except AuthError as exc:
        raise _auth_failed(exc) from exc

    response = redirect(safe_next(next, DEFAULT_NEXT), status.HTTP_303_SEE_OTHER)
    set_session_cookies(response, tokens, config.session)
    return response


@router.get("/signup", response_model=AuthPageResponse)
async def signup_page() -> AuthPageResponse:
    """Describe the signup form."""
    return AuthPageResponse(
        title="Create account",
        subtitle="Start tracking your progress.",
        submit_to="/signup",
    )


@router.post("/signup")
def signup(
    credentials: CredentialsRequest,
    ctx: RequestContext = Depends(get_request_context),
    config: AppConfig = Depends(get_config),
):
    """Create an account and go to the dashboard.

    When the provider requires email confirmation no session is issued and
    the dashboard will send the user on to the login page.
    """
    if len(credentials.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
        )

    try:
        tokens = sign_up(ctx.client, credentials.email, credentials.password)
    except AuthError as exc:
        raise _auth_failed(exc) from exc

    response = redirect(DEFAULT_NEXT, status.HTTP_303_SEE_OTHER)
    if tokens is not None:
        set_session_cookies(response, tokens, config.session)
    return response


@router.get("/admin/login", response_model=AuthPageResponse)
async def admin_login_page() -> AuthPageResponse:
    """Describe the admin login form."""
    return AuthPageResponse(
        title="Admin Login",
        subtitle="Project Education",
        submit_to="/admin/login",
    )


@router.post("/admin/login")
def admin_login(
    credentials: CredentialsRequest,
    ctx: RequestContext = Depends(get_request_context),
    config: AppConfig = Depends(get_config),
):
    """Sign in and go to the admin dashboard."""
    try:
        tokens = sign_in(ctx.client, credentials.email, credentials.password)
    except AuthError as exc:
        raise _auth_failed(exc) from exc

    response = redirect("/admin", status.HTTP_303_SEE_OTHER)
    set_session_cookies(response, tokens, config.session)
    return response


@router.post("/api/auth/logout")
def logout(
    next: str | None = None,
    ctx: RequestContext = Depends(get_request_context),
    config: AppConfig = Depends(get_config),
):
    """Sign out and redirect to /login (or a local `next`)."""
    if ctx.has_tokens:
        try:
            sign_out(ctx.client, ctx.access_token, ctx.refresh_token)
        except AuthError as exc:
            # cookies are cleared either way
            logger.warning("sign_out_failed", reason=str(exc))

    response = redirect(safe_next(next, "/login"), status.HTTP_303_SEE_OTHER)
    clear_session_cookies(response, config.session)
    logger.info("signed_out", user_id=ctx.user.id if ctx.user else None)
    return response
