"""Backend access: Supabase client, auth helpers and table repository."""

from eduportal.backend.client import (
    AuthTokens,
    AuthUser,
    create_backend_client,
    get_user,
    scope_to_user,
    sign_in,
    sign_out,
    sign_up,
)
from eduportal.backend.repository import ContentRepository

__all__ = [
    "AuthTokens",
    "AuthUser",
    "ContentRepository",
    "create_backend_client",
    "get_user",
    "scope_to_user",
    "sign_in",
    "sign_out",
    "sign_up",
]
