"""Site-wide lockout switch.

When the site is locked (production + protect_site), every page except the
admin login and static assets redirects to the admin login. Paths under
/api are never intercepted.
"""

from __future__ import annotations

import structlog
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from eduportal.config.app_config import SiteConfig

logger = structlog.get_logger(__name__)

LOCK_TARGET = "/admin/login"
ALLOWED_PREFIXES = ("/admin/login", "/static", "/favicon.ico")


def is_gated(path: str) -> bool:
    """Whether a locked site redirects this path."""
    if path.startswith("/api"):
        return False
    return not path.startswith(ALLOWED_PREFIXES)


class SiteLockMiddleware(BaseHTTPMiddleware):
    """Redirect gated paths to the admin login while the site is locked."""

    def __init__(self, app, site: SiteConfig):
        super().__init__(app)
        self._site = site

    async def dispatch(self, request, call_next):
        if self._site.is_locked and is_gated(request.url.path):
            logger.debug("site_locked_redirect", path=request.url.path)
            return RedirectResponse(url=LOCK_TARGET, status_code=307)
        return await call_next(request)
