"""Route handlers for the web app."""

from eduportal.web.routes.admin import router as admin_router
from eduportal.web.routes.auth import router as auth_router
from eduportal.web.routes.classes import router as classes_router
from eduportal.web.routes.health import router as health_router
from eduportal.web.routes.pages import router as pages_router

__all__ = [
    "admin_router",
    "auth_router",
    "classes_router",
    "health_router",
    "pages_router",
]
