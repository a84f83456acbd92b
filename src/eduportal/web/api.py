"""FastAPI application factory.

Main entry point for the eduportal web app.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eduportal import __version__
from eduportal.config.app_config import AppConfig, load_app_config
from eduportal.errors import (
    AuthError,
    BackendConfigError,
    FormValidationError,
    StoreError,
)
from eduportal.web.routes import (
    admin_router,
    auth_router,
    classes_router,
    health_router,
    pages_router,
)
from eduportal.web.site_lock import SiteLockMiddleware

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    config: AppConfig = app.state.config
    logger.info(
        "api_startup",
        backend_configured=bool(config.backend.url and config.backend.get_anon_key()),
        environment=config.site.environment,
        site_locked=config.site.is_locked,
    )
    yield


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.message},
        )

    @app.exception_handler(FormValidationError)
    async def form_error_handler(
        request: Request, exc: FormValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message},
        )

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(exc)},
        )

    @app.exception_handler(BackendConfigError)
    async def config_error_handler(
        request: Request, exc: BackendConfigError
    ) -> JSONResponse:
        logger.error("backend_not_configured", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
        )


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Configuration to use. Loaded from file/env when omitted.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="Project Education",
        description="Learn Smart. Practice Better.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = config

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.site.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SiteLockMiddleware, site=config.site)
    _register_error_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(pages_router)
    app.include_router(classes_router)
    app.include_router(admin_router)

    return app


# Default app instance for uvicorn
app = create_app()
