"""
Main FastAPI application for QSL Card Manager API.

This module provides the core FastAPI application with middleware,
CORS configuration, exception handlers and the API routers.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, List, cast

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from .. import __version__
from ..core.config import QSLCardConfig, get_config
from ..core.database import close_database, init_database
from ..core.errors import QSLCardError
from ..core.logging import get_logger, security_logger

API_PREFIX = "/api"
AUTH_PATH_PREFIX = f"{API_PREFIX}/auth"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Dispatch request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = (
            "geolocation=(), microphone=(), camera=()"
        )

        # Remove server information
        if "server" in response.headers:
            del response.headers["server"]

        return cast(Response, response)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Simple in-memory rate limiting for POSTs to auth endpoints."""

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int = 10,
        window_seconds: int = 60,
        path_prefix: str = AUTH_PATH_PREFIX,
    ) -> None:
        """Initialize rate limiting middleware."""
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.requests: Dict[str, List[float]] = {}

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Dispatch request with rate limiting for auth endpoints."""
        if request.method == "POST" and request.url.path.startswith(
            self.path_prefix
        ):
            client_ip = request.client.host if request.client else "unknown"
            current_time = time.time()

            # Clean old entries
            self.requests = {
                ip: timestamps
                for ip, timestamps in self.requests.items()
                if timestamps and current_time - timestamps[-1] < self.window_seconds
            }

            recent = [
                ts
                for ts in self.requests.get(client_ip, [])
                if current_time - ts < self.window_seconds
            ]

            if len(recent) >= self.max_requests:
                security_logger.log_rate_limit_exceeded(
                    request.url.path, request=request
                )
                return JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content={
                        "detail": "Rate limit exceeded",
                        "message": (
                            f"Too many requests. Limit: {self.max_requests} "
                            f"per {self.window_seconds} seconds"
                        ),
                        "path": request.url.path,
                    },
                )

            recent.append(current_time)
            self.requests[client_ip] = recent

        return cast(Response, await call_next(request))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger = get_logger("api.app")
    config = get_config()
    logger.info(
        "Starting QSL Card Manager API server",
        environment=config.environment.value,
    )
    if config.database.auto_create:
        await init_database()

    yield

    # Shutdown
    logger.info("Shutting down QSL Card Manager API server")
    await close_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()

    app = FastAPI(
        title="QSL Card Manager API",
        description="""
        ## QSL Card Manager API

        Keep an amateur radio contact log and turn contacts into QSL cards.

        ### Features
        - **Logbook**: Create, search and edit QSO records
        - **Import**: Upload ADIF or CSV logs; duplicates are skipped
        - **Templates**: Design cards in HTML with `{{token}}` placeholders
        - **Export**: Download tables, card sheets and template cards as PDF or PNG

        ### Authentication
        Register or log in under `/api/auth`. The session is a JWT stored in
        the HTTP-only `auth-token` cookie.
        """,
        version=__version__,
        docs_url="/docs" if not config.is_production() else None,
        redoc_url="/redoc" if not config.is_production() else None,
        lifespan=lifespan,
    )

    # Add middleware
    _setup_middleware(app, config)

    # Add exception handlers
    _setup_exception_handlers(app)

    # Add routes
    _setup_routes(app)

    return app


def _setup_middleware(app: FastAPI, config: QSLCardConfig) -> None:
    """Set up application middleware."""
    # Security headers middleware (add first to ensure headers are set)
    app.add_middleware(SecurityHeadersMiddleware)

    # Rate limiting middleware for auth endpoints
    if config.api.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=config.api.rate_limit_requests,
            window_seconds=config.api.rate_limit_window_seconds,
        )

    # CORS middleware with environment-specific configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_resolved,
        allow_credentials=config.api.cors_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Requested-With"],
        expose_headers=["Content-Disposition"],
        max_age=config.api.cors_max_age,
    )

    # Gzip compression middleware
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        logger = get_logger("api.middleware")
        start_time = time.time()

        response = await call_next(request)

        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            client=request.client.host if request.client else "unknown",
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return response


def _setup_exception_handlers(app: FastAPI) -> None:
    """Set up exception handlers."""
    logger = get_logger("api.exceptions")

    @app.exception_handler(QSLCardError)
    async def application_error_handler(
        request: Request, exc: QSLCardError
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            detail=exc.message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={**exc.to_dict(), "path": request.url.path},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Validation error", errors=str(exc.errors()))
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Validation error",
                "errors": jsonable_encoder(exc.errors()),
                "path": request.url.path,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning("HTTP exception", status_code=exc.status_code, detail=exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "path": request.url.path},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error("Unexpected error", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "path": request.url.path},
        )


def _setup_routes(app: FastAPI) -> None:
    """Set up application routes."""
    from .auth import auth_router
    from .routes import export, health, qsl, qsl_logs, templates

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(qsl.router, prefix=API_PREFIX)
    app.include_router(qsl_logs.router, prefix=API_PREFIX)
    app.include_router(templates.router, prefix=API_PREFIX)
    app.include_router(export.router, prefix=API_PREFIX)


# Create the main application instance
app = create_app()


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    config = get_config()

    uvicorn.run(
        "qslcard.api.app:app",
        host=config.api.host,
        port=config.api.port,
        reload=config.api.reload and config.is_development(),
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
