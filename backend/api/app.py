"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modules.admin.routes import router as admin_router
from modules.ask.routes import router as ask_router
from modules.auth.profile_routes import router as profile_router
from modules.auth.routes import router as auth_router
from modules.billing.routes import payment_router, webhook_router
from modules.search.routes import router as search_router
from modules.study.routes import router as study_router
from shared.config import get_settings as get_app_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    EstudarError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)

from .config import get_settings
from .dependencies import get_container
from .middleware.gate import AccessGateMiddleware
from .routes import health

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[EstudarError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ConfigurationError, 503),
    (ExternalServiceError, 502),
]


def status_for_error(exc: EstudarError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def estudar_error_handler(request: Request, exc: EstudarError) -> JSONResponse:
    """Render module errors that escaped a route as JSON."""
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, **exc.to_dict()},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are a 400 with field-level detail."""
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "VALIDATION_ERROR",
            "message": "Dados inválidos",
            "details": errors,
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Fail fast on a missing session secret
    get_container().session_codec
    logger.info("Starting Estudar.Pro API on %s:%s", settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down Estudar.Pro API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=get_app_settings().app_name,
        description="Legal study platform API: WhatsApp login, law search and subscriptions",
        version=get_app_settings().app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    app.add_exception_handler(EstudarError, estudar_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Access gate (added first, so it runs inside CORS)
    app.add_middleware(AccessGateMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(profile_router, prefix="/api/user", tags=["user"])
    app.include_router(search_router, prefix="/api/search", tags=["search"])
    app.include_router(ask_router, prefix="/api/ask", tags=["ask"])
    app.include_router(study_router, prefix="/api/study", tags=["study"])
    app.include_router(payment_router, prefix="/api/payment", tags=["payment"])
    app.include_router(webhook_router, prefix="/api/webhooks", tags=["webhooks"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
