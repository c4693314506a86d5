"""SalonHub API: FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from salonhub.config import Settings, configure_logging, get_settings
from salonhub.core import container
from salonhub.database import (
    DatabaseSession,
    create_schema,
    dispose_engine,
    get_session_factory,
    initialize_database,
)
from salonhub.domain.common.exceptions import DomainError
from salonhub.exceptions import status_code_for
from salonhub.infrastructure.audit.routers import audit_logs
from salonhub.infrastructure.booking.routers import bookings
from salonhub.infrastructure.common.event_handlers import register_default_handlers
from salonhub.infrastructure.common.rate_limit import limiter
from salonhub.infrastructure.identity.routers import auth, users
from salonhub.infrastructure.salon.routers import salons
from salonhub.infrastructure.tenancy.routers import tenants

logger = structlog.get_logger(__name__)
settings = get_settings()


def _bootstrap_super_admin(settings: Settings) -> None:
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return
    db = get_session_factory(settings)()
    container.db.override(db)
    try:
        admin = container.user_management_use_case().ensure_super_admin(
            settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD
        )
        logger.info("super_admin_ready", user_id=str(admin.id))
    finally:
        container.db.reset_override()
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    if settings.ENVIRONMENT != "production":
        create_schema()
    register_default_handlers(container.event_bus())
    _bootstrap_super_admin(settings)
    logger.info("salonhub_started", environment=settings.ENVIRONMENT, version=settings.VERSION)
    yield
    logger.info("salonhub_shutting_down")
    dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Multi-tenant salon management: salons, branches, services, staff and bookings",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (
    auth.router,
    users.router,
    tenants.router,
    salons.router,
    bookings.router,
    audit_logs.router,
):
    app.include_router(router, prefix=settings.API_V1_PREFIX)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors to their HTTP status with the error details."""
    status_code = status_code_for(exc)
    logger.info(
        "domain_error",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "error": type(exc).__name__,
            "details": jsonable_encoder(exc.details),
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_validation_failed", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request data",
            "details": [
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
                for error in exc.errors()
            ],
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


@app.get("/", tags=["meta"])
async def root() -> dict[str, str]:
    return {"name": settings.PROJECT_NAME, "version": settings.VERSION, "docs": "/docs"}


@app.get("/health", tags=["meta"])
async def health(db: DatabaseSession) -> JSONResponse:
    """Report whether the API can reach its database."""
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("health_check_failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unavailable"},
        )
    return JSONResponse(content={"status": "healthy", "database": "ok"})
