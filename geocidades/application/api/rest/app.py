import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from geocidades.application.api.v1.errors import map_error
from geocidades.application.api.v1.routes import auth, health, me, users
from geocidades.application.di import create_container
from geocidades.config import Config, configure_logging
from geocidades.domain.shared.authorization.startup import validate_all_handlers
from geocidades.domain.shared.error import ConfigurationError, GeoCidadesError
from geocidades.infrastructure.event.worker import OutboxWorker
from geocidades.infrastructure.persistence.database import create_tables
from geocidades.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)

# RFC 7518 requires HS256 keys of at least 256 bits
MIN_JWT_SECRET_LENGTH = 32


def validate_auth_config(config: Config) -> None:
    """Refuse to start without a usable JWT signing secret."""
    if len(config.auth.jwt.secret) < MIN_JWT_SECRET_LENGTH:
        raise ConfigurationError(
            "GEOCIDADES_AUTH__JWT__SECRET must be set to at least "
            f"{MIN_JWT_SECRET_LENGTH} characters",
            code="jwt_secret_missing",
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_migrate:
        engine = await container.get(AsyncEngine)
        await create_tables(engine)

    worker: OutboxWorker | None = None
    if config.events.worker_enabled:
        worker = OutboxWorker(container, config.events)
        worker.start()

    yield

    if worker is not None:
        await worker.stop()
    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s server v%s", config.server.name, config.server.version)

    validate_auth_config(config)

    # Validate all handlers have authorization declarations (fail fast)
    validate_all_handlers()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Traces stay local unless LOGFIRE_TOKEN is set
    logfire.configure(
        send_to_logfire="if-token-present",
        service_name=config.server.name,
        console=False,
    )
    logfire.instrument_httpx()
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    # Register v1 routes with /api/v1 prefix
    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(auth.router, prefix="/api/v1")
    app_instance.include_router(me.router, prefix="/api/v1")
    app_instance.include_router(users.router, prefix="/api/v1")

    # Global error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(GeoCidadesError)
    async def geocidades_error_handler(request: Request, exc: GeoCidadesError):
        http_exc = map_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"code": "internal_error", "message": "Internal server error"},
        )

    return app_instance
