"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.bootstrap import bootstrap
from src.catalog.api.http.responses import (
    InvalidPathIdError,
    write_error,
    write_use_case_error,
)
from src.catalog.api.http.routes import setup_routes
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.errors import ErrorKind, UseCaseError
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.runtime.config.config_data import ConfigData, load_config

__all__ = ["create_app"]


def create_app(
    config: ConfigData | None = None,
    database: DbSessionService | None = None,
) -> FastAPI:
    """Build the application: logging, dependency graph, handlers and routes.

    Raises:
        DatabaseUnavailableError: A database is configured but unreachable.
    """
    config = config or load_config()
    log = configure_logging(config)
    app_deps = bootstrap(config, log, database=database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Starting up application in {} environment", config.app.environment)
        try:
            yield
        finally:
            log.info("Shutting down application")
            app.state.app_dependencies.close()

    app = FastAPI(
        title="Catalog API",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    app.state.app_dependencies = app_deps

    _install_request_logging(app, app_deps)
    _install_exception_handlers(app, app_deps)
    setup_routes(app)
    return app


def _install_request_logging(app: FastAPI, app_deps: ApplicationDependencies) -> None:
    log = app_deps.log

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        base_ctx = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }

        start = time.perf_counter()
        # Everything that logs within this block inherits base_ctx
        with logger.contextualize(**base_ctx):
            log.debug("request.start")
            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start) * 1000
                log.bind(
                    status_code=500,
                    duration_ms=round(duration_ms, 1),
                    error_type=type(exc).__name__,
                ).exception("request.error")
                response = write_error(500, "Internal server error")
                response.headers["X-Request-ID"] = request_id
                return response

            duration_ms = (time.perf_counter() - start) * 1000
            log.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")
            response.headers.setdefault("X-Request-ID", request_id)
            return response


def _install_exception_handlers(app: FastAPI, app_deps: ApplicationDependencies) -> None:
    log = app_deps.log

    @app.exception_handler(UseCaseError)
    async def handle_use_case_error(request: Request, exc: UseCaseError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            log.bind(cause=repr(exc.__cause__)).error(
                "{} {} failed: {}", request.method, request.url.path, exc.message
            )
        return write_use_case_error(exc)

    @app.exception_handler(InvalidPathIdError)
    async def handle_invalid_id(request: Request, exc: InvalidPathIdError) -> JSONResponse:
        log.warning("Invalid {} ID: {!r}", exc.resource, exc.raw)
        return write_error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        log.bind(errors=exc.errors()).warning("Invalid request body")
        return write_error(400, "Invalid request body")
