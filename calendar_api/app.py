from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from database.appointment_controller import AppointmentController
from database.factory import AppointmentServiceFactory

from .errors import register_exception_handlers
from .logging_config import RequestResponseLoggerMiddleware, setup_logging
from .middleware.request_id import RequestIDMiddleware
from .settings import Settings

log = logging.getLogger("calendar_api.app")


def _get_docs_urls(settings: Settings) -> tuple[str | None, str | None, str | None]:
    """
    Return the URL paths for the OpenAPI schema, Swagger UI and Redoc.

    Documentation is only served in development with OpenAPI exposure enabled;
    otherwise every URL is None.
    """
    if settings.is_dev and settings.expose_openapi_in_dev:
        return "/openapi.json", "/docs", "/redoc"
    return None, None, None


def _configure_cors(fastapi_app: FastAPI, settings: Settings) -> None:
    """Apply CORS for the configured browser origins only."""
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID", "X-Trace-Id"],
        expose_headers=["X-Trace-Id"],
        allow_credentials=False,
        max_age=600,
    )


def _build_controller(settings: Settings) -> AppointmentController:
    return AppointmentServiceFactory().create_controller(
        backend=settings.storage_backend,
        path=settings.storage_path,
        key=settings.storage_key,
        week_start=settings.week_start,
    )


def create_app(
    settings: Settings | None = None,
    controller: AppointmentController | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application with:
    - Structured logging and request/response logging
    - Unified error handlers
    - One calendar session (controller) shared by all requests
    - Conditional OpenAPI/docs exposure in dev
    """
    settings = settings or Settings()  # reads env with CALENDAR_ prefix

    # Initialize logging once per process
    setup_logging(settings)
    log.info(
        "Starting Calendar API",
        extra={"env": settings.environment, "port": settings.port},
    )

    openapi_url, docs_url, redoc_url = _get_docs_urls(settings)

    fastapi_app = FastAPI(
        title="Appointment Calendar API",
        version="0.1.0",
        openapi_url=openapi_url,
        docs_url=docs_url,
        redoc_url=redoc_url,
        default_response_class=ORJSONResponse,
    )
    fastapi_app.state.settings = settings
    fastapi_app.state.controller = (
        controller if controller is not None else _build_controller(settings)
    )

    register_exception_handlers(fastapi_app)
    _configure_cors(fastapi_app, settings)

    # RequestID must be last-added to be outermost so trace_id is on every response
    fastapi_app.add_middleware(RequestResponseLoggerMiddleware)
    fastapi_app.add_middleware(RequestIDMiddleware)

    from .routes.appointments import router as appointments_router
    from .routes.calendar import router as calendar_router
    from .routes.health import router as health_router

    fastapi_app.include_router(health_router)
    fastapi_app.include_router(calendar_router)
    fastapi_app.include_router(appointments_router)

    return fastapi_app


# Factory for `--factory` usage:
#   uvicorn calendar_api.app:app_factory --factory
def app_factory() -> FastAPI:
    return create_app()
