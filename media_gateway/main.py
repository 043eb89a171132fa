"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here (SRP). See media_gateway.core.lifespan and
media_gateway.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from media_gateway.api import api_router
from media_gateway.application.use_cases import MediaGateway
from media_gateway.core.config import Settings, get_settings
from media_gateway.core.exception_handlers import register_exception_handlers
from media_gateway.core.lifespan import create_lifespan
from media_gateway.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from media_gateway.shared.telemetry.logging import setup_logging


def _setup_telemetry(app: FastAPI, settings: Settings) -> None:
    from media_gateway.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)


def create_app(
    settings: Settings | None = None,
    gateway: MediaGateway | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        settings: Defaults to get_settings() (resolved here, not at import).
        gateway: Pre-built gateway (tests); otherwise built in the lifespan.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.settings = settings
    app.state.media_gateway = gateway

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: request ID -> security -> CORS -> size limit.
    app.add_middleware(
        RequestSizeLimitMiddleware, max_bytes=settings.max_request_body_bytes
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router)

    if settings.telemetry_enabled:
        _setup_telemetry(app, settings)

    return app


app = create_app()
