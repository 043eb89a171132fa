"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Builds the media
gateway's collaborators once unless one was injected, sets up telemetry,
and closes outbound HTTP pools on the way out.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: media gateway (unless injected). Shutdown: gateway
    collaborators close, telemetry shutdown.
    """
    settings = app.state.settings

    # ---- Startup ----
    owns_gateway = getattr(app.state, "media_gateway", None) is None
    if owns_gateway:
        from media_gateway.api.dependencies import build_media_gateway

        app.state.media_gateway = build_media_gateway(settings)
    logger.info(
        "%s %s started (environment=%s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )

    yield

    # ---- Shutdown ----
    if owns_gateway and app.state.media_gateway is not None:
        await app.state.media_gateway.aclose()
        app.state.media_gateway = None
        logger.info("Media gateway collaborators closed")

    from media_gateway.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
