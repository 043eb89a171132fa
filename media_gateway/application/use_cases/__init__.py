"""Application use cases: one entry point per workflow."""

from media_gateway.application.use_cases.media_gateway import (
    GatewayResponse,
    MediaGateway,
    extract_bearer_token,
)

__all__ = ["GatewayResponse", "MediaGateway", "extract_bearer_token"]
