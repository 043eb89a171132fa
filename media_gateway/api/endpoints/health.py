"""Health check endpoint. No auth and no collaborator calls; used for liveness probes."""

from fastapi import APIRouter

from media_gateway.api.dependencies import MediaGatewayDep
from media_gateway.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(gateway: MediaGatewayDep) -> HealthResponse:
    """Return ok status, environment and server time."""
    return HealthResponse(**gateway.health().body)
