"""API router aggregation.

Routes sit at the root (no version prefix) because deployed web clients
call /media/... and /health directly.
"""

from fastapi import APIRouter

from media_gateway.api.endpoints import health, media

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
