"""HTTP surface: routers, endpoints and dependency wiring."""

from media_gateway.api.router import api_router

__all__ = ["api_router"]
