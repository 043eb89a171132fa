"""Core: config, exception handlers and application bootstrap.

Single place for settings.
"""

from media_gateway.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
