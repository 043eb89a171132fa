"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from media_gateway.shared.utils import (
    ensure_utc,
    generate_cuid,
    isoformat_utc,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "isoformat_utc",
]
