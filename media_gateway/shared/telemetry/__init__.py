"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from media_gateway.shared.telemetry.logging import (
    RequestIDLogFilter,
    request_id_var,
    setup_logging,
)
from media_gateway.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from media_gateway.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "RequestIDLogFilter",
    "request_id_var",
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
]
