"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from contentflow.shared.telemetry.logging import get_logger, setup_logging
from contentflow.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)
from contentflow.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "get_tracer",
    "traced",
    "add_span_attributes",
    "TracedOperation",
]
