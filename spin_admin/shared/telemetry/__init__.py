"""Logging setup, OpenTelemetry tracing and span helpers."""

from spin_admin.shared.telemetry.logging import RequestIdFilter, setup_logging
from spin_admin.shared.telemetry.telemetry import Telemetry, get_telemetry, set_telemetry
from spin_admin.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "RequestIdFilter",
    "Telemetry",
    "add_span_attributes",
    "add_span_event",
    "get_telemetry",
    "set_telemetry",
    "setup_logging",
    "traced",
]
