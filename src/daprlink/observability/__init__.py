"""Observability module for daprlink.

Structured logging (structlog) and OpenTelemetry trace context
propagation for requests sent to the Dapr sidecar.

Example:
    >>> from daprlink.observability import get_logger, trace_headers
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("daprlink.example", topic="orders")
"""

from daprlink.observability.logging import (
    LogSettings,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
)
from daprlink.observability.tracing import (
    build_traceparent,
    build_tracestate,
    configure_tracing,
    current_trace_context,
    get_tracer,
    reset_tracing,
    trace_headers,
)

__all__ = [
    "LogSettings",
    "bind_context",
    "build_traceparent",
    "build_tracestate",
    "clear_context",
    "configure_logging",
    "configure_tracing",
    "current_trace_context",
    "get_logger",
    "get_tracer",
    "is_debug_mode",
    "reset_tracing",
    "sanitize_for_logging",
    "trace_headers",
]
