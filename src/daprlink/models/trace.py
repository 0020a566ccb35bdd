"""Trace context snapshot consumed by the trace header builder.

TraceContext is a read-only copy of the identifiers of a span, taken at
call time. daprlink never owns or mutates the tracing system's state; it
only formats what it is handed.
"""

from __future__ import annotations

from opentelemetry.trace import SpanContext
from pydantic import Field

from daprlink.models.base import DaprLinkBaseModel
from daprlink.models.constants import MAX_SPAN_ID, MAX_TRACE_ID, TRACE_FLAG_SAMPLED


class TraceContext(DaprLinkBaseModel):
    """Identifiers propagated with a publish.

    Attributes:
        trace_id: 128-bit trace identifier
        span_id: 64-bit span identifier
        sampled: Whether the trace is sampled
        trace_state: Vendor trace state, already in ``tracestate`` header form

    Example:
        >>> ctx = TraceContext(trace_id=1, span_id=2, sampled=True)
        >>> ctx.trace_flags
        1
    """

    trace_id: int = Field(..., ge=0, le=MAX_TRACE_ID)
    span_id: int = Field(..., ge=0, le=MAX_SPAN_ID)
    sampled: bool = False
    trace_state: str = ""

    @property
    def trace_flags(self) -> int:
        return TRACE_FLAG_SAMPLED if self.sampled else 0x00

    @property
    def is_valid(self) -> bool:
        """False for the all-zero ids OpenTelemetry uses when no span is active."""
        return self.trace_id != 0 and self.span_id != 0

    @classmethod
    def from_span_context(cls, span_context: SpanContext) -> TraceContext:
        """Snapshot an OpenTelemetry SpanContext."""
        return cls(
            trace_id=span_context.trace_id,
            span_id=span_context.span_id,
            sampled=bool(span_context.trace_flags & TRACE_FLAG_SAMPLED),
            trace_state=span_context.trace_state.to_header(),
        )
