"""OpenTelemetry tracing integration and W3C Trace Context headers.

This module turns a TraceContext into the ``traceparent`` and
``tracestate`` headers attached to publish requests, reads the ambient
OpenTelemetry span when the caller does not pass a context explicitly,
and configures the tracer daprlink uses for its own publish span.

Example:
    >>> from daprlink.models import TraceContext
    >>> from daprlink.observability.tracing import build_traceparent
    >>> ctx = TraceContext(
    ...     trace_id=0x0102030405060708090A0B0C0D0E0F10,
    ...     span_id=0x0A0B0C0D0E0F1011,
    ...     sampled=True,
    ... )
    >>> build_traceparent(ctx)
    '00-0102030405060708090a0b0c0d0e0f10-0a0b0c0d0e0f1011-01'
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from daprlink.headers import HeaderSet
from daprlink.models.constants import (
    TRACE_FLAG_SAMPLED,
    TRACEPARENT_HEADER,
    TRACEPARENT_VERSION,
    TRACESTATE_HEADER,
)
from daprlink.models.trace import TraceContext
from daprlink.observability.logging import get_logger

# Environment variables for zero-config (OpenTelemetry convention)
_ENV_OTEL_SERVICE_NAME = "OTEL_SERVICE_NAME"
_ENV_OTEL_TRACES_EXPORTER = "OTEL_TRACES_EXPORTER"
_ENV_OTEL_EXPORTER_OTLP_ENDPOINT = "OTEL_EXPORTER_OTLP_ENDPOINT"

TRACER_NAME = "daprlink"
PUBLISH_SPAN_NAME = "daprlink.publish"

logger = get_logger(__name__)

_tracer_provider: TracerProvider | None = None
_tracer: trace.Tracer | None = None


def build_traceparent(context: TraceContext) -> str:
    """Format ``{version}-{trace_id}-{span_id}-{flags}`` as lower-case hex."""
    flags = context.trace_flags & TRACE_FLAG_SAMPLED
    return (
        f"{TRACEPARENT_VERSION:02x}-{context.trace_id:032x}-{context.span_id:016x}-{flags:02x}"
    )


def build_tracestate(context: TraceContext) -> str:
    """Return the trace state string unmodified."""
    return context.trace_state


def trace_headers(context: TraceContext) -> HeaderSet:
    """Build the propagation headers for ``context``.

    Returns:
        HeaderSet holding exactly ``traceparent`` and ``tracestate``.
    """
    headers = HeaderSet()
    headers.add(TRACEPARENT_HEADER, build_traceparent(context))
    headers.add(TRACESTATE_HEADER, build_tracestate(context))
    return headers


def current_trace_context() -> TraceContext:
    """Snapshot the span that is current in the ambient OpenTelemetry context.

    With no active span this is OpenTelemetry's invalid context (all-zero
    ids, not sampled); it is returned as-is so callers see exactly what
    the tracing system reports.
    """
    span_context = trace.get_current_span().get_span_context()
    return TraceContext.from_span_context(span_context)


def configure_tracing(
    service_name: str | None = None,
    span_exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Configure an SDK tracer provider for daprlink spans.

    Uses environment variables for zero-config:
    - OTEL_SERVICE_NAME: service name (default: "daprlink")
    - OTEL_TRACES_EXPORTER: "none" | "otlp" | "console" (default: "none")
    - OTEL_EXPORTER_OTLP_ENDPOINT: OTLP endpoint (e.g. http://localhost:4317)

    The provider is also offered as the global OpenTelemetry provider;
    if the application already installed one, OpenTelemetry keeps that
    one and daprlink keeps using its own for the publish span.

    Args:
        service_name: Override for OTEL_SERVICE_NAME.
        span_exporter: Extra exporter attached with a SimpleSpanProcessor
            (e.g. an InMemorySpanExporter in tests).

    Returns:
        The configured TracerProvider.
    """
    global _tracer_provider, _tracer

    name = service_name or os.environ.get(_ENV_OTEL_SERVICE_NAME) or TRACER_NAME
    _tracer_provider = TracerProvider(resource=Resource.create({"service.name": name}))

    exporter_name = os.environ.get(_ENV_OTEL_TRACES_EXPORTER, "none").strip().lower()
    if exporter_name == "otlp":
        _add_otlp_processor(_tracer_provider)
    elif exporter_name == "console":
        _tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    if span_exporter is not None:
        _tracer_provider.add_span_processor(SimpleSpanProcessor(span_exporter))

    trace.set_tracer_provider(_tracer_provider)
    _tracer = _tracer_provider.get_tracer(TRACER_NAME)
    return _tracer_provider


def _add_otlp_processor(provider: TracerProvider) -> None:
    """Add an OTLP span processor if an endpoint is set and an exporter is installed."""
    endpoint = os.environ.get(_ENV_OTEL_EXPORTER_OTLP_ENDPOINT)
    if not endpoint:
        return
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    except ImportError as e:
        logger.debug("daprlink.tracing.otlp_unavailable", error=str(e))
        return
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True)))


def reset_tracing() -> None:
    """Reset module tracer state (for test teardown)."""
    global _tracer_provider, _tracer
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
    _tracer_provider = None
    _tracer = None


def get_tracer() -> trace.Tracer:
    """Return the tracer used for daprlink spans.

    Falls back to the global provider's tracer when configure_tracing was
    not called, so applications that set up OpenTelemetry themselves get
    daprlink spans in their own pipeline.
    """
    if _tracer is None:
        return trace.get_tracer(TRACER_NAME)
    return _tracer


def publish_span_context(
    pubsub_name: str,
    topic: str,
    query_id: str | None = None,
) -> AbstractContextManager[trace.Span]:
    """Start the current span wrapping one traced publish (use with "with").

    Attributes: daprlink.pubsub, daprlink.topic, daprlink.query_id. An
    exception leaving the block is recorded on the span and sets its
    status to ERROR.
    """
    attrs: dict[str, str] = {
        "daprlink.pubsub": pubsub_name,
        "daprlink.topic": topic,
    }
    if query_id:
        attrs["daprlink.query_id"] = query_id
    return get_tracer().start_as_current_span(
        PUBLISH_SPAN_NAME,
        kind=trace.SpanKind.PRODUCER,
        attributes=attrs,
        record_exception=True,
        set_status_on_exception=True,
    )
