"""Publishing to Dapr pub/sub components through the sidecar.

Both publishers POST to ``http://{host}:{port}/v1.0/publish/{pubsub}/{topic}``
and differ only in where their headers come from:

- DaprHttpPublisher sends the caller's headers verbatim and adds nothing.
- TracedPublisher takes no caller headers; it sends ``traceparent`` and
  ``tracestate`` built from a trace context, and logs each publish.

Example:
    >>> async with TracedPublisher("localhost", 3500, "pubsub", "orders") as publisher:
    ...     await publisher.publish_current({"order_id": 7}, query_id="q-1")
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import BaseModel

from daprlink.config import SidecarSettings
from daprlink.headers import HeaderSet
from daprlink.models.endpoints import PublishEndpoint
from daprlink.models.outcome import RequestOutcome
from daprlink.models.trace import TraceContext
from daprlink.observability.logging import get_logger, is_debug_mode, sanitize_for_logging
from daprlink.observability.tracing import (
    current_trace_context,
    publish_span_context,
    trace_headers,
)
from daprlink.transport.dispatcher import HttpDispatcher

logger = get_logger(__name__)

_PublisherT = TypeVar("_PublisherT", bound="_SidecarPublisher")


@runtime_checkable
class Publisher(Protocol):
    """Anything that can publish a payload with caller-chosen headers."""

    async def publish(self, payload: Any, headers: HeaderSet | None = None) -> RequestOutcome:
        ...


@runtime_checkable
class TraceContextPublisher(Protocol):
    """Anything that can publish a payload carrying a trace context."""

    async def publish(self, payload: Any, trace_context: TraceContext) -> RequestOutcome:
        ...


class _SidecarPublisher:
    """Endpoint and dispatcher plumbing shared by both publishers."""

    def __init__(
        self,
        sidecar_host: str,
        sidecar_port: int,
        pubsub_name: str,
        topic: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.endpoint = PublishEndpoint(
            host=sidecar_host, port=sidecar_port, pubsub_name=pubsub_name, topic=topic
        )
        self._dispatcher = HttpDispatcher(
            sidecar_host, sidecar_port, transport=transport, timeout=timeout
        )

    @classmethod
    def from_env(
        cls: type[_PublisherT],
        pubsub_name: str,
        topic: str,
        settings: SidecarSettings | None = None,
        **kwargs: Any,
    ) -> _PublisherT:
        """Build a publisher for the sidecar described by DAPR_HOST / DAPR_HTTP_PORT."""
        settings = settings or SidecarSettings.from_env()
        return cls(settings.host, settings.http_port, pubsub_name, topic, **kwargs)

    @property
    def url(self) -> str:
        return self.endpoint.url

    async def _send(self, payload: Any, headers: HeaderSet) -> RequestOutcome:
        return await self._dispatcher.post_json(self.endpoint.path, payload, headers)

    async def aclose(self) -> None:
        await self._dispatcher.aclose()

    async def __aenter__(self: _PublisherT) -> _PublisherT:
        await self._dispatcher.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()


class DaprHttpPublisher(_SidecarPublisher):
    """Publishes with exactly the headers the caller supplies.

    No header is injected. The body is JSON, so ``Content-Type`` defaults
    to ``application/json`` unless the caller set one.
    """

    async def publish(self, payload: Any, headers: HeaderSet | None = None) -> RequestOutcome:
        """Publish ``payload`` to the configured topic.

        Args:
            payload: JSON-serializable value or pydantic model
            headers: Optional headers, attached as-is

        Returns:
            RequestOutcome for any HTTP response, whatever its status code

        Raises:
            HeaderEncodingError: If a header cannot be encoded
            SidecarTransportError: If the request could not be completed
        """
        return await self._send(payload, headers if headers is not None else HeaderSet())


class TracedPublisher(_SidecarPublisher):
    """Publishes with W3C trace context headers instead of caller headers."""

    async def publish(
        self,
        payload: Any,
        trace_context: TraceContext,
        *,
        query_id: str | None = None,
    ) -> RequestOutcome:
        """Publish ``payload`` with ``traceparent``/``tracestate`` from ``trace_context``.

        An INFO record describing the payload is logged before sending.
        Payload fields that look like credentials are redacted unless
        DAPRLINK_DEBUG is set.

        Args:
            payload: JSON-serializable value or pydantic model
            trace_context: Context to propagate
            query_id: Optional correlation id added to the log record

        Raises:
            SidecarTransportError: If the request could not be completed
        """
        logged = payload.model_dump(mode="json") if isinstance(payload, BaseModel) else payload
        logger.info(
            "daprlink.publisher.publishing",
            pubsub=self.endpoint.pubsub_name,
            topic=self.endpoint.topic,
            query_id=query_id,
            trace_id=f"{trace_context.trace_id:032x}",
            payload=logged if is_debug_mode() else sanitize_for_logging(logged),
        )
        return await self._send(payload, trace_headers(trace_context))

    async def publish_current(self, payload: Any, query_id: str | None = None) -> RequestOutcome:
        """Publish under a ``daprlink.publish`` span, propagating that span.

        The span is a child of whatever span is current in the caller's
        OpenTelemetry context. A failure is recorded on the span before it
        propagates.

        Args:
            payload: JSON-serializable value or pydantic model
            query_id: Optional correlation id, set as ``daprlink.query_id``
                on the span and logged

        Raises:
            SidecarTransportError: If the request could not be completed
        """
        with publish_span_context(self.endpoint.pubsub_name, self.endpoint.topic, query_id):
            return await self.publish(payload, current_trace_context(), query_id=query_id)
