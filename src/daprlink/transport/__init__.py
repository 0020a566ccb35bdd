"""daprlink HTTP Transport Layer.

This module provides the components that talk to the Dapr sidecar over
HTTP using httpx:

Public exports:
    HttpDispatcher: Reusable async client bound to a sidecar host/port
    Invoker: Service invocation capability
    DaprHttpInvoker: Invoker over the sidecar HTTP API
    Publisher: Pub/sub capability with caller headers
    TraceContextPublisher: Pub/sub capability with trace context
    DaprHttpPublisher: Publisher sending caller headers verbatim
    TracedPublisher: Publisher sending traceparent/tracestate
"""

from daprlink.transport.dispatcher import HttpDispatcher, encode_json_body
from daprlink.transport.invoker import DaprHttpInvoker, Invoker
from daprlink.transport.publisher import (
    DaprHttpPublisher,
    Publisher,
    TraceContextPublisher,
    TracedPublisher,
)

__all__ = [
    "DaprHttpInvoker",
    "DaprHttpPublisher",
    "HttpDispatcher",
    "Invoker",
    "Publisher",
    "TraceContextPublisher",
    "TracedPublisher",
    "encode_json_body",
]
