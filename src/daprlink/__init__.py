"""daprlink: async client for the Dapr sidecar HTTP API.

Invoke methods on other Dapr applications and publish to pub/sub topics,
propagating W3C trace context on outgoing publishes.

Example:
    >>> from daprlink import DaprHttpInvoker, HeaderSet
    >>>
    >>> async with DaprHttpInvoker("localhost", 3500, "checkout", "orders") as invoker:
    ...     await invoker.invoke({"order_id": 7}, HeaderSet({"X-Request-Id": "r-1"}))
"""

__version__ = "0.1.0"

from daprlink.config import SidecarSettings
from daprlink.errors import (
    ConfigurationError,
    DaprLinkError,
    HeaderEncodingError,
    PayloadSerializationError,
    SidecarConnectionError,
    SidecarTimeoutError,
    SidecarTransportError,
)
from daprlink.headers import HeaderSet, validate_header
from daprlink.models import (
    InvocationEndpoint,
    PublishEndpoint,
    RequestOutcome,
    TraceContext,
)
from daprlink.transport import (
    DaprHttpInvoker,
    DaprHttpPublisher,
    HttpDispatcher,
    Invoker,
    Publisher,
    TraceContextPublisher,
    TracedPublisher,
)

__all__ = [
    "ConfigurationError",
    "DaprHttpInvoker",
    "DaprHttpPublisher",
    "DaprLinkError",
    "HeaderEncodingError",
    "HeaderSet",
    "HttpDispatcher",
    "InvocationEndpoint",
    "Invoker",
    "PayloadSerializationError",
    "PublishEndpoint",
    "Publisher",
    "RequestOutcome",
    "SidecarConnectionError",
    "SidecarSettings",
    "SidecarTimeoutError",
    "SidecarTransportError",
    "TraceContext",
    "TraceContextPublisher",
    "TracedPublisher",
    "__version__",
    "validate_header",
]
