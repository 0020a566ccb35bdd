"""daprlink Models.

Immutable Pydantic value objects shared by the transport components:
sidecar endpoints, trace context snapshots and request outcomes.
"""

from daprlink.models.base import DaprLinkBaseModel
from daprlink.models.constants import (
    CONTENT_TYPE_HEADER,
    DAPR_API_VERSION,
    DAPR_APP_ID_HEADER,
    DEFAULT_SIDECAR_HOST,
    DEFAULT_SIDECAR_HTTP_PORT,
    JSON_CONTENT_TYPE,
    TRACEPARENT_HEADER,
    TRACESTATE_HEADER,
)
from daprlink.models.endpoints import InvocationEndpoint, PublishEndpoint, SidecarAddress
from daprlink.models.outcome import RequestOutcome
from daprlink.models.trace import TraceContext

__all__ = [
    "CONTENT_TYPE_HEADER",
    "DAPR_API_VERSION",
    "DAPR_APP_ID_HEADER",
    "DEFAULT_SIDECAR_HOST",
    "DEFAULT_SIDECAR_HTTP_PORT",
    "DaprLinkBaseModel",
    "InvocationEndpoint",
    "JSON_CONTENT_TYPE",
    "PublishEndpoint",
    "RequestOutcome",
    "SidecarAddress",
    "TRACEPARENT_HEADER",
    "TRACESTATE_HEADER",
    "TraceContext",
]
