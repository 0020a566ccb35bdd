"""Sidecar endpoints targeted by invokers and publishers.

An endpoint is fixed when a component is built and never changes for the
component's lifetime. The method name of an invocation endpoint is used
verbatim as the URL path, so callers own any nested path structure.
"""

from pydantic import Field

from daprlink.models.base import DaprLinkBaseModel
from daprlink.models.constants import DAPR_API_VERSION


class SidecarAddress(DaprLinkBaseModel):
    """Host and HTTP port of the local Dapr sidecar."""

    host: str = Field(..., min_length=1)
    port: int = Field(..., ge=0, le=65535)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class InvocationEndpoint(SidecarAddress):
    """Target of a service invocation: ``POST http://{host}:{port}/{method}``.

    Attributes:
        app_id: Dapr app id of the application that receives the call,
            sent as the ``dapr-app-id`` header
        method: Method name, appended to the sidecar URL as-is
    """

    app_id: str
    method: str

    @property
    def path(self) -> str:
        return f"/{self.method}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"


class PublishEndpoint(SidecarAddress):
    """Target of a publish: ``POST http://{host}:{port}/v1.0/publish/{pubsub}/{topic}``."""

    pubsub_name: str
    topic: str

    @property
    def path(self) -> str:
        return f"/{DAPR_API_VERSION}/publish/{self.pubsub_name}/{self.topic}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"
