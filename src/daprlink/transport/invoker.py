"""Service invocation through the Dapr sidecar.

DaprHttpInvoker calls one method of one target application. The request
goes to ``http://{host}:{port}/{method}`` and names the target with the
``dapr-app-id`` header, which Dapr uses to route the call.

Example:
    >>> async with DaprHttpInvoker("localhost", 3500, "checkout", "orders") as invoker:
    ...     outcome = await invoker.invoke({"order_id": 7})
    ...     outcome.status_code
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from daprlink.config import SidecarSettings
from daprlink.headers import HeaderSet
from daprlink.models.constants import CONTENT_TYPE_HEADER, DAPR_APP_ID_HEADER, JSON_CONTENT_TYPE
from daprlink.models.endpoints import InvocationEndpoint
from daprlink.models.outcome import RequestOutcome
from daprlink.transport.dispatcher import HttpDispatcher


@runtime_checkable
class Invoker(Protocol):
    """Anything that can invoke a method on a remote application."""

    async def invoke(self, payload: Any, headers: HeaderSet | None = None) -> RequestOutcome:
        ...


class DaprHttpInvoker:
    """Invokes a method on another Dapr application over the sidecar's HTTP API.

    Headers sent with each call are the caller's headers plus:
        - ``Content-Type: application/json`` when the caller set no content type
        - ``dapr-app-id: {app_id}``, always, replacing any caller value

    Attributes:
        endpoint: Immutable sidecar address, target app id and method
    """

    def __init__(
        self,
        sidecar_host: str,
        sidecar_port: int,
        app_id: str,
        method: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.endpoint = InvocationEndpoint(
            host=sidecar_host, port=sidecar_port, app_id=app_id, method=method
        )
        self._dispatcher = HttpDispatcher(
            sidecar_host, sidecar_port, transport=transport, timeout=timeout
        )

    @classmethod
    def from_env(
        cls,
        app_id: str,
        method: str,
        settings: SidecarSettings | None = None,
        **kwargs: Any,
    ) -> DaprHttpInvoker:
        """Build an invoker for the sidecar described by DAPR_HOST / DAPR_HTTP_PORT."""
        settings = settings or SidecarSettings.from_env()
        return cls(settings.host, settings.http_port, app_id, method, **kwargs)

    @property
    def url(self) -> str:
        return self.endpoint.url

    def build_headers(self, headers: HeaderSet | None = None) -> HeaderSet:
        """Merge the caller's headers with the invocation headers.

        The caller's HeaderSet is copied, never modified.
        """
        merged = headers.copy() if headers is not None else HeaderSet()
        merged.setdefault(CONTENT_TYPE_HEADER, JSON_CONTENT_TYPE)
        merged.add(DAPR_APP_ID_HEADER, self.endpoint.app_id)
        return merged

    async def invoke(self, payload: Any, headers: HeaderSet | None = None) -> RequestOutcome:
        """POST ``payload`` to the target method.

        Args:
            payload: JSON-serializable value or pydantic model
            headers: Optional caller headers

        Returns:
            RequestOutcome for any HTTP response, whatever its status code

        Raises:
            HeaderEncodingError: If a header cannot be encoded
            SidecarTransportError: If the request could not be completed
        """
        return await self._dispatcher.post_json(
            self.endpoint.path, payload, self.build_headers(headers)
        )

    async def aclose(self) -> None:
        await self._dispatcher.aclose()

    async def __aenter__(self) -> DaprHttpInvoker:
        await self._dispatcher.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()
