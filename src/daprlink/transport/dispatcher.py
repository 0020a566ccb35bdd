"""Async HTTP dispatcher bound to one Dapr sidecar.

HttpDispatcher owns a single httpx.AsyncClient, reused by every request
the owning component sends and safe to share between concurrent tasks.
It knows nothing about invocation or pub/sub semantics: it validates
headers, encodes the JSON body, POSTs it and maps the transport outcome.

Any HTTP response counts as a completed call. Status codes are copied
into the RequestOutcome but never turned into errors here.

Example:
    >>> async with HttpDispatcher("localhost", 3500) as dispatcher:
    ...     outcome = await dispatcher.post_json("/orders", {"id": 7}, HeaderSet())
    ...     outcome.status_code
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import BaseModel

from daprlink.errors import (
    PayloadSerializationError,
    SidecarConnectionError,
    SidecarTimeoutError,
    SidecarTransportError,
)
from daprlink.headers import HeaderSet
from daprlink.models.constants import CONTENT_TYPE_HEADER, JSON_CONTENT_TYPE
from daprlink.models.endpoints import SidecarAddress
from daprlink.models.outcome import RequestOutcome
from daprlink.utils.sanitization import sanitize_url


def encode_json_body(payload: Any) -> bytes:
    """Serialize ``payload`` to a UTF-8 JSON request body.

    Pydantic models are dumped in JSON mode first.

    Raises:
        PayloadSerializationError: If the payload is not JSON-serializable
            (including NaN and infinite floats, which JSON cannot carry).
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    try:
        return json.dumps(payload, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise PayloadSerializationError(
            f"Payload of type {type(payload).__name__} is not JSON-serializable: {e}",
            cause=e,
        ) from e


class HttpDispatcher:
    """Sends JSON POST requests to a fixed sidecar host and port.

    The underlying httpx.AsyncClient is created on first use (or on
    ``async with``) and kept until ``aclose()``. No timeout is set unless
    one is passed; otherwise httpx's default applies.

    Attributes:
        address: Sidecar host and port
        timeout: Explicit request timeout in seconds, or None for the
            transport default
    """

    def __init__(
        self,
        host: str,
        port: int,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            host: Sidecar host
            port: Sidecar HTTP port
            transport: Optional custom async transport (for testing). Must be an
                instance of httpx.AsyncBaseTransport (e.g., httpx.MockTransport).
            timeout: Optional request timeout in seconds.
        """
        self.address = SidecarAddress(host=host, port=port)
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self.address.base_url

    @property
    def is_connected(self) -> bool:
        """Check if the dispatcher holds an open client."""
        return self._client is not None

    def _get_client(self) -> httpx.AsyncClient:
        # No await between the check and the assignment, so concurrent first
        # calls on one event loop end up sharing a single client.
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self._transport is not None:
                kwargs["transport"] = self._transport
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def __aenter__(self) -> HttpDispatcher:
        self._get_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client. A later call opens a new one."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post_json(self, path: str, payload: Any, headers: HeaderSet) -> RequestOutcome:
        """POST ``payload`` as JSON to ``{base_url}{path}``.

        ``Content-Type: application/json`` is added unless ``headers``
        already names a content type. ``headers`` itself is not modified.

        Args:
            path: Request path, appended verbatim to the sidecar base URL
            payload: JSON-serializable value or pydantic model
            headers: Headers to send

        Returns:
            RequestOutcome carrying the response status code

        Raises:
            HeaderEncodingError: If a header cannot be encoded; nothing is sent
            PayloadSerializationError: If the payload cannot be encoded; nothing is sent
            SidecarTimeoutError: If the transport times out
            SidecarConnectionError: If the sidecar cannot be reached
            SidecarTransportError: For any other transport failure
        """
        url = f"{self.base_url}{path}"
        headers.validate()
        body = encode_json_body(payload)

        wire_headers = headers.copy()
        wire_headers.setdefault(CONTENT_TYPE_HEADER, JSON_CONTENT_TYPE)

        safe_url = sanitize_url(url)
        try:
            response = await self._get_client().post(
                url,
                content=body,
                headers=wire_headers.items(),
            )
        except httpx.TimeoutException as e:
            raise SidecarTimeoutError(
                f"Request to {safe_url} timed out: {e!r}", url=safe_url, cause=e
            ) from e
        except httpx.TransportError as e:
            raise SidecarConnectionError(
                f"Could not reach the Dapr sidecar at {safe_url}: {e!r}", url=safe_url, cause=e
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SidecarTransportError(
                f"Request to {safe_url} failed: {e!r}", url=safe_url, cause=e
            ) from e

        return RequestOutcome(method="POST", url=url, status_code=response.status_code)
