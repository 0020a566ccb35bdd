"""Result of a call that reached the sidecar."""

from pydantic import Field

from daprlink.models.base import DaprLinkBaseModel


class RequestOutcome(DaprLinkBaseModel):
    """Successful dispatch of one request.

    A call succeeds as soon as the transport receives any HTTP response.
    ``status_code`` is recorded for callers that want to look at it, but a
    4xx or 5xx from the sidecar or the target app is still a success here.
    Transport failures never produce an outcome; they raise a
    ``SidecarTransportError`` subclass instead.

    Attributes:
        method: HTTP method used
        url: Request URL
        status_code: HTTP status of the response
    """

    method: str = "POST"
    url: str
    # Any three-digit code, including ones outside the registered 1xx-5xx classes
    status_code: int = Field(..., ge=100, le=999)

    @property
    def is_success_status(self) -> bool:
        """True for a 2xx response. Informational only."""
        return 200 <= self.status_code < 300
