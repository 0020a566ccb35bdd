"""daprlink Error Taxonomy.

This module defines the error hierarchy raised by daprlink when a call
to the Dapr sidecar cannot be completed. Every error carries a code in
the ``daprlink:<area>/<reason>`` form, a human-readable message and a
details dict.

HTTP error statuses returned by the sidecar or the target application
are not errors at this layer; they are reported through
``RequestOutcome.status_code``.
"""
from __future__ import annotations

from typing import Any


class DaprLinkError(Exception):
    """Base exception for all daprlink errors.

    Attributes:
        code: Error code following the daprlink:<area>/<reason> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class HeaderEncodingError(DaprLinkError):
    """Raised when a header name or value cannot be sent as an HTTP header.

    Detected before the request is handed to the transport, so nothing
    is sent for the failing call. The offending value is never copied
    into the error, only the header name and the reason.

    Attributes:
        header_name: Name of the rejected header
        reason: Why the header was rejected
    """

    def __init__(
        self, header_name: str, reason: str, details: dict[str, Any] | None = None
    ) -> None:
        message = f"Invalid HTTP header {header_name!r}: {reason}"
        super().__init__(
            code="daprlink:headers/invalid_header",
            message=message,
            details={"header_name": header_name, "reason": reason, **(details or {})},
        )
        self.header_name = header_name
        self.reason = reason


class SidecarTransportError(DaprLinkError):
    """Raised when the request to the sidecar fails at the transport level.

    Attributes:
        url: Target URL of the failed request (credentials masked)
        cause: Original exception raised by the transport
    """

    default_code = "daprlink:transport/error"

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details_dict: dict[str, Any] = {}
        if url is not None:
            details_dict["url"] = url
        if cause is not None:
            details_dict["cause"] = f"{type(cause).__name__}: {cause}"
        if details:
            details_dict.update(details)

        super().__init__(code=self.default_code, message=message, details=details_dict)
        self.url = url
        self.cause = cause


class SidecarConnectionError(SidecarTransportError):
    """Raised when the sidecar cannot be reached (refused, DNS, TLS, reset)."""

    default_code = "daprlink:transport/connection_failed"


class SidecarTimeoutError(SidecarTransportError):
    """Raised when the transport gives up waiting on the sidecar.

    No timeout is configured by daprlink itself; this surfaces the
    transport's own timeout.
    """

    default_code = "daprlink:transport/timeout"


class PayloadSerializationError(SidecarTransportError):
    """Raised when the payload cannot be encoded as a JSON request body."""

    default_code = "daprlink:transport/serialization_failed"


class ConfigurationError(DaprLinkError):
    """Raised when sidecar settings from the environment are unusable.

    Attributes:
        setting: Name of the offending setting (usually an env var)
    """

    def __init__(self, setting: str, reason: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="daprlink:config/invalid",
            message=f"Invalid configuration for {setting}: {reason}",
            details={"setting": setting, **(details or {})},
        )
        self.setting = setting
