"""Tests for daprlink error handling."""

import httpx

from daprlink.errors import (
    ConfigurationError,
    DaprLinkError,
    HeaderEncodingError,
    PayloadSerializationError,
    SidecarConnectionError,
    SidecarTimeoutError,
    SidecarTransportError,
)


class TestDaprLinkError:
    """Test DaprLinkError base class."""

    def test_basic_error_creation(self) -> None:
        """Test creating a basic DaprLinkError."""
        error = DaprLinkError(code="daprlink:test/error", message="Test error message")

        assert error.code == "daprlink:test/error"
        assert error.message == "Test error message"
        assert error.details == {}
        assert str(error) == "Test error message"

    def test_to_dict(self) -> None:
        """Test serialization to a code/message/details dict."""
        error = DaprLinkError("daprlink:test/error", "msg", {"key": "value"})

        assert error.to_dict() == {
            "code": "daprlink:test/error",
            "message": "msg",
            "details": {"key": "value"},
        }

    def test_error_details_not_shared(self) -> None:
        """Test that details dict is not shared between instances."""
        error1 = DaprLinkError("code", "msg")
        error2 = DaprLinkError("code", "msg")
        error1.details["key"] = "value"

        assert error2.details == {}


class TestHeaderEncodingError:
    """Test HeaderEncodingError class."""

    def test_carries_name_and_reason(self) -> None:
        """Test the header name and reason are exposed and in the message."""
        error = HeaderEncodingError("X-Bad", "value contains control characters")

        assert error.code == "daprlink:headers/invalid_header"
        assert error.header_name == "X-Bad"
        assert error.reason == "value contains control characters"
        assert "X-Bad" in str(error)
        assert isinstance(error, DaprLinkError)


class TestTransportErrors:
    """Test the SidecarTransportError family."""

    def test_cause_is_described_in_details(self) -> None:
        """Test the underlying exception is kept and described."""
        cause = httpx.ConnectError("connection refused")
        error = SidecarConnectionError("boom", url="http://localhost:3500/x", cause=cause)

        assert error.cause is cause
        assert error.url == "http://localhost:3500/x"
        assert error.details["cause"] == "ConnectError: connection refused"
        assert error.details["url"] == "http://localhost:3500/x"

    def test_codes_per_subclass(self) -> None:
        """Test each transport error subclass has its own code."""
        assert SidecarTransportError("m").code == "daprlink:transport/error"
        assert SidecarConnectionError("m").code == "daprlink:transport/connection_failed"
        assert SidecarTimeoutError("m").code == "daprlink:transport/timeout"
        assert PayloadSerializationError("m").code == "daprlink:transport/serialization_failed"

    def test_subclasses_are_transport_errors(self) -> None:
        """Test callers can catch every transport failure with one class."""
        for cls in (SidecarConnectionError, SidecarTimeoutError, PayloadSerializationError):
            assert issubclass(cls, SidecarTransportError)

    def test_without_cause_or_url(self) -> None:
        """Test optional fields are left out of details when not given."""
        error = SidecarTransportError("failed")

        assert error.details == {}
        assert error.cause is None


class TestConfigurationError:
    """Test ConfigurationError class."""

    def test_names_setting(self) -> None:
        """Test the offending setting is exposed."""
        error = ConfigurationError("DAPR_HTTP_PORT", "expected an integer")

        assert error.code == "daprlink:config/invalid"
        assert error.setting == "DAPR_HTTP_PORT"
        assert "DAPR_HTTP_PORT" in error.message
