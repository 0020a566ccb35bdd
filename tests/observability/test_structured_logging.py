"""Tests for structured logging configuration."""

import io
import json
import logging
import sys

import pytest
import structlog

from daprlink.errors import ConfigurationError
from daprlink.observability.logging import (
    REDACTED_PLACEHOLDER,
    LogSettings,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_root_level(self) -> None:
        """configure_logging sets the root log level."""
        configure_logging(log_format="console", log_level="WARNING", force=True)
        assert logging.getLogger().level == logging.WARNING

    def test_json_format(self) -> None:
        """JSON output can be configured."""
        configure_logging(log_format="json", log_level="INFO", force=True)
        assert get_logger("test.json") is not None

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Level comes from DAPRLINK_LOG_LEVEL when not passed."""
        monkeypatch.setenv("DAPRLINK_LOG_LEVEL", "error")
        configure_logging(force=True)
        assert logging.getLogger().level == logging.ERROR

    def test_service_name_in_records(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Every record carries the service name, even after the context is cleared."""
        stream = io.StringIO()
        monkeypatch.setattr(sys, "stdout", stream)
        configure_logging(
            log_format="json", log_level="INFO", service_name="orders-service", force=True
        )
        clear_context()
        get_logger("tests.service").info("daprlink.test.event", topic="orders")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["service"] == "orders-service"
        assert record["event"] == "daprlink.test.event"
        assert record["topic"] == "orders"
        assert record["level"] == "info"

    def test_unknown_level(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            configure_logging(log_level="chatty", force=True)
        assert exc_info.value.setting == "DAPRLINK_LOG_LEVEL"

    def test_unknown_format(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            configure_logging(log_format="xml", force=True)
        assert exc_info.value.setting == "DAPRLINK_LOG_FORMAT"

    def test_quiets_httpx_request_lines(self) -> None:
        """httpx per-request INFO lines are suppressed."""
        configure_logging(log_level="INFO", force=True)
        assert logging.getLogger("httpx").level == logging.WARNING

        configure_logging(log_level="ERROR", force=True)
        assert logging.getLogger("httpx").level == logging.ERROR

    def test_single_handler_after_reconfigure(self) -> None:
        """Reconfiguring replaces the root handler instead of stacking."""
        configure_logging(force=True)
        configure_logging(force=True)
        assert len(logging.getLogger().handlers) == 1


class TestLogContext:
    """Tests for bind_context and clear_context."""

    def test_bind_and_clear(self) -> None:
        """Bound values are visible until cleared."""
        bind_context(trace_id="abc")
        assert structlog.contextvars.get_contextvars()["trace_id"] == "abc"
        clear_context()
        assert "trace_id" not in structlog.contextvars.get_contextvars()


class TestSanitizeForLogging:
    """Tests for sanitize_for_logging."""

    def test_redacts_sensitive_keys(self) -> None:
        """Keys that look like credentials are redacted."""
        result = sanitize_for_logging({"order_id": 7, "api_key": "sk_live", "Password": "p"})
        assert result == {"order_id": 7, "api_key": REDACTED_PLACEHOLDER, "Password": REDACTED_PLACEHOLDER}

    def test_nested_structures(self) -> None:
        """Nested dicts and lists are walked."""
        result = sanitize_for_logging({"customer": {"auth_token": "t"}, "cards": [{"secret": "s"}, 1]})
        assert result == {
            "customer": {"auth_token": REDACTED_PLACEHOLDER},
            "cards": [{"secret": REDACTED_PLACEHOLDER}, 1],
        }

    @pytest.mark.parametrize("value", [None, 3, "text", True])
    def test_scalars_unchanged(self, value: object) -> None:
        """Scalars pass through."""
        assert sanitize_for_logging(value) == value

    def test_does_not_mutate_input(self) -> None:
        """The original payload is left alone."""
        payload = {"token": "t"}
        sanitize_for_logging(payload)
        assert payload == {"token": "t"}


class TestDebugMode:
    """Tests for is_debug_mode."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", "on"])
    def test_truthy(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        """Truthy values enable debug mode."""
        monkeypatch.setenv("DAPRLINK_DEBUG", value)
        assert is_debug_mode()

    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Debug mode is off by default."""
        monkeypatch.delenv("DAPRLINK_DEBUG", raising=False)
        assert not is_debug_mode()


class TestLogSettings:
    """Tests for LogSettings."""

    def test_defaults(self) -> None:
        settings = LogSettings.from_env({})
        assert settings == LogSettings(log_format="console", log_level="INFO", service_name="daprlink")

    def test_from_mapping(self) -> None:
        """Values come from the DAPRLINK_* variables."""
        settings = LogSettings.from_env(
            {
                "DAPRLINK_LOG_FORMAT": "json",
                "DAPRLINK_LOG_LEVEL": "debug",
                "DAPRLINK_SERVICE_NAME": "checkout",
            }
        )
        assert settings.service_name == "checkout"
        assert settings.level_number() == logging.DEBUG
        assert isinstance(settings.renderer(), structlog.processors.JSONRenderer)
