"""Structured logging configuration for daprlink.

This module configures structlog for structured logging with support for
both development (console) and production (JSON) output formats.

Environment Variables:
    DAPRLINK_LOG_FORMAT: Set to "json" for JSON output, "console" for colored output
    DAPRLINK_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR)
    DAPRLINK_SERVICE_NAME: Service name to include in logs
    DAPRLINK_DEBUG: Set to "true" or "1" to log payloads unredacted

Example:
    >>> from daprlink.observability.logging import get_logger, configure_logging
    >>>
    >>> configure_logging(log_format="json", log_level="INFO")
    >>> logger = get_logger("daprlink.transport.publisher")
    >>> logger.info("daprlink.publisher.publishing", topic="orders")
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

from daprlink.errors import ConfigurationError

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
DEFAULT_SERVICE_NAME = "daprlink"

ENV_LOG_FORMAT = "DAPRLINK_LOG_FORMAT"
ENV_LOG_LEVEL = "DAPRLINK_LOG_LEVEL"
ENV_SERVICE_NAME = "DAPRLINK_SERVICE_NAME"
ENV_DEBUG = "DAPRLINK_DEBUG"

REDACTED_PLACEHOLDER = "***REDACTED***"

# Key substrings (case-insensitive) that mark a payload field as sensitive
_SENSITIVE_KEY_PATTERNS = frozenset({"password", "token", "secret", "key", "authorization", "auth"})

_logging_configured = False


def _is_sensitive_key(key: str) -> bool:
    lower = key.lower()
    return any(pattern in lower for pattern in _SENSITIVE_KEY_PATTERNS)


def sanitize_for_logging(data: Any) -> Any:
    """Redact sensitive fields of a payload before it is logged.

    Dict keys matching (case-insensitive) password, token, secret, key,
    authorization or auth have their values replaced with
    REDACTED_PLACEHOLDER. Nested dicts and lists are walked recursively;
    scalars are returned unchanged.

    Args:
        data: A JSON-like value (the outgoing payload).

    Returns:
        A sanitized copy of ``data``.

    Example:
        >>> sanitize_for_logging({"order": 7, "api_key": "sk_live_abc"})
        {'order': 7, 'api_key': '***REDACTED***'}
        >>> sanitize_for_logging([{"token": "t"}, 3])
        [{'token': '***REDACTED***'}, 3]
    """
    if isinstance(data, dict):
        return {
            k: REDACTED_PLACEHOLDER
            if isinstance(k, str) and _is_sensitive_key(k)
            else sanitize_for_logging(v)
            for k, v in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item) for item in data]
    return data


def is_debug_mode() -> bool:
    """Return True if DAPRLINK_DEBUG is set to a truthy value (e.g. true, 1)."""
    value = os.environ.get(ENV_DEBUG, "").strip().lower()
    return value in ("true", "1", "yes", "on")

@dataclass(frozen=True)
class LogSettings:
    """How daprlink log records are rendered.

    Attributes:
        log_format: "console" or "json"
        log_level: Name of a stdlib logging level
        service_name: Added to every record as ``service``
    """

    log_format: str = DEFAULT_LOG_FORMAT
    log_level: str = DEFAULT_LOG_LEVEL
    service_name: str = DEFAULT_SERVICE_NAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LogSettings:
        env = os.environ if environ is None else environ
        return cls(
            log_format=env.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT),
            log_level=env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            service_name=env.get(ENV_SERVICE_NAME, DEFAULT_SERVICE_NAME),
        )

    def level_number(self) -> int:
        """Resolve ``log_level`` to its numeric value.

        Raises:
            ConfigurationError: If the name is not a logging level.
        """
        level = logging.getLevelName(self.log_level.strip().upper())
        if not isinstance(level, int):
            raise ConfigurationError(ENV_LOG_LEVEL, f"unknown log level {self.log_level!r}")
        return level

    def renderer(self) -> Processor:
        """Return the final processor for ``log_format``.

        Raises:
            ConfigurationError: If the format is neither "console" nor "json".
        """
        log_format = self.log_format.strip().lower()
        if log_format == "json":
            return structlog.processors.JSONRenderer()
        if log_format == "console":
            return structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        raise ConfigurationError(
            ENV_LOG_FORMAT, f"expected 'console' or 'json', got {self.log_format!r}"
        )


def _add_service_name(service_name: str) -> Processor:
    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _pre_chain(service_name: str) -> list[Processor]:
    # Shared by structlog records and records from plain stdlib loggers
    return [
        structlog.contextvars.merge_contextvars,
        _add_service_name(service_name),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    service_name: str | None = None,
    force: bool = False,
) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Arguments left as None come from DAPRLINK_LOG_FORMAT,
    DAPRLINK_LOG_LEVEL and DAPRLINK_SERVICE_NAME. Calling again without
    ``force`` is a no-op.

    Raises:
        ConfigurationError: On an unknown level or format.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    env = LogSettings.from_env()
    settings = LogSettings(
        log_format=log_format or env.log_format,
        log_level=log_level or env.log_level,
        service_name=service_name or env.service_name,
    )
    level = settings.level_number()
    pre_chain = _pre_chain(settings.service_name)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                settings.renderer(),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    _logging_configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a logger named ``name``, configuring defaults on first use."""
    if not _logging_configured:
        configure_logging()
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind fields added to every record logged from the current context.

    Example:
        >>> bind_context(query_id="order-7")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
