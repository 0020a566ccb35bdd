"""Sidecar connection settings.

Dapr injects the sidecar's HTTP port into the application's environment
as ``DAPR_HTTP_PORT``; ``DAPR_HOST`` is honored when the sidecar is not
on localhost (e.g. docker-compose setups).

Example:
    >>> settings = SidecarSettings.from_env({"DAPR_HTTP_PORT": "3501"})
    >>> settings.http_port
    3501
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from daprlink.errors import ConfigurationError
from daprlink.models.constants import DEFAULT_SIDECAR_HOST, DEFAULT_SIDECAR_HTTP_PORT

ENV_DAPR_HOST = "DAPR_HOST"
ENV_DAPR_HTTP_PORT = "DAPR_HTTP_PORT"


@dataclass(frozen=True)
class SidecarSettings:
    """Where the local Dapr sidecar listens for HTTP.

    Attributes:
        host: Sidecar host (default: localhost)
        http_port: Sidecar HTTP port (default: 3500)
    """

    host: str = DEFAULT_SIDECAR_HOST
    http_port: int = DEFAULT_SIDECAR_HTTP_PORT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SidecarSettings:
        """Read settings from the environment.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigurationError: If DAPR_HTTP_PORT is not an integer in 0-65535
                or DAPR_HOST is blank.
        """
        env = os.environ if environ is None else environ

        host = env.get(ENV_DAPR_HOST, DEFAULT_SIDECAR_HOST).strip()
        if not host:
            raise ConfigurationError(ENV_DAPR_HOST, "host must not be empty")

        raw_port = env.get(ENV_DAPR_HTTP_PORT)
        if raw_port is None or not raw_port.strip():
            return cls(host=host)
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ConfigurationError(
                ENV_DAPR_HTTP_PORT, f"expected an integer, got {raw_port!r}"
            ) from e
        if not 0 <= port <= 65535:
            raise ConfigurationError(ENV_DAPR_HTTP_PORT, f"port {port} is out of range")
        return cls(host=host, http_port=port)
