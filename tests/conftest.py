"""Shared pytest fixtures for daprlink tests.

The daprlink.testing.fixtures plugin provides mock_sidecar, mock_invoker,
mock_publisher, mock_traced_publisher and span_exporter.
"""

from __future__ import annotations

import pytest

from daprlink.models import TraceContext
from daprlink.observability.logging import clear_context

pytest_plugins = ["daprlink.testing.fixtures"]


@pytest.fixture(autouse=True)
def _isolate_log_context() -> None:
    """Drop structlog context variables bound by a previous test."""
    clear_context()


@pytest.fixture
def sampled_context() -> TraceContext:
    """A sampled trace context with fixed ids and a vendor trace state.

    traceparent: 00-0102030405060708090a0b0c0d0e0f10-0a0b0c0d0e0f1011-01
    """
    return TraceContext(
        trace_id=0x0102030405060708090A0B0C0D0E0F10,
        span_id=0x0A0B0C0D0E0F1011,
        sampled=True,
        trace_state="congo=t61rcWkgMzE,rojo=00f067aa0ba902b7",
    )


@pytest.fixture
def sample_order() -> dict[str, object]:
    """A small JSON payload."""
    return {"order_id": 7, "items": [{"sku": "A-1", "qty": 2}], "express": False}
