"""Pytest fixtures for daprlink tests.

Load with ``pytest_plugins = ["daprlink.testing.fixtures"]``.

Fixtures:
    mock_sidecar: Fresh MockSidecar.
    mock_invoker: DaprHttpInvoker wired to mock_sidecar (async).
    mock_publisher: DaprHttpPublisher wired to mock_sidecar (async).
    mock_traced_publisher: TracedPublisher wired to mock_sidecar (async).
    span_exporter: In-memory exporter receiving daprlink spans.
"""

from collections.abc import AsyncIterator, Iterator

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from daprlink.observability.tracing import configure_tracing, reset_tracing
from daprlink.testing.mocks import MockSidecar
from daprlink.transport.invoker import DaprHttpInvoker
from daprlink.transport.publisher import DaprHttpPublisher, TracedPublisher

TEST_SIDECAR_HOST = "localhost"
TEST_SIDECAR_PORT = 3500
TEST_APP_ID = "checkout"
TEST_METHOD = "orders"
TEST_PUBSUB = "mypubsub"
TEST_TOPIC = "orders"


@pytest.fixture
def mock_sidecar() -> MockSidecar:
    """Create a fresh MockSidecar answering 204."""
    return MockSidecar()


@pytest.fixture
async def mock_invoker(mock_sidecar: MockSidecar) -> AsyncIterator[DaprHttpInvoker]:
    """Provide an open invoker for TEST_APP_ID / TEST_METHOD on mock_sidecar."""
    async with DaprHttpInvoker(
        TEST_SIDECAR_HOST,
        TEST_SIDECAR_PORT,
        TEST_APP_ID,
        TEST_METHOD,
        transport=mock_sidecar.transport,
    ) as invoker:
        yield invoker


@pytest.fixture
async def mock_publisher(mock_sidecar: MockSidecar) -> AsyncIterator[DaprHttpPublisher]:
    """Provide an open header-passthrough publisher for TEST_PUBSUB / TEST_TOPIC."""
    async with DaprHttpPublisher(
        TEST_SIDECAR_HOST,
        TEST_SIDECAR_PORT,
        TEST_PUBSUB,
        TEST_TOPIC,
        transport=mock_sidecar.transport,
    ) as publisher:
        yield publisher


@pytest.fixture
async def mock_traced_publisher(mock_sidecar: MockSidecar) -> AsyncIterator[TracedPublisher]:
    """Provide an open trace-propagating publisher for TEST_PUBSUB / TEST_TOPIC."""
    async with TracedPublisher(
        TEST_SIDECAR_HOST,
        TEST_SIDECAR_PORT,
        TEST_PUBSUB,
        TEST_TOPIC,
        transport=mock_sidecar.transport,
    ) as publisher:
        yield publisher


@pytest.fixture
def span_exporter(monkeypatch: pytest.MonkeyPatch) -> Iterator[InMemorySpanExporter]:
    """Configure daprlink tracing with an in-memory exporter; reset afterwards."""
    monkeypatch.delenv("OTEL_TRACES_EXPORTER", raising=False)
    exporter = InMemorySpanExporter()
    reset_tracing()
    configure_tracing(service_name="daprlink-tests", span_exporter=exporter)
    yield exporter
    reset_tracing()


__all__ = [
    "TEST_APP_ID",
    "TEST_METHOD",
    "TEST_PUBSUB",
    "TEST_SIDECAR_HOST",
    "TEST_SIDECAR_PORT",
    "TEST_TOPIC",
    "mock_invoker",
    "mock_publisher",
    "mock_sidecar",
    "mock_traced_publisher",
    "span_exporter",
]
