"""daprlink testing utilities.

Modules:
    fixtures: Pytest fixtures (mock_sidecar, mock_invoker, mock_publisher,
              mock_traced_publisher, span_exporter).
    mocks: MockSidecar for recording requests behind httpx.MockTransport, and
           in-process RecordingInvoker / RecordingPublisher doubles.
    assertions: assert_traceparent_valid, assert_invocation_request,
                assert_publish_request.

Example:
    >>> from daprlink.testing import MockSidecar, assert_traceparent_valid
"""

from daprlink.testing.assertions import (
    assert_invocation_request,
    assert_publish_request,
    assert_traceparent_valid,
)
from daprlink.testing.mocks import (
    MockSidecar,
    RecordedCall,
    RecordedRequest,
    RecordingInvoker,
    RecordingPublisher,
)

__all__ = [
    "MockSidecar",
    "RecordedCall",
    "RecordedRequest",
    "RecordingInvoker",
    "RecordingPublisher",
    "assert_invocation_request",
    "assert_publish_request",
    "assert_traceparent_valid",
]
