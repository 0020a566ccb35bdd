"""Constants for the Dapr sidecar HTTP API.

This module defines header names, path segments and defaults shared
across daprlink.
"""

# Sidecar defaults (match the Dapr CLI and injector)
DEFAULT_SIDECAR_HOST = "localhost"
DEFAULT_SIDECAR_HTTP_PORT = 3500

# Dapr HTTP API version segment used by the publish endpoint
DAPR_API_VERSION = "v1.0"

# Header naming the target application of a service invocation
DAPR_APP_ID_HEADER = "dapr-app-id"

CONTENT_TYPE_HEADER = "Content-Type"
JSON_CONTENT_TYPE = "application/json"

# W3C Trace Context
TRACEPARENT_HEADER = "traceparent"
TRACESTATE_HEADER = "tracestate"
TRACEPARENT_VERSION = 0x00
"""Only version 00 of the traceparent format is emitted."""

TRACE_FLAG_SAMPLED = 0x01
"""Sampled bit of the traceparent trace-flags byte.

The emitted flags byte is the context's flags masked with this bit, so
any other flag the tracing provider sets is dropped.
"""

MAX_TRACE_ID = (1 << 128) - 1
MAX_SPAN_ID = (1 << 64) - 1
