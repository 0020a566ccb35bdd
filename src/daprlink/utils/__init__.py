"""Utility modules for daprlink.

This package contains helpers shared across daprlink, such as masking
credentials before URLs and headers reach logs or error details.
"""

__all__: list[str] = []
