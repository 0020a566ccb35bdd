"""Header set used to build requests to the Dapr sidecar.

HeaderSet keeps one value per header name. Names are matched
case-insensitively, as HTTP does, while the spelling passed to the last
``add`` is kept for the wire.

No legality checks happen while a set is being built; ``validate_header``
runs at send time so a malformed entry fails the call before anything
leaves the process.

Example:
    >>> headers = HeaderSet({"X-Request-Id": "req-1"})
    >>> headers.add("x-request-id", "req-2")
    >>> headers.to_dict()
    {'x-request-id': 'req-2'}
    >>> "X-REQUEST-ID" in headers
    True
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping

from daprlink.errors import HeaderEncodingError
from daprlink.utils.sanitization import redact_headers

# RFC 9110 section 5.6.2 token characters
_HEADER_NAME_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Visible ASCII, space and horizontal tab
_HEADER_VALUE_PATTERN = re.compile(r"[\t\x20-\x7e]*")


def validate_header(name: str, value: str) -> None:
    """Check that ``name: value`` can be encoded as an HTTP/1.1 header.

    Args:
        name: Header name
        value: Header value

    Raises:
        HeaderEncodingError: If the name is not a token or the value holds
            control characters (CR, LF, NUL...) or non-ASCII text.
    """
    if not isinstance(name, str) or not isinstance(value, str):
        raise HeaderEncodingError(str(name), "header names and values must be strings")
    if not _HEADER_NAME_PATTERN.fullmatch(name):
        raise HeaderEncodingError(name, "name is not a valid HTTP token")
    if not _HEADER_VALUE_PATTERN.fullmatch(value):
        raise HeaderEncodingError(name, "value contains control or non-ASCII characters")


class HeaderSet:
    """Case-insensitive mapping of header name to header value.

    Iteration yields ``(name, value)`` pairs in insertion order of the
    normalized name; HTTP gives that order no meaning.
    """

    __slots__ = ("_entries",)

    def __init__(self, headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        self._entries: dict[str, tuple[str, str]] = {}
        if headers is None:
            return
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for key, value in pairs:
            self.add(key, value)

    def add(self, key: str, value: str) -> None:
        """Insert ``key``, replacing any value stored under the same name.

        Raises:
            HeaderEncodingError: If ``key`` is not a string.
        """
        if not isinstance(key, str):
            raise HeaderEncodingError(repr(key), "header names must be strings")
        self._entries[key.lower()] = (key, value)

    def setdefault(self, key: str, value: str) -> str:
        """Set ``key`` only if no value is stored under that name.

        Returns:
            The value stored after the call.
        """
        if not isinstance(key, str):
            raise HeaderEncodingError(repr(key), "header names must be strings")
        existing = self._entries.get(key.lower())
        if existing is not None:
            return existing[1]
        self.add(key, value)
        return value

    def get(self, key: str, default: str | None = None) -> str | None:
        entry = self._entries.get(key.lower())
        return entry[1] if entry is not None else default

    def remove(self, key: str) -> None:
        """Drop ``key`` if present."""
        self._entries.pop(key.lower(), None)

    def copy(self) -> HeaderSet:
        clone = HeaderSet()
        clone._entries = dict(self._entries)
        return clone

    def items(self) -> list[tuple[str, str]]:
        return list(self._entries.values())

    def to_dict(self) -> dict[str, str]:
        """Return the headers as a plain dict keyed by their sent spelling."""
        return dict(self._entries.values())

    def validate(self) -> None:
        """Run ``validate_header`` on every entry.

        Raises:
            HeaderEncodingError: On the first illegal entry.
        """
        for name, value in self._entries.values():
            validate_header(name, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._entries

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderSet):
            return {k: v for k, (_, v) in self._entries.items()} == {
                k: v for k, (_, v) in other._entries.items()
            }
        return NotImplemented

    def __repr__(self) -> str:
        return f"HeaderSet({redact_headers(self.items())!r})"


__all__ = ["HeaderSet", "validate_header"]
