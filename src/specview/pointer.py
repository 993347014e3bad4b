"""Compile and parse RFC 6901 JSON Pointers.

Pointers identify a location inside the OpenAPI document and double as
stable, URL-friendly identifiers for operation views. The path segment
``/pets/{id}`` contains the separator itself, so every segment is escaped
(``~`` becomes ``~0``, ``/`` becomes ``~1``) before joining::

    >>> compile_pointer(["paths", "/pets/{id}", "get"])
    '/paths/~1pets~1{id}/get'
"""

from __future__ import annotations

from typing import Iterable, Union

Segment = Union[str, int]


def escape(segment: Segment) -> str:
    """Escape a single pointer segment.

    ``~`` must be replaced before ``/`` so that the ``~`` introduced by
    ``~1`` is not escaped a second time.

    Raises:
        TypeError: If *segment* is neither a string nor an integer.
    """
    if isinstance(segment, bool) or not isinstance(segment, (str, int)):
        raise TypeError(
            f"Pointer segments must be str or int, got {type(segment).__name__}"
        )
    return str(segment).replace("~", "~0").replace("/", "~1")


def unescape(segment: str) -> str:
    """Reverse :func:`escape`."""
    return segment.replace("~1", "/").replace("~0", "~")


def compile_pointer(segments: Iterable[Segment]) -> str:
    """Join *segments* into a single pointer string.

    Args:
        segments: Raw, unescaped path segments.

    Returns:
        The compiled pointer, or ``""`` for an empty sequence.
    """
    parts = [escape(segment) for segment in segments]
    if not parts:
        return ""
    return "/" + "/".join(parts)


def parse_pointer(pointer: str) -> list[str]:
    """Split a pointer (optionally prefixed with ``#``) into raw segments."""
    if pointer.startswith("#"):
        pointer = pointer[1:]
    if not pointer:
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer: {pointer!r}")
    return [unescape(part) for part in pointer[1:].split("/")]


def join_pointer(base: str, segments: Iterable[Segment]) -> str:
    """Append escaped *segments* to an already compiled *base* pointer."""
    return base + compile_pointer(segments)
