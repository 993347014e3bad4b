"""Merge path-level and operation-level parameters.

Parameters are identified by the pair ``(name, in)``. Path-level
parameters come first; an operation-level parameter with the same key
replaces the inherited one at its original position, any other
operation-level parameter is appended::

    path level:       [id@path, trace@header]
    operation level:  [limit@query, id@path (required)]
    merged:           [id@path (required), trace@header, limit@query]

Keys are read from the dereferenced parameter, so a ``$ref`` to
``#/components/parameters/...`` overrides an inline one (and vice versa).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, TypeVar

from specview.models import ParameterLocation
from specview.parser.resolver import SpecResolver
from specview.pointer import join_pointer

logger = logging.getLogger(__name__)

_DEFAULT_STYLES: dict[ParameterLocation, str] = {
    ParameterLocation.QUERY: "form",
    ParameterLocation.COOKIE: "form",
    ParameterLocation.PATH: "simple",
    ParameterLocation.HEADER: "simple",
}

T = TypeVar("T")


def param_key(param: dict[str, Any]) -> tuple[str, str]:
    """Identity of a parameter: its ``name`` and ``in`` location."""
    return (str(param.get("name", "")), str(param.get("in", "")))


def merge_params(
    resolver: SpecResolver,
    path_params: Optional[Sequence[Any]],
    operation_params: Optional[Sequence[Any]],
) -> list[Any]:
    """Combine inherited and operation-level parameters.

    Args:
        resolver: Used to dereference entries in order to read their key.
        path_params: Parameters declared on the path item (may be ``None``).
        operation_params: Parameters declared on the operation.

    Returns:
        The raw entries (references are kept as references) in merged
        order. Entries that do not resolve to a mapping are dropped.
    """
    merged: list[Any] = []
    positions: dict[tuple[str, str], int] = {}

    for param in path_params or []:
        resolved = resolver.deref(param)
        if not isinstance(resolved, dict):
            logger.debug("Skipping malformed path parameter: %r", param)
            continue
        positions[param_key(resolved)] = len(merged)
        merged.append(param)

    for param in operation_params or []:
        resolved = resolver.deref(param)
        if not isinstance(resolved, dict):
            logger.debug("Skipping malformed parameter: %r", param)
            continue
        key = param_key(resolved)
        if key in positions:
            merged[positions[key]] = param
        else:
            positions[key] = len(merged)
            merged.append(param)

    return merged


def sort_by_required(items: Sequence[T]) -> list[T]:
    """Stable reorder placing every item with ``required`` set first.

    The flag is read from the view, not from the raw document. A
    :class:`ParameterView` for a path parameter is always required (OpenAPI
    demands ``required: true`` there), so a path parameter declared
    ``required: false`` still sorts with the required ones.
    """
    return sorted(items, key=lambda item: not getattr(item, "required", False))


class ParameterView:
    """Display-ready view of one parameter.

    Path parameters are always required, whatever the document says. A
    parameter described with ``content`` instead of ``schema`` takes the
    schema of its (single) media type.
    """

    def __init__(
        self,
        resolver: SpecResolver,
        param_or_ref: Any,
        operation_pointer: str,
    ) -> None:
        raw = resolver.deref(param_or_ref)
        if not isinstance(raw, dict):
            raw = {}

        self.name: str = str(raw.get("name", ""))
        self.raw_location: str = str(raw.get("in", ""))
        try:
            self.location: Optional[ParameterLocation] = ParameterLocation(self.raw_location)
        except ValueError:
            self.location = None

        self.required: bool = bool(raw.get("required")) or (
            self.location is ParameterLocation.PATH
        )
        self.description: str = raw.get("description") or ""
        self.deprecated: bool = bool(raw.get("deprecated"))
        self.example: Any = raw.get("example")
        self.examples: dict[str, Any] = resolver.deep_deref(raw.get("examples") or {})
        self.schema: dict[str, Any] = resolver.deep_deref(self._schema_of(raw))

        self.style: Optional[str] = raw.get("style") or _DEFAULT_STYLES.get(self.location)
        explode = raw.get("explode")
        self.explode: bool = self.style == "form" if explode is None else bool(explode)

        self.pointer: str = join_pointer(
            operation_pointer, ["parameters", self.raw_location, self.name]
        )

    @staticmethod
    def _schema_of(raw: dict[str, Any]) -> Any:
        if "schema" in raw:
            return raw["schema"] or {}
        content = raw.get("content")
        if isinstance(content, dict):
            for media in content.values():
                if isinstance(media, dict) and "schema" in media:
                    return media["schema"]
        return {}

    def __repr__(self) -> str:
        return (
            f"ParameterView(name={self.name!r}, in={self.raw_location!r}, "
            f"required={self.required!r})"
        )
