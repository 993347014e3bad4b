"""Media type entries shared by request bodies and responses."""

from __future__ import annotations

from typing import Any

from specview.parser.resolver import SpecResolver


class MediaTypeView:
    """One ``content`` entry, keyed by MIME type, with its schema resolved."""

    def __init__(self, resolver: SpecResolver, name: str, info: Any) -> None:
        info = resolver.deref(info)
        if not isinstance(info, dict):
            info = {}
        self.name = name
        self.schema: dict[str, Any] = resolver.deep_deref(info.get("schema") or {})
        self.example: Any = info.get("example")
        self.examples: dict[str, Any] = resolver.deep_deref(info.get("examples") or {})

    @property
    def is_json(self) -> bool:
        mime = self.name.split(";", 1)[0].strip().lower()
        return mime == "application/json" or mime.endswith("+json")

    def __repr__(self) -> str:
        return f"MediaTypeView({self.name!r})"


def build_media_types(resolver: SpecResolver, content: Any) -> list[MediaTypeView]:
    """Build views for a ``content`` mapping, preserving declaration order."""
    if not isinstance(content, dict):
        return []
    return [MediaTypeView(resolver, str(name), info) for name, info in content.items()]
