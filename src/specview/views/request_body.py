"""Request body view."""

from __future__ import annotations

from typing import Any

from specview.parser.resolver import SpecResolver
from specview.views.media import MediaTypeView, build_media_types


class RequestBodyView:
    """Display-ready view of an operation's ``requestBody``.

    Args:
        resolver: The shared document resolver.
        body_or_ref: The raw *Request Body Object* or a reference to one
            under ``#/components/requestBodies``.
    """

    def __init__(self, resolver: SpecResolver, body_or_ref: Any) -> None:
        body = resolver.deref(body_or_ref)
        if not isinstance(body, dict):
            body = {}
        self.description: str = body.get("description") or ""
        self.required: bool = bool(body.get("required"))
        self.content: list[MediaTypeView] = build_media_types(resolver, body.get("content"))

    @property
    def content_types(self) -> list[str]:
        return [media.name for media in self.content]

    def __repr__(self) -> str:
        return f"RequestBodyView(required={self.required!r}, content={self.content_types!r})"
