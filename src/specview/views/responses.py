"""Filter and classify an operation's responses.

Only keys that are HTTP status codes survive: ``"default"``, three digit
codes from ``100`` to ``599`` and the range forms ``1XX`` to ``5XX``.
Anything else under ``responses`` (``x-`` extensions, typos) is dropped
without a warning.

Every response also learns whether *any* response of the operation is a
success. A ``default`` response is shown as an error when an explicit
success exists and as the success response otherwise.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from specview.models import StatusFamily, ViewOptions
from specview.parser.resolver import SpecResolver
from specview.views.media import MediaTypeView, build_media_types

DEFAULT_RESPONSE = "default"

_STATUS_CODE = re.compile(r"^[1-5](?:[0-9]{2}|XX)$", re.IGNORECASE)

_FAMILIES: dict[str, StatusFamily] = {
    "1": StatusFamily.INFO,
    "2": StatusFamily.SUCCESS,
    "3": StatusFamily.REDIRECT,
    "4": StatusFamily.CLIENT_ERROR,
    "5": StatusFamily.SERVER_ERROR,
}


def is_status_code(code: str) -> bool:
    """Return ``True`` for keys allowed under ``responses``."""
    return code == DEFAULT_RESPONSE or bool(_STATUS_CODE.match(code))


def status_family(code: str) -> Optional[StatusFamily]:
    """Classify *code* by its leading digit; ``default`` has no family.

    Raises:
        ValueError: If *code* is not a status code.
    """
    if code == DEFAULT_RESPONSE:
        return None
    if not _STATUS_CODE.match(code):
        raise ValueError(f"Invalid HTTP status code: {code!r}")
    return _FAMILIES[code[0]]


class ResponseView:
    """Display-ready view of one response.

    Attributes:
        code: The status code key as written in the document.
        family: The status family, ``None`` for ``default``.
        has_success_responses: Whether the operation declares at least one
            success response (any code, this one included).
        expanded: Whether the response starts out expanded.
    """

    def __init__(
        self,
        resolver: SpecResolver,
        code: str,
        has_success_responses: bool,
        info_or_ref: Any,
        options: ViewOptions,
    ) -> None:
        info = resolver.deref(info_or_ref)
        if not isinstance(info, dict):
            info = {}

        self.code = code
        self.family = status_family(code)
        self.has_success_responses = has_success_responses
        self.expanded = options.is_expanded(code)
        self.summary: str = info.get("summary") or ""
        self.description: str = info.get("description") or ""
        headers = info.get("headers")
        self.headers: dict[str, Any] = (
            resolver.deep_deref(headers) if isinstance(headers, dict) else {}
        )
        self.content: list[MediaTypeView] = build_media_types(resolver, info.get("content"))
        self.links: dict[str, Any] = resolver.deep_deref(info.get("links") or {})

    @property
    def is_default(self) -> bool:
        return self.code == DEFAULT_RESPONSE

    @property
    def kind(self) -> str:
        """Display category: the family value, or success/error for ``default``."""
        if self.family is not None:
            return self.family.value
        return "error" if self.has_success_responses else StatusFamily.SUCCESS.value

    def __repr__(self) -> str:
        return f"ResponseView(code={self.code!r}, kind={self.kind!r})"


def classify_responses(
    resolver: SpecResolver,
    responses: Optional[Mapping[str, Any]],
    options: Optional[ViewOptions] = None,
) -> list[ResponseView]:
    """Build response views for the valid keys of *responses*, in order.

    The success flag is computed over the whole retained set before the
    first view is built, so every view sees the same value.
    """
    options = options or ViewOptions()
    entries = [
        (str(code), info)
        for code, info in (responses or {}).items()
        if is_status_code(str(code))
    ]
    has_success = any(
        status_family(code) is StatusFamily.SUCCESS for code, _ in entries
    )
    return [
        ResponseView(resolver, code, has_success, info, options)
        for code, info in entries
    ]
