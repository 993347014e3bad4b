"""Read-only access to a loaded OpenAPI document and its ``$ref`` pointers.

:class:`SpecResolver` is the document collaborator shared by every
operation view built from the same document. It never mutates the
document; views keep a reference to it and call :meth:`SpecResolver.deref`
or :meth:`SpecResolver.deep_deref` lazily, when a parameter, request body
or response is first displayed.

Only **internal** references (those starting with ``#/``) are followed.
A reference that points outside the document, or to a location that does
not exist, is logged at WARNING level and resolves to an empty mapping so
that one broken pointer never prevents the rest of the document from being
shown.

Circular references are detected: :meth:`SpecResolver.deref` stops and
returns ``{}``, :meth:`SpecResolver.deep_deref` leaves the ``$ref`` dict in
place at the cycle point.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specview.exceptions import SpecParseError
from specview.pointer import parse_pointer

logger = logging.getLogger(__name__)


def is_ref(obj: Any) -> bool:
    """Return ``True`` if *obj* is a JSON Reference (``{"$ref": "..."}``)."""
    return isinstance(obj, dict) and isinstance(obj.get("$ref"), str)


class SpecResolver:
    """Dereferencing and document-wide defaults for one OpenAPI document.

    Args:
        spec: The parsed document, as returned by
            :func:`~specview.parser.loader.load_spec`.
        spec_url: The absolute URL the document was published at. Used as
            the base for relative server URLs; may be ``None``.

    Example::

        resolver = SpecResolver(load_spec("petstore.yaml"), "https://example.com/v1/openapi.yaml")
        pet = resolver.deref({"$ref": "#/components/schemas/Pet"})
    """

    def __init__(self, spec: dict[str, Any], spec_url: Optional[str] = None) -> None:
        self.spec = spec
        self.spec_url = spec_url

    # ------------------------------------------------------------------
    # Document-wide defaults
    # ------------------------------------------------------------------

    @property
    def servers(self) -> Optional[list[dict[str, Any]]]:
        """The top-level ``servers`` list, or ``None`` when not declared."""
        return self.spec.get("servers")

    @property
    def security(self) -> Optional[list[dict[str, Any]]]:
        """The top-level ``security`` list, or ``None`` when not declared."""
        return self.spec.get("security")

    @property
    def security_schemes(self) -> dict[str, Any]:
        """The ``components/securitySchemes`` mapping (possibly empty)."""
        components = self.spec.get("components") or {}
        return components.get("securitySchemes") or {}

    # ------------------------------------------------------------------
    # Dereferencing
    # ------------------------------------------------------------------

    def by_ref(self, ref: str) -> Any:
        """Return the value a ``$ref`` string points at, or ``None``.

        Failures are logged rather than raised.
        """
        try:
            return self._walk(ref)
        except SpecParseError as exc:
            logger.warning("%s", exc)
            return None

    def deref(self, obj: Any) -> Any:
        """Shallowly resolve *obj* if it is a reference.

        Reference chains (a ``$ref`` pointing at another ``$ref``) are
        followed until a concrete value is reached. Keys placed next to
        ``$ref`` (OpenAPI 3.1 ``summary``/``description`` overrides) take
        precedence over the target's own keys. Non-reference values are
        returned unchanged.
        """
        if not is_ref(obj):
            return obj

        seen: set[str] = set()
        overrides: dict[str, Any] = {}
        current = obj
        while is_ref(current):
            ref = current["$ref"]
            if ref in seen:
                logger.warning("Circular $ref chain at '%s'", ref)
                return {}
            seen.add(ref)
            siblings = {k: v for k, v in current.items() if k != "$ref"}
            overrides = {**siblings, **overrides}
            current = self.by_ref(ref)
            if current is None:
                return dict(overrides)

        if isinstance(current, dict) and overrides:
            return {**current, **overrides}
        return current

    def deep_deref(self, obj: Any) -> Any:
        """Recursively resolve every reference inside *obj*.

        Returns new dicts and lists; the document itself is left untouched.
        A reference that is already being resolved further up the stack is
        returned as-is to break the cycle.
        """
        return self._deep_resolve(obj, frozenset())

    def _deep_resolve(self, obj: Any, seen: frozenset[str]) -> Any:
        if isinstance(obj, dict):
            if is_ref(obj):
                ref = obj["$ref"]
                if ref in seen:
                    return obj
                target = self.by_ref(ref)
                if target is None:
                    return {}
                return self._deep_resolve(target, seen | {ref})
            return {key: self._deep_resolve(value, seen) for key, value in obj.items()}

        if isinstance(obj, list):
            return [self._deep_resolve(item, seen) for item in obj]

        return obj

    def _walk(self, ref: str) -> Any:
        """Navigate the document following an internal JSON Pointer.

        Raises:
            SpecParseError: If the reference is external or any segment
                does not exist.
        """
        if not ref.startswith("#/"):
            raise SpecParseError(
                f"External $ref not supported: {ref}. "
                "Only internal references (#/...) are handled."
            )

        current: Any = self.spec
        for segment in parse_pointer(ref):
            if isinstance(current, dict):
                if segment not in current:
                    raise SpecParseError(
                        f"Cannot resolve $ref '{ref}': key '{segment}' not found"
                    )
                current = current[segment]
            elif isinstance(current, list):
                try:
                    current = current[int(segment)]
                except (ValueError, IndexError) as exc:
                    raise SpecParseError(
                        f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                    ) from exc
            else:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"cannot navigate into {type(current).__name__}"
                )
        return current
