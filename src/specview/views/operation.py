"""The operation view: one API operation, ready to be displayed.

:class:`OperationView` splits its work in two:

* **At construction** -- cheap, eager derivations that never change: the
  pointer and identifier, name, description, flags, servers and security.
* **On first access** -- the expensive, reference-resolving derivations:
  :attr:`~OperationView.request_body`, :attr:`~OperationView.parameters`
  and :attr:`~OperationView.responses`. Each is computed at most once per
  instance and cached. Large documents hold many operations that are never
  expanded, so their parameters and responses are never resolved.

The only other mutable state is the ``active`` flag, changed through
:meth:`~OperationView.activate` and :meth:`~OperationView.deactivate`.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, TypeVar, Union

from pydantic import ValidationError

from specview.exceptions import InvalidOperationError
from specview.models import CodeSample, ExternalDocs, OperationFragment, ViewOptions
from specview.parser.resolver import SpecResolver
from specview.pointer import compile_pointer
from specview.views.parameters import ParameterView, merge_params, sort_by_required
from specview.views.request_body import RequestBodyView
from specview.views.responses import ResponseView, classify_responses
from specview.views.security import (
    SecurityRequirementView,
    resolve_security,
    select_security,
)
from specview.views.servers import normalize_servers, select_servers

if TYPE_CHECKING:
    from specview.views.menu import GroupView

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()

NO_SUMMARY = "<no summary>"


def memoized(method: Callable[[Any], T]) -> T:
    """Turn a zero-argument method into a read-only, compute-once property.

    The first read runs *method* under the instance's ``_memo_lock``; every
    later read returns the stored result, including ``None``.
    """
    slot = "_memo_" + method.__name__

    @functools.wraps(method)
    def getter(self: Any) -> Any:
        value = self.__dict__.get(slot, _UNSET)
        if value is _UNSET:
            with self._memo_lock:
                value = self.__dict__.get(slot, _UNSET)
                if value is _UNSET:
                    value = method(self)
                    self.__dict__[slot] = value
        return value

    return property(getter)  # type: ignore[return-value]


def get_operation_summary(fragment: OperationFragment) -> str:
    """Pick a display name: summary, operationId, or the start of the description."""
    if fragment.summary:
        return fragment.summary
    if fragment.operation_id:
        return fragment.operation_id
    if fragment.description:
        return fragment.description[:50]
    return NO_SUMMARY


def _as_fragment(fragment: Union[OperationFragment, Mapping[str, Any]]) -> OperationFragment:
    if isinstance(fragment, OperationFragment):
        return fragment
    if not isinstance(fragment, Mapping):
        raise InvalidOperationError(
            f"Operation fragment must be a mapping, got {type(fragment).__name__}"
        )
    try:
        return OperationFragment.model_validate(dict(fragment))
    except ValidationError as exc:
        raise InvalidOperationError(
            f"Operation fragment needs a non-empty verb and path: {exc}"
        ) from exc


class OperationView:
    """Display-ready view of one operation.

    Args:
        resolver: The shared, read-only document resolver. Not owned.
        fragment: The operation with its inherited path-level context,
            either as an :class:`~specview.models.OperationFragment` or as
            a raw mapping (``httpVerb``/``pathName`` or ``verb``/``path``
            keys are required).
        parent: The enclosing group, if any. Not owned.
        options: View options; defaults apply when omitted.

    Raises:
        InvalidOperationError: If the fragment lacks its verb or path.

    Example::

        view = OperationView(resolver, {"httpVerb": "get", "pathName": "/pets",
                                        "operationId": "listPets"})
        view.identifier   # 'operation/listPets'
        view.pointer      # '/paths/~1pets/get'
    """

    type = "operation"

    def __init__(
        self,
        resolver: SpecResolver,
        fragment: Union[OperationFragment, Mapping[str, Any]],
        parent: Optional["GroupView"] = None,
        options: Optional[ViewOptions] = None,
    ) -> None:
        self._resolver = resolver
        self._fragment = _as_fragment(fragment)
        self._options = options or ViewOptions()
        self._memo_lock = threading.Lock()

        spec = self._fragment
        self.pointer: str = compile_pointer(["paths", spec.path, spec.verb])
        if spec.operation_id is not None:
            self.identifier: str = "operation/" + spec.operation_id
        elif parent is not None:
            self.identifier = parent.identifier + self.pointer
        else:
            self.identifier = self.pointer

        self.parent = parent
        self.depth: int = parent.depth + 1 if parent is not None else 0
        self.items: list[Any] = []
        self.active: bool = False

        self.name: str = get_operation_summary(spec)
        self.description: Optional[str] = spec.description
        self.external_docs: Optional[ExternalDocs] = spec.external_docs
        self.operation_id: Optional[str] = spec.operation_id
        self.verb: str = spec.verb
        self.path: str = spec.path
        self.deprecated: bool = spec.deprecated
        self.code_samples: list[CodeSample] = list(spec.code_samples or [])

        self.servers = normalize_servers(
            resolver.spec_url,
            select_servers(spec.servers, spec.path_servers, resolver.servers),
        )
        self.security: list[SecurityRequirementView] = resolve_security(
            resolver, select_security(spec.security, resolver.security)
        )

    # ------------------------------------------------------------------
    # Activation (used by the side menu)
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Mark the operation as active."""
        self.active = True

    def deactivate(self) -> None:
        """Mark the operation as inactive."""
        self.active = False

    # ------------------------------------------------------------------
    # Lazy derivations
    # ------------------------------------------------------------------

    @memoized
    def request_body(self) -> Optional[RequestBodyView]:
        if self._fragment.request_body is None:
            return None
        return RequestBodyView(self._resolver, self._fragment.request_body)

    @memoized
    def parameters(self) -> tuple[ParameterView, ...]:
        merged = merge_params(
            self._resolver,
            self._fragment.path_parameters,
            self._fragment.parameters,
        )
        params = [ParameterView(self._resolver, param, self.pointer) for param in merged]
        if self._options.required_props_first:
            params = sort_by_required(params)
        logger.debug("Resolved %d parameters for %s", len(params), self.identifier)
        return tuple(params)

    @memoized
    def responses(self) -> tuple[ResponseView, ...]:
        return tuple(
            classify_responses(self._resolver, self._fragment.responses, self._options)
        )

    def __repr__(self) -> str:
        return f"OperationView({self.verb.upper()} {self.path!r}, id={self.identifier!r})"
