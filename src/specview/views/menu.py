"""Menu items: tag groups and the walk that builds operation views.

Anything shown in the side menu satisfies the :class:`MenuItem` protocol.
:func:`build_operation_views` walks a document's ``paths`` and returns the
top-level menu: one :class:`GroupView` per tag (declared tags first, in
declaration order) holding its operations, followed by any untagged
operations, which have no parent.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional, Protocol, Union, runtime_checkable

from pydantic import ValidationError

from specview.models import HTTPMethod, OperationFragment, ViewOptions
from specview.parser.resolver import SpecResolver
from specview.views.operation import OperationView

logger = logging.getLogger(__name__)


@runtime_checkable
class MenuItem(Protocol):
    """Capabilities shared by every entry of the navigation menu."""

    identifier: str
    name: str
    depth: int
    active: bool
    items: list[Any]

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...


class GroupView:
    """A tag group: the parent of the operations tagged with its name."""

    type = "tag"

    def __init__(
        self,
        name: str,
        description: Optional[str] = None,
        parent: Optional["GroupView"] = None,
    ) -> None:
        self.name = name
        self.description = description
        self.parent = parent
        self.identifier = "tag/" + name
        self.depth: int = parent.depth + 1 if parent is not None else 1
        self.items: list[OperationView] = []
        self.active = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def __repr__(self) -> str:
        return f"GroupView({self.name!r}, items={len(self.items)})"


def build_operation_views(
    resolver: SpecResolver,
    options: Optional[ViewOptions] = None,
) -> list[Union[GroupView, OperationView]]:
    """Build the menu for every operation in the document.

    Operations are grouped under their first tag. Path items that are not
    mappings, and verbs whose value is not a mapping, are skipped. An
    operation that cannot be built (an empty path key) is logged and
    skipped; the rest of the document still builds.
    """
    options = options or ViewOptions()
    groups: dict[str, GroupView] = {}
    for tag in resolver.spec.get("tags") or []:
        if isinstance(tag, dict) and tag.get("name"):
            name = str(tag["name"])
            groups[name] = GroupView(name, tag.get("description"))

    untagged: list[OperationView] = []
    for path, path_item in (resolver.spec.get("paths") or {}).items():
        path_item = resolver.deref(path_item)
        if not isinstance(path_item, dict):
            logger.debug("Skipping malformed path item: %s", path)
            continue

        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if not isinstance(operation, dict):
                continue
            try:
                fragment = OperationFragment.from_path_item(
                    str(path), method.value, operation, path_item
                )
            except ValidationError as exc:
                logger.warning("Skipping operation %s %r: %s", method.value, path, exc)
                continue
            if not fragment.tags:
                untagged.append(OperationView(resolver, fragment, None, options))
                continue

            tag = fragment.tags[0]
            group = groups.get(tag)
            if group is None:
                group = groups[tag] = GroupView(tag)
            group.items.append(OperationView(resolver, fragment, group, options))

    menu: list[Union[GroupView, OperationView]] = [
        group for group in groups.values() if group.items
    ]
    menu.extend(untagged)
    return menu


def iter_operations(items: Iterable[Any]) -> Iterator[OperationView]:
    """Yield every operation in *items*, descending into groups."""
    for item in items:
        if isinstance(item, OperationView):
            yield item
        else:
            yield from iter_operations(getattr(item, "items", []))


def find_operation(items: Iterable[Any], key: str) -> Optional[OperationView]:
    """Find an operation by identifier or by ``operationId``."""
    for operation in iter_operations(items):
        if key in (operation.identifier, operation.operation_id):
            return operation
    return None
