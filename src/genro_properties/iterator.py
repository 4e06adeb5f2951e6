# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PropertyIterator - flat, depth-first traversal of the property leaves.

The iterator keeps an explicit stack of frames instead of recursing. Each
frame records the map being traversed, the cursor position in it and the
path prefix reported for its entries. The top frame's cursor always points
at the current leaf, unless the stack is empty, which is the end state.

Maps are expanded in place. Links are expanded too: a link to a value is
reported as a leaf under the link's own name, a link to a map is traversed
like a map whose entries are reported under the link's path. The aliased
values are therefore visited once more for every link pointing at them.

The traversal is forward-only and cannot be restarted; ask the Properties
for a new iterator instead. Modifying the tree while iterating is not
supported.

Example:
    >>> it = props.begin()
    >>> while it != props.end():
    ...     print(it.path_and_name, it.value())
    ...     it.increment()
"""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

from .exceptions import (
    LinkResolutionError,
    NotFoundError,
    TypeMismatchError,
)

if TYPE_CHECKING:
    from .store.property_map import PropertyMap
    from .store.resolver import LinkResolver

logger = logging.getLogger(__name__)


class _Frame:
    """Traversal state for one map: cursor position and reported path prefix."""

    __slots__ = ('pmap', 'index', 'prefix')

    def __init__(self, pmap: PropertyMap, prefix: str = '', index: int = 0) -> None:
        self.pmap = pmap
        self.prefix = prefix
        self.index = index

    def __repr__(self) -> str:
        return f"_Frame({self.prefix!r}, index={self.index})"

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.pmap)

    def copy(self) -> _Frame:
        return _Frame(self.pmap, self.prefix, self.index)

    def key(self) -> tuple[int, int, str]:
        return (id(self.pmap), self.index, self.prefix)


class PropertyIterator:
    """Iterator over all leaf values of a property tree.

    ``PropertyIterator()`` without arguments is the end sentinel.

    Args:
        root: The top-level PropertyMap to traverse.
        separator: Separator used to build the reported paths.
        links: Resolver used to expand link entries. Required when
            ``root`` is given.

    Raises:
        ValueError: If ``root`` is given without ``links``.
    """

    __slots__ = ('_separator', '_links', '_stack')

    def __init__(
        self,
        root: PropertyMap | None = None,
        separator: str = '.',
        links: LinkResolver | None = None,
    ) -> None:
        if root is not None and links is None:
            raise ValueError("links is required when root is given")
        self._separator = separator
        self._links = links
        self._stack: list[_Frame] = []
        if root is not None:
            self._stack.append(_Frame(root))
            self._find_next_value()

    # ==================== Traversal ====================

    def _on_stack(self, pmap: PropertyMap) -> bool:
        return any(frame.pmap is pmap for frame in self._stack)

    def _push(self, pmap: PropertyMap, name: str) -> None:
        prefix = self._stack[-1].prefix
        if prefix:
            prefix = f"{prefix}{self._separator}{name}"
        else:
            prefix = name
        self._stack.append(_Frame(pmap, prefix))

    def _find_next_value(self) -> None:
        """Move to the next leaf at or after the current cursor position."""
        stack = self._stack
        while stack:
            frame = stack[-1]
            if frame.exhausted:
                stack.pop()
                # the parent cursor still points at the map just finished
                if stack:
                    stack[-1].index += 1
                continue

            entry = frame.pmap.entry_at(frame.index)
            if entry.is_value:
                return
            if entry.is_map:
                self._push(entry.children, entry.name)
                continue

            try:
                target = self._links.resolve(entry)
            except LinkResolutionError as exc:
                logger.warning("Skipping link '%s': %s", self._full_name(frame, entry.name), exc)
                frame.index += 1
                continue
            if target.is_value:
                return
            if self._on_stack(target.children):
                logger.warning(
                    "Skipping link '%s': it aliases its own ancestor '%s'",
                    self._full_name(frame, entry.name), entry.target,
                )
                frame.index += 1
                continue
            self._push(target.children, entry.name)

    def increment(self) -> PropertyIterator:
        """Advance to the next leaf and return the iterator itself.

        Does nothing once the end has been reached.
        """
        if self._stack:
            self._stack[-1].index += 1
            self._find_next_value()
        return self

    def post_increment(self) -> PropertyIterator:
        """Advance to the next leaf, returning a copy of the previous state."""
        previous = self.copy()
        self.increment()
        return previous

    def copy(self) -> PropertyIterator:
        """Return an independent iterator at the same position."""
        clone = PropertyIterator(separator=self._separator, links=self._links)
        clone._stack = [frame.copy() for frame in self._stack]
        return clone

    __copy__ = copy

    # ==================== Python Iteration ====================

    def __iter__(self) -> PropertyIterator:
        return self

    def __next__(self) -> tuple[str, Any]:
        """Return ``(path_and_name, value)`` of the current leaf and advance."""
        if not self._stack:
            raise StopIteration
        result = (self.path_and_name, self.value())
        self.increment()
        return result

    # ==================== Comparison ====================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyIterator):
            return NotImplemented
        return [f.key() for f in self._stack] == [f.key() for f in other._stack]

    def __repr__(self) -> str:
        if not self._stack:
            return "PropertyIterator(<end>)"
        return f"PropertyIterator({self.path_and_name!r})"

    # ==================== Current Leaf ====================

    @property
    def at_end(self) -> bool:
        """True once all leaves have been visited."""
        return not self._stack

    def _full_name(self, frame: _Frame, name: str) -> str:
        if frame.prefix:
            return f"{frame.prefix}{self._separator}{name}"
        return name

    @property
    def path(self) -> str:
        """Path of the map containing the current leaf ('' at top level or end)."""
        if not self._stack:
            return ''
        return self._stack[-1].prefix

    @property
    def name(self) -> str:
        """Name of the current leaf ('' at the end)."""
        if not self._stack:
            return ''
        frame = self._stack[-1]
        return frame.pmap.entry_at(frame.index).name

    @property
    def path_and_name(self) -> str:
        """Full path of the current leaf ('' at the end)."""
        if not self._stack:
            return ''
        return self._full_name(self._stack[-1], self.name)

    def value(self, value_type: type | tuple[type, ...] | None = None) -> Any:
        """Return the value of the current leaf.

        A link leaf is dereferenced, so the aliased value is returned.

        Args:
            value_type: If given, the value must be an instance of it.

        Raises:
            NotFoundError: If the iterator is at the end.
            TypeMismatchError: If the value is not an instance of value_type.
        """
        if not self._stack:
            raise NotFoundError("Iterator is at the end, no current value")
        frame = self._stack[-1]
        entry = frame.pmap.entry_at(frame.index)
        name = entry.name
        if entry.is_link:
            try:
                entry = self._links.resolve(entry)
            except LinkResolutionError as exc:
                raise NotFoundError(str(exc)) from exc
        result = entry.value
        if value_type is not None and not isinstance(result, value_type):
            raise TypeMismatchError(
                f"'{self._full_name(frame, name)}' holds "
                f"{type(result).__name__}, not {_type_label(value_type)}"
            )
        return result


def _type_label(value_type: type | tuple[type, ...]) -> str:
    if isinstance(value_type, tuple):
        return ' or '.join(t.__name__ for t in value_type)
    return value_type.__name__
