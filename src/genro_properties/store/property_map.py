# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PropertyMap - one level of the property tree.

Entries are stored in a dict for O(1) lookup by name, and their names are
kept in a sorted list so that iteration and positional access always
follow ascending lexicographic key order.
"""

from __future__ import annotations

from bisect import insort
from typing import Any, Iterator

from ..entry import EntryKind, PropertyEntry
from ..exceptions import ConflictError


class PropertyMap:
    """An ordered-by-name collection of PropertyEntry objects.

    Conflict rules:
    - a value may replace a value or an empty map
    - a link may replace a link or an empty map
    - a map is never replaced; a value in its place is a conflict

    Example:
        >>> pmap = PropertyMap()
        >>> pmap.insert_value('b', 2)
        >>> pmap.insert_value('a', 1)
        >>> pmap.names()
        ['a', 'b']
    """

    __slots__ = ('_entries', '_order')

    def __init__(self) -> None:
        self._entries: dict[str, PropertyEntry] = {}
        self._order: list[str] = []

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"PropertyMap({self._order})"

    def __len__(self) -> int:
        """Return the number of direct entries."""
        return len(self._entries)

    def __iter__(self) -> Iterator[PropertyEntry]:
        """Iterate over direct entries in ascending name order."""
        for name in self._order:
            yield self._entries[name]

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    # ==================== Access ====================

    def find(self, name: str) -> PropertyEntry | None:
        """Return the entry called ``name``, or None."""
        return self._entries.get(name)

    def entry_at(self, index: int) -> PropertyEntry:
        """Return the entry at position ``index`` in name order.

        Raises:
            IndexError: If index is out of range.
        """
        return self._entries[self._order[index]]

    def names(self) -> list[str]:
        """Return the entry names in ascending order."""
        return list(self._order)

    # ==================== Insertion ====================

    def _store(self, entry: PropertyEntry) -> None:
        if entry.name not in self._entries:
            insort(self._order, entry.name)
        self._entries[entry.name] = entry

    def _check_replaceable(self, name: str, kind: EntryKind) -> None:
        """Raise ConflictError unless ``name`` is free, of ``kind``, or an empty map."""
        existing = self._entries.get(name)
        if existing is None or existing.kind is kind:
            return
        if existing.is_map and len(existing.children) == 0:
            return
        raise ConflictError(
            f"Cannot store {kind.value} '{name}': a {existing.kind.value} already exists"
        )

    def insert_value(self, name: str, value: Any) -> PropertyEntry:
        """Insert or overwrite the scalar value called ``name``.

        Args:
            name: Entry name (a single path component).
            value: The value to store.

        Returns:
            The stored entry.

        Raises:
            ConflictError: If ``name`` holds a non-empty map or a link.
        """
        self._check_replaceable(name, EntryKind.VALUE)
        entry = PropertyEntry.value_entry(name, value)
        self._store(entry)
        return entry

    def insert_or_get_map(self, name: str) -> PropertyEntry:
        """Return the map or link entry called ``name``, creating a map if absent.

        A link entry is returned as is; the caller decides whether its
        target can be descended into.

        Raises:
            ConflictError: If ``name`` holds a value.
        """
        existing = self._entries.get(name)
        if existing is None:
            existing = PropertyEntry.map_entry(name)
            self._store(existing)
        elif existing.is_value:
            raise ConflictError(f"'{name}' is a value, cannot descend into it")
        return existing

    def insert_link(self, name: str, target: str) -> PropertyEntry:
        """Insert or overwrite the link called ``name``.

        Raises:
            ConflictError: If ``name`` holds a value or a non-empty map.
        """
        self._check_replaceable(name, EntryKind.LINK)
        entry = PropertyEntry.link_entry(name, target)
        self._store(entry)
        return entry

    def restore(self, name: str, previous: PropertyEntry | None) -> None:
        """Put back ``previous`` under ``name``, or drop ``name`` if None.

        Used to undo an insertion that turned out to be invalid.
        """
        if previous is not None:
            self._entries[name] = previous
            return
        if name in self._entries:
            del self._entries[name]
            self._order.remove(name)
