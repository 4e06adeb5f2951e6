# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Property entry classes."""

from __future__ import annotations

from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .store.property_map import PropertyMap


class EntryKind(Enum):
    """The three kinds of entry a PropertyMap can hold."""

    VALUE = 'value'
    MAP = 'map'
    LINK = 'link'


class PropertyEntry:
    """A named entry in a PropertyMap.

    Each entry has:
    - name: The entry's unique name within its map
    - kind: One of EntryKind.VALUE, EntryKind.MAP, EntryKind.LINK
    - value: The scalar value, the owned nested PropertyMap,
      or the target path of a link

    A link stores the path of its target, never the target entry itself,
    and is resolved again every time it is used.

    Example:
        >>> entry = PropertyEntry.value_entry('Age', 50)
        >>> entry.is_value
        True
        >>> entry.value
        50
    """

    __slots__ = ('name', 'kind', 'value')

    def __init__(self, name: str, kind: EntryKind, value: Any = None) -> None:
        """Initialize a PropertyEntry.

        Args:
            name: The entry's name.
            kind: The entry kind.
            value: Scalar value, nested PropertyMap, or link target path.
        """
        self.name = name
        self.kind = kind
        self.value = value

    @classmethod
    def value_entry(cls, name: str, value: Any) -> PropertyEntry:
        """Create a leaf entry holding a scalar value."""
        return cls(name, EntryKind.VALUE, value)

    @classmethod
    def map_entry(cls, name: str, children: PropertyMap | None = None) -> PropertyEntry:
        """Create a map entry owning ``children`` (a new empty map if None)."""
        if children is None:
            from .store.property_map import PropertyMap
            children = PropertyMap()
        return cls(name, EntryKind.MAP, children)

    @classmethod
    def link_entry(cls, name: str, target: str) -> PropertyEntry:
        """Create a link entry aliasing the property at path ``target``."""
        return cls(name, EntryKind.LINK, target)

    def __repr__(self) -> str:
        if self.kind is EntryKind.MAP:
            value_repr = f"PropertyMap({len(self.value)})"
        elif self.kind is EntryKind.LINK:
            value_repr = f"-> {self.value}"
        else:
            value_repr = repr(self.value)
        return f"PropertyEntry({self.name!r}, {self.kind.value}, {value_repr})"

    @property
    def is_value(self) -> bool:
        """True if this entry holds a scalar value."""
        return self.kind is EntryKind.VALUE

    @property
    def is_map(self) -> bool:
        """True if this entry owns a nested PropertyMap."""
        return self.kind is EntryKind.MAP

    @property
    def is_link(self) -> bool:
        """True if this entry is an alias of another path."""
        return self.kind is EntryKind.LINK

    @property
    def children(self) -> PropertyMap:
        """The nested PropertyMap of a map entry.

        Raises:
            TypeError: If the entry is not a map.
        """
        if self.kind is not EntryKind.MAP:
            raise TypeError(f"Entry '{self.name}' is a {self.kind.value}, not a map")
        return self.value

    @property
    def target(self) -> str:
        """The target path of a link entry.

        Raises:
            TypeError: If the entry is not a link.
        """
        if self.kind is not EntryKind.LINK:
            raise TypeError(f"Entry '{self.name}' is a {self.kind.value}, not a link")
        return self.value
