# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Properties - A hierarchical, path-addressed property store.

This module provides the Properties class, the root of a tree of named
entries. Each entry is a scalar value, a nested map, or a link aliasing
another path of the same tree.

Key Features:
    - **Path access**: Separator-delimited paths ('Address.Phone.Home')
    - **Sorted levels**: Entries of every level iterate in name order
    - **Links**: Aliases resolved on every use, readable and writable through
    - **Flat iteration**: All leaves, links expanded, in depth-first order
    - **Dump**: Indented text form of the tree, links shown as ``name -> target``

Error handling:
    add_property(), add_link(), get_property() and has_property() never
    raise by default: they return False (or the default value) and log the
    reason at DEBUG level. Create the store with ``raise_on_error=True`` to
    get the exceptions from genro_properties.exceptions instead.

Example:
    Basic usage::

        props = Properties()
        props.add_property('Address.Phone.Home', '123 45 67 89')
        props.add_link('Contacts', 'Address.Phone')

        print(props.get_property('Contacts.Home'))  # '123 45 67 89'

        for path, value in props:
            print(path, value)

        print(props)  # dump
"""

from __future__ import annotations

import logging
from typing import Any, TextIO

from ..dump import format_dump, write_dump
from ..exceptions import (
    ConflictError,
    NotFoundError,
    PropertiesError,
    TypeMismatchError,
)
from ..iterator import PropertyIterator
from .loading import load_from_dict, load_from_list
from .property_map import PropertyMap
from .resolver import PathResolver

logger = logging.getLogger(__name__)


class Properties:
    """A tree of properties addressed by separator-delimited paths.

    Properties provides:
    - add_property(path, value): Create/overwrite a value, autocreating maps
    - add_link(link, target): Create an alias of an existing path
    - has_property(path) / get_property(path): Lookups
    - begin() / end() / iter(props): Flat iteration over all leaves
    - dump() / str(props): Indented text form

    Attributes:
        separator: The path separator character, fixed at construction.

    Example:
        >>> props = Properties()
        >>> props.add_property('Name', 'Hugentobler')
        True
        >>> props.add_property('Name.First', 'Peter')
        False
    """

    __slots__ = ('_separator', '_root', '_paths', '_raise_on_error')

    def __init__(
        self,
        separator: str = '.',
        source: dict | list | None = None,
        raise_on_error: bool = False,
    ) -> None:
        """Initialize Properties.

        Args:
            separator: Single character separating path components.
            source: Optional initial data. Can be:
                - dict: Nested dict, nested dicts become maps
                - list: List of (path, value) tuples
            raise_on_error: If True, add_property(), add_link() and
                get_property() raise instead of returning False/default.

        Raises:
            ValueError: If separator is not a single character.
            TypeError: If source is not dict or list.

        Example:
            >>> Properties({'Address': {'Street': 'Hochtiefstrasse'}})
            >>> Properties('/', [('Address/Street', 'Hochtiefstrasse')])
        """
        if not isinstance(separator, str) or len(separator) != 1:
            raise ValueError(f"separator must be a single character, not {separator!r}")
        self._separator = separator
        self._root = PropertyMap()
        self._paths = PathResolver(self._root, separator)
        self._raise_on_error = raise_on_error

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: dict | list) -> None:
        """Load data from source, dispatching on its type.

        Raises:
            TypeError: If source is not dict or list.
        """
        if isinstance(source, dict):
            load_from_dict(self, source)
        elif isinstance(source, list):
            load_from_list(self, source)
        else:
            raise TypeError(
                f"source must be dict or list, not {type(source).__name__}"
            )

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"Properties({self._root.names()})"

    def __str__(self) -> str:
        return format_dump(self._root)

    def __contains__(self, path: str) -> bool:
        return self.has_property(path)

    def __getitem__(self, path: str) -> Any:
        """Get the value at path.

        Raises:
            NotFoundError: If the path does not lead to a value.
        """
        return self._get_value(path)

    def __setitem__(self, path: str, value: Any) -> None:
        """Set the value at path.

        Raises:
            ConflictError: If the path collides with an existing entry.
        """
        parent, name = self._paths.resolve_for_write(path)
        parent.insert_value(name, value)

    def __iter__(self) -> PropertyIterator:
        """Iterate over (path, value) pairs of all leaves, links expanded."""
        return self.begin()

    @property
    def separator(self) -> str:
        """The path separator character."""
        return self._separator

    @property
    def root(self) -> PropertyMap:
        """The top-level PropertyMap."""
        return self._root

    # ==================== Core API ====================

    def add_property(self, path: str, value: Any) -> bool:
        """Store ``value`` at ``path``, creating intermediate maps as needed.

        An existing value at the same path is overwritten. A link met on
        the way redirects the write into the aliased map.

        Args:
            path: Path of the property (e.g., 'Address.Street').
            value: The value to store.

        Returns:
            True if stored, False if the path conflicts with an existing entry.

        Example:
            >>> props.add_property('Age', 50)
            True
            >>> props.add_property('Age.Years', 50)
            False
        """
        try:
            self[path] = value
        except PropertiesError as exc:
            logger.debug("add_property('%s') rejected: %s", path, exc)
            if self._raise_on_error:
                raise
            return False
        return True

    def add_link(self, link_path: str, target_path: str) -> bool:
        """Create a link at ``link_path`` aliasing the entry at ``target_path``.

        The target must exist now; afterwards it is looked up again on
        every use of the link. An existing link at ``link_path`` is replaced.
        A link that would close a cycle of links, or that would leave another
        link of the tree without a target, is refused and the previous entry
        at ``link_path`` is kept.

        Args:
            link_path: Path of the new link.
            target_path: Path of the aliased value or map.

        Returns:
            True if the link was created, False otherwise.

        Example:
            >>> props.add_link('Contacts', 'Address.Phone')
            True
        """
        try:
            self._paths.resolve_concrete(target_path)
            if link_path == target_path:
                raise ConflictError(f"Link '{link_path}' cannot point to itself")
            parent, name = self._paths.resolve_for_write(link_path)
            links = self._paths.links
            intact = [e for e in self._paths.iter_links() if links.resolves(e)]
            previous = parent.find(name)
            entry = parent.insert_link(name, target_path)
            try:
                links.resolve(entry)
                for other in intact:
                    if other is not previous:
                        links.resolve(other)
            except PropertiesError:
                parent.restore(name, previous)
                raise
        except PropertiesError as exc:
            logger.debug("add_link('%s', '%s') rejected: %s", link_path, target_path, exc)
            if self._raise_on_error:
                raise
            return False
        return True

    def has_property(self, path: str) -> bool:
        """Return True if ``path`` leads to a value, a map or a resolvable link."""
        try:
            self._paths.resolve_concrete(path)
        except PropertiesError:
            return False
        return True

    def _get_value(self, path: str, value_type: type | tuple[type, ...] | None = None) -> Any:
        entry = self._paths.resolve_concrete(path)
        if entry.is_map:
            raise NotFoundError(f"'{path}' is a map, not a value")
        if value_type is not None and not isinstance(entry.value, value_type):
            raise TypeMismatchError(
                f"'{path}' holds {type(entry.value).__name__}, "
                f"not {getattr(value_type, '__name__', value_type)}"
            )
        return entry.value

    def get_property(
        self,
        path: str,
        default: Any = None,
        value_type: type | tuple[type, ...] | None = None,
    ) -> Any:
        """Get the value at ``path``.

        Links are followed, both within the path and at its end.

        Args:
            path: Path of the property.
            default: Returned when there is no value at path. A stored value
                equal to default cannot be told apart from a failure; pass
                a unique sentinel such as ``object()`` when that matters.
            value_type: If given, a value that is not an instance of it is
                treated as missing.

        Returns:
            The value, or default.

        Example:
            >>> props.get_property('Contacts.Home')
            '123 45 67 89'
            >>> props.get_property('Address')  # a map
            None
        """
        try:
            return self._get_value(path, value_type)
        except PropertiesError as exc:
            logger.debug("get_property('%s') failed: %s", path, exc)
            if self._raise_on_error:
                raise
            return default

    # ==================== Iteration ====================

    def begin(self) -> PropertyIterator:
        """Return an iterator positioned on the first leaf."""
        return PropertyIterator(self._root, self._separator, self._paths.links)

    def end(self) -> PropertyIterator:
        """Return the end sentinel iterator."""
        return PropertyIterator()

    def items(self) -> list[tuple[str, Any]]:
        """Return all (path, value) pairs, links expanded."""
        return list(self.begin())

    # ==================== Dump ====================

    def dump(self, stream: TextIO | None = None) -> str | None:
        """Dump the tree as indented text.

        Args:
            stream: Text stream to write to. If None, the text is returned.

        Returns:
            The dump text if no stream was given, None otherwise.
        """
        if stream is None:
            return format_dump(self._root)
        write_dump(self._root, stream)
        return None
