# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path and link resolution over a PropertyMap tree.

PathResolver walks a separator-delimited path from the root map, following
links met along the way. LinkResolver turns a link entry into the concrete
value or map entry it denotes, looking its target path up from the root
every time.

Link chains (a link whose target is itself a link) are followed
transitively. The targets on the current resolution chain are tracked and
a target seen twice raises LinkResolutionError instead of looping.
"""

from __future__ import annotations

from typing import Iterator

from ..entry import PropertyEntry
from ..exceptions import (
    ConflictError,
    InvalidPathError,
    LinkResolutionError,
    NotFoundError,
)
from .property_map import PropertyMap


def split_path(path: str, separator: str) -> list[str]:
    """Split ``path`` into its components.

    Raises:
        InvalidPathError: If the path or one of its components is empty.
    """
    if not path:
        raise InvalidPathError("Empty path")
    parts = path.split(separator)
    if '' in parts:
        raise InvalidPathError(f"Empty component in path '{path}'")
    return parts


class LinkResolver:
    """Resolve link entries to the concrete entry they alias.

    Args:
        paths: The PathResolver used to look link targets up from the root.
    """

    __slots__ = ('_paths',)

    def __init__(self, paths: PathResolver) -> None:
        self._paths = paths

    def resolve(self, entry: PropertyEntry, chain: set[str] | None = None) -> PropertyEntry:
        """Return the value or map entry that ``entry`` denotes.

        Non-link entries are returned unchanged.

        Args:
            entry: The entry to dereference.
            chain: Targets already being resolved by an enclosing call.

        Raises:
            LinkResolutionError: If a target is missing or the chain is cyclic.
        """
        if chain is None:
            chain = set()
        added: list[str] = []
        try:
            while entry.is_link:
                target = entry.target
                if target in chain:
                    raise LinkResolutionError(
                        f"Cyclic link: '{entry.name}' -> '{target}'"
                    )
                chain.add(target)
                added.append(target)
                try:
                    entry = self._paths.resolve_for_read(target, chain)
                except NotFoundError as exc:
                    raise LinkResolutionError(
                        f"Link '{entry.name}' -> '{target}': {exc}"
                    ) from exc
            return entry
        finally:
            for target in added:
                chain.discard(target)

    def resolves(self, entry: PropertyEntry) -> bool:
        """Return True if ``entry`` resolves to a value or a map."""
        try:
            self.resolve(entry)
        except LinkResolutionError:
            return False
        return True


class PathResolver:
    """Walk and create paths in the tree rooted at ``root``.

    Args:
        root: The top-level PropertyMap.
        separator: The path separator character.
    """

    __slots__ = ('root', 'separator', 'links')

    def __init__(self, root: PropertyMap, separator: str) -> None:
        self.root = root
        self.separator = separator
        self.links = LinkResolver(self)

    def iter_links(self) -> Iterator[PropertyEntry]:
        """Yield every link entry stored in the tree, without following links."""
        pending = [self.root]
        while pending:
            pmap = pending.pop()
            for entry in pmap:
                if entry.is_map:
                    pending.append(entry.children)
                elif entry.is_link:
                    yield entry

    def _descend(
        self, entry: PropertyEntry, part: str, path: str, chain: set[str] | None
    ) -> PropertyMap:
        """Return the map to continue a read walk in, below ``entry``."""
        if entry.is_link:
            try:
                entry = self.links.resolve(entry, chain)
            except LinkResolutionError as exc:
                raise NotFoundError(str(exc)) from exc
        if not entry.is_map:
            raise NotFoundError(f"'{part}' is a value, cannot access '{path}'")
        return entry.children

    def resolve_for_read(self, path: str, chain: set[str] | None = None) -> PropertyEntry:
        """Return the entry at ``path``.

        Links met on intermediate components are followed, a link in the
        last component is returned without being dereferenced.

        Raises:
            InvalidPathError: If the path is malformed.
            NotFoundError: If a component is missing, a value is descended
                through, or an intermediate link does not resolve.
        """
        parts = split_path(path, self.separator)
        current = self.root
        for part in parts[:-1]:
            entry = current.find(part)
            if entry is None:
                raise NotFoundError(f"Path segment '{part}' not found in '{path}'")
            current = self._descend(entry, part, path, chain)

        entry = current.find(parts[-1])
        if entry is None:
            raise NotFoundError(f"'{parts[-1]}' not found in '{path}'")
        return entry

    def resolve_concrete(self, path: str) -> PropertyEntry:
        """Return the value or map entry at ``path``, dereferencing a final link.

        Raises:
            NotFoundError: If the path does not resolve.
            LinkResolutionError: If the final link does not resolve.
        """
        return self.links.resolve(self.resolve_for_read(path))

    def resolve_for_write(self, path: str) -> tuple[PropertyMap, str]:
        """Walk ``path``, creating intermediate maps as needed.

        A link met on an intermediate component redirects the walk into its
        target map, so writes below an alias land in the aliased subtree.

        Returns:
            Tuple of (parent_map, last_name).

        Raises:
            InvalidPathError: If the path is malformed.
            ConflictError: If a value or a link to a value is in the way.
        """
        parts = split_path(path, self.separator)
        current = self.root
        for part in parts[:-1]:
            entry = current.insert_or_get_map(part)
            if entry.is_link:
                try:
                    entry = self.links.resolve(entry)
                except LinkResolutionError as exc:
                    raise ConflictError(str(exc)) from exc
                if not entry.is_map:
                    raise ConflictError(
                        f"Link '{part}' points to a value, cannot write '{path}'"
                    )
            current = entry.children
        return current, parts[-1]
