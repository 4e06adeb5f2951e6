# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Text dump of a property tree.

Maps are printed as ``name:`` followed by their entries, indented by three
more spaces. Values are printed as ``name = value`` and links as
``name -> target``; links are never expanded.
"""

from __future__ import annotations

from typing import Iterator, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from .store.property_map import PropertyMap

INDENT = '   '


def iter_dump_lines(pmap: PropertyMap, indent: str = '') -> Iterator[str]:
    """Yield the dump lines of ``pmap`` in pre-order, without line ends."""
    for entry in pmap:
        if entry.is_map:
            yield f"{indent}{entry.name}:"
            yield from iter_dump_lines(entry.children, indent + INDENT)
        elif entry.is_link:
            yield f"{indent}{entry.name} -> {entry.target}"
        else:
            yield f"{indent}{entry.name} = {entry.value}"


def format_dump(pmap: PropertyMap) -> str:
    """Return the dump of ``pmap``, every line terminated by a newline."""
    return ''.join(f"{line}\n" for line in iter_dump_lines(pmap))


def write_dump(pmap: PropertyMap, stream: TextIO) -> None:
    """Write the dump of ``pmap`` to ``stream``."""
    for line in iter_dump_lines(pmap):
        stream.write(line)
        stream.write('\n')
