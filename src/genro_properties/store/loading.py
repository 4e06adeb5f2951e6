# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Bulk loading of Properties from plain Python data.

Entries that cannot be stored are skipped one by one and logged, so that a
single bad entry does not prevent the rest of a configuration from loading.
"""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Properties

logger = logging.getLogger(__name__)


def load_from_dict(props: Properties, data: dict[str, Any], prefix: str = '') -> int:
    """Load a nested dict into ``props``.

    Nested dicts become maps, every other value becomes a property.
    Keys may themselves be paths. An empty nested dict stores nothing: a
    map exists only to hold properties, and its path is created by the
    first property written below it.

    Args:
        props: The Properties to populate.
        data: Nested dict of values.
        prefix: Path under which the keys are stored.

    Returns:
        Number of properties stored.

    Example:
        >>> load_from_dict(props, {'Address': {'Street': 'Hochtiefstrasse'}})
        1
    """
    stored = 0
    for key, value in data.items():
        path = f"{prefix}{props.separator}{key}" if prefix else key
        if isinstance(value, dict):
            stored += load_from_dict(props, value, path)
        elif props.add_property(path, value):
            stored += 1
        else:
            logger.warning("Skipping property '%s': rejected", path)
    return stored


def load_from_list(props: Properties, items: list[tuple[str, Any]]) -> int:
    """Load a list of ``(path, value)`` tuples into ``props``.

    Args:
        props: The Properties to populate.
        items: List of (path, value) tuples.

    Returns:
        Number of properties stored.

    Raises:
        ValueError: If an item is not a 2-tuple.
    """
    stored = 0
    for item in items:
        if not isinstance(item, tuple) or len(item) != 2:
            raise ValueError(f"Expected (path, value) tuple, got {item!r}")
        path, value = item
        if props.add_property(path, value):
            stored += 1
        else:
            logger.warning("Skipping property '%s': rejected", path)
    return stored
