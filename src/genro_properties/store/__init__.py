# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Properties store package - Hierarchical, path-addressed property tree.

The package is organized into:
- core: Main Properties class with the public API
- property_map: PropertyMap, one sorted level of the tree
- resolver: Path walking and link resolution
- loading: Functions for loading data from dict or list sources

Example:
    >>> from genro_properties import Properties
    >>> props = Properties()
    >>> props.add_property('config.name', 'MyApp')
    True
    >>> props['config.name']
    'MyApp'
"""

from .core import Properties
from .loading import load_from_dict, load_from_list
from .property_map import PropertyMap
from .resolver import LinkResolver, PathResolver, split_path

__all__ = [
    "Properties",
    "PropertyMap",
    "PathResolver",
    "LinkResolver",
    "split_path",
    "load_from_dict",
    "load_from_list",
]
