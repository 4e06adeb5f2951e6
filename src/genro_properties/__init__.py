# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Properties - Hierarchical, path-addressed property store.

A lightweight, zero-dependency library providing a tree of named values,
nested maps and links, with path access, flat iteration and a text dump.
"""

__version__ = "0.1.0"

from .entry import EntryKind, PropertyEntry
from .exceptions import (
    ConflictError,
    InvalidPathError,
    LinkResolutionError,
    NotFoundError,
    PropertiesError,
    TypeMismatchError,
)
from .iterator import PropertyIterator
from .store import (
    LinkResolver,
    PathResolver,
    Properties,
    PropertyMap,
    load_from_dict,
    load_from_list,
)

__all__ = [
    # Core classes
    "Properties",
    "PropertyMap",
    "PropertyEntry",
    "EntryKind",
    "PropertyIterator",
    # Resolution
    "PathResolver",
    "LinkResolver",
    # Loading
    "load_from_dict",
    "load_from_list",
    # Exceptions
    "PropertiesError",
    "ConflictError",
    "NotFoundError",
    "TypeMismatchError",
    "LinkResolutionError",
    "InvalidPathError",
]
