# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Properties exceptions."""

from __future__ import annotations


class PropertiesError(Exception):
    """Base exception for Properties errors."""

    pass


class ConflictError(PropertiesError, ValueError):
    """Raised when a write collides with an entry of a different kind."""

    pass


class NotFoundError(PropertiesError, KeyError):
    """Raised when a path does not lead to an entry or a value."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ''


class TypeMismatchError(PropertiesError, TypeError):
    """Raised when a value exists but is not of the requested type."""

    pass


class LinkResolutionError(PropertiesError, LookupError):
    """Raised when a link target is missing or the link chain is cyclic."""

    pass


class InvalidPathError(PropertiesError, ValueError):
    """Raised when a path is empty or contains an empty component."""

    pass
