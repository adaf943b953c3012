# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""ConfigMap exceptions."""

from __future__ import annotations


class CfgMapError(Exception):
    """Base exception for ConfigMap errors."""

    pass


class NotAMapError(CfgMapError):
    """Raised when inserting under a path whose parent is not a map.

    Attributes:
        path: The full path passed to ``add``.
        parent: The parent portion of the path that failed to resolve
            to a map.
    """

    def __init__(self, path: str, parent: str) -> None:
        self.path = path
        self.parent = parent
        super().__init__(
            f"Cannot insert '{path}': '{parent}' does not resolve to a map"
        )


class InvalidRootError(CfgMapError, TypeError):
    """Raised when a parsed document handed to an adapter is not a mapping."""

    pass
