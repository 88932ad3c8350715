# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileTree exceptions."""

from __future__ import annotations


class FileTreeError(Exception):
    """Base exception for FileTree errors."""

    pass


class NotFoundError(FileTreeError, KeyError):
    """Raised when no node in the tree has the requested id."""

    def __init__(self, node_id: object) -> None:
        super().__init__(f"Node '{node_id}' not found")
        self.node_id = node_id

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class InvalidTargetError(FileTreeError, ValueError):
    """Raised when a folder is required but the target node is a file."""

    pass


class InvalidLabelError(FileTreeError, ValueError):
    """Raised when a node name is empty or not a string."""

    pass


class RootDeletionForbiddenError(FileTreeError):
    """Raised when trying to delete the root node."""

    pass


class DuplicateIdError(FileTreeError, ValueError):
    """Raised when loaded data contains the same id more than once."""

    pass
