# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FileTree - Folder/file trees for file explorer views.

A lightweight, zero-dependency library holding an in-memory tree of folders
and files, with insert, delete and rename operations addressed by node id.
"""

__version__ = "0.1.0"

from .exceptions import (
    DuplicateIdError,
    FileTreeError,
    InvalidLabelError,
    InvalidTargetError,
    NotFoundError,
    RootDeletionForbiddenError,
)
from .ids import CounterIdGenerator, IdGenerator, RandomIdGenerator
from .node import FileTreeNode
from .store import FileTreeStore

__all__ = [
    # Core classes
    "FileTreeStore",
    "FileTreeNode",
    # Id generation
    "IdGenerator",
    "CounterIdGenerator",
    "RandomIdGenerator",
    # Exceptions
    "FileTreeError",
    "NotFoundError",
    "InvalidTargetError",
    "InvalidLabelError",
    "RootDeletionForbiddenError",
    "DuplicateIdError",
]
