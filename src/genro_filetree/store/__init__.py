# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileTreeStore package - Folder/file tree container.

The package is organized into:
- core: Main FileTreeStore class with insert, delete, edit and lookup
- loading: Functions for loading nodes from nested dicts
- subscription: Event subscription and notification system

Example:
    >>> from genro_filetree import FileTreeStore
    >>> store = FileTreeStore(root_id=1)
    >>> store.insert(1, 'docs', True)
    >>> [n.name for n in store.children(1)]
    ['docs']
"""

from .core import FileTreeStore, validate_id, validate_label
from .loading import load_from_dict, load_items

__all__ = ["FileTreeStore", "validate_id", "validate_label", "load_from_dict", "load_items"]
