# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileTree node class."""

from __future__ import annotations

from typing import Iterator, Union

NodeId = Union[str, int]


class FileTreeNode:
    """A folder or file entry in a FileTreeStore hierarchy.

    Each node has:
    - id: Identifier, unique across the whole tree
    - name: Display label
    - is_folder: True if the node may hold children
    - children: Ordered child nodes (always empty for files)
    - parent: The folder node containing this node, or None for the root

    Children are owned by the store: ``children`` is a read-only tuple,
    mutations go through FileTreeStore.insert/delete/edit.

    Example:
        >>> node = FileTreeNode(1, 'root', is_folder=True)
        >>> node.name
        'root'
        >>> node.children
        ()
    """

    __slots__ = ('id', 'name', 'is_folder', '_children', 'parent')

    def __init__(
        self,
        id: NodeId,
        name: str,
        is_folder: bool = False,
        parent: FileTreeNode | None = None,
    ) -> None:
        """Initialize a FileTreeNode.

        Args:
            id: The node's unique identifier.
            name: The display label.
            is_folder: Whether the node can contain children.
            parent: The folder node containing this node.
        """
        self.id = id
        self.name = name
        self.is_folder = bool(is_folder)
        self._children: list[FileTreeNode] = []
        self.parent = parent

    def __repr__(self) -> str:
        kind = 'folder' if self.is_folder else 'file'
        return f"FileTreeNode({self.id!r}, {self.name!r}, {kind}, children={len(self._children)})"

    def __len__(self) -> int:
        """Return the number of direct children."""
        return len(self._children)

    def __iter__(self) -> Iterator[FileTreeNode]:
        """Iterate over direct children in order."""
        return iter(tuple(self._children))

    @property
    def children(self) -> tuple[FileTreeNode, ...]:
        """Direct children in display order."""
        return tuple(self._children)

    @property
    def is_leaf(self) -> bool:
        """True if this node is a file."""
        return not self.is_folder

    @property
    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self.parent is None

    @property
    def depth(self) -> int:
        """Distance from the root (root=0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    @property
    def path(self) -> str:
        """Names from the root down to this node, joined with '/'."""
        names = []
        node: FileTreeNode | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return '/'.join(reversed(names))

    @property
    def _(self) -> FileTreeNode:
        """Return parent node for navigation.

        Example:
            >>> node._.name  # containing folder
        """
        if self.parent is None:
            raise ValueError("Node has no parent")
        return self.parent

    def iter_preorder(self) -> Iterator[FileTreeNode]:
        """Yield this node, then each subtree left to right."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def _as_flat_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'isFolder': self.is_folder, 'items': []}

    def as_dict(self) -> dict:
        """Convert this subtree to the nested ``items`` dict format.

        Works level by level with an explicit stack, so depth is not
        bounded by the interpreter's recursion limit.
        """
        result = self._as_flat_dict()
        stack = [(self, result['items'])]
        while stack:
            node, items = stack.pop()
            for child in node._children:
                child_dict = child._as_flat_dict()
                items.append(child_dict)
                stack.append((child, child_dict['items']))
        return result
