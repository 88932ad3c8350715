# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""FileTreeStore - In-memory folder/file tree with locate-by-id mutation.

This module provides the FileTreeStore class, the model behind a file
explorer view. The store owns a single root folder and exposes three
structural operations that locate their target by id:

    - **insert**: add a folder or file inside an existing folder
    - **delete**: remove a node together with its whole subtree
    - **edit**: rename a node

Ordering:
    New folders are placed first in their parent's children so they
    surface above existing entries; new files are appended at the end.

Lookup:
    Targets are located by pre-order depth-first search (node first, then
    children left to right). A missing id always raises NotFoundError.

Atomicity:
    Every operation validates before mutating, so a failed operation
    leaves the tree unchanged. All operations hold a re-entrant lock.

Example:
    Basic usage::

        store = FileTreeStore(root_id=1)
        store.insert(1, 'docs', True).insert(1, 'readme.md', False)
        [n.name for n in store.children(1)]  # ['docs', 'readme.md']

        docs = store.root.children[0]
        store.edit(docs.id, 'documents')
        store.delete(docs.id)
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterator

from ..exceptions import (
    InvalidLabelError,
    InvalidTargetError,
    NotFoundError,
    RootDeletionForbiddenError,
)
from ..ids import CounterIdGenerator, IdGenerator
from ..node import FileTreeNode, NodeId
from .subscription import SubscriptionMixin, SubscriberCallback

log = logging.getLogger(__name__)

# Attempts at drawing a non-colliding id before giving up
MAX_ID_ATTEMPTS = 1000


def validate_label(label: Any) -> str:
    """Return label if it is a usable node name.

    Raises:
        InvalidLabelError: If label is not a string or is blank.
    """
    if not isinstance(label, str):
        raise InvalidLabelError(
            f"label must be a string, not {type(label).__name__}"
        )
    if not label.strip():
        raise InvalidLabelError("label cannot be empty")
    return label


def is_valid_id(node_id: Any) -> bool:
    """True if node_id is a str or an int (bools excluded)."""
    return isinstance(node_id, (str, int)) and not isinstance(node_id, bool)


def validate_id(node_id: Any) -> NodeId:
    """Return node_id if it can identify a node.

    Raises:
        TypeError: If node_id is not a str or an int, or is a bool.
    """
    if not is_valid_id(node_id):
        raise TypeError(f"id must be a str or an int, not {type(node_id).__name__}")
    return node_id


class FileTreeStore(SubscriptionMixin):
    """A folder/file tree with insert, delete and edit by node id.

    FileTreeStore provides:
    - insert(target_id, label, is_folder): Create a child in a folder
    - delete(target_id): Remove a node and its subtree
    - edit(target_id, new_label): Rename a node
    - get_node(id) / children(id): Read-only access for rendering

    Attributes:
        root: The root folder node.
        id_factory: Generator proposing ids for new nodes.

    Example:
        >>> store = FileTreeStore(root_id='1')
        >>> store.insert('1', 'src', True)
        FileTreeStore(root='1', nodes=2)
    """

    __slots__ = (
        'root', 'id_factory', '_ids', '_lock',
        '_upd_subscribers', '_ins_subscribers', '_del_subscribers',
    )

    def __init__(
        self,
        root_id: NodeId = 1,
        root_name: str = 'root',
        id_factory: IdGenerator | None = None,
    ) -> None:
        """Initialize a FileTreeStore with an empty root folder.

        Args:
            root_id: Id of the root folder, fixed for the store's lifetime.
            root_name: Display name of the root folder.
            id_factory: Id generation strategy for inserted nodes.
                Defaults to a CounterIdGenerator starting at 1; candidates
                already used in the tree are skipped.

        Example:
            >>> FileTreeStore()
            >>> FileTreeStore(root_id='root', id_factory=RandomIdGenerator())
        """
        validate_id(root_id)
        validate_label(root_name)
        self.root = FileTreeNode(root_id, root_name, is_folder=True)
        self.id_factory = id_factory if id_factory is not None else CounterIdGenerator()
        self._ids: set[NodeId] = {root_id}
        self._lock = threading.RLock()
        self._upd_subscribers: dict[str, SubscriberCallback] = {}
        self._ins_subscribers: dict[str, SubscriberCallback] = {}
        self._del_subscribers: dict[str, SubscriberCallback] = {}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], id_factory: IdGenerator | None = None
    ) -> FileTreeStore:
        """Build a store from the nested ``items`` dict format.

        Args:
            data: Root node dict: {'id', 'name', 'isFolder', 'items': [...]}.
            id_factory: Id generation strategy for later inserts.

        Example:
            >>> FileTreeStore.from_dict({'id': '1', 'name': 'root', 'items': [
            ...     {'id': '2', 'name': 'a.txt', 'isFolder': False}]})
        """
        from .loading import load_from_dict
        return load_from_dict(cls, data, id_factory=id_factory)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"FileTreeStore(root={self.root.id!r}, nodes={len(self._ids)})"

    def __len__(self) -> int:
        """Return the total number of nodes, root included."""
        return len(self._ids)

    def __contains__(self, node_id: object) -> bool:
        """Check if a node with this id exists anywhere in the tree."""
        return is_valid_id(node_id) and node_id in self._ids

    def __iter__(self) -> Iterator[FileTreeNode]:
        """Iterate over all nodes in pre-order."""
        with self._lock:
            return iter(list(self.root.iter_preorder()))

    @property
    def root_id(self) -> NodeId:
        """Id of the root folder."""
        return self.root.id

    # ==================== Lookup ====================

    def _find(self, node_id: NodeId) -> FileTreeNode:
        """Locate a node by pre-order depth-first search.

        Raises:
            NotFoundError: If no node has this id. Values that are not
                valid ids, such as bools, never match.
        """
        if not is_valid_id(node_id):
            raise NotFoundError(node_id)
        for node in self.root.iter_preorder():
            if node.id == node_id:
                return node
        raise NotFoundError(node_id)

    def _next_id(self) -> NodeId:
        """Draw ids from id_factory until one is unused in the tree."""
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = validate_id(self.id_factory())
            if candidate not in self._ids:
                return candidate
            log.debug("id %r already in use, drawing another", candidate)
        raise RuntimeError(
            f"{type(self.id_factory).__name__} produced no unused id "
            f"in {MAX_ID_ATTEMPTS} attempts"
        )

    def _attach(self, parent: FileTreeNode, node: FileTreeNode, index: int) -> None:
        """Link a detached subtree under parent and register its ids."""
        parent._children.insert(index, node)
        node.parent = parent
        self._ids.update(n.id for n in node.iter_preorder())

    # ==================== Core API ====================

    def insert(self, target_id: NodeId, label: str, is_folder: bool) -> FileTreeStore:
        """Create a new node inside the folder with id target_id.

        Folders are inserted at the front of the target's children,
        files are appended at the end.

        Args:
            target_id: Id of an existing folder.
            label: Name of the new node.
            is_folder: Whether the new node can hold children.

        Returns:
            This store, for chaining.

        Raises:
            InvalidLabelError: If label is empty.
            NotFoundError: If target_id is not in the tree.
            InvalidTargetError: If the target is a file.
        """
        with self._lock:
            try:
                validate_label(label)
                target = self._find(target_id)
                if not target.is_folder:
                    raise InvalidTargetError(
                        f"Cannot insert into '{target.name}' ({target_id!r}): not a folder"
                    )
            except (InvalidLabelError, NotFoundError, InvalidTargetError) as exc:
                log.debug("insert into %r rejected: %s", target_id, exc)
                raise

            node = FileTreeNode(self._next_id(), label, is_folder=is_folder)
            index = 0 if node.is_folder else len(target._children)
            self._attach(target, node, index)
            log.debug(
                "inserted %s %r (%r) into %r at %d",
                'folder' if node.is_folder else 'file', label, node.id, target_id, index,
            )
            self._on_node_inserted(node, target, index)
            return self

    def delete(self, target_id: NodeId) -> FileTreeStore:
        """Remove the node with id target_id together with its subtree.

        Returns:
            This store, for chaining.

        Raises:
            RootDeletionForbiddenError: If target_id is the root's id.
            NotFoundError: If target_id is not in the tree.
        """
        with self._lock:
            try:
                node = self._find(target_id)
                if node is self.root:
                    raise RootDeletionForbiddenError("The root node cannot be deleted")
            except (RootDeletionForbiddenError, NotFoundError) as exc:
                log.debug("delete of %r rejected: %s", target_id, exc)
                raise

            parent = node._
            index = parent._children.index(node)
            del parent._children[index]
            removed = [n.id for n in node.iter_preorder()]
            self._ids.difference_update(removed)
            node.parent = None
            log.debug("deleted %r with %d node(s)", target_id, len(removed))
            self._on_node_deleted(node, parent, index)
            return self

    def edit(self, target_id: NodeId, new_label: str) -> FileTreeStore:
        """Rename the node with id target_id.

        Only the name changes; kind and children are untouched.

        Returns:
            This store, for chaining.

        Raises:
            InvalidLabelError: If new_label is empty.
            NotFoundError: If target_id is not in the tree.
        """
        with self._lock:
            try:
                validate_label(new_label)
                node = self._find(target_id)
            except (InvalidLabelError, NotFoundError) as exc:
                log.debug("edit of %r rejected: %s", target_id, exc)
                raise

            oldvalue = node.name
            if oldvalue == new_label:
                return self
            node.name = new_label
            log.debug("renamed %r from %r to %r", target_id, oldvalue, new_label)
            parent = node.parent
            index = parent._children.index(node) if parent is not None else 0
            self._on_node_renamed(node, parent, index, oldvalue)
            return self

    # ==================== Read-only Access ====================

    def get_node(self, node_id: NodeId) -> FileTreeNode:
        """Get the node with this id.

        Raises:
            NotFoundError: If node_id is not in the tree.
        """
        with self._lock:
            return self._find(node_id)

    def get(self, node_id: NodeId, default: Any = None) -> FileTreeNode | None:
        """Get the node with this id, or default if absent."""
        try:
            return self.get_node(node_id)
        except NotFoundError:
            return default

    def children(self, node_id: NodeId) -> tuple[FileTreeNode, ...]:
        """Return the immediate children of a node (empty for a file).

        Raises:
            NotFoundError: If node_id is not in the tree.
        """
        with self._lock:
            return self._find(node_id).children

    def find_by_name(self, name: str) -> list[FileTreeNode]:
        """Return all nodes named name, in pre-order."""
        with self._lock:
            return [n for n in self.root.iter_preorder() if n.name == name]

    def walk(self) -> Iterator[tuple[str, FileTreeNode]]:
        """Yield (path, node) for every node in pre-order.

        Example:
            >>> for path, node in store.walk():
            ...     print(path)
            root
            root/docs
        """
        with self._lock:
            items = [(n.path, n) for n in self.root.iter_preorder()]
        return iter(items)

    # ==================== Conversion ====================

    def as_dict(self) -> dict[str, Any]:
        """Convert the whole tree to the nested ``items`` dict format."""
        with self._lock:
            return self.root.as_dict()
