# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for populating a FileTreeStore from nested dicts.

The dict format is the one used by file explorer views::

    {
        'id': '1',
        'name': 'root',
        'isFolder': True,
        'items': [
            {'id': '2', 'name': 'public', 'isFolder': True, 'items': [...]},
            {'id': '11', 'name': 'package.json', 'isFolder': False, 'items': []},
        ],
    }

``is_folder`` and ``children`` are accepted as aliases of ``isFolder`` and
``items`` (a node may not populate both). A node without ``id`` receives
one from the store's id factory.
Children keep their source order.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..exceptions import DuplicateIdError, InvalidTargetError
from ..node import FileTreeNode
from .core import validate_id, validate_label

if TYPE_CHECKING:
    from ..ids import IdGenerator
    from .core import FileTreeStore


def _get_children(data: dict[str, Any]) -> list[Any]:
    items = data.get('items')
    children = data.get('children')
    if items and children:
        raise ValueError(
            f"Node '{data.get('name')}' has both 'items' and 'children'"
        )
    items = items or children
    if items is None:
        return []
    if not isinstance(items, list):
        raise TypeError(f"items must be a list, not {type(items).__name__}")
    return items


def _get_is_folder(data: dict[str, Any], default: bool) -> bool:
    if 'isFolder' in data:
        return bool(data['isFolder'])
    if 'is_folder' in data:
        return bool(data['is_folder'])
    return default


def _collect_ids(items: list[Any], taken: set[Any]) -> None:
    """Add every explicit id found in items and their descendants to taken.

    Raises:
        TypeError: If a node is not a dict or an id is not a str or an int.
        DuplicateIdError: If an id is already in taken.
    """
    stack = list(items)
    while stack:
        data = stack.pop()
        if not isinstance(data, dict):
            raise TypeError(f"node must be a dict, not {type(data).__name__}")
        node_id = data.get('id')
        if node_id is not None:
            validate_id(node_id)
            if node_id in taken:
                raise DuplicateIdError(f"Duplicate id {node_id!r} ('{data.get('name')}')")
            taken.add(node_id)
        stack.extend(_get_children(data))


def _build_node(
    store: FileTreeStore, data: dict[str, Any], taken: set[Any]
) -> tuple[FileTreeNode, list[Any]]:
    """Build a single detached node and return it with its child dicts.

    Raises:
        InvalidTargetError: If a file has children.
        InvalidLabelError: If a name is missing or blank.
    """
    name = validate_label(data.get('name'))
    items = _get_children(data)
    is_folder = _get_is_folder(data, default=bool(items))
    if items and not is_folder:
        raise InvalidTargetError(f"File '{name}' cannot have children")

    node_id = data.get('id')
    if node_id is None:
        node_id = store._next_id()
        while node_id in taken:
            node_id = store._next_id()
        taken.add(node_id)
    return FileTreeNode(node_id, name, is_folder=is_folder), items


def _build_subtree(
    store: FileTreeStore, data: dict[str, Any], taken: set[Any]
) -> FileTreeNode:
    """Build a detached node and its descendants from a dict.

    Nodes are created in pre-order with an explicit stack, so nesting depth
    is not bounded by the recursion limit.

    Args:
        store: Store supplying ids for nodes without one.
        data: Node dict, already checked by _collect_ids.
        taken: Ids in use; generated ids are added to it.
    """
    top, items = _build_node(store, data, taken)
    stack = [(top, item) for item in reversed(items)]
    while stack:
        parent, child_data = stack.pop()
        node, items = _build_node(store, child_data, taken)
        node.parent = parent
        parent._children.append(node)
        stack.extend((node, item) for item in reversed(items))
    return top


def load_items(
    store: FileTreeStore, target_id: Any, items: list[dict[str, Any]]
) -> FileTreeStore:
    """Append nodes described by dicts to the folder target_id.

    The whole batch is validated before anything is attached, so a
    validation error leaves the store unchanged. Subscribers are notified
    once every subtree is attached; an exception raised by a subscriber
    propagates with the batch already in place.

    Args:
        store: The FileTreeStore to populate.
        target_id: Id of an existing folder.
        items: List of node dicts.

    Returns:
        The store.
    """
    with store._lock:
        target = store._find(target_id)
        if not target.is_folder:
            raise InvalidTargetError(
                f"Cannot load into '{target.name}' ({target_id!r}): not a folder"
            )
        taken = set(store._ids)
        _collect_ids(items, taken)
        subtrees = [_build_subtree(store, item, taken) for item in items]
        attached = []
        for node in subtrees:
            index = len(target._children)
            store._attach(target, node, index)
            attached.append((node, index))
        for node, index in attached:
            store._on_node_inserted(node, target, index)
    return store


def load_from_dict(
    store_class: type[FileTreeStore],
    data: dict[str, Any],
    id_factory: IdGenerator | None = None,
) -> FileTreeStore:
    """Create a store whose root and descendants come from a dict.

    Args:
        store_class: FileTreeStore or a subclass.
        data: Root node dict; the root must be a folder.
        id_factory: Id generation strategy for the new store.

    Raises:
        TypeError: If data is not a dict.
        InvalidTargetError: If the root is declared as a file.
    """
    if not isinstance(data, dict):
        raise TypeError(f"data must be a dict, not {type(data).__name__}")
    if not _get_is_folder(data, default=True):
        raise InvalidTargetError("The root node must be a folder")

    kwargs: dict[str, Any] = {'root_name': validate_label(data.get('name', 'root'))}
    if data.get('id') is not None:
        kwargs['root_id'] = data['id']
    store = store_class(id_factory=id_factory, **kwargs)
    return load_items(store, store.root_id, _get_children(data))
