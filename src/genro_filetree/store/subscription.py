# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Event subscription and notification for FileTreeStore.

A presentation layer subscribes to be told when the tree changes and
re-renders the affected folder.

Events:
    - 'ins': a node was inserted (node, parent, index)
    - 'del': a node was removed with its subtree (node, parent, index)
    - 'upd_name': a node was renamed (node, parent, index, oldvalue)

Example:
    >>> def on_change(node, parent, evt, **kw):
    ...     print(evt, node.name)
    >>> store.subscribe('view', any=on_change)
    >>> store.insert(1, 'docs', True)
    ins docs
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from ..node import FileTreeNode

log = logging.getLogger(__name__)

SubscriberCallback = Callable[..., Any]


class SubscriptionMixin:
    """Mixin providing subscribe/unsubscribe and event dispatch.

    Classes using it must initialize ``_upd_subscribers``,
    ``_ins_subscribers`` and ``_del_subscribers`` as empty dicts.
    """

    _upd_subscribers: dict[str, SubscriberCallback]
    _ins_subscribers: dict[str, SubscriberCallback]
    _del_subscribers: dict[str, SubscriberCallback]

    def subscribe(
        self,
        subscriber_id: str,
        update: SubscriberCallback | None = None,
        insert: SubscriberCallback | None = None,
        delete: SubscriberCallback | None = None,
        any: SubscriberCallback | None = None,
    ) -> None:
        """Register callbacks for tree change events.

        Args:
            subscriber_id: Key identifying the subscriber; subscribing again
                with the same id replaces the previous callbacks.
            update: Called when a node is renamed.
            insert: Called when a node is inserted.
            delete: Called when a node is deleted.
            any: Shortcut registering the same callback for all events.
        """
        if any is not None:
            update = update or any
            insert = insert or any
            delete = delete or any
        if update is not None:
            self._upd_subscribers[subscriber_id] = update
        if insert is not None:
            self._ins_subscribers[subscriber_id] = insert
        if delete is not None:
            self._del_subscribers[subscriber_id] = delete
        log.debug("subscriber %r registered", subscriber_id)

    def unsubscribe(
        self,
        subscriber_id: str,
        update: bool = False,
        insert: bool = False,
        delete: bool = False,
        any: bool = False,
    ) -> None:
        """Remove a subscriber's callbacks.

        With no event flag set, all callbacks of the subscriber are removed.
        """
        if any or not (update or insert or delete):
            update = insert = delete = True
        if update:
            self._upd_subscribers.pop(subscriber_id, None)
        if insert:
            self._ins_subscribers.pop(subscriber_id, None)
        if delete:
            self._del_subscribers.pop(subscriber_id, None)

    def _notify(
        self, subscribers: dict[str, SubscriberCallback], **kwargs: Any
    ) -> None:
        # Copy: a callback may unsubscribe itself
        for callback in list(subscribers.values()):
            callback(**kwargs)

    def _on_node_inserted(
        self, node: FileTreeNode, parent: FileTreeNode, index: int
    ) -> None:
        self._notify(
            self._ins_subscribers, node=node, parent=parent, index=index, evt='ins'
        )

    def _on_node_deleted(
        self, node: FileTreeNode, parent: FileTreeNode, index: int
    ) -> None:
        self._notify(
            self._del_subscribers, node=node, parent=parent, index=index, evt='del'
        )

    def _on_node_renamed(
        self,
        node: FileTreeNode,
        parent: FileTreeNode | None,
        index: int,
        oldvalue: str,
    ) -> None:
        self._notify(
            self._upd_subscribers,
            node=node,
            parent=parent,
            index=index,
            evt='upd_name',
            oldvalue=oldvalue,
        )
