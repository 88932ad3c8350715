# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Explorer - Example text view over a FileTreeStore.

A didactic example showing how a presentation layer reads the tree
through the read-only accessors and redraws on change events.

Run it directly::

    python examples/file_explorer/explorer.py
"""

from __future__ import annotations

import logging

from genro_filetree import FileTreeError, FileTreeNode, FileTreeStore

SAMPLE = {
    'id': '1',
    'name': 'root',
    'isFolder': True,
    'items': [
        {'id': '2', 'name': 'public', 'isFolder': True, 'items': [
            {'id': '3', 'name': 'index.html', 'isFolder': False, 'items': []},
        ]},
        {'id': '7', 'name': 'src', 'isFolder': True, 'items': [
            {'id': '8', 'name': 'App.js', 'isFolder': False, 'items': []},
        ]},
        {'id': '11', 'name': 'package.json', 'isFolder': False, 'items': []},
    ],
}


def render(store: FileTreeStore) -> str:
    """Return an indented listing, folders marked with a folder icon."""
    lines = []

    def _render(node: FileTreeNode, indent: int) -> None:
        icon = '📂' if node.is_folder else '📄'
        lines.append(f"{'  ' * indent}{icon} {node.name}")
        for child in store.children(node.id):
            _render(child, indent + 1)

    _render(store.root, 0)
    return '\n'.join(lines)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')
    store = FileTreeStore.from_dict(SAMPLE)
    store.subscribe('view', any=lambda evt, node, **kw: print(f"[{evt}] {node.name}"))

    store.insert('7', 'components', True)
    store.insert('7', 'styles.css', False)
    store.edit('8', 'Main.js')
    store.delete('2')

    try:
        store.insert('11', 'nested', True)
    except FileTreeError as exc:
        print(f"rejected: {exc}")

    print(render(store))


if __name__ == '__main__':
    main()
