# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""JSON and YAML transport for FileTreeStore.

Both formats carry the nested ``items`` dict produced by
FileTreeStore.as_dict(). YAML support needs PyYAML (``pip install
genro-filetree[yaml]``).

The stdlib json encoder and decoder recurse once per nesting level, and
every folder adds two levels (its dict and its ``items`` list). JSON text
is therefore written and read here with an explicit stack, using json only
for scalars, so any tree that insert() can build round-trips. YAML goes
through PyYAML's representer, which recurses, and suits shallow trees only.

Example:
    >>> text = to_json(store)
    >>> copy = from_json(text)
    >>> copy.as_dict() == store.as_dict()
    True
"""

from __future__ import annotations

import json
import re
from json.decoder import JSONDecodeError, scanstring
from json.scanner import NUMBER_RE
from typing import Any, TYPE_CHECKING

from .store import FileTreeStore

if TYPE_CHECKING:
    from .ids import IdGenerator

_WHITESPACE = re.compile(r'[ \t\n\r]*')
_LITERALS = {'true': True, 'false': False, 'null': None}
_END = object()


def _import_yaml() -> Any:
    try:
        import yaml
    except ImportError as exc:
        raise ImportError(
            "YAML support requires PyYAML: pip install genro-filetree[yaml]"
        ) from exc
    return yaml


# ==================== JSON text ====================

def _dumps(value: Any, indent: int | None = None) -> str:
    """Encode value like json.dumps(ensure_ascii=False), without recursion."""
    chunks: list[str] = []
    item_sep = ',' if indent is not None else ', '

    def _newline(level: int) -> str:
        return '' if indent is None else '\n' + ' ' * (indent * level)

    # frames: [iterator, closing bracket, is_dict, items written]
    stack: list[list[Any]] = []
    current = value
    pending = True
    while True:
        if pending:
            if isinstance(current, dict) and current:
                chunks.append('{')
                stack.append([iter(current.items()), '}', True, 0])
            elif isinstance(current, (list, tuple)) and current:
                chunks.append('[')
                stack.append([iter(current), ']', False, 0])
            else:
                chunks.append(json.dumps(current, ensure_ascii=False))
            pending = False
        if not stack:
            return ''.join(chunks)
        frame = stack[-1]
        item = next(frame[0], _END)
        if item is _END:
            stack.pop()
            chunks.append(_newline(len(stack)) + frame[1])
            continue
        if frame[3]:
            chunks.append(item_sep)
        frame[3] += 1
        chunks.append(_newline(len(stack)))
        if frame[2]:
            key, current = item
            chunks.append(json.dumps(str(key), ensure_ascii=False) + ': ')
        else:
            current = item
        pending = True


def _skip(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _read_key(text: str, pos: int) -> tuple[str, int]:
    """Read '"key" :' at pos and return the key and the value position."""
    if text[pos:pos + 1] != '"':
        raise JSONDecodeError("Expecting property name enclosed in double quotes", text, pos)
    key, pos = scanstring(text, pos + 1)
    pos = _skip(text, pos)
    if text[pos:pos + 1] != ':':
        raise JSONDecodeError("Expecting ':' delimiter", text, pos)
    return key, _skip(text, pos + 1)


def _loads(text: str) -> Any:
    """Decode JSON text like json.loads(), without recursion.

    Raises:
        JSONDecodeError: If text is not valid JSON.
    """
    containers: list[dict | list] = []
    keys: list[str | None] = []
    pos = _skip(text, 0)
    while True:
        # Read one value starting at pos
        char = text[pos:pos + 1]
        if char == '{':
            pos = _skip(text, pos + 1)
            if text[pos:pos + 1] != '}':
                key, pos = _read_key(text, pos)
                containers.append({})
                keys.append(key)
                continue
            value: Any = {}
            pos += 1
        elif char == '[':
            pos = _skip(text, pos + 1)
            if text[pos:pos + 1] != ']':
                containers.append([])
                keys.append(None)
                continue
            value = []
            pos += 1
        elif char == '"':
            value, pos = scanstring(text, pos + 1)
        else:
            match = NUMBER_RE.match(text, pos)
            if match is not None:
                integer, frac, exp = match.groups()
                if frac or exp:
                    value = float(integer + (frac or '') + (exp or ''))
                else:
                    value = int(integer)
                pos = match.end()
            else:
                for literal, literal_value in _LITERALS.items():
                    if text.startswith(literal, pos):
                        value = literal_value
                        pos += len(literal)
                        break
                else:
                    raise JSONDecodeError("Expecting value", text, pos)

        # Store the value, closing every container that ends here
        while True:
            if not containers:
                pos = _skip(text, pos)
                if pos != len(text):
                    raise JSONDecodeError("Extra data", text, pos)
                return value
            container = containers[-1]
            if isinstance(container, dict):
                container[keys[-1]] = value
            else:
                container.append(value)
            pos = _skip(text, pos)
            char = text[pos:pos + 1]
            if char == ',':
                pos = _skip(text, pos + 1)
                if isinstance(container, dict):
                    keys[-1], pos = _read_key(text, pos)
                break
            closing = '}' if isinstance(container, dict) else ']'
            if char != closing:
                raise JSONDecodeError("Expecting ',' delimiter", text, pos)
            pos += 1
            value = containers.pop()
            keys.pop()


# ==================== Public API ====================

def to_json(store: FileTreeStore, indent: int | None = 2) -> str:
    """Serialize the whole tree to a JSON string."""
    return _dumps(store.as_dict(), indent=indent)


def from_json(text: str, id_factory: IdGenerator | None = None) -> FileTreeStore:
    """Build a store from a JSON string produced by to_json()."""
    return FileTreeStore.from_dict(_loads(text), id_factory=id_factory)


def to_yaml(store: FileTreeStore) -> str:
    """Serialize the whole tree to a YAML string."""
    yaml = _import_yaml()
    return yaml.safe_dump(
        store.as_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def from_yaml(text: str, id_factory: IdGenerator | None = None) -> FileTreeStore:
    """Build a store from a YAML string produced by to_yaml()."""
    yaml = _import_yaml()
    return FileTreeStore.from_dict(yaml.safe_load(text), id_factory=id_factory)
