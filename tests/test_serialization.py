# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for JSON and YAML transport."""

import json

import pytest

from genro_filetree import FileTreeStore, RandomIdGenerator
from genro_filetree.serialization import _dumps, _loads, from_json, from_yaml, to_json, to_yaml


@pytest.fixture
def store():
    store = FileTreeStore(root_id='root', root_name='project')
    store.insert('root', 'src', True)
    src = store.root.children[0]
    store.insert(src.id, 'main.py', False)
    store.insert('root', 'README.md', False)
    return store


class TestJson:
    """Tests for JSON serialization."""

    def test_to_json_shape(self, store):
        """Test JSON uses the nested items format."""
        data = json.loads(to_json(store))
        assert data['id'] == 'root'
        assert data['isFolder'] is True
        assert [item['name'] for item in data['items']] == ['src', 'README.md']
        assert data['items'][0]['items'][0]['name'] == 'main.py'

    def test_from_json_restores_tree(self, store):
        """Test loading JSON gives an equal tree."""
        copy = from_json(to_json(store))
        assert copy is not store
        assert copy.as_dict() == store.as_dict()
        assert copy.root_id == 'root'

    def test_from_json_id_factory(self, store):
        """Test loaded store uses the given id factory for inserts."""
        copy = from_json(to_json(store), id_factory=RandomIdGenerator())
        copy.insert('root', 'docs', True)
        assert isinstance(copy.root.children[0].id, str)
        assert len(copy) == 5

    def test_non_ascii_names(self):
        """Test names are kept verbatim."""
        store = FileTreeStore()
        store.insert(1, 'résumé.txt', False)
        assert 'résumé.txt' in to_json(store)
        assert from_json(to_json(store)).root.children[0].name == 'résumé.txt'


class TestJsonText:
    """Tests for the stack-based JSON writer and reader."""

    SAMPLES = [
        {'id': 1, 'name': 'a', 'isFolder': True, 'items': []},
        {'s': 'quote " slash \\ tab \t \u00e9', 'n': None, 'f': False},
        [1, -2, 3.5, 1e20, [], {}, [[[]]], {'x': {'y': [0]}}],
        'plain',
        0,
    ]

    @pytest.mark.parametrize('value', SAMPLES)
    @pytest.mark.parametrize('indent', [None, 2])
    def test_dumps_matches_stdlib(self, value, indent):
        """Test output is identical to json.dumps."""
        assert _dumps(value, indent=indent) == json.dumps(value, indent=indent, ensure_ascii=False)

    @pytest.mark.parametrize('value', SAMPLES)
    def test_loads_matches_stdlib(self, value):
        """Test parsing gives the same result as json.loads."""
        text = json.dumps(value, indent=2)
        assert _loads(text) == json.loads(text)

    @pytest.mark.parametrize('text', ['', '{', '[1,]', '{"a" 1}', '{"a": 1,}', '[1] 2', 'nul', '{1: 2}'])
    def test_loads_invalid(self, text):
        """Test malformed text raises JSONDecodeError."""
        with pytest.raises(json.JSONDecodeError):
            _loads(text)

    def test_deep_chain_round_trip(self):
        """Test a chain deeper than the recursion limit survives JSON."""
        store = FileTreeStore(root_id=0)
        target = 0
        for i in range(1200):
            store.insert(target, f'd{i}', True)
            target = store.children(target)[0].id

        for indent in (None, 2):
            copy = from_json(to_json(store, indent=indent))
            assert len(copy) == 1201
            assert [(n.id, n.name, n.is_folder) for n in copy] == \
                [(n.id, n.name, n.is_folder) for n in store]
            assert copy.get_node(target).depth == 1200


class TestYaml:
    """Tests for YAML serialization."""

    def test_yaml_round_trip(self, store):
        """Test dumping and loading YAML."""
        pytest.importorskip('yaml')
        text = to_yaml(store)
        assert 'main.py' in text
        assert from_yaml(text).as_dict() == store.as_dict()

    def test_yaml_keeps_key_order(self, store):
        """Test node keys are written in id, name, isFolder, items order."""
        pytest.importorskip('yaml')
        first_lines = to_yaml(store).splitlines()[:4]
        assert first_lines == ['id: root', 'name: project', 'isFolder: true', 'items:']
