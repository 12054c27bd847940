"""
Unit tests for dotted path resolution.
"""

import pytest

from pycastor.conf.errors import PathNotFound
from pycastor.conf.model import Section, StringValue
from pycastor.conf.parser import ConfParser
from pycastor.conf.path import (
    flatten,
    path_to_string,
    resolve_all,
    resolve_last,
    resolve_section
)


TEXT = """\
top = 0
[a]
    [b]
        c = 1
        c = 2
        [empty]
        [!empty]
    [!b]
[!a]
"""


@pytest.fixture
def tree():
    return ConfParser.loads(TEXT)


class TestFlatten:
    """Test cases for path flattening."""

    def test_dotted_and_split_are_equal(self):
        assert flatten('a.b.c') == flatten('a', 'b', 'c') == ['a', 'b', 'c']
        assert flatten('a.b', 'c') == ['a', 'b', 'c']

    def test_none_segments_ignored(self):
        assert flatten(None, 'a', None) == ['a']

    def test_empty(self):
        assert flatten() == []

    def test_path_to_string(self):
        assert path_to_string('a.b', 'c') == 'a.b.c'
        assert path_to_string() == ''


class TestResolve:
    """Test cases for resolve_all / resolve_last."""

    def test_flattening_equivalence(self, tree):
        dotted = resolve_all(tree, StringValue, 'a.b.c')
        split = resolve_all(tree, StringValue, 'a', 'b', 'c')
        assert [i.value for i in dotted] == [i.value for i in split] == ['1', '2']

    def test_resolve_last_is_last_duplicate(self, tree):
        assert resolve_last(tree, StringValue, 'a.b.c').value == '2'

    def test_missing_final_component_is_empty(self, tree):
        assert resolve_all(tree, StringValue, 'a.b.nope') == []
        assert resolve_last(tree, StringValue, 'a.b.nope') is None

    def test_missing_intermediate_raises(self, tree):
        with pytest.raises(PathNotFound) as e:
            resolve_all(tree, StringValue, 'a.x.c', source='t.conf')
        assert e.value.component == 'x'
        assert e.value.path == 'a.x.c'
        assert 'a.x.c' in str(e.value)
        assert 't.conf' in str(e.value)

    def test_value_is_not_a_section(self, tree):
        with pytest.raises(PathNotFound):
            resolve_all(tree, StringValue, 'top.x')

    def test_kind_filter(self, tree):
        assert resolve_all(tree, Section, 'a.b.c') == []
        assert resolve_all(tree, StringValue, 'a.b.empty') == []

    def test_empty_section_is_found(self, tree):
        found = resolve_last(tree, Section, 'a.b.empty')
        assert found is not None
        assert len(found.children) == 0

    def test_empty_path_is_root(self, tree):
        root = resolve_last(tree, Section)
        assert root.children is tree
        assert resolve_all(tree, StringValue) == []

    def test_top_level_value(self, tree):
        assert resolve_last(tree, StringValue, 'top').value == '0'


class TestResolveSection:
    """Test cases for resolve_section."""

    def test_nested(self, tree):
        assert resolve_section(tree, ['a', 'b']).names(StringValue) == ['c', 'c']

    def test_root(self, tree):
        assert resolve_section(tree, []) is tree

    def test_missing(self, tree):
        with pytest.raises(PathNotFound):
            resolve_section(tree, ['a.nope'])
