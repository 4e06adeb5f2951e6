# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for PropertyEntry, PropertyMap, path and link resolution, dump."""

import pytest

from genro_properties import (
    ConflictError,
    EntryKind,
    InvalidPathError,
    LinkResolutionError,
    NotFoundError,
    PathResolver,
    PropertyEntry,
    PropertyMap,
)
from genro_properties.dump import format_dump
from genro_properties.store import split_path


class TestPropertyEntry:
    """Tests for PropertyEntry."""

    def test_value_entry(self):
        """Test a value entry."""
        entry = PropertyEntry.value_entry('Age', 50)
        assert entry.kind is EntryKind.VALUE
        assert entry.is_value and not entry.is_map and not entry.is_link
        assert entry.value == 50

    def test_map_entry_owns_new_map(self):
        """Test a map entry creates its own empty map."""
        first = PropertyEntry.map_entry('Address')
        second = PropertyEntry.map_entry('Address')
        assert first.is_map
        assert isinstance(first.children, PropertyMap)
        assert first.children is not second.children

    def test_link_entry(self):
        """Test a link entry stores its target path."""
        entry = PropertyEntry.link_entry('Contacts', 'Address.Phone')
        assert entry.is_link
        assert entry.target == 'Address.Phone'

    def test_wrong_kind_accessors_raise(self):
        """Test children/target on the wrong kind raise TypeError."""
        entry = PropertyEntry.value_entry('Age', 50)
        with pytest.raises(TypeError, match="not a map"):
            _ = entry.children
        with pytest.raises(TypeError, match="not a link"):
            _ = entry.target

    def test_repr(self):
        """Test string representation."""
        assert repr(PropertyEntry.value_entry('Age', 50)) == "PropertyEntry('Age', value, 50)"
        assert 'Address.Phone' in repr(PropertyEntry.link_entry('C', 'Address.Phone'))


class TestPropertyMap:
    """Tests for PropertyMap insertion rules and ordering."""

    def test_sorted_order(self):
        """Test entries iterate in ascending name order."""
        pmap = PropertyMap()
        for name in ('Name', 'Age', 'First Name', 'Address'):
            pmap.insert_value(name, name.lower())
        assert pmap.names() == ['Address', 'Age', 'First Name', 'Name']
        assert [e.name for e in pmap] == pmap.names()
        assert pmap.entry_at(1).name == 'Age'
        assert len(pmap) == 4
        assert 'Age' in pmap

    def test_find(self):
        """Test find returns the entry or None."""
        pmap = PropertyMap()
        pmap.insert_value('Age', 50)
        assert pmap.find('Age').value == 50
        assert pmap.find('Missing') is None

    def test_overwrite_value_keeps_single_name(self):
        """Test overwriting a value does not add a second name."""
        pmap = PropertyMap()
        pmap.insert_value('Age', 50)
        pmap.insert_value('Age', 35)
        assert pmap.names() == ['Age']
        assert pmap.find('Age').value == 35

    def test_value_over_non_empty_map_conflicts(self):
        """Test a value cannot replace a map with children."""
        pmap = PropertyMap()
        pmap.insert_or_get_map('Name').children.insert_value('First', 'Peter')
        with pytest.raises(ConflictError):
            pmap.insert_value('Name', 'Hugentobler')

    def test_value_over_empty_map(self):
        """Test a value may replace an empty map."""
        pmap = PropertyMap()
        pmap.insert_or_get_map('Name')
        pmap.insert_value('Name', 'Hugentobler')
        assert pmap.find('Name').is_value

    def test_insert_or_get_map(self):
        """Test the same map entry is returned on repeated calls."""
        pmap = PropertyMap()
        first = pmap.insert_or_get_map('Address')
        assert pmap.insert_or_get_map('Address') is first

    def test_insert_or_get_map_on_value_conflicts(self):
        """Test descending into a value is a conflict."""
        pmap = PropertyMap()
        pmap.insert_value('Name', 'Hugentobler')
        with pytest.raises(ConflictError, match="is a value"):
            pmap.insert_or_get_map('Name')

    def test_insert_or_get_map_returns_link(self):
        """Test a link is handed back to the caller."""
        pmap = PropertyMap()
        pmap.insert_link('Contacts', 'Address.Phone')
        assert pmap.insert_or_get_map('Contacts').is_link

    def test_link_rules(self):
        """Test a link may replace a link but not a value."""
        pmap = PropertyMap()
        pmap.insert_link('L', 'A')
        pmap.insert_link('L', 'B')
        assert pmap.find('L').target == 'B'
        pmap.insert_value('V', 1)
        with pytest.raises(ConflictError):
            pmap.insert_link('V', 'A')

    def test_restore(self):
        """Test restore puts back the previous entry or drops the name."""
        pmap = PropertyMap()
        previous = pmap.insert_link('L', 'A')
        pmap.insert_link('L', 'B')
        pmap.restore('L', previous)
        assert pmap.find('L').target == 'A'
        pmap.insert_link('M', 'A')
        pmap.restore('M', None)
        assert pmap.names() == ['L']


class TestPathResolver:
    """Tests for PathResolver and LinkResolver."""

    @pytest.fixture
    def resolver(self):
        resolver = PathResolver(PropertyMap(), '.')
        parent, name = resolver.resolve_for_write('Address.Phone.Home')
        parent.insert_value(name, '123')
        parent, name = resolver.resolve_for_write('Contacts')
        parent.insert_link(name, 'Address.Phone')
        return resolver

    def test_split_path(self):
        """Test path splitting and validation."""
        assert split_path('a.b.c', '.') == ['a', 'b', 'c']
        assert split_path('a.b', '/') == ['a.b']
        with pytest.raises(InvalidPathError, match="Empty path"):
            split_path('', '.')
        with pytest.raises(InvalidPathError, match="Empty component"):
            split_path('a..b', '.')

    def test_resolve_for_read(self, resolver):
        """Test reading follows intermediate links."""
        assert resolver.resolve_for_read('Address.Phone.Home').value == '123'
        assert resolver.resolve_for_read('Contacts.Home').value == '123'

    def test_final_link_not_dereferenced(self, resolver):
        """Test the last component is returned as stored."""
        assert resolver.resolve_for_read('Contacts').is_link
        assert resolver.resolve_concrete('Contacts').is_map

    def test_resolve_for_read_missing(self, resolver):
        """Test missing components raise NotFoundError."""
        with pytest.raises(NotFoundError):
            resolver.resolve_for_read('Address.Fax')
        with pytest.raises(NotFoundError):
            resolver.resolve_for_read('Nowhere.Home')
        with pytest.raises(NotFoundError, match="is a value"):
            resolver.resolve_for_read('Address.Phone.Home.More')

    def test_resolve_for_write_through_link(self, resolver):
        """Test a write below a link lands in the target map."""
        parent, name = resolver.resolve_for_write('Contacts.Office')
        phone = resolver.resolve_for_read('Address.Phone').children
        assert parent is phone
        assert name == 'Office'

    def test_resolve_for_write_through_value_link(self, resolver):
        """Test a write below a link to a value conflicts."""
        parent, name = resolver.resolve_for_write('Primary')
        parent.insert_link(name, 'Address.Phone.Home')
        with pytest.raises(ConflictError, match="points to a value"):
            resolver.resolve_for_write('Primary.More')

    def test_dangling_link(self):
        """Test a link whose target is missing fails to resolve."""
        resolver = PathResolver(PropertyMap(), '.')
        entry = resolver.root.insert_link('L', 'Missing')
        with pytest.raises(LinkResolutionError, match="Missing"):
            resolver.links.resolve(entry)
        with pytest.raises(NotFoundError):
            resolver.resolve_for_read('L.x')

    def test_cyclic_links(self):
        """Test a cycle of links raises instead of looping."""
        resolver = PathResolver(PropertyMap(), '.')
        first = resolver.root.insert_link('A', 'B')
        resolver.root.insert_link('B', 'A')
        with pytest.raises(LinkResolutionError, match="Cyclic"):
            resolver.links.resolve(first)
        with pytest.raises(NotFoundError):
            resolver.resolve_for_read('A.x')


class TestDump:
    """Tests for the dump formatter on bare maps."""

    def test_nested_indentation(self):
        """Test each level is indented by three spaces."""
        resolver = PathResolver(PropertyMap(), '.')
        parent, name = resolver.resolve_for_write('a.b.c')
        parent.insert_value(name, 1)
        resolver.root.insert_link('z', 'a.b')
        assert format_dump(resolver.root) == "a:\n   b:\n      c = 1\nz -> a.b\n"
