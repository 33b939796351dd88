# -*- coding: utf-8 -*-
"""
Component Tests.

Tests for the component tree node: pixel accumulation, merging of open
and sealed components, sealing, pixel enumeration, ancestry, and the
size and level sort helpers.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import pytest

from comptree.components.component import Component, sort_by_level, sort_by_size
from comptree.exceptions import InvariantError


def _sealed(level, pixels, component_id=0):
    c = Component()
    for p in pixels:
        c.add_pixel(p)
    c.seal(level)
    c._assign_id(component_id)
    return c


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestComponentConstruction:
    """Test open components."""

    def test_new_component_is_empty(self):
        c = Component()
        assert c.size == 0
        assert c.level is None
        assert c.id == -1
        assert c.is_root
        assert c.is_leaf
        assert not c.is_sealed

    def test_add_pixel(self):
        c = Component()
        c.add_pixel(5)
        c.add_pixel(6)
        assert c.size == 2
        assert c.local_pixels == (5, 6)

    def test_seal_fixes_level(self):
        c = _sealed(17, [1])
        assert c.level == 17
        assert c.is_sealed

    def test_add_pixel_after_seal_raises(self):
        c = _sealed(3, [1])
        with pytest.raises(InvariantError, match="sealed"):
            c.add_pixel(2)

    def test_seal_twice_raises(self):
        c = _sealed(3, [1])
        with pytest.raises(InvariantError):
            c.seal(4)

    def test_assign_id_twice_raises(self):
        c = _sealed(3, [1], component_id=4)
        with pytest.raises(InvariantError, match="already has id"):
            c._assign_id(5)


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------

class TestComponentMerge:
    """Test merge semantics."""

    def test_sealed_other_becomes_child(self):
        child = _sealed(2, [0, 1])
        parent = Component()
        parent.add_pixel(2)
        assert parent.merge(child) is parent
        assert child.parent is parent
        assert parent.children == (child,)
        assert parent.size == 3
        assert parent.height == 1
        assert parent.local_pixels == (2,)

    def test_open_other_is_absorbed(self):
        grandchild = _sealed(1, [9])
        a, b = Component(), Component()
        a.add_pixel(0)
        b.add_pixel(1)
        b.merge(grandchild)
        a.merge(b)
        assert b.is_absorbed
        assert b.size == 0
        assert a.size == 3
        assert sorted(a.local_pixels) == [0, 1]
        assert grandchild.parent is a
        assert a.children == (grandchild,)

    def test_absorbed_component_cannot_grow(self):
        a, b = Component(), Component()
        a.merge(b)
        with pytest.raises(InvariantError, match="absorbed"):
            b.add_pixel(1)

    def test_merge_into_sealed_raises(self):
        a = _sealed(5, [0])
        with pytest.raises(InvariantError):
            a.merge(Component())

    def test_merge_with_self_raises(self):
        a = Component()
        with pytest.raises(InvariantError, match="itself"):
            a.merge(a)

    def test_child_adopted_once(self):
        child = _sealed(1, [0])
        Component().merge(child)
        with pytest.raises(InvariantError, match="already has a parent"):
            Component().merge(child)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

class TestComponentQueries:
    """Test pixel enumeration, ancestry and rendering."""

    def _chain(self):
        leaf = _sealed(1, [0], component_id=0)
        mid = Component()
        mid.add_pixel(1)
        mid.merge(leaf)
        mid.seal(2)
        mid._assign_id(1)
        root = Component()
        root.add_pixel(2)
        root.add_pixel(3)
        root.merge(mid)
        root.seal(3)
        root._assign_id(2)
        return leaf, mid, root

    def test_all_pixels(self):
        leaf, mid, root = self._chain()
        assert sorted(root.all_pixels()) == [0, 1, 2, 3]
        assert sorted(root.child_pixels()) == [0, 1]
        assert leaf.child_pixels() == []

    def test_sizes_and_heights(self):
        leaf, mid, root = self._chain()
        assert (leaf.size, mid.size, root.size) == (1, 2, 4)
        assert (leaf.height, mid.height, root.height) == (0, 1, 2)

    def test_ancestors_and_root(self):
        leaf, mid, root = self._chain()
        assert list(leaf.ancestors()) == [mid, root]
        assert leaf.find_root() is root
        assert root.find_root() is root

    def test_extremal(self):
        leaf, mid, root = self._chain()
        assert leaf.is_extremal
        assert root.is_extremal

    def test_repr(self):
        leaf, mid, root = self._chain()
        text = repr(leaf)
        assert text.startswith('Component 0(1)')
        assert 'parent=1(2)' in text
        assert 'parent=x' in repr(root)


class TestSortHelpers:
    """Test component ordering helpers."""

    def test_sort_by_size_descending(self):
        comps = [_sealed(1, [0]), _sealed(2, [1, 2, 3]), _sealed(3, [4, 5])]
        assert [c.size for c in sort_by_size(comps)] == [3, 2, 1]

    def test_sort_by_level_ascending(self):
        comps = [_sealed(9, [0]), _sealed(2, [1]), _sealed(5, [2])]
        assert [c.level for c in sort_by_level(comps)] == [2, 5, 9]
