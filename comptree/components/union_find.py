# -*- coding: utf-8 -*-
"""
Union-Find Forest - Incremental disjoint sets over pixel ids.

Weighted union-find with path compression, extended so that each set
root carries a reference to the ``Component`` currently representing the
set. Pixels enter the structure lazily through ``make_set`` as the
builder activates them. When a union joins two sets that carry different
components, an ``on_merge`` hook decides which component represents the
merged set.

The structure is scratch space owned by a single builder run.

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

# Standard library
from typing import Callable, List, Optional

# COMPTREE internal
from comptree.components.component import Component
from comptree.exceptions import InvariantError

MergeHook = Callable[[Component, Component], Component]

_INACTIVE = -1


class DisjointSet:
    """Weighted union-find with component back-references.

    Parameters
    ----------
    n : int
        Number of pixel ids (``0 .. n-1``).
    on_merge : callable, optional
        ``on_merge(winner_component, loser_component) -> Component``,
        called by ``union`` when the two roots carry different
        components. The returned component represents the merged set.
        Without a hook the winner root keeps its own component.
    """

    def __init__(self, n: int, on_merge: Optional[MergeHook] = None) -> None:
        self._parent: List[int] = [_INACTIVE] * n
        self._rank: List[int] = [0] * n
        self._size: List[int] = [0] * n
        self._component: List[Optional[Component]] = [None] * n
        self._on_merge = on_merge
        self._n_sets = 0

    @property
    def n_sets(self) -> int:
        """Number of disjoint sets currently alive."""
        return self._n_sets

    def is_active(self, x: int) -> bool:
        """True once ``make_set(x)`` has been called."""
        return self._parent[x] != _INACTIVE

    def make_set(self, x: int, component: Optional[Component] = None) -> None:
        """Create the singleton set ``{x}`` represented by *component*."""
        if self._parent[x] != _INACTIVE:
            raise InvariantError(f"pixel {x} is already active")
        self._parent[x] = x
        self._rank[x] = 0
        self._size[x] = 1
        self._component[x] = component
        self._n_sets += 1

    def find(self, x: int) -> int:
        """Find root with path compression."""
        parent = self._parent
        if parent[x] == _INACTIVE:
            raise InvariantError(f"pixel {x} is not active")
        root = x
        while parent[root] != root:
            root = parent[root]
        # Path compression
        while parent[x] != root:
            next_x = parent[x]
            parent[x] = root
            x = next_x
        return root

    def union(self, a: int, b: int) -> int:
        """Merge the sets containing *a* and *b*; return the surviving root.

        Joining a set with itself is a no-op that returns its root.
        """
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return ra
        # Union by rank
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        self._size[ra] += self._size[rb]
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1
        self._n_sets -= 1

        ca, cb = self._component[ra], self._component[rb]
        if cb is not None and cb is not ca:
            if ca is None:
                self._component[ra] = cb
            elif self._on_merge is not None:
                self._component[ra] = self._on_merge(ca, cb)
        self._component[rb] = None
        return ra

    def component(self, x: int) -> Optional[Component]:
        """Component representing the set that contains *x*."""
        return self._component[self.find(x)]

    def set_component(self, x: int, component: Optional[Component]) -> None:
        """Attach *component* to the set that contains *x*."""
        self._component[self.find(x)] = component

    def set_size(self, x: int) -> int:
        """Number of pixels in the set that contains *x*."""
        return self._size[self.find(x)]
