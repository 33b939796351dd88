# -*- coding: utf-8 -*-
"""
Component - A node of the component tree.

A ``Component`` is a connected set of pixels at or before some threshold
level. It stores only its *local* pixels (pixels whose intensity equals
the component's level and that lie in no child); the pixels of the
children are reached through the tree.

A component is open while a builder is filling it. ``seal(level)`` fixes
its level and freezes its pixels and children. The only change allowed
after sealing is setting the parent link, exactly once, when a later
component adopts it.

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
from typing import Iterable, Iterator, List, Optional, Tuple

# COMPTREE internal
from comptree.exceptions import InvariantError


class Component:
    """Connected component of a gray-level image at a fixed level.

    Instances are created by component tree builders; consumers only
    read them.
    """

    __slots__ = (
        '_id', '_level', '_local', '_children', '_parent',
        '_size', '_height', '_sealed', '_absorbed',
    )

    def __init__(self) -> None:
        self._id = -1
        self._level: Optional[int] = None
        self._local: List[int] = []
        self._children: List['Component'] = []
        self._parent: Optional['Component'] = None
        self._size = 0
        self._height = 0
        self._sealed = False
        self._absorbed = False

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------
    def _check_open(self) -> None:
        if self._sealed:
            raise InvariantError(f"{self!r} is sealed")
        if self._absorbed:
            raise InvariantError(f"{self!r} was absorbed by another component")

    def add_pixel(self, pixel_id: int) -> None:
        """Add a local pixel to an open component."""
        self._check_open()
        self._local.append(pixel_id)
        self._size += 1

    def merge(self, other: 'Component') -> 'Component':
        """Join *other* into this open component and return ``self``.

        A sealed *other* (a component from an earlier level) becomes a
        child of this component. An open *other* (a component of the
        same level) is absorbed: its local pixels and children move here
        and it is marked absorbed.

        Raises
        ------
        InvariantError
            If this component is sealed, if *other* is this component,
            or if a sealed *other* already has a parent.
        """
        self._check_open()
        if other is self:
            raise InvariantError(f"{self!r} cannot merge with itself")

        if other._sealed:
            if other._parent is not None:
                raise InvariantError(f"{other!r} already has a parent")
            other._parent = self
            self._children.append(other)
            self._height = max(self._height, other._height + 1)
            self._size += other._size
        else:
            other._check_open()
            for child in other._children:
                child._parent = self
            self._children.extend(other._children)
            self._local.extend(other._local)
            self._height = max(self._height, other._height)
            self._size += other._size
            other._children = []
            other._local = []
            other._size = 0
            other._absorbed = True
        return self

    def seal(self, level: int) -> None:
        """Fix the level and freeze pixels and children.

        Raises
        ------
        InvariantError
            If the component is already sealed or was absorbed.
        """
        self._check_open()
        self._level = int(level)
        self._local = tuple(self._local)
        self._children = tuple(self._children)
        self._sealed = True

    def _assign_id(self, component_id: int) -> None:
        if self._id >= 0:
            raise InvariantError(f"{self!r} already has id {self._id}")
        self._id = component_id

    # -----------------------------------------------------------------
    # Read access
    # -----------------------------------------------------------------
    @property
    def id(self) -> int:
        """Index in the owning tree's component list (-1 before sealing)."""
        return self._id

    @property
    def level(self) -> Optional[int]:
        """Intensity level; ``None`` while the component is open."""
        return self._level

    @property
    def size(self) -> int:
        """Number of pixels, children included."""
        return self._size

    @property
    def local_pixels(self) -> Tuple[int, ...]:
        """Pixel ids that belong to this component but to no child."""
        return tuple(self._local)

    @property
    def children(self) -> Tuple['Component', ...]:
        return tuple(self._children)

    @property
    def parent(self) -> Optional['Component']:
        return self._parent

    @property
    def height(self) -> int:
        """Height of the subtree rooted at this component (leaf = 0)."""
        return self._height

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    @property
    def is_absorbed(self) -> bool:
        return self._absorbed

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def is_leaf(self) -> bool:
        return not self._children

    @property
    def is_extremal(self) -> bool:
        """True if the parent lies at a different level (or there is none)."""
        return self._parent is None or self._parent._level != self._level

    def child_pixels(self) -> List[int]:
        """All pixel ids contained in the children of this component."""
        pixels: List[int] = []
        stack = list(self._children)
        while stack:
            node = stack.pop()
            pixels.extend(node._local)
            stack.extend(node._children)
        return pixels

    def all_pixels(self) -> List[int]:
        """All pixel ids of this component, children included."""
        return list(self._local) + self.child_pixels()

    def ancestors(self) -> Iterator['Component']:
        """Yield parent, grandparent, ... up to the root."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def find_root(self) -> 'Component':
        """Root of the tree that contains this component."""
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def __repr__(self) -> str:
        parent = 'x' if self._parent is None else (
            f"{self._parent._id}({self._parent._level})"
        )
        return (
            f"Component {self._id}({self._level}): size={self._size} "
            f"local={len(self._local)} children={len(self._children)} "
            f"parent={parent}"
        )


def sort_by_size(components: Iterable[Component]) -> List[Component]:
    """Components ordered by decreasing size (largest first)."""
    return sorted(components, key=lambda c: c.size, reverse=True)


def sort_by_level(components: Iterable[Component]) -> List[Component]:
    """Components ordered by increasing level (lowest first)."""
    return sorted(components, key=lambda c: c.level)

