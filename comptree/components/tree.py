# -*- coding: utf-8 -*-
"""
Component Tree - Immutable forest of nested image components.

``ComponentTree`` owns every sealed ``Component`` built from a
``PixelMap`` (the component's ``id`` is its index in the tree) and
answers structural and pixel-level queries: roots, leaves, components
per level, depth-first and level-ordered traversal, per-pixel ownership,
threshold reconstruction and labelling at any level, and integrity
validation.

A pixel is foreground at level ``L`` when it belongs to a component whose
level is at or before ``L`` in the processing order (``<= L`` for dark
polarity, ``>= L`` for bright polarity). ``reconstruct_at_level`` and
``label_at_level`` reproduce exactly what thresholding the image at
``L`` and labelling its connected regions would give.

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
from typing import (
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

# Third-party
import numpy as np
from scipy import ndimage

# COMPTREE internal
from comptree.components.component import Component
from comptree.components.pixel_map import PixelMap
from comptree.exceptions import InvariantError, ValidationError
from comptree.vocabulary import ComponentTreeMethod, Connectivity, Polarity


_INDENT = 4


class ComponentTree:
    """Immutable component tree (or forest) of a gray-level image.

    Instances are produced by component tree builders; use
    ``ComponentTree.from_image`` or ``ComponentTree.from_pixel_map``.

    Parameters
    ----------
    pixel_map : PixelMap
        Image the tree was built from.
    components : Sequence[Component]
        Sealed components; ``components[i].id`` must equal ``i``.
    method : ComponentTreeMethod
        Construction method that produced the components.

    Raises
    ------
    InvariantError
        If a component is not sealed or its id does not match its
        position.
    """

    def __init__(
        self,
        pixel_map: PixelMap,
        components: Sequence[Component],
        method: ComponentTreeMethod = ComponentTreeMethod.LINEAR_TIME,
    ) -> None:
        self._pixel_map = pixel_map
        self._method = method
        self._components: Tuple[Component, ...] = tuple(components)
        for i, c in enumerate(self._components):
            if not c.is_sealed or c.id != i:
                raise InvariantError(
                    f"component at position {i} is not a sealed tree node: {c!r}"
                )
        self._roots = tuple(c for c in self._components if c.is_root)

        by_level: Dict[int, List[Component]] = {}
        for c in self._components:
            by_level.setdefault(c.level, []).append(c)
        self._by_level = {lvl: tuple(cs) for lvl, cs in by_level.items()}

        self._owner: Optional[np.ndarray] = None

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------
    @classmethod
    def from_pixel_map(
        cls,
        pixel_map: PixelMap,
        method: Union[str, ComponentTreeMethod] = ComponentTreeMethod.LINEAR_TIME,
        validate: bool = False,
    ) -> 'ComponentTree':
        """Build the component tree of *pixel_map* with *method*."""
        from comptree.components.builders import get_builder
        return get_builder(method, validate=validate).build(pixel_map)

    @classmethod
    def from_image(
        cls,
        image: np.ndarray,
        connectivity: Union[int, Connectivity] = 4,
        method: Union[str, ComponentTreeMethod] = ComponentTreeMethod.LINEAR_TIME,
        polarity: Union[str, Polarity] = 'dark',
        mask: Optional[np.ndarray] = None,
        validate: bool = False,
    ) -> 'ComponentTree':
        """Build the component tree of a 2D integer image.

        Parameters
        ----------
        image : np.ndarray
            Non-negative integer intensities, shape ``(rows, cols)``.
        connectivity : int or Connectivity
            4 or 8. Default 4.
        method : str or ComponentTreeMethod
            ``'linear_time'`` (default), ``'flood'`` or
            ``'local_flooding'``.
        polarity : str or Polarity
            ``'dark'`` (default) or ``'bright'``.
        mask : np.ndarray of bool, optional
            Validity mask; ``False`` pixels are ignored.
        validate : bool
            Run ``validate()`` on the result.

        Returns
        -------
        ComponentTree

        Raises
        ------
        ValidationError
            For malformed input.
        EmptyInputError
            If the image has no (valid) pixels.

        Examples
        --------
        >>> tree = ComponentTree.from_image(np.full((4, 4), 100), connectivity=8)
        >>> tree.root.level, tree.root.size
        (100, 16)
        """
        pixel_map = PixelMap(
            image, connectivity=connectivity, polarity=polarity, mask=mask,
        )
        return cls.from_pixel_map(pixel_map, method=method, validate=validate)

    # -----------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------
    @property
    def pixel_map(self) -> PixelMap:
        return self._pixel_map

    @property
    def method(self) -> ComponentTreeMethod:
        return self._method

    @property
    def connectivity(self) -> Connectivity:
        return self._pixel_map.connectivity

    @property
    def polarity(self) -> Polarity:
        return self._pixel_map.polarity

    @property
    def root(self) -> Component:
        """The single root component.

        Raises
        ------
        ValidationError
            If the tree is a forest (validity mask with several blobs).
        """
        if len(self._roots) != 1:
            raise ValidationError(
                f"tree has {len(self._roots)} roots; use roots() instead"
            )
        return self._roots[0]

    # -----------------------------------------------------------------
    # Component queries
    # -----------------------------------------------------------------
    def components(self) -> Tuple[Component, ...]:
        """All components, indexed by id."""
        return self._components

    def roots(self) -> Tuple[Component, ...]:
        """Components without a parent, in ascending id."""
        return self._roots

    def leaves(self) -> Tuple[Component, ...]:
        """Components without children."""
        return tuple(c for c in self._components if c.is_leaf)

    def levels(self) -> List[int]:
        """Distinct component levels, ascending."""
        return sorted(self._by_level)

    def components_at_level(self, level: int) -> Tuple[Component, ...]:
        """Components sealed at *level* (possibly none)."""
        return self._by_level.get(level, ())

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components)

    def __getitem__(self, component_id: int) -> Component:
        return self._components[component_id]

    def _check_member(self, component: Component) -> None:
        cid = component.id
        if not (0 <= cid < len(self._components)) or self._components[cid] is not component:
            raise ValidationError(f"{component!r} does not belong to this tree")

    def local_pixels(self, component: Component) -> Tuple[int, ...]:
        """Pixel ids owned by *component* itself (not by its children)."""
        self._check_member(component)
        return component.local_pixels

    def pixels(self, component: Component) -> List[int]:
        """All pixel ids of *component*, children included."""
        self._check_member(component)
        return component.all_pixels()

    def mask_of(self, component: Component) -> np.ndarray:
        """Boolean image of the pixels of *component*."""
        flat = np.zeros(self._pixel_map.size, dtype=bool)
        flat[self.pixels(component)] = True
        return self._pixel_map.to_image(flat)

    # -----------------------------------------------------------------
    # Traversal
    # -----------------------------------------------------------------
    def iter_depth_first(self) -> Iterator[Component]:
        """Pre-order traversal from each root in turn."""
        for root in self._roots:
            stack = [root]
            while stack:
                node = stack.pop()
                yield node
                stack.extend(reversed(node.children))

    def iter_by_level(self) -> Iterator[Component]:
        """Components in processing order (children before parents)."""
        order = np.lexsort((
            np.arange(len(self._components)), self._component_keys(),
        ))
        for i in order.tolist():
            yield self._components[i]

    # -----------------------------------------------------------------
    # Pixel-level reconstruction
    # -----------------------------------------------------------------
    def _component_keys(self) -> np.ndarray:
        pm = self._pixel_map
        return np.array(
            [pm.key_of_level(c.level) for c in self._components], dtype=np.int64,
        )

    def _owner_ids(self) -> np.ndarray:
        if self._owner is None:
            owner = np.full(self._pixel_map.size, -1, dtype=np.int64)
            for c in self._components:
                if c.local_pixels:
                    owner[list(c.local_pixels)] = c.id
            owner.setflags(write=False)
            self._owner = owner
        return self._owner

    def component_map(self) -> np.ndarray:
        """Id of the component owning each pixel locally, -1 if masked.

        Returns
        -------
        np.ndarray
            int64 image, shape ``(height, width)``.
        """
        return self._pixel_map.to_image(self._owner_ids())

    def reconstruct_at_level(self, level: int) -> np.ndarray:
        """Foreground mask of all components at or before *level*.

        Parameters
        ----------
        level : int
            Threshold intensity.

        Returns
        -------
        np.ndarray
            bool image, shape ``(height, width)``.
        """
        return self.threshold_stack([level])[0]

    def threshold_stack(self, levels: Optional[Iterable[int]] = None) -> np.ndarray:
        """Foreground masks for a sequence of levels.

        Parameters
        ----------
        levels : iterable of int, optional
            Threshold intensities. Default ``0 .. max(255, max_value)``.

        Returns
        -------
        np.ndarray
            bool array, shape ``(n_levels, height, width)``.
        """
        pm = self._pixel_map
        if levels is None:
            levels = range(max(255, pm.max_value) + 1)
        thresholds = np.array(
            [pm.key_of_level(lvl) for lvl in levels], dtype=np.int64,
        )
        owner = self._owner_ids()
        comp_keys = np.append(self._component_keys(), np.iinfo(np.int64).max)
        pixel_keys = comp_keys[owner]
        stack = pixel_keys[None, :] <= thresholds[:, None]
        return stack.reshape(len(thresholds), pm.height, pm.width)

    def label_at_level(self, level: int) -> np.ndarray:
        """Label the connected foreground regions at *level*.

        Each foreground pixel receives ``1 + id`` of the largest
        component at or before *level* that contains it; background and
        masked pixels are 0. The partition equals that of
        ``scipy.ndimage.label`` applied to ``reconstruct_at_level(level)``
        with the tree's connectivity.

        Returns
        -------
        np.ndarray
            int32 image, shape ``(height, width)``.
        """
        threshold = self._pixel_map.key_of_level(level)
        keys = self._component_keys()
        rep = np.full(len(self._components) + 1, -1, dtype=np.int64)

        # Parents precede children in descending key order
        for i in np.argsort(-keys, kind='stable').tolist():
            if keys[i] > threshold:
                continue
            parent = self._components[i].parent
            if parent is not None and keys[parent.id] <= threshold:
                rep[i] = rep[parent.id]
            else:
                rep[i] = i
        labels = (rep[self._owner_ids()] + 1).astype(np.int32)
        return self._pixel_map.to_image(labels)

    # -----------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------
    def validate(self) -> None:
        """Check the structural integrity of the tree.

        Checks, in order: every component is reachable exactly once from
        the roots; parent links point into the tree and never to the
        component itself; children point back to their parent; the roots
        match the connected blobs of valid pixels; parents follow their
        children in the processing order and local pixels carry the
        component's level; sizes add up; every valid pixel is owned by
        exactly one component.

        Raises
        ------
        InvariantError
            Describing the first failed check.
        """
        self._check_nodes()
        self._check_parents()
        self._check_children()
        self._check_roots()
        self._check_levels()
        self._check_sizes()
        self._check_coverage()

    def _check_nodes(self) -> None:
        seen = set()
        for node in self.iter_depth_first():
            if node.id in seen:
                raise InvariantError(f"duplicate tree node: {node!r}")
            seen.add(node.id)
        if len(seen) != len(self._components):
            raise InvariantError(
                f"{len(self._components) - len(seen)} components cannot be "
                f"reached from the roots"
            )

    def _check_parents(self) -> None:
        for c in self._components:
            p = c.parent
            if p is None:
                continue
            if p is c:
                raise InvariantError(f"self-referring parent link in {c!r}")
            if not (0 <= p.id < len(self._components)) or self._components[p.id] is not p:
                raise InvariantError(f"parent of {c!r} is not in the tree")

    def _check_children(self) -> None:
        for c in self._components:
            for child in c.children:
                if child.parent is not c:
                    raise InvariantError(f"incorrect parent link in {child!r}")

    def _check_roots(self) -> None:
        pm = self._pixel_map
        _, n_blobs = ndimage.label(
            pm.to_image(pm.valid), structure=pm.structure,
        )
        if len(self._roots) != n_blobs:
            raise InvariantError(
                f"tree has {len(self._roots)} roots but the image has "
                f"{n_blobs} connected blobs"
            )

    def _check_levels(self) -> None:
        pm = self._pixel_map
        values = pm.values
        for c in self._components:
            p = c.parent
            if p is not None and pm.key_of_level(c.level) >= pm.key_of_level(p.level):
                raise InvariantError(
                    f"{c!r} does not precede its parent level {p.level}"
                )
            local = list(c.local_pixels)
            if local and np.any(values[local] != c.level):
                raise InvariantError(f"local pixel with wrong value in {c!r}")

    def _check_sizes(self) -> None:
        for c in self._components:
            expected = len(c.local_pixels) + sum(child.size for child in c.children)
            if c.size != expected:
                raise InvariantError(
                    f"wrong size in {c!r}: expected {expected}"
                )

    def _check_coverage(self) -> None:
        pm = self._pixel_map
        counts = np.zeros(pm.size, dtype=np.int64)
        for c in self._components:
            if c.local_pixels:
                np.add.at(counts, list(c.local_pixels), 1)
        if np.any(counts[pm.valid] != 1) or np.any(counts[~pm.valid] != 0):
            raise InvariantError(
                "valid pixels must belong to exactly one component"
            )

    # -----------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------
    def to_text(self) -> str:
        """Indented rendering of the forest, one component per line."""
        lines = []
        for root in self._roots:
            stack = [(root, 0)]
            while stack:
                node, depth = stack.pop()
                lines.append(('|' + ' ' * _INDENT) * depth + repr(node))
                stack.extend((child, depth + 1) for child in reversed(node.children))
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return (
            f"ComponentTree(method={self._method.value!r}, "
            f"components={len(self._components)}, roots={len(self._roots)}, "
            f"polarity={self.polarity.value!r})"
        )

    def __str__(self) -> str:
        return f"{self!r}\n{self.to_text()}"
