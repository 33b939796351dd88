# -*- coding: utf-8 -*-
"""
Component Tree Builder Base - Template method shared by all strategies.

``ComponentTreeBuilder.build()`` checks the input, hands an empty
``TreeAssembler`` to the strategy-specific ``_build()``, and wraps the
sealed components into an immutable ``ComponentTree``. Strategies only
decide *when* components are created, merged, and sealed; the assembler
assigns ids and enforces the level ordering between a component and its
children.

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
import logging
from abc import abstractmethod
from typing import Annotated, Any, ClassVar, Dict, List

# COMPTREE internal
from comptree.components.component import Component
from comptree.components.pixel_map import PixelMap
from comptree.components.tree import ComponentTree
from comptree.exceptions import EmptyInputError, InvariantError
from comptree.image_processing.base import ImageProcessor
from comptree.image_processing.params import Desc
from comptree.vocabulary import ComponentTreeMethod

logger = logging.getLogger(__name__)


class TreeAssembler:
    """Collects sealed components in sealing order.

    Parameters
    ----------
    pixel_map : PixelMap
        Image being processed; translates processing keys to levels.
    """

    def __init__(self, pixel_map: PixelMap) -> None:
        self._pixel_map = pixel_map
        self._sealed: List[Component] = []

    @property
    def components(self) -> List[Component]:
        """Sealed components; the list index equals the component id."""
        return self._sealed

    def new_component(self) -> Component:
        """Create an open component."""
        return Component()

    def seal(self, component: Component, key: int) -> Component:
        """Seal *component* at processing *key* and assign its id.

        Raises
        ------
        InvariantError
            If a child does not precede *key* in the processing order.
        """
        pm = self._pixel_map
        for child in component.children:
            if pm.key_of_level(child.level) >= key:
                raise InvariantError(
                    f"child {child!r} does not precede level "
                    f"{pm.level_of_key(key)}"
                )
        component.seal(pm.level_of_key(key))
        component._assign_id(len(self._sealed))
        self._sealed.append(component)
        return component


class ComponentTreeBuilder(ImageProcessor):
    """
    Abstract base class for component tree construction strategies.

    Concrete builders set ``method`` and implement ``_build``, which
    creates, merges, and seals components through the given
    ``TreeAssembler``. Every strategy returns the same tree for the same
    ``PixelMap``; only component ids and child order may differ.

    Parameters
    ----------
    validate : bool
        Run ``ComponentTree.validate()`` on the finished tree. Default
        False.
    """

    method: ClassVar[ComponentTreeMethod]

    validate: Annotated[
        bool, Desc('Run integrity checks on the finished tree')
    ] = False

    def build(self, pixel_map: PixelMap, **kwargs: Any) -> ComponentTree:
        """Build the component tree of *pixel_map*.

        Parameters
        ----------
        pixel_map : PixelMap
            Source image.
        **kwargs
            Runtime overrides of tunable parameters, and an optional
            ``progress_callback`` receiving the completed fraction.

        Returns
        -------
        ComponentTree
            Immutable tree of sealed components.

        Raises
        ------
        EmptyInputError
            If *pixel_map* has no valid pixels.
        InvariantError
            If construction or validation detects an inconsistency.
        """
        params = self._resolve_params(kwargs)
        if pixel_map.n_valid == 0:
            raise EmptyInputError("pixel map has no valid pixels")

        logger.debug(
            "Building %s component tree for %r (%d valid pixels)",
            self.method.value, pixel_map, pixel_map.n_valid,
        )
        assembler = TreeAssembler(pixel_map)
        self._build(pixel_map, assembler, kwargs)
        tree = ComponentTree(pixel_map, assembler.components, method=self.method)
        if params['validate']:
            tree.validate()
        logger.debug(
            "Built %s component tree: %d components, %d roots",
            self.method.value, len(tree), len(tree.roots()),
        )
        return tree

    @abstractmethod
    def _build(
        self,
        pixel_map: PixelMap,
        assembler: TreeAssembler,
        kwargs: Dict[str, Any],
    ) -> None:
        """Create and seal every component of *pixel_map*."""
        ...
