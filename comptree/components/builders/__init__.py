# -*- coding: utf-8 -*-
"""
Component Tree Builders - Interchangeable tree construction strategies.

Every builder turns a ``PixelMap`` into the same ``ComponentTree``; they
differ only in running time and in the order in which component ids are
assigned.

Classes
-------
- ComponentTreeBuilder: Abstract base (template method)
- UnionFindTreeBuilder: Union-find over bucket-sorted pixels (linear_time)
- FloodTreeBuilder: Labelling of every threshold image (flood)
- LocalFloodingTreeBuilder: Nister-Stewenius local flooding (local_flooding)

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
from typing import Dict, Optional, Type, Union

# Third-party
import numpy as np

# COMPTREE internal
from comptree.components.builders._base import ComponentTreeBuilder, TreeAssembler
from comptree.components.builders.flood import FloodTreeBuilder
from comptree.components.builders.linear_time import UnionFindTreeBuilder
from comptree.components.builders.local_flooding import LocalFloodingTreeBuilder
from comptree.components.pixel_map import PixelMap
from comptree.components.tree import ComponentTree
from comptree.exceptions import ValidationError
from comptree.vocabulary import ComponentTreeMethod, Connectivity, Polarity

BUILDERS: Dict[ComponentTreeMethod, Type[ComponentTreeBuilder]] = {
    ComponentTreeMethod.LINEAR_TIME: UnionFindTreeBuilder,
    ComponentTreeMethod.FLOOD: FloodTreeBuilder,
    ComponentTreeMethod.LOCAL_FLOODING: LocalFloodingTreeBuilder,
}


def get_builder(
    method: Union[str, ComponentTreeMethod] = ComponentTreeMethod.LINEAR_TIME,
    validate: bool = False,
) -> ComponentTreeBuilder:
    """Instantiate the builder registered for *method*.

    Parameters
    ----------
    method : str or ComponentTreeMethod
        ``'linear_time'``, ``'flood'`` or ``'local_flooding'``.
    validate : bool
        Passed to the builder; validates every finished tree.

    Raises
    ------
    ValidationError
        If *method* is not a known construction method.
    """
    if not isinstance(method, ComponentTreeMethod):
        try:
            method = ComponentTreeMethod(method)
        except ValueError:
            known = ', '.join(repr(m.value) for m in ComponentTreeMethod)
            raise ValidationError(
                f"unknown component tree method {method!r}; expected one of {known}"
            ) from None
    return BUILDERS[method](validate=validate)


def build_component_tree(
    image: Union[np.ndarray, PixelMap],
    connectivity: Union[int, Connectivity] = 4,
    method: Union[str, ComponentTreeMethod] = ComponentTreeMethod.LINEAR_TIME,
    polarity: Union[str, Polarity] = 'dark',
    mask: Optional[np.ndarray] = None,
    validate: bool = False,
) -> ComponentTree:
    """Build the component tree of an image or an existing ``PixelMap``.

    *connectivity*, *polarity* and *mask* are ignored when *image* is
    already a ``PixelMap``.
    """
    if isinstance(image, PixelMap):
        return ComponentTree.from_pixel_map(image, method=method, validate=validate)
    return ComponentTree.from_image(
        image,
        connectivity=connectivity,
        method=method,
        polarity=polarity,
        mask=mask,
        validate=validate,
    )


__all__ = [
    'BUILDERS',
    'ComponentTreeBuilder',
    'TreeAssembler',
    'UnionFindTreeBuilder',
    'FloodTreeBuilder',
    'LocalFloodingTreeBuilder',
    'get_builder',
    'build_component_tree',
]
