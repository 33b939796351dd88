# -*- coding: utf-8 -*-
"""
COMPTREE - Component trees of gray-level images.

Builds the tree of nested connected components of a 2D integer image,
the data structure underlying Maximally Stable Extremal Region (MSER)
detection, with three interchangeable construction methods and a query
API for threshold reconstruction, labelling, and validation.

Dependencies
------------
numpy
scipy

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from comptree.exceptions import (
    ComptreeError,
    ValidationError,
    EmptyInputError,
    InvariantError,
)
from comptree.vocabulary import (
    Connectivity,
    Polarity,
    ComponentTreeMethod,
    ProcessorCategory,
)
from comptree.components import (
    PixelMap,
    Pixel,
    Component,
    ComponentTree,
    build_component_tree,
    get_builder,
)
from comptree.image_processing import ThresholdStack

__all__ = [
    'ComptreeError',
    'ValidationError',
    'EmptyInputError',
    'InvariantError',
    'Connectivity',
    'Polarity',
    'ComponentTreeMethod',
    'ProcessorCategory',
    'PixelMap',
    'Pixel',
    'Component',
    'ComponentTree',
    'build_component_tree',
    'get_builder',
    'ThresholdStack',
]
