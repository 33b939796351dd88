# -*- coding: utf-8 -*-
"""
Components - Component tree data model and construction.

Builds the tree of nested connected components of a gray-level image
(the data structure behind MSER detection): every node is a connected
set of pixels at or below some threshold level, and each node's parent
is the smallest component at a later level that contains it.

Modules
-------
- pixel_map: Indexed image view with neighbor lookup and polarity
- ordering: Counting sort of pixels by processing key
- union_find: Disjoint-set forest with a component merge hook
- component: Tree node
- tree: Immutable component tree with query and reconstruction API
- builders: linear_time, flood and local_flooding construction

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

from comptree.components.pixel_map import PixelMap, Pixel, NEIGHBOR_OFFSETS
from comptree.components.ordering import (
    IntensityBuckets,
    bucket_by_intensity,
    sort_by_intensity,
)
from comptree.components.union_find import DisjointSet
from comptree.components.component import Component, sort_by_level, sort_by_size
from comptree.components.tree import ComponentTree
from comptree.components.builders import (
    ComponentTreeBuilder,
    UnionFindTreeBuilder,
    FloodTreeBuilder,
    LocalFloodingTreeBuilder,
    build_component_tree,
    get_builder,
)

__all__ = [
    'PixelMap',
    'Pixel',
    'NEIGHBOR_OFFSETS',
    'IntensityBuckets',
    'bucket_by_intensity',
    'sort_by_intensity',
    'DisjointSet',
    'Component',
    'sort_by_level',
    'sort_by_size',
    'ComponentTree',
    'ComponentTreeBuilder',
    'UnionFindTreeBuilder',
    'FloodTreeBuilder',
    'LocalFloodingTreeBuilder',
    'build_component_tree',
    'get_builder',
]
