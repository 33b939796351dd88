# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the COMPTREE framework.

Defines the single source of truth for controlled vocabularies used across
the package: pixel connectivity, component polarity, tree construction
methods, and processor categories. Builders, the pixel map, and processor
tags all import from this module so that values are guaranteed consistent
and typo-free.

Author
------
Steven Siebert

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

from enum import Enum


class Connectivity(Enum):
    """Pixel adjacency used when growing connected components.

    The value is the number of neighbors of an interior pixel.
    """

    FOUR = 4
    EIGHT = 8


class Polarity(Enum):
    """Direction in which components grow with the threshold.

    ``DARK`` components are connected sets of pixels with intensity
    ``<= level`` (min-tree, levels increase toward the root).
    ``BRIGHT`` components are connected sets with intensity ``>= level``
    (max-tree, levels decrease toward the root).
    """

    DARK = "dark"
    BRIGHT = "bright"


class ComponentTreeMethod(Enum):
    """Component tree construction algorithms.

    All methods produce the same tree; they differ in run time and in
    how they traverse the image.
    """

    LINEAR_TIME = "linear_time"
    FLOOD = "flood"
    LOCAL_FLOODING = "local_flooding"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    SEGMENTATION = "segmentation"
    THRESHOLD = "threshold"
    STACKS = "stacks"
    ANALYZE = "analyze"
