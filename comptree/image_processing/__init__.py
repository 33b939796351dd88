# -*- coding: utf-8 -*-
"""
Image Processing Module - Processor infrastructure and image transforms.

All processor types inherit from ``ImageProcessor``, which provides
version checking, tunable parameter validation, and progress reporting.
Component tree builders (:mod:`comptree.components.builders`) are
processors as well.

Sub-modules
-----------
base.py
    ``ImageProcessor`` and ``ImageTransform`` ABCs.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers for tunable
    parameters via ``Annotated`` type hints.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
threshold_stack.py
    ``ThresholdStack`` -- threshold images reconstructed from the
    component tree.

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

from comptree.image_processing.base import ImageProcessor, ImageTransform
from comptree.image_processing.params import Range, Options, Desc, ParamSpec
from comptree.image_processing.versioning import processor_version, processor_tags
from comptree.image_processing.threshold_stack import ThresholdStack

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
    'ThresholdStack',
]
