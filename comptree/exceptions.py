# -*- coding: utf-8 -*-
"""
COMPTREE Exception Hierarchy - Domain-specific exceptions for tree construction.

Provides a small exception hierarchy that lets downstream consumers (e.g.,
MSER feature scoring or visualization layers) catch component-tree errors
distinctly from Python built-in exceptions. All COMPTREE exceptions
subclass both ``ComptreeError`` and the appropriate built-in exception for
backward compatibility.

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


class ComptreeError(Exception):
    """Base exception for all COMPTREE errors."""


class ValidationError(ComptreeError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for non-positive image dimensions, grid/size mismatches,
    unsupported connectivity or polarity values, negative or non-integer
    intensities, and other input validation failures.
    """


class EmptyInputError(ValidationError):
    """Tree construction was requested for an image with no pixels.

    Raised for zero-sized grids and for grids whose validity mask
    excludes every pixel. No partial tree is produced.
    """


class InvariantError(ComptreeError, RuntimeError):
    """Internal consistency failure of a component tree.

    Raised by defensive checks (sealing a component twice, adopting a
    child whose level does not precede its parent, a dangling union-find
    reference) and by ``ComponentTree.validate()``. Indicates a
    construction defect, never a recoverable runtime condition.
    """
