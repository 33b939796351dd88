# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability decorators for processors.

Provides the ``@processor_version`` class decorator that stamps a semantic
version on component tree builders and image transforms, and
``@processor_tags`` for category and description metadata used when
listing the available processors.

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

# Standard library
import importlib.metadata
from typing import Optional, Type, TypeVar

# COMPTREE vocabulary
from comptree.vocabulary import ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps ``__processor_version__`` on a processor.

    When *version* is omitted the installed ``comptree`` distribution
    version is used, or ``'unknown'`` if the package is not installed.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Returns
    -------
    Callable
        Class decorator.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyBuilder(ComponentTreeBuilder):
    ...     def _build(self, pixel_map, assembler):
    ...         ...
    >>> MyBuilder.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('comptree')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for processor capability metadata.

    Stamps ``__processor_tags__`` with the category and description.

    Parameters
    ----------
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short human-readable description.

    Raises
    ------
    TypeError
        If *category* is not a ``ProcessorCategory`` member.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator
