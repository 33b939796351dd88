# -*- coding: utf-8 -*-
"""
Threshold Stack - Binary or labelled threshold images from a component tree.

``ThresholdStack`` builds the component tree of a 2D integer image and
reconstructs, for every requested level, the thresholded image (``mask``
output) or its connected regions labelled by component (``labels``
output). The result is a ``(levels, rows, cols)`` array.

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
"""

# Standard library
from typing import Annotated, Any, Iterable, Optional

# Third-party
import numpy as np

# COMPTREE internal
from comptree.components.tree import ComponentTree
from comptree.exceptions import ValidationError
from comptree.image_processing.base import ImageTransform
from comptree.image_processing.params import Desc, Options
from comptree.image_processing.versioning import processor_tags, processor_version
from comptree.vocabulary import ProcessorCategory


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.STACKS,
    description='Threshold image stack reconstructed from the component tree',
)
class ThresholdStack(ImageTransform):
    """Stack of threshold images of a gray-level image.

    Parameters
    ----------
    connectivity : int
        Pixel adjacency, 4 or 8. Default 4.
    method : str
        Component tree construction method. Default ``'linear_time'``.
    polarity : str
        ``'dark'`` thresholds at ``value <= level``, ``'bright'`` at
        ``value >= level``. Default ``'dark'``.
    output : str
        ``'mask'`` for boolean images, ``'labels'`` for int32 images
        holding ``1 + component id`` per foreground pixel. Default
        ``'mask'``.

    Examples
    --------
    >>> stack = ThresholdStack(connectivity=8).apply(image, levels=[50, 100])
    >>> stack.shape
    (2, rows, cols)
    """

    connectivity: Annotated[int, Options(4, 8), Desc('Pixel adjacency')] = 4
    method: Annotated[
        str,
        Options('linear_time', 'flood', 'local_flooding'),
        Desc('Component tree construction method'),
    ] = 'linear_time'
    polarity: Annotated[
        str, Options('dark', 'bright'), Desc('Threshold direction'),
    ] = 'dark'
    output: Annotated[
        str, Options('mask', 'labels'), Desc('Boolean masks or region labels'),
    ] = 'mask'

    def apply(
        self,
        source: np.ndarray,
        levels: Optional[Iterable[int]] = None,
        mask: Optional[np.ndarray] = None,
        **kwargs: Any,
    ) -> np.ndarray:
        """Threshold *source* at every level.

        Parameters
        ----------
        source : np.ndarray
            Non-negative integer image, shape ``(rows, cols)``.
        levels : iterable of int, optional
            Threshold levels. Default ``0 .. max(255, source.max())``.
        mask : np.ndarray of bool, optional
            Validity mask; masked pixels are never foreground.

        Returns
        -------
        np.ndarray
            ``(n_levels, rows, cols)`` array, bool or int32.

        Raises
        ------
        ValidationError
            If *source* is not 2D or not a valid intensity image.
        """
        params = self._resolve_params(kwargs)
        source = np.asarray(source)
        if source.ndim != 2:
            raise ValidationError(
                f"Expected 2D image, got shape {source.shape}"
            )

        tree = ComponentTree.from_image(
            source,
            connectivity=params['connectivity'],
            method=params['method'],
            polarity=params['polarity'],
            mask=mask,
        )
        self._report_progress(kwargs, 0.5)

        if params['output'] == 'mask':
            result = tree.threshold_stack(levels)
        else:
            if levels is None:
                levels = range(max(255, tree.pixel_map.max_value) + 1)
            result = np.zeros((0,) + source.shape, dtype=np.int32)
            labels = [tree.label_at_level(lvl) for lvl in levels]
            if labels:
                result = np.stack(labels).astype(np.int32)
        self._report_progress(kwargs, 1.0)
        return result
