# -*- coding: utf-8 -*-
"""
Flood Component Tree - Naive construction from the threshold stack.

Thresholds the image at every processing key, labels the connected
regions of the binary image with ``scipy.ndimage.label``, and creates one
component for each region that contains pixels of the current key. The
components active inside such a region (created at earlier keys) become
its children. Regions without new pixels keep their current component.

Runs in O(K * N) for K keys and N pixels. Slow on deep images, but it
follows the definition of the tree directly and serves as a reference
for the faster builders.

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
from typing import Any, Dict

# Third-party
import numpy as np
from scipy import ndimage

# COMPTREE internal
from comptree.components.builders._base import ComponentTreeBuilder, TreeAssembler
from comptree.components.ordering import bucket_by_intensity
from comptree.components.pixel_map import PixelMap
from comptree.image_processing.versioning import processor_tags, processor_version
from comptree.vocabulary import ComponentTreeMethod, ProcessorCategory


@processor_version('1.0.0')
@processor_tags(
    category=ProcessorCategory.THRESHOLD,
    description='Component tree by labelling every threshold image',
)
class FloodTreeBuilder(ComponentTreeBuilder):
    """Level-by-level flood construction.

    Regions of one threshold image are processed in ascending label
    order (``scipy.ndimage.label`` numbers regions in raster order), so
    the result is deterministic.
    """

    method = ComponentTreeMethod.FLOOD

    def _build(
        self,
        pixel_map: PixelMap,
        assembler: TreeAssembler,
        kwargs: Dict[str, Any],
    ) -> None:
        buckets = bucket_by_intensity(pixel_map)
        keys = pixel_map.to_image(pixel_map.keys)
        valid = pixel_map.to_image(pixel_map.valid)
        structure = pixel_map.structure
        n_keys = max(buckets.n_keys, 1)

        # Id of the component currently holding each pixel, -1 if inactive
        active = np.full(pixel_map.size, -1, dtype=np.int64)
        components = assembler.components

        for key, new_ids in buckets:
            labels, _ = ndimage.label(valid & (keys <= key), structure=structure)
            labels = labels.ravel()

            is_new = np.zeros(pixel_map.size, dtype=bool)
            is_new[new_ids] = True
            grown = np.unique(labels[new_ids])

            # Pixels of all regions that receive new pixels, grouped by label
            members = np.flatnonzero(np.isin(labels, grown))
            members = members[np.argsort(labels[members], kind='stable')]
            _, starts = np.unique(labels[members], return_index=True)

            sealed = []
            for region in np.split(members, starts[1:]):
                comp = assembler.new_component()
                for p in region[is_new[region]].tolist():
                    comp.add_pixel(p)
                old = active[region[~is_new[region]]]
                for child_id in np.unique(old).tolist():
                    comp.merge(components[child_id])
                sealed.append((comp, region))

            for comp, region in sealed:
                assembler.seal(comp, key)
                active[region] = comp.id
            self._report_progress(kwargs, (key + 1) / n_keys)
