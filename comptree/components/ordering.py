# -*- coding: utf-8 -*-
"""
Intensity Ordering - Counting sort of pixels by processing key.

Groups the valid pixels of a ``PixelMap`` into one bucket per processing
key. Within a bucket pixels appear in ascending pixel id, which fixes the
order in which same-level merges happen and makes tree construction
reproducible. Runs in O(N + K) for N pixels and K distinct keys.

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
from dataclasses import dataclass
from typing import Iterator, Tuple

# Third-party
import numpy as np

# COMPTREE internal
from comptree.components.pixel_map import PixelMap


@dataclass(frozen=True)
class IntensityBuckets:
    """Pixel ids grouped by processing key.

    Attributes
    ----------
    order : np.ndarray
        Valid pixel ids sorted by ascending key, ties by ascending id.
    offsets : np.ndarray
        ``K + 1`` bucket boundaries: the ids with key ``k`` are
        ``order[offsets[k]:offsets[k + 1]]``.
    """

    order: np.ndarray
    offsets: np.ndarray

    @property
    def n_keys(self) -> int:
        return len(self.offsets) - 1

    def bucket(self, key: int) -> np.ndarray:
        """Pixel ids with processing key *key* (possibly empty)."""
        if not (0 <= key < self.n_keys):
            return self.order[:0]
        return self.order[self.offsets[key]:self.offsets[key + 1]]

    def __iter__(self) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield ``(key, ids)`` for every non-empty bucket, ascending."""
        for key in np.flatnonzero(np.diff(self.offsets)):
            key = int(key)
            yield key, self.order[self.offsets[key]:self.offsets[key + 1]]

    def __len__(self) -> int:
        return len(self.order)


def bucket_by_intensity(pixel_map: PixelMap) -> IntensityBuckets:
    """Counting-sort the valid pixels of *pixel_map* by processing key.

    Parameters
    ----------
    pixel_map : PixelMap
        Source pixels.

    Returns
    -------
    IntensityBuckets
        Sorted ids and bucket boundaries.
    """
    ids = pixel_map.pixel_ids()
    keys = pixel_map.keys[ids]
    n_keys = int(keys.max()) + 1 if len(keys) else 0

    counts = np.bincount(keys, minlength=n_keys)
    offsets = np.zeros(n_keys + 1, dtype=np.int64)
    np.cumsum(counts, out=offsets[1:])

    # ids are ascending, so a stable sort keeps every bucket sorted by id
    # (numpy uses radix sort for small integer keys)
    order = ids[np.argsort(keys, kind='stable')].astype(np.int64)

    order.setflags(write=False)
    offsets.setflags(write=False)
    return IntensityBuckets(order=order, offsets=offsets)


def sort_by_intensity(pixel_map: PixelMap) -> np.ndarray:
    """Valid pixel ids of *pixel_map* in ascending processing-key order.

    Ties are broken by ascending pixel id.
    """
    return bucket_by_intensity(pixel_map).order
