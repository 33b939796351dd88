# -*- coding: utf-8 -*-
"""
Intensity Ordering Tests.

Tests for the counting sort of pixels by processing key: ascending key
order, ascending-id tie break, bucket boundaries, masked pixels, and the
bright polarity inversion.

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

import numpy as np
import pytest

from comptree.components.ordering import bucket_by_intensity, sort_by_intensity
from comptree.components.pixel_map import PixelMap


class TestSortByIntensity:
    """Test the sorted pixel order."""

    def test_ascending_with_id_ties(self):
        pm = PixelMap(np.array([[3, 1, 3], [0, 1, 2]]))
        assert sort_by_intensity(pm).tolist() == [3, 1, 4, 5, 0, 2]

    def test_is_permutation_of_valid_ids(self):
        rng = np.random.default_rng(7)
        pm = PixelMap(rng.integers(0, 256, size=(9, 11)))
        order = sort_by_intensity(pm)
        assert sorted(order.tolist()) == list(range(pm.size))
        keys = pm.keys[order]
        assert np.all(np.diff(keys) >= 0)

    def test_flat_image_keeps_id_order(self):
        pm = PixelMap(np.full((3, 3), 42))
        assert sort_by_intensity(pm).tolist() == list(range(9))

    def test_bright_polarity_sorts_descending_values(self):
        pm = PixelMap(np.array([[0, 255, 7]]), polarity='bright')
        assert sort_by_intensity(pm).tolist() == [1, 2, 0]

    def test_masked_pixels_omitted(self):
        mask = np.array([[True, False, True]])
        pm = PixelMap(np.array([[5, 0, 1]]), mask=mask)
        assert sort_by_intensity(pm).tolist() == [2, 0]

    def test_result_read_only(self):
        pm = PixelMap(np.array([[1, 0]]))
        with pytest.raises(ValueError):
            sort_by_intensity(pm)[0] = 1


class TestIntensityBuckets:
    """Test bucket boundaries and iteration."""

    def test_bucket_contents(self):
        pm = PixelMap(np.array([[2, 0, 2], [0, 5, 2]]))
        buckets = bucket_by_intensity(pm)
        assert buckets.n_keys == 6
        assert buckets.bucket(0).tolist() == [1, 3]
        assert buckets.bucket(2).tolist() == [0, 2, 5]
        assert buckets.bucket(1).tolist() == []
        assert buckets.bucket(5).tolist() == [4]

    def test_bucket_out_of_range_is_empty(self):
        pm = PixelMap(np.array([[2, 0]]))
        buckets = bucket_by_intensity(pm)
        assert len(buckets.bucket(99)) == 0
        assert len(buckets.bucket(-1)) == 0

    def test_iter_skips_empty_buckets(self):
        pm = PixelMap(np.array([[2, 0, 2], [0, 5, 2]]))
        got = [(key, ids.tolist()) for key, ids in bucket_by_intensity(pm)]
        assert got == [(0, [1, 3]), (2, [0, 2, 5]), (5, [4])]

    def test_len_counts_valid_pixels(self):
        mask = np.array([[True, True, False]])
        pm = PixelMap(np.array([[1, 2, 3]]), mask=mask)
        assert len(bucket_by_intensity(pm)) == 2

    def test_offsets_cover_order(self):
        rng = np.random.default_rng(3)
        pm = PixelMap(rng.integers(0, 20, size=(6, 6)))
        buckets = bucket_by_intensity(pm)
        assert buckets.offsets[0] == 0
        assert buckets.offsets[-1] == pm.size
        for key, ids in buckets:
            assert np.all(pm.keys[ids] == key)
