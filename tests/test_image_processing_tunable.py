# -*- coding: utf-8 -*-
"""
Annotated Tunable Parameter Tests.

Tests for the typing.Annotated-based tunable parameter system: constraint
markers (Range, Options, Desc), ParamSpec introspection, annotation
collection, the generated keyword-only __init__, __post_init__,
_resolve_params runtime resolution, and inheritance across builder
classes.

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

import inspect
from typing import Annotated

import numpy as np
import pytest

from comptree.components.builders import ComponentTreeBuilder, UnionFindTreeBuilder
from comptree.exceptions import ValidationError
from comptree.image_processing.base import ImageProcessor, ImageTransform
from comptree.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
)
from comptree.image_processing.versioning import processor_version


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------

class TestMarkers:
    """Test Range, Options and Desc."""

    def test_range(self):
        r = Range(min=1, max=64)
        assert (r.min, r.max) == (1, 64)
        assert repr(r) == 'Range(min=1, max=64)'
        assert isinstance(r, ParamMeta)

    def test_range_open_ended(self):
        r = Range(min=0)
        assert r.max is None
        assert 'max' not in repr(r)

    def test_options(self):
        o = Options(4, 8)
        assert o.choices == (4, 8)
        assert isinstance(o, ParamMeta)

    def test_options_empty_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Options()

    def test_desc(self):
        assert Desc('Pixel adjacency').text == 'Pixel adjacency'


# ---------------------------------------------------------------------------
# ParamSpec validation
# ---------------------------------------------------------------------------

class TestParamSpec:
    """Test ParamSpec.validate and repr."""

    def test_required(self):
        spec = ParamSpec('delta', int, None, False, '', None, None, None)
        assert spec.required is True
        assert 'default=' not in repr(spec)

    def test_int_rejects_bool(self):
        spec = ParamSpec('delta', int, 5, True, '', 1, None, None)
        with pytest.raises(TypeError, match="delta"):
            spec.validate(True)

    def test_float_accepts_int(self):
        spec = ParamSpec('max_variation', float, 0.25, True, '', 0.0, 1.0, None)
        spec.validate(1)

    def test_bounds_inclusive(self):
        spec = ParamSpec('min_area', int, 30, True, '', 1, 100, None)
        spec.validate(1)
        spec.validate(100)
        with pytest.raises(ValidationError, match="below minimum"):
            spec.validate(0)
        with pytest.raises(ValidationError, match="above maximum"):
            spec.validate(101)

    def test_choices(self):
        spec = ParamSpec('connectivity', int, 4, True, '', None, None, (4, 8))
        spec.validate(8)
        with pytest.raises(ValidationError, match="not in allowed choices"):
            spec.validate(6)

    def test_object_skips_type_check(self):
        spec = ParamSpec('mask', object, None, True, '', None, None, None)
        spec.validate(np.ones((2, 2), dtype=bool))

    def test_repr_optional(self):
        spec = ParamSpec('min_area', int, 30, True, '', 1, None, None)
        r = repr(spec)
        assert 'required=False' in r
        assert 'default=30' in r
        assert 'min_value=1' in r


# ---------------------------------------------------------------------------
# collect_param_specs
# ---------------------------------------------------------------------------

class TestCollectParamSpecs:
    """Test annotation collection."""

    def test_plain_annotations_ignored(self):
        class C:
            delta: int = 5
            label: Annotated[str, 'not a marker'] = 'x'
        assert collect_param_specs(C) == ()

    def test_declaration_order(self):
        class C:
            delta: Annotated[int, Range(min=1), Desc('Level step')] = 5
            connectivity: Annotated[int, Options(4, 8)] = 4

        specs = collect_param_specs(C)
        assert [s.name for s in specs] == ['delta', 'connectivity']
        assert specs[0].description == 'Level step'
        assert specs[1].choices == (4, 8)

    def test_range_and_options_mutually_exclusive(self):
        class C:
            delta: Annotated[int, Range(min=1), Options(1, 2)] = 1
        with pytest.raises(TypeError, match="mutually exclusive"):
            collect_param_specs(C)

    def test_parent_first_and_override(self):
        class Parent:
            delta: Annotated[int, Range(max=10)] = 5
            min_area: Annotated[int, Range(min=1)] = 30

        class Child(Parent):
            delta: Annotated[int, Range(max=100)] = 50

        specs = collect_param_specs(Child)
        assert [s.name for s in specs] == ['delta', 'min_area']
        assert specs[0].max_value == 100
        assert specs[0].default == 50


# ---------------------------------------------------------------------------
# Generated __init__ and runtime resolution
# ---------------------------------------------------------------------------

@processor_version('1.0.0')
class _AreaFilter(ImageTransform):
    """Keeps foreground regions of a binary image within an area range."""

    min_area: Annotated[int, Range(min=1), Desc('Smallest region')] = 2
    connectivity: Annotated[int, Options(4, 8), Desc('Pixel adjacency')] = 4

    def apply(self, source, **kwargs):
        from scipy import ndimage
        params = self._resolve_params(kwargs)
        rank = 1 if params['connectivity'] == 4 else 2
        labels, _ = ndimage.label(
            source, structure=ndimage.generate_binary_structure(2, rank),
        )
        areas = np.bincount(labels.ravel())
        keep = areas >= params['min_area']
        keep[0] = False
        return keep[labels]


class TestGeneratedInit:
    """Test the generated keyword-only constructor."""

    def test_defaults(self):
        f = _AreaFilter()
        assert (f.min_area, f.connectivity) == (2, 4)

    def test_validation(self):
        with pytest.raises(ValidationError, match="below minimum"):
            _AreaFilter(min_area=0)
        with pytest.raises(TypeError, match="unexpected"):
            _AreaFilter(delta=3)

    def test_required_missing(self):
        @processor_version('1.0.0')
        class P(ImageTransform):
            delta: Annotated[int, Desc('required')]

            def apply(self, source, **kwargs):
                return source

        with pytest.raises(TypeError, match="missing required"):
            P()
        assert P(delta=3).delta == 3

    def test_signature(self):
        sig = inspect.signature(_AreaFilter.__init__)
        assert list(sig.parameters) == ['self', 'min_area', 'connectivity']
        assert sig.parameters['min_area'].kind is inspect.Parameter.KEYWORD_ONLY
        assert sig.parameters['connectivity'].default == 4

    def test_post_init(self):
        @processor_version('1.0.0')
        class P(ImageTransform):
            method: Annotated[str, Options('flood', 'FLOOD')] = 'FLOOD'

            def __post_init__(self):
                self.method = self.method.lower()

            def apply(self, source, **kwargs):
                return source

        assert P().method == 'flood'

    def test_custom_init_kept(self):
        @processor_version('1.0.0')
        class P(ImageTransform):
            delta: Annotated[int, Range(min=1)] = 5

            def __init__(self, delta=5, name='custom'):
                self.delta = delta
                self.name = name

            def apply(self, source, **kwargs):
                return source

        p = P(delta=2, name='x')
        assert p.name == 'x'
        assert P.__param_specs__[0].name == 'delta'


class TestResolveParams:
    """Test construction and runtime parameter resolution."""

    def test_apply_defaults_and_override(self):
        image = np.array([
            [1, 0, 1, 1],
            [0, 1, 0, 0],
            [0, 0, 0, 1],
        ], dtype=bool)
        f = _AreaFilter()
        kept4 = f.apply(image)
        assert kept4.sum() == 2
        kept8 = f.apply(image, connectivity=8)
        assert kept8.sum() == 4
        assert f.connectivity == 4

    def test_non_param_kwargs_ignored(self):
        f = _AreaFilter()
        params = f._resolve_params({'min_area': 3, 'progress_callback': print})
        assert params == {'min_area': 3, 'connectivity': 4}

    def test_runtime_validation(self):
        with pytest.raises(ValidationError, match="not in allowed choices"):
            _AreaFilter()._resolve_params({'connectivity': 6})


# ---------------------------------------------------------------------------
# Builder parameters
# ---------------------------------------------------------------------------

class TestBuilderParams:
    """Builders inherit the validate parameter from the base class."""

    def test_base_declares_validate(self):
        assert [s.name for s in ComponentTreeBuilder.__param_specs__] == ['validate']

    def test_concrete_builder_init(self):
        b = UnionFindTreeBuilder(validate=True)
        assert b.validate is True
        assert UnionFindTreeBuilder().validate is False

    def test_processor_base_empty(self):
        assert ImageProcessor.__param_specs__ == ()
