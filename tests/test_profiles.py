"""Tests for profiles.py: outer, sash and mullion cross-sections."""
import math

import pytest
from shapely.geometry import Polygon

from window_geometry.contracts import ProfileKind
from window_geometry.errors import InvalidDimension
from window_geometry.profiles import (
    SASH_PROPORTIONS, build_profile, member_width, mullion_profile,
    outer_profile, profile_extent, rectangle_profile, sash_profile,
)


class TestOuterProfile:
    def test_l_shape_vertices(self):
        poly = outer_profile(60, 70)
        coords = set(poly.exterior.coords)
        assert (0.0, 0.0) in coords
        assert (60.0, 0.0) in coords
        assert any(u == 60.0 and math.isclose(v, 49.0) for u, v in coords)
        assert any(math.isclose(u, 42.0) and math.isclose(v, 70.0) for u, v in coords)

    def test_area_is_rectangle_minus_rebate(self):
        poly = outer_profile(60, 70)
        expected = 60 * 70 - (0.3 * 60) * (0.3 * 70)
        assert poly.area == pytest.approx(expected)

    def test_rebate_on_interior_face_at_opening_edge(self):
        poly = outer_profile(60, 70)
        # The corner at the opening edge on the interior face is cut away.
        from shapely.geometry import Point
        assert not poly.contains(Point(59.0, 69.0))
        assert poly.contains(Point(1.0, 69.0))
        assert poly.contains(Point(59.0, 1.0))

    def test_counter_clockwise(self):
        assert outer_profile(60, 70).exterior.is_ccw

    @pytest.mark.parametrize("width,depth", [(0, 70), (60, 0), (-5, 70), (60, -1)])
    def test_non_positive_dimensions_raise(self, width, depth):
        with pytest.raises(InvalidDimension):
            outer_profile(width, depth)

    def test_non_finite_dimension_raises(self):
        with pytest.raises(InvalidDimension):
            outer_profile(float("nan"), 70)


class TestSashProfile:
    def test_width_is_ratio_of_outer_width(self):
        poly = sash_profile(60, 42)
        width, depth = profile_extent(poly)
        assert width == pytest.approx(60 * SASH_PROPORTIONS.width_ratio)
        assert depth == pytest.approx(42)

    def test_valid_and_positive_area(self):
        poly = sash_profile(60, 42)
        assert poly.is_valid
        assert poly.area > 0
        assert poly.exterior.is_ccw

    def test_glazing_seat_is_symmetric(self):
        poly = sash_profile(80, 50)
        sash_w = 80 * SASH_PROPORTIONS.width_ratio
        mirrored = Polygon([(sash_w - u, v) for u, v in poly.exterior.coords])
        assert poly.symmetric_difference(mirrored).area == pytest.approx(0.0, abs=1e-9)

    def test_has_twelve_vertices(self):
        assert len(sash_profile(60, 42).exterior.coords) - 1 == 12

    def test_invalid_dimension(self):
        with pytest.raises(InvalidDimension):
            sash_profile(60, 0)


class TestMullionProfile:
    def test_centered_t_shape(self):
        poly = mullion_profile(60, 70)
        min_u, min_v, max_u, max_v = poly.bounds
        assert min_u == pytest.approx(-30)
        assert max_u == pytest.approx(30)
        assert (min_v, max_v) == (pytest.approx(0), pytest.approx(70))

    def test_stem_narrower_than_head(self):
        poly = mullion_profile(60, 70)
        stem = poly.intersection(Polygon([(-100, 0), (100, 0), (100, 1), (-100, 1)]))
        head = poly.intersection(Polygon([(-100, 69), (100, 69), (100, 70), (-100, 70)]))
        assert stem.bounds[2] - stem.bounds[0] == pytest.approx(24)
        assert head.bounds[2] - head.bounds[0] == pytest.approx(60)

    def test_area(self):
        poly = mullion_profile(60, 70)
        assert poly.area == pytest.approx(24 * 21 + 60 * 49)


class TestHelpers:
    def test_build_profile_dispatch(self):
        assert build_profile(ProfileKind.OUTER, 60, 70).equals(outer_profile(60, 70))
        assert build_profile(ProfileKind.MULLION, 60, 70).equals(mullion_profile(60, 70))

    def test_member_width(self):
        assert member_width(ProfileKind.OUTER, 60) == 60
        assert member_width(ProfileKind.MULLION, 60) == 60
        assert member_width(ProfileKind.SASH, 60) == pytest.approx(42)

    def test_rectangle_centered(self):
        assert rectangle_profile(10, 4).bounds == (-5.0, -2.0, 5.0, 2.0)

    def test_deterministic(self):
        a = list(sash_profile(60, 42).exterior.coords)
        b = list(sash_profile(60, 42).exterior.coords)
        assert a == b
