"""Tests for extrusion.py."""
import numpy as np
import pytest
from shapely.geometry import Polygon

from window_geometry.errors import InvalidDimension, InvalidLength
from window_geometry.extrusion import extrude
from window_geometry.profiles import outer_profile


class TestExtrude:
    def test_spans_zero_to_length_along_z(self):
        mesh = extrude(outer_profile(60, 70), 500)
        np.testing.assert_allclose(mesh.bounds, [[0, 0, 0], [60, 70, 500]], atol=1e-9)

    def test_volume_is_area_times_length(self):
        poly = outer_profile(60, 70)
        mesh = extrude(poly, 250)
        assert mesh.is_watertight
        assert mesh.volume == pytest.approx(poly.area * 250)

    @pytest.mark.parametrize("length", [0, -10, float("inf")])
    def test_bad_length_raises(self, length):
        with pytest.raises(InvalidLength):
            extrude(outer_profile(60, 70), length)

    def test_empty_polygon_raises(self):
        with pytest.raises(InvalidDimension):
            extrude(Polygon(), 100)

    def test_deterministic_vertices(self):
        a = extrude(outer_profile(60, 70), 300)
        b = extrude(outer_profile(60, 70), 300)
        assert np.array_equal(a.vertices, b.vertices)
        assert np.array_equal(a.faces, b.faces)
