"""
Tests for hexgrid.metrics: cell boundaries, areas and great circle
distances.
"""

import math

import pytest

from hexgrid.codec import decode, pentagons, res0_cells
from hexgrid.constants import EARTH_RADIUS_KM
from hexgrid.coordinates import GeoCoordinate
from hexgrid.errors import InvalidIndexError
from hexgrid.hierarchy import children, parent
from hexgrid.index import NULL_INDEX, is_pentagon
from hexgrid.metrics import (
    area_km2,
    area_m2,
    area_rads2,
    boundary,
    great_circle_distance_km,
    great_circle_distance_m,
    great_circle_distance_rads,
)

SF_RES9 = 0x8928308280fffff


def _signed_area(h):
    """Shoelace area of a boundary in a local east/north plane around the centre."""
    centre = decode(h)
    cos_lat = math.cos(centre.lat_rads)
    points = []
    for vert in boundary(h):
        dlng = (vert.lng - centre.lng + 540.0) % 360.0 - 180.0
        points.append((dlng * cos_lat, vert.lat - centre.lat))
    total = 0.0
    for (x0, y0), (x1, y1) in zip(points, points[1:] + points[:1]):
        total += x0 * y1 - x1 * y0
    return total / 2


class TestBoundary:
    """Vertex counts and orientation."""

    def test_class_ii_hexagon(self):
        assert len(boundary(parent(SF_RES9, 8))) == 6

    def test_class_iii_hexagon(self):
        assert 6 <= len(boundary(SF_RES9)) <= 10

    def test_class_ii_pentagons(self):
        for res in (0, 2, 4):
            for pentagon in pentagons(res):
                assert len(boundary(pentagon)) == 5

    def test_class_iii_pentagons(self):
        """Every Class III pentagon edge crosses an icosahedron edge."""
        for res in (1, 3):
            for pentagon in pentagons(res):
                assert len(boundary(pentagon)) == 10

    def test_res0_counts(self):
        for h in res0_cells():
            assert len(boundary(h)) == (5 if is_pentagon(h) else 6)

    def test_res1_counts(self):
        for base in res0_cells():
            for h in children(base, 1):
                n = len(boundary(h))
                if is_pentagon(h):
                    assert n == 10
                else:
                    assert 6 <= n <= 10

    def test_counter_clockwise(self):
        for h in (SF_RES9, parent(SF_RES9, 8), parent(SF_RES9, 5)):
            assert _signed_area(h) > 0

    def test_vertices_surround_centre(self):
        centre = decode(SF_RES9)
        for vert in boundary(SF_RES9):
            assert 0.1 < great_circle_distance_km(centre, vert) < 0.3

    def test_invalid(self):
        with pytest.raises(InvalidIndexError):
            boundary(NULL_INDEX)

    def test_too_many_vertices_raises(self, monkeypatch):
        """An overlong vertex walk is an error, not a truncated polygon."""
        points = [(0.1, 0.01 * n) for n in range(11)]
        monkeypatch.setattr("hexgrid.metrics.face_ijk_to_boundary", lambda face, c, res: points)
        with pytest.raises(RuntimeError):
            boundary(SF_RES9)


class TestArea:
    """Spherical areas."""

    def test_san_francisco_res9(self):
        # res 9 cells average about 0.105 km2
        assert 0.08 < area_km2(SF_RES9) < 0.13

    def test_units_consistent(self):
        km2 = area_km2(SF_RES9)
        assert area_m2(SF_RES9) == pytest.approx(km2 * 1e6)
        assert area_rads2(SF_RES9) * EARTH_RADIUS_KM ** 2 == pytest.approx(km2)

    def test_res0_covers_sphere(self):
        total = sum(area_rads2(h) for h in res0_cells())
        assert total == pytest.approx(4 * math.pi, rel=1e-6)

    def test_children_sum_to_parent(self):
        h = parent(SF_RES9, 6)
        total = sum(area_km2(kid) for kid in children(h, 7))
        assert total == pytest.approx(area_km2(h), rel=0.05)

    def test_parent_larger_than_children(self):
        h = parent(SF_RES9, 6)
        assert area_km2(h) > max(area_km2(kid) for kid in children(h, 7))

    def test_pentagon_smaller_than_neighbour_hexagons(self):
        pentagon = pentagons(5)[3]
        hexagon = children(parent(pentagon, 4), 5)[2]
        assert area_km2(pentagon) < area_km2(hexagon)

    def test_invalid(self):
        with pytest.raises(InvalidIndexError):
            area_km2(NULL_INDEX)


class TestGreatCircleDistance:
    def test_quarter_equator(self):
        a = GeoCoordinate(0.0, 0.0)
        b = GeoCoordinate(0.0, 90.0)
        assert great_circle_distance_rads(a, b) == pytest.approx(math.pi / 2)
        assert great_circle_distance_km(a, b) == pytest.approx(math.pi / 2 * EARTH_RADIUS_KM)
        assert great_circle_distance_m(a, b) == pytest.approx(math.pi / 2 * EARTH_RADIUS_KM * 1000)

    def test_pole_to_pole(self):
        a = GeoCoordinate(90.0, 0.0)
        b = GeoCoordinate(-90.0, 0.0)
        assert great_circle_distance_rads(a, b) == pytest.approx(math.pi)

    def test_zero(self):
        a = GeoCoordinate(37.0, -122.0)
        assert great_circle_distance_km(a, a) == 0.0

    def test_symmetric(self):
        a = GeoCoordinate(52.37, 4.89)
        b = GeoCoordinate(40.71, -74.0)
        assert great_circle_distance_km(a, b) == pytest.approx(great_circle_distance_km(b, a))
        # Amsterdam to New York is about 5860 km
        assert 5800 < great_circle_distance_km(a, b) < 5900
