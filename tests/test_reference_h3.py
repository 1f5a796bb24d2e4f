"""
Tests comparing hexgrid with the h3 library.

Indexes, centres, boundaries, disks and children must agree with h3 in both
hemispheres and around all twelve pentagons, so hex strings produced here
can be exchanged with other H3 engines.
"""

import h3
import numpy as np
import pytest

from hexgrid.codec import decode, encode, pentagons, res0_cells
from hexgrid.coordinates import GeoCoordinate
from hexgrid.hierarchy import children
from hexgrid.index import from_string, to_string
from hexgrid.metrics import area_km2, boundary, great_circle_distance_km
from hexgrid.traversal import grid_disk

# 1 cm
TOLERANCE_KM = 1e-5

NAMED_POINTS = [
    (37.775938728915946, -122.41795063018799),  # San Francisco
    (52.0, 5.0),  # Netherlands
    (-33.8688, 151.2093),  # Sydney
    (-33.9249, 18.4241),  # Cape Town
    (-33.4489, -70.6693),  # Santiago
    (-65.814, 125.076),
    (-79.8208, -149.4461),
    (-89.9, 45.0),
    (89.9, -45.0),
    (0.0, 180.0),
    (-26.284, -117.046),
]


def _random_points(n, seed=42):
    """Points spread uniformly over the sphere."""
    rng = np.random.default_rng(seed)
    lats = np.degrees(np.arcsin(rng.uniform(-1.0, 1.0, n)))
    lngs = rng.uniform(-180.0, 180.0, n)
    return [(float(lat), float(lng)) for lat, lng in zip(lats, lngs)]


RANDOM_POINTS = _random_points(60)


def _assert_same_point(lat, lng, coord):
    assert great_circle_distance_km(GeoCoordinate(lat, lng), coord) < TOLERANCE_KM


def _assert_same_cell_geometry(cell):
    h = from_string(cell)
    lat, lng = h3.cell_to_latlng(cell)
    _assert_same_point(lat, lng, decode(h))

    expected = h3.cell_to_boundary(cell)
    actual = boundary(h)
    assert len(actual) == len(expected)
    for (lat, lng), vert in zip(expected, actual):
        _assert_same_point(lat, lng, vert)


class TestAgainstH3Encode:
    """Point indexing matches h3.latlng_to_cell."""

    @pytest.mark.parametrize("lat,lng", NAMED_POINTS)
    def test_named_points(self, lat, lng):
        for res in range(16):
            assert to_string(encode(GeoCoordinate(lat, lng), res)) == h3.latlng_to_cell(lat, lng, res)

    @pytest.mark.parametrize("lat,lng", RANDOM_POINTS)
    def test_random_points(self, lat, lng):
        for res in (0, 1, 5, 9, 15):
            assert to_string(encode(GeoCoordinate(lat, lng), res)) == h3.latlng_to_cell(lat, lng, res)

    def test_southern_base_cell(self):
        assert to_string(encode(GeoCoordinate(-65.814, 125.076), 0)) == "80edfffffffffff"


class TestAgainstH3Geometry:
    """Centres, boundaries and areas match h3."""

    def test_res0_cells(self):
        assert [to_string(h) for h in res0_cells()] == sorted(h3.get_res0_cells())
        for cell in h3.get_res0_cells():
            _assert_same_cell_geometry(cell)

    @pytest.mark.parametrize("lat,lng", NAMED_POINTS + RANDOM_POINTS[:20])
    def test_cells_at_points(self, lat, lng):
        for res in (1, 4, 7, 10):
            _assert_same_cell_geometry(h3.latlng_to_cell(lat, lng, res))

    @pytest.mark.parametrize("lat,lng", NAMED_POINTS)
    def test_area(self, lat, lng):
        for res in (0, 5, 9):
            cell = h3.latlng_to_cell(lat, lng, res)
            assert area_km2(from_string(cell)) == pytest.approx(h3.cell_area(cell, unit="km^2"), rel=1e-6)


class TestAgainstH3Pentagons:
    """All twelve pentagons at the first few resolutions."""

    @pytest.mark.parametrize("res", [0, 1, 2, 3])
    def test_pentagon_indexes(self, res):
        assert sorted(to_string(h) for h in pentagons(res)) == sorted(h3.get_pentagons(res))

    @pytest.mark.parametrize("res", [0, 1, 2, 3])
    def test_pentagon_geometry(self, res):
        for cell in h3.get_pentagons(res):
            _assert_same_cell_geometry(cell)

    @pytest.mark.parametrize("res", [0, 1, 2, 3])
    def test_pentagon_disks(self, res):
        for cell in h3.get_pentagons(res):
            actual = {to_string(h) for h in grid_disk(from_string(cell), 2)}
            assert actual == set(h3.grid_disk(cell, 2))

    @pytest.mark.parametrize("res", [0, 1, 2])
    def test_pentagon_children(self, res):
        for cell in h3.get_pentagons(res):
            actual = [to_string(h) for h in children(from_string(cell), res + 2)]
            assert sorted(actual) == sorted(h3.cell_to_children(cell, res + 2))


class TestAgainstH3Navigation:
    """Disks and children of hexagons in both hemispheres."""

    @pytest.mark.parametrize("lat,lng", NAMED_POINTS + RANDOM_POINTS[:20])
    def test_grid_disk(self, lat, lng):
        for res in (1, 5):
            cell = h3.latlng_to_cell(lat, lng, res)
            actual = {to_string(h) for h in grid_disk(from_string(cell), 2)}
            assert actual == set(h3.grid_disk(cell, 2))

    @pytest.mark.parametrize("lat,lng", NAMED_POINTS)
    def test_children(self, lat, lng):
        cell = h3.latlng_to_cell(lat, lng, 6)
        actual = [to_string(h) for h in children(from_string(cell), 8)]
        assert sorted(actual) == sorted(h3.cell_to_children(cell, 8))

    def test_southern_string_parses(self):
        assert to_string(from_string("81d47ffffffffff")) == "81d47ffffffffff"
