"""
Tests for hexgrid.coordinates: GeoCoordinate validation, longitude
normalisation and unit conversion.
"""

import math

import pytest

from hexgrid.coordinates import AngleUnit, GeoCoordinate, degs_to_rads, rads_to_degs
from hexgrid.errors import DomainError, ErrorCode


class TestGeoCoordinateValidation:
    """Latitude range and finiteness are enforced on construction."""

    def test_valid_coordinate(self):
        coord = GeoCoordinate(37.775938728915946, -122.41795063018799)
        assert coord.lat == pytest.approx(37.775938728915946)
        assert coord.lng == pytest.approx(-122.41795063018799)

    @pytest.mark.parametrize("lat", [90.0001, -90.5, 180.0])
    def test_latitude_out_of_range(self, lat):
        with pytest.raises(DomainError) as excinfo:
            GeoCoordinate(lat, 0.0)
        assert excinfo.value.code == ErrorCode.DOMAIN_ERROR

    @pytest.mark.parametrize("lat,lng", [(float("nan"), 0.0), (0.0, float("inf")), (float("-inf"), 1.0)])
    def test_non_finite_rejected(self, lat, lng):
        with pytest.raises(DomainError):
            GeoCoordinate(lat, lng)

    def test_non_numeric_rejected(self):
        with pytest.raises(DomainError):
            GeoCoordinate("north", 0.0)

    def test_poles_accepted(self):
        assert GeoCoordinate(90.0, 0.0).lat == 90.0
        assert GeoCoordinate(-90.0, 0.0).lat == -90.0

    def test_immutable(self):
        coord = GeoCoordinate(1.0, 2.0)
        with pytest.raises(AttributeError):
            coord.lat = 3.0


class TestLongitudeNormalisation:
    """Longitudes land in (-180, 180]."""

    @pytest.mark.parametrize("lng,expected", [
        (190.0, -170.0),
        (-190.0, 170.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (540.0, 180.0),
        (360.0, 0.0),
        (-45.0, -45.0),
    ])
    def test_normalised(self, lng, expected):
        assert GeoCoordinate(0.0, lng).lng == pytest.approx(expected)

    def test_equal_after_normalisation(self):
        assert GeoCoordinate(10.0, 370.0) == GeoCoordinate(10.0, 10.0)


class TestUnits:
    """Degree / radian conversion."""

    def test_round_trip_helpers(self):
        assert degs_to_rads(180.0) == pytest.approx(math.pi)
        assert rads_to_degs(math.pi / 2) == pytest.approx(90.0)

    def test_from_radians(self):
        coord = GeoCoordinate.from_radians(math.pi / 4, -math.pi / 2)
        assert coord.lat == pytest.approx(45.0)
        assert coord.lng == pytest.approx(-90.0)

    def test_from_radians_clamps_pole_overshoot(self):
        coord = GeoCoordinate.from_radians(math.pi / 2 + 1e-15, 0.0)
        assert coord.lat == 90.0

    def test_create_with_unit(self):
        degrees = GeoCoordinate.create(45.0, 90.0)
        radians = GeoCoordinate.create(math.pi / 4, math.pi / 2, AngleUnit.RADIANS)
        assert degrees.lat == pytest.approx(radians.lat)
        assert degrees.lng == pytest.approx(radians.lng)

    def test_to_unit(self):
        coord = GeoCoordinate(30.0, 60.0)
        lat, lng = coord.to_unit(AngleUnit.RADIANS)
        assert lat == pytest.approx(math.pi / 6)
        assert lng == pytest.approx(math.pi / 3)
        assert coord.to_unit(AngleUnit.DEGREES) == (30.0, 60.0)
