"""
Coordinate Model
================

Geographic points on the unit sphere and the planar/spherical vector helpers
used by the face projections.

GeoCoordinate is stored in degrees (the external form) and exposes radians
for the geometry code. Longitudes are normalised into (-180, 180].
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .constants import EPSILON, FLT_EPSILON, M_2PI, M_PI_2
from .errors import DomainError


class AngleUnit(Enum):
    """Unit of the angles passed to GeoCoordinate.create."""
    DEGREES = "degrees"
    RADIANS = "radians"


def degs_to_rads(degrees: float) -> float:
    return degrees * math.pi / 180.0


def rads_to_degs(radians: float) -> float:
    return radians * 180.0 / math.pi


def _normalize_lng_degrees(lng: float) -> float:
    lng = math.fmod(lng, 360.0)
    if lng > 180.0:
        lng -= 360.0
    elif lng <= -180.0:
        lng += 360.0
    return lng


@dataclass(frozen=True)
class GeoCoordinate:
    """
    A point on the sphere in degrees.

    Raises:
        DomainError: If latitude is outside [-90, 90] or either value is not finite
    """
    lat: float
    lng: float

    def __post_init__(self):
        try:
            lat = float(self.lat)
            lng = float(self.lng)
        except (TypeError, ValueError):
            raise DomainError(f"Coordinates must be numeric, got ({self.lat!r}, {self.lng!r})")
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise DomainError(f"Coordinates must be finite, got ({lat}, {lng})")
        if lat < -90.0 or lat > 90.0:
            raise DomainError(f"Latitude {lat} outside [-90, 90]")
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", _normalize_lng_degrees(lng))

    @classmethod
    def create(cls, lat: float, lng: float, unit: AngleUnit = AngleUnit.DEGREES) -> "GeoCoordinate":
        """Build a coordinate from angles in the given unit."""
        if unit is AngleUnit.RADIANS:
            return cls.from_radians(lat, lng)
        return cls(lat, lng)

    @classmethod
    def from_radians(cls, lat: float, lng: float) -> "GeoCoordinate":
        lat_degs = rads_to_degs(lat)
        # clamp tiny overshoot from inverse trig at the poles
        if abs(lat) - M_PI_2 < EPSILON * 1e6 and abs(lat_degs) > 90.0:
            lat_degs = math.copysign(90.0, lat_degs)
        return cls(lat_degs, rads_to_degs(lng))

    @property
    def lat_rads(self) -> float:
        return degs_to_rads(self.lat)

    @property
    def lng_rads(self) -> float:
        return degs_to_rads(self.lng)

    def to_radians(self) -> Tuple[float, float]:
        return self.lat_rads, self.lng_rads

    def to_unit(self, unit: AngleUnit) -> Tuple[float, float]:
        """Return (lat, lng) in the requested unit."""
        if unit is AngleUnit.RADIANS:
            return self.to_radians()
        return self.lat, self.lng


# ============================================================================
# SPHERICAL HELPERS (radians)
# ============================================================================

def pos_angle_rads(rads: float) -> float:
    """Normalize an angle into [0, 2pi)."""
    tmp = rads + M_2PI if rads < 0.0 else rads
    if rads >= M_2PI:
        tmp -= M_2PI
    return tmp


def constrain_lng(lng: float) -> float:
    while lng > math.pi:
        lng -= M_2PI
    while lng < -math.pi:
        lng += M_2PI
    return lng


def geo_azimuth_rads(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Azimuth from point 1 to point 2, clockwise from north."""
    return math.atan2(
        math.cos(lat2) * math.sin(lng2 - lng1),
        math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lng2 - lng1),
    )


def geo_az_distance_rads(lat1: float, lng1: float, az: float, distance: float) -> Tuple[float, float]:
    """
    Point at a great circle distance and azimuth from a start point.

    Args:
        lat1, lng1: Start point in radians
        az: Azimuth in radians, clockwise from north
        distance: Angular distance in radians

    Returns:
        (lat, lng) of the destination in radians
    """
    if distance < EPSILON:
        return lat1, lng1

    az = pos_angle_rads(az)

    # due north or south
    if az < EPSILON or abs(az - math.pi) < EPSILON:
        lat2 = lat1 + distance if az < EPSILON else lat1 - distance
        if abs(lat2 - M_PI_2) < EPSILON:
            return M_PI_2, 0.0
        if abs(lat2 + M_PI_2) < EPSILON:
            return -M_PI_2, 0.0
        return lat2, constrain_lng(lng1)

    sinlat = math.sin(lat1) * math.cos(distance) + math.cos(lat1) * math.sin(distance) * math.cos(az)
    sinlat = min(1.0, max(-1.0, sinlat))
    lat2 = math.asin(sinlat)
    if abs(lat2 - M_PI_2) < EPSILON:
        return M_PI_2, 0.0
    if abs(lat2 + M_PI_2) < EPSILON:
        return -M_PI_2, 0.0

    sinlng = math.sin(az) * math.sin(distance) / math.cos(lat2)
    coslng = (math.cos(distance) - math.sin(lat1) * math.sin(lat2)) / math.cos(lat1) / math.cos(lat2)
    sinlng = min(1.0, max(-1.0, sinlng))
    coslng = min(1.0, max(-1.0, coslng))
    return lat2, constrain_lng(lng1 + math.atan2(sinlng, coslng))


def great_circle_distance_rads(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance between two points given in radians."""
    sin_lat = math.sin((lat2 - lat1) / 2.0)
    sin_lng = math.sin((lng2 - lng1) / 2.0)
    a = sin_lat * sin_lat + math.cos(lat1) * math.cos(lat2) * sin_lng * sin_lng
    return 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def geo_to_vec3d(lat: float, lng: float) -> Tuple[float, float, float]:
    r = math.cos(lat)
    return math.cos(lng) * r, math.sin(lng) * r, math.sin(lat)


# ============================================================================
# PLANAR HELPERS
# ============================================================================

def v2d_intersect(p0, p1, p2, p3) -> Tuple[float, float]:
    """Intersection of the lines p0-p1 and p2-p3."""
    s1x, s1y = p1[0] - p0[0], p1[1] - p0[1]
    s2x, s2y = p3[0] - p2[0], p3[1] - p2[1]
    t = (s2x * (p0[1] - p2[1]) - s2y * (p0[0] - p2[0])) / (-s2x * s1y + s1x * s2y)
    return p0[0] + t * s1x, p0[1] + t * s1y


def v2d_almost_equals(a, b) -> bool:
    return abs(a[0] - b[0]) < FLT_EPSILON and abs(a[1] - b[1]) < FLT_EPSILON
