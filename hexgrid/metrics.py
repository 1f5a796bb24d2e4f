"""
Metrics Engine
==============

Cell boundaries, cell areas and great circle distances on a sphere of radius
EARTH_RADIUS_KM.

Areas are the sum of the spherical excess of the triangles fanning out from
the cell centre to each boundary edge (L'Huilier's theorem).
"""

import math
from typing import Tuple

from .codec import cell_to_face_ijk, decode
from .constants import EARTH_RADIUS_KM, MAX_CELL_BOUNDARY_VERTS
from .coordinates import GeoCoordinate, great_circle_distance_rads as _distance_rads
from .faces import face_ijk_pent_to_boundary, face_ijk_to_boundary
from .index import get_resolution, is_pentagon, require_valid_cell

CellBoundary = Tuple[GeoCoordinate, ...]


def boundary(h: int) -> CellBoundary:
    """
    Vertices of a cell, counter-clockwise seen from outside the sphere.

    Pentagons have 5 corners and hexagons 6; Class III cells that straddle an
    icosahedron edge gain a vertex at each crossing.

    Raises:
        InvalidIndexError: If h is not a valid cell
    """
    require_valid_cell(h)
    face, c = cell_to_face_ijk(h)
    res = get_resolution(h)
    if is_pentagon(h):
        points = face_ijk_pent_to_boundary(face, c, res)
    else:
        points = face_ijk_to_boundary(face, c, res)
    if len(points) > MAX_CELL_BOUNDARY_VERTS:
        raise RuntimeError(f"Cell {h:x} produced {len(points)} boundary vertices")
    return tuple(GeoCoordinate.from_radians(lat, lng) for lat, lng in points)


# ============================================================================
# DISTANCE
# ============================================================================

def great_circle_distance_rads(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Central angle between two points (haversine)."""
    return _distance_rads(a.lat_rads, a.lng_rads, b.lat_rads, b.lng_rads)


def great_circle_distance_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    return great_circle_distance_rads(a, b) * EARTH_RADIUS_KM


def great_circle_distance_m(a: GeoCoordinate, b: GeoCoordinate) -> float:
    return great_circle_distance_km(a, b) * 1000


# ============================================================================
# AREA
# ============================================================================

def _triangle_edge_lengths_to_area(a: float, b: float, c: float) -> float:
    s = (a + b + c) / 2
    a = (s - a) / 2
    b = (s - b) / 2
    c = (s - c) / 2
    s = s / 2
    # rounding can push a degenerate triangle slightly negative
    product = max(0.0, math.tan(s) * math.tan(a) * math.tan(b) * math.tan(c))
    return 4 * math.atan(math.sqrt(product))


def _triangle_area(a: GeoCoordinate, b: GeoCoordinate, c: GeoCoordinate) -> float:
    return _triangle_edge_lengths_to_area(
        great_circle_distance_rads(a, b),
        great_circle_distance_rads(b, c),
        great_circle_distance_rads(c, a),
    )


def area_rads2(h: int) -> float:
    """Area of a cell in steradians."""
    center = decode(h)
    verts = boundary(h)
    total = 0.0
    for i, vert in enumerate(verts):
        total += _triangle_area(vert, verts[(i + 1) % len(verts)], center)
    return total


def area_km2(h: int) -> float:
    """
    Area of a cell in square kilometres.

    Raises:
        InvalidIndexError: If h is not a valid cell
    """
    return area_rads2(h) * EARTH_RADIUS_KM * EARTH_RADIUS_KM


def area_m2(h: int) -> float:
    return area_km2(h) * 1.0e6
