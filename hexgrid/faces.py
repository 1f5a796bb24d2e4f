"""
Icosahedron Face Projection
===========================

Gnomonic projection of the sphere onto the 20 faces of the icosahedron and
the face-relative hexagonal lattice that every resolution is built on.

Each face has a centre point and a Class II i-axis azimuth. A point is
projected onto the face with the closest centre, scaled by sqrt(7) per
resolution and rotated by asin(sqrt(3/28)) on Class III resolutions.

Lattice coordinates that fall beyond a face edge ("overage") are carried onto
the adjacent face by that face's neighbour orientation: a number of 60 degree
counter-clockwise rotations followed by a translation.

Key Functions:
- geo_to_face_ijk: point -> (face, lattice coordinate) at a resolution
- face_ijk_to_geo: inverse of the above for lattice cell centres
- adjust_overage_class_ii: move an off-face Class II coordinate to its face
- face_ijk_to_boundary / face_ijk_pent_to_boundary: cell corner polygons
"""

import math
from enum import IntEnum
from typing import List, NamedTuple, Tuple

import numpy as np

from .constants import (
    EPSILON,
    M_AP7_ROT_RADS,
    M_SQRT3_2,
    M_SQRT7,
    NUM_HEX_VERTS,
    NUM_ICOSA_FACES,
    NUM_PENT_VERTS,
    RES0_U_GNOMONIC,
)
from .coordinates import (
    geo_az_distance_rads,
    geo_azimuth_rads,
    geo_to_vec3d,
    pos_angle_rads,
    v2d_almost_equals,
    v2d_intersect,
)
from .ijk import (
    IJK,
    down_ap3,
    down_ap3r,
    down_ap7r,
    hex2d_to_ijk,
    ijk_add,
    ijk_normalize,
    ijk_rotate60ccw,
    ijk_rotate60cw,
    ijk_scale,
    ijk_sub,
    ijk_to_hex2d,
    is_class_iii,
)


LatLngRads = Tuple[float, float]


# ============================================================================
# FACE TABLES
# ============================================================================

# face centre (lat, lng) in radians
FACE_CENTER_GEO: Tuple[LatLngRads, ...] = (
    (0.803582649718989942, 1.248397419617396099),
    (1.307747883455638156, 2.536945009877921159),
    (1.054751253523952054, -1.347517358900396623),
    (0.600191595538186799, -0.450603909469755746),
    (0.491715428198773866, 0.401988202911306943),
    (0.172745327415618701, 1.678146885280433686),
    (0.605929321571350690, 2.953923329812411617),
    (0.427370518328979641, -1.888876200336285401),
    (-0.079066118549212831, -0.733429513380867741),
    (-0.230961644455383637, 0.506495587332349035),
    (0.079066118549212831, 2.408163140208925497),
    (0.230961644455383637, -2.635097066257444203),
    (-0.172745327415618701, -1.463445768309359553),
    (-0.605929321571350690, -0.187669323777381622),
    (-0.427370518328979641, 1.252716453253507838),
    (-0.600191595538186799, 2.690988744120037492),
    (-0.491715428198773866, -2.739604450678486295),
    (-1.054751253523952054, 1.794075294689396615),
    (-1.307747883455638156, 0.604647643711872080),
    (-0.803582649718989942, -1.893195233972397139),
)

# unit vectors of the face centres, one row per face
FACE_CENTER_POINTS = np.array([geo_to_vec3d(lat, lng) for lat, lng in FACE_CENTER_GEO])
FACE_CENTER_POINTS.setflags(write=False)

# azimuth of each face's Class II i-axis, measured from the face centre
FACE_AXIS_AZ_CII: Tuple[float, ...] = (
    5.619958268523939882,
    5.760339081714187279,
    0.780213654393430055,
    0.430469363979999913,
    6.130269123335111400,
    2.692877706530642877,
    2.982963003477243874,
    3.532912002790141181,
    3.494305004259568154,
    3.003214169499538391,
    5.930472956509811562,
    0.138378484090254847,
    0.448714947059150361,
    0.158629650112549365,
    5.891865957979238535,
    2.711123289609793325,
    3.294508837434268316,
    3.804819692245439833,
    3.664438879055192436,
    2.361378999196363184,
)


class Quadrant(IntEnum):
    """Which side of a face a lattice coordinate has left through."""
    CENTER = 0
    IJ = 1
    KI = 2
    JK = 3


class FaceOrient(NamedTuple):
    """Where a neighbouring face sits relative to a face's lattice."""
    face: int
    translate: IJK
    ccw_rot60: int


def _orient_ring(face: int, ij: int, ki: int, jk: int, ij_t: IJK, ki_t: IJK, rot_ij: int, rot_ki: int):
    return (
        FaceOrient(face, (0, 0, 0), 0),
        FaceOrient(ij, ij_t, rot_ij),
        FaceOrient(ki, ki_t, rot_ki),
        FaceOrient(jk, (0, 2, 2), 3),
    )


def _build_face_neighbors() -> Tuple[Tuple[FaceOrient, ...], ...]:
    table = []
    # north cap: faces 0-4 share the north vertex at their i-vertex
    for f in range(5):
        table.append(_orient_ring(f, (f - 1) % 5, (f + 1) % 5, f + 5, (2, 0, 2), (2, 2, 0), 1, 5))
    # upper equatorial band
    for m in range(5):
        table.append(_orient_ring(5 + m, 10 + m, 10 + (m - 1) % 5, m, (2, 2, 0), (2, 0, 2), 3, 3))
    # lower equatorial band
    for m in range(5):
        table.append(_orient_ring(10 + m, 5 + m, 5 + (m + 1) % 5, 15 + m, (2, 2, 0), (2, 0, 2), 3, 3))
    # south cap: faces 15-19 share the south vertex at their i-vertex
    for m in range(5):
        table.append(_orient_ring(15 + m, 15 + (m + 1) % 5, 15 + (m - 1) % 5, 10 + m, (2, 0, 2), (2, 2, 0), 1, 5))
    return tuple(table)


FACE_NEIGHBORS = _build_face_neighbors()


def _build_adjacent_face_dir() -> Tuple[Tuple[int, ...], ...]:
    rows = []
    for face in range(NUM_ICOSA_FACES):
        row = [-1] * NUM_ICOSA_FACES
        for quadrant, orient in enumerate(FACE_NEIGHBORS[face]):
            row[orient.face] = quadrant
        rows.append(tuple(row))
    return tuple(rows)


# direction from one face to an adjacent one, -1 when not adjacent
ADJACENT_FACE_DIR = _build_adjacent_face_dir()


def max_dim_by_cii_res(res: int) -> int:
    """Lattice size of a face edge at a Class II resolution."""
    return 2 * 7 ** (res // 2)


def unit_scale_by_cii_res(res: int) -> int:
    return 7 ** (res // 2)


def quadrant_of(c: IJK) -> Quadrant:
    """Side of the face an off-face coordinate lies beyond."""
    if c[2] > 0:
        return Quadrant.JK if c[1] > 0 else Quadrant.KI
    return Quadrant.IJ


def transform_to_neighbor(face: int, c: IJK, quadrant: int, unit_scale: int) -> Tuple[int, IJK]:
    """Express a coordinate in the lattice of the face across an edge."""
    orient = FACE_NEIGHBORS[face][quadrant]
    for _ in range(orient.ccw_rot60):
        c = ijk_rotate60ccw(c)
    c = ijk_normalize(ijk_add(c, ijk_scale(orient.translate, unit_scale)))
    return orient.face, c


# ============================================================================
# PROJECTION
# ============================================================================

def closest_face(lat: float, lng: float) -> Tuple[int, float]:
    """
    Face whose centre is nearest to a point.

    Returns:
        (face, squared chord distance to its centre)
    """
    point = np.array(geo_to_vec3d(lat, lng))
    sqd = np.sum((FACE_CENTER_POINTS - point) ** 2, axis=1)
    face = int(np.argmin(sqd))
    return face, float(sqd[face])


def geo_to_hex2d(lat: float, lng: float, res: int) -> Tuple[int, Tuple[float, float]]:
    """Project a point onto its face's planar coordinates at a resolution."""
    face, sqd = closest_face(lat, lng)

    # cos(r) = 1 - 2 * sin^2(r/2) = 1 - sqd / 2
    r = math.acos(max(-1.0, min(1.0, 1.0 - sqd / 2.0)))
    if r < EPSILON:
        return face, (0.0, 0.0)

    center_lat, center_lng = FACE_CENTER_GEO[face]
    theta = pos_angle_rads(
        FACE_AXIS_AZ_CII[face] - pos_angle_rads(geo_azimuth_rads(center_lat, center_lng, lat, lng))
    )
    if is_class_iii(res):
        theta = pos_angle_rads(theta - M_AP7_ROT_RADS)

    # gnomonic scaling
    r = math.tan(r) / RES0_U_GNOMONIC
    r *= M_SQRT7 ** res

    return face, (r * math.cos(theta), r * math.sin(theta))


def hex2d_to_geo(v: Tuple[float, float], face: int, res: int, substrate: bool) -> LatLngRads:
    """
    Inverse gnomonic projection of a planar face coordinate.

    Args:
        v: Planar coordinate on the face
        face: Icosahedron face
        res: Resolution of the lattice v is expressed in
        substrate: True when v is on the aperture-3 vertex substrate grid

    Returns:
        (lat, lng) in radians
    """
    r = math.hypot(v[0], v[1])
    if r < EPSILON:
        return FACE_CENTER_GEO[face]

    theta = math.atan2(v[1], v[0])

    r /= M_SQRT7 ** res
    if substrate:
        r /= 3.0
        if is_class_iii(res):
            r /= M_SQRT7

    r = math.atan(r * RES0_U_GNOMONIC)

    # substrate coordinates are already in the Class II frame
    if not substrate and is_class_iii(res):
        theta = pos_angle_rads(theta + M_AP7_ROT_RADS)

    theta = pos_angle_rads(FACE_AXIS_AZ_CII[face] - theta)
    center_lat, center_lng = FACE_CENTER_GEO[face]
    return geo_az_distance_rads(center_lat, center_lng, theta, r)


def geo_to_face_ijk(lat: float, lng: float, res: int) -> Tuple[int, IJK]:
    face, v = geo_to_hex2d(lat, lng, res)
    return face, hex2d_to_ijk(*v)


def face_ijk_to_geo(face: int, c: IJK, res: int) -> LatLngRads:
    return hex2d_to_geo(ijk_to_hex2d(c), face, res, substrate=False)


# ============================================================================
# OVERAGE
# ============================================================================

class Overage(IntEnum):
    NO_OVERAGE = 0
    FACE_EDGE = 1
    NEW_FACE = 2


def adjust_overage_class_ii(
    face: int, c: IJK, res: int, pent_leading4: bool, substrate: bool
) -> Tuple[Overage, int, IJK]:
    """
    Move a Class II lattice coordinate onto the face that contains it.

    Args:
        face: Face the coordinate is expressed on
        c: Lattice coordinate, possibly beyond the face edges
        res: Class II resolution
        pent_leading4: Coordinate descends from a pentagon through digit 4
        substrate: Coordinate is on the aperture-3 substrate grid

    Returns:
        (overage kind, face, coordinate on that face)
    """
    max_dim = max_dim_by_cii_res(res)
    if substrate:
        max_dim *= 3

    total = c[0] + c[1] + c[2]
    if substrate and total == max_dim:
        return Overage.FACE_EDGE, face, c
    if total <= max_dim:
        return Overage.NO_OVERAGE, face, c

    quadrant = quadrant_of(c)
    if quadrant == Quadrant.KI and pent_leading4:
        # rotate about the pentagon to skip the missing sequence
        origin = (max_dim, 0, 0)
        c = ijk_add(ijk_rotate60cw(ijk_sub(c, origin)), origin)

    unit_scale = unit_scale_by_cii_res(res)
    if substrate:
        unit_scale *= 3
    face, c = transform_to_neighbor(face, c, quadrant, unit_scale)

    # overage points on pentagon boundaries can end up on edges
    if substrate and c[0] + c[1] + c[2] == max_dim:
        return Overage.FACE_EDGE, face, c
    return Overage.NEW_FACE, face, c


def adjust_pent_vert_overage(face: int, c: IJK, res: int) -> Tuple[Overage, int, IJK]:
    """Repeat overage adjustment until a pentagon vertex settles on a face."""
    while True:
        overage, face, c = adjust_overage_class_ii(face, c, res, False, True)
        if overage != Overage.NEW_FACE:
            return overage, face, c


# ============================================================================
# CELL BOUNDARIES
# ============================================================================

# corners of an origin-centred cell on the substrate grid, counter-clockwise
_VERTS_CII: Tuple[IJK, ...] = ((2, 1, 0), (1, 2, 0), (0, 2, 1), (0, 1, 2), (1, 0, 2), (2, 0, 1))
_VERTS_CIII: Tuple[IJK, ...] = ((5, 4, 0), (1, 5, 0), (0, 5, 4), (0, 1, 5), (4, 0, 5), (5, 0, 1))


def _face_ijk_to_verts(face: int, c: IJK, res: int, num_verts: int) -> Tuple[List[Tuple[int, IJK]], int]:
    """Substrate coordinates of a cell's corners and the substrate resolution."""
    verts = _VERTS_CIII if is_class_iii(res) else _VERTS_CII

    # aperture 3 then 3r gets the centre onto the vertex substrate
    c = down_ap3r(down_ap3(c))

    # Class III needs one more clockwise aperture 7 to reach Class II
    if is_class_iii(res):
        c = down_ap7r(c)
        res += 1

    return [(face, ijk_normalize(ijk_add(c, verts[v]))) for v in range(num_verts)], res


def _face_edge_vertices(adj_res: int, quadrant: int) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Planar end points of a face edge on the substrate grid."""
    max_dim = max_dim_by_cii_res(adj_res)
    v0 = (3.0 * max_dim, 0.0)
    v1 = (-1.5 * max_dim, 3.0 * M_SQRT3_2 * max_dim)
    v2 = (-1.5 * max_dim, -3.0 * M_SQRT3_2 * max_dim)
    if quadrant == Quadrant.IJ:
        return v0, v1
    if quadrant == Quadrant.JK:
        return v1, v2
    return v2, v0


def face_ijk_to_boundary(face: int, c: IJK, res: int) -> List[LatLngRads]:
    """
    Corners of a hexagonal cell, with extra vertices where a Class III cell
    edge crosses an icosahedron edge.
    """
    verts, adj_res = _face_ijk_to_verts(face, c, res, NUM_HEX_VERTS)
    points: List[LatLngRads] = []

    last_face = -1
    last_overage = Overage.NO_OVERAGE
    # one extra pass to catch a crossing on the closing edge
    for vert in range(NUM_HEX_VERTS + 1):
        v = vert % NUM_HEX_VERTS
        vert_face, vert_ijk = verts[v]
        overage, vert_face, vert_ijk = adjust_overage_class_ii(vert_face, vert_ijk, adj_res, False, True)

        if is_class_iii(res) and vert > 0 and vert_face != last_face and last_overage != Overage.FACE_EDGE:
            last_v = (v + 5) % NUM_HEX_VERTS
            orig0 = ijk_to_hex2d(verts[last_v][1])
            orig1 = ijk_to_hex2d(verts[v][1])

            face2 = vert_face if last_face == face else last_face
            edge0, edge1 = _face_edge_vertices(adj_res, ADJACENT_FACE_DIR[face][face2])
            inter = v2d_intersect(orig0, orig1, edge0, edge1)
            # an intersection at a corner needs no extra vertex
            if not (v2d_almost_equals(orig0, inter) or v2d_almost_equals(orig1, inter)):
                points.append(hex2d_to_geo(inter, face, adj_res, substrate=True))

        if vert < NUM_HEX_VERTS:
            points.append(hex2d_to_geo(ijk_to_hex2d(vert_ijk), vert_face, adj_res, substrate=True))

        last_face = vert_face
        last_overage = overage

    return points


def face_ijk_pent_to_boundary(face: int, c: IJK, res: int) -> List[LatLngRads]:
    """Corners of a pentagonal cell; every Class III pentagon edge crosses a face edge."""
    verts, adj_res = _face_ijk_to_verts(face, c, res, NUM_PENT_VERTS)
    points: List[LatLngRads] = []

    last_face, last_ijk = -1, (0, 0, 0)
    for vert in range(NUM_PENT_VERTS + 1):
        v = vert % NUM_PENT_VERTS
        _, vert_face, vert_ijk = adjust_pent_vert_overage(verts[v][0], verts[v][1], adj_res)

        if is_class_iii(res) and vert > 0:
            orig0 = ijk_to_hex2d(last_ijk)

            # express this vertex in the previous vertex's face
            to_last = ADJACENT_FACE_DIR[vert_face][last_face]
            tmp_face, tmp_ijk = transform_to_neighbor(
                vert_face, vert_ijk, to_last, unit_scale_by_cii_res(adj_res) * 3
            )
            orig1 = ijk_to_hex2d(tmp_ijk)

            edge0, edge1 = _face_edge_vertices(adj_res, ADJACENT_FACE_DIR[tmp_face][vert_face])
            inter = v2d_intersect(orig0, orig1, edge0, edge1)
            points.append(hex2d_to_geo(inter, tmp_face, adj_res, substrate=True))

        if vert < NUM_PENT_VERTS:
            points.append(hex2d_to_geo(ijk_to_hex2d(vert_ijk), vert_face, adj_res, substrate=True))

        last_face, last_ijk = vert_face, vert_ijk

    return points
