"""
Index Codec
===========

Conversion between geographic coordinates and cell indexes.

Encoding projects a point onto its icosahedron face, walks the lattice
coordinate up one aperture-7 level per resolution to collect digits, and
finally rotates the digits into the base cell's home orientation. Decoding
walks back down from the base cell's home lattice point and carries any
coordinate that has left the home face onto the face that holds it.
"""

from typing import List, Tuple

from .base_cells import (
    BASE_CELLS,
    PENTAGON_BASE_CELLS,
    base_cell_is_cw_offset,
    face_ijk_to_base_cell,
    is_base_cell_pentagon,
)
from .constants import MAX_FACE_COORD, NUM_BASE_CELLS
from .coordinates import GeoCoordinate
from .errors import DomainError
from .faces import Overage, adjust_overage_class_ii, face_ijk_to_geo, geo_to_face_ijk
from .ijk import (
    IJK,
    Direction,
    down_ap7,
    down_ap7r,
    ijk_normalize,
    ijk_sub,
    is_class_iii,
    neighbor,
    unit_ijk_to_digit,
    up_ap7,
    up_ap7r,
)
from .index import (
    get_base_cell,
    get_digit,
    get_resolution,
    is_pentagon,
    leading_nonzero_digit,
    new_cell,
    require_resolution,
    require_valid_cell,
    rotate60ccw_index,
    rotate60cw_index,
    rotate_pent60ccw,
    set_base_cell,
    set_digit,
)

FaceIJK = Tuple[int, IJK]


# ============================================================================
# FACE LATTICE <-> INDEX
# ============================================================================

def face_ijk_to_cell(face: int, c: IJK, res: int) -> int:
    """
    Cell index of a lattice coordinate on a face.

    Raises:
        DomainError: If the coordinate lies too far off the face to resolve
    """
    h = new_cell(res, 0)

    for r in range(res - 1, -1, -1):
        last = c
        if is_class_iii(r + 1):
            c = up_ap7(c)
            last_center = down_ap7(c)
        else:
            c = up_ap7r(c)
            last_center = down_ap7r(c)
        h = set_digit(h, r + 1, unit_ijk_to_digit(ijk_normalize(ijk_sub(last, last_center))))

    if max(c) > MAX_FACE_COORD:
        raise DomainError(f"Lattice coordinate {c} lies outside face {face}")

    number, rotations = face_ijk_to_base_cell(face, c)
    h = set_base_cell(h, number)

    if is_base_cell_pentagon(number):
        # rotate out of the deleted K subsequence
        if leading_nonzero_digit(h) == Direction.K:
            if base_cell_is_cw_offset(number, face):
                h = rotate60cw_index(h)
            else:
                h = rotate60ccw_index(h)
        for _ in range(rotations):
            h = rotate_pent60ccw(h)
    else:
        for _ in range(rotations):
            h = rotate60ccw_index(h)

    return h


def _walk_down(h: int, c: IJK) -> Tuple[IJK, bool]:
    """Walk from a base cell lattice point down to the index resolution."""
    res = get_resolution(h)
    number = get_base_cell(h)
    possible_overage = is_base_cell_pentagon(number) or not (res == 0 or c == (0, 0, 0))

    for r in range(1, res + 1):
        c = down_ap7(c) if is_class_iii(r) else down_ap7r(c)
        c = neighbor(c, get_digit(h, r))

    return c, possible_overage


def cell_to_face_ijk(h: int) -> FaceIJK:
    """Face and lattice coordinate of a cell centre, on the face holding it."""
    number = get_base_cell(h)
    if is_base_cell_pentagon(number) and leading_nonzero_digit(h) == Direction.IK:
        h = rotate60cw_index(h)

    home = BASE_CELLS[number]
    face = home.face
    c, possible_overage = _walk_down(h, home.ijk)
    if not possible_overage:
        return face, c

    orig = c
    res = get_resolution(h)
    # overage is resolved on the next finer Class II lattice
    if is_class_iii(res):
        c = down_ap7r(c)
        res += 1

    pent_leading4 = is_base_cell_pentagon(number) and leading_nonzero_digit(h) == Direction.I
    overage, face, c = adjust_overage_class_ii(face, c, res, pent_leading4, False)
    if overage != Overage.NO_OVERAGE:
        # pentagons can overflow onto a second face
        if is_base_cell_pentagon(number):
            while overage != Overage.NO_OVERAGE:
                overage, face, c = adjust_overage_class_ii(face, c, res, False, False)
        if res != get_resolution(h):
            c = up_ap7r(c)
    elif res != get_resolution(h):
        c = orig

    return face, c


# ============================================================================
# PUBLIC CODEC
# ============================================================================

def encode(coord: GeoCoordinate, res: int) -> int:
    """
    Index of the cell containing a point.

    Args:
        coord: Point to index
        res: Resolution in [0, 15]

    Returns:
        Cell index

    Raises:
        InvalidResolutionError: If res is out of range
        DomainError: If coord is not a valid coordinate
    """
    require_resolution(res)
    if not isinstance(coord, GeoCoordinate):
        raise DomainError(f"Expected a GeoCoordinate, got {type(coord).__name__}")
    face, c = geo_to_face_ijk(coord.lat_rads, coord.lng_rads, res)
    return require_valid_cell(face_ijk_to_cell(face, c, res))


def decode(h: int) -> GeoCoordinate:
    """
    Centre of a cell.

    Raises:
        InvalidIndexError: If h is not a valid cell
    """
    require_valid_cell(h)
    face, c = cell_to_face_ijk(h)
    lat, lng = face_ijk_to_geo(face, c, get_resolution(h))
    return GeoCoordinate.from_radians(lat, lng)


def resolution_of(h: int) -> int:
    return get_resolution(require_valid_cell(h))


def base_cell_of(h: int) -> int:
    return get_base_cell(require_valid_cell(h))


def is_pentagon_cell(h: int) -> bool:
    return is_pentagon(require_valid_cell(h))


def res0_cells() -> List[int]:
    """All 122 resolution 0 cells in base cell order."""
    return [new_cell(0, number) for number in range(NUM_BASE_CELLS)]


def pentagons(res: int) -> List[int]:
    """The 12 pentagonal cells at a resolution."""
    require_resolution(res)
    return [new_cell(res, number, Direction.CENTER) for number in PENTAGON_BASE_CELLS]
