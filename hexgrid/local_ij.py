"""
Local IJK Coordinates
=====================

Unfolds a cell into the lattice of an origin cell's base cell so two cells
can be compared with plain lattice arithmetic.

Cells on the same base cell share a lattice directly. A cell on a
neighbouring base cell is rotated into the origin base cell's orientation
and offset by the neighbour direction scaled to the resolution. Pentagons
add extra rotations to account for the deleted K sector. Unfolding across
more than one face around a pentagon is refused.
"""

from typing import Tuple

from .base_cells import BASE_CELL_NEIGHBOR_ROTATIONS, base_cell_direction, is_base_cell_pentagon
from .errors import IncompatibleResolutionError, NotComparableError
from .ijk import (
    IJK,
    Direction,
    UNIT_VECS,
    down_ap7,
    down_ap7r,
    ijk_add,
    ijk_normalize,
    ijk_rotate60cw,
    is_class_iii,
    neighbor,
    rotate60cw,
)
from .index import (
    get_base_cell,
    get_digit,
    get_resolution,
    leading_nonzero_digit,
    rotate60cw_index,
    rotate_pent60cw,
)

# origin leading digit -> index leading digit -> clockwise rotations; K is invalid
PENTAGON_ROTATIONS: Tuple[Tuple[int, ...], ...] = (
    (0, -1, 0, 0, 0, 0, 0),
    (-1, -1, -1, -1, -1, -1, -1),
    (0, -1, 0, 0, 0, 1, 0),
    (0, -1, 0, 0, 1, 1, 0),
    (0, -1, 0, 5, 0, 0, 0),
    (0, -1, 5, 5, 0, 0, 0),
    (0, -1, 0, 0, 0, 0, 0),
)

# pairs of directions around a pentagon that would unfold across two faces
FAILED_DIRECTIONS: Tuple[Tuple[bool, ...], ...] = (
    (False, False, False, False, False, False, False),
    (False, False, False, False, False, False, False),
    (False, False, False, False, True, True, False),
    (False, False, False, False, True, False, True),
    (False, False, True, True, False, False, False),
    (False, False, True, False, False, False, True),
    (False, False, False, True, False, True, False),
)


def _base_cell_lattice(h: int) -> IJK:
    """Lattice coordinate of a cell relative to its base cell centre."""
    c = (0, 0, 0)
    for r in range(1, get_resolution(h) + 1):
        c = down_ap7(c) if is_class_iii(r) else down_ap7r(c)
        c = neighbor(c, get_digit(h, r))
    return c


def _rotate_cw(c: IJK, times: int) -> IJK:
    if times < 0:
        raise NotComparableError("Pentagon unfolding is undefined for this direction")
    for _ in range(times):
        c = ijk_rotate60cw(c)
    return c


def cell_to_local_ijk(origin: int, h: int) -> IJK:
    """
    Lattice coordinate of h in the frame of origin's base cell.

    Raises:
        IncompatibleResolutionError: If the cells have different resolutions
        NotComparableError: If the base cells are not neighbours or the
            unfolding would cross a pentagon distortion
    """
    res = get_resolution(origin)
    if res != get_resolution(h):
        raise IncompatibleResolutionError(
            f"Cells have different resolutions ({res} and {get_resolution(h)})"
        )

    origin_base = get_base_cell(origin)
    base = get_base_cell(h)

    direction = Direction.CENTER
    rev_direction = Direction.CENTER
    if origin_base != base:
        direction = base_cell_direction(origin_base, base)
        if direction == Direction.INVALID:
            raise NotComparableError(f"Base cells {origin_base} and {base} are not neighbours")
        rev_direction = base_cell_direction(base, origin_base)

    origin_on_pent = is_base_cell_pentagon(origin_base)
    index_on_pent = is_base_cell_pentagon(base)

    if direction != Direction.CENTER:
        # undo the rotation into the neighbouring base cell
        for _ in range(BASE_CELL_NEIGHBOR_ROTATIONS[origin_base][direction]):
            if index_on_pent:
                h = rotate_pent60cw(h)
                rev_direction = rotate60cw(rev_direction)
                if rev_direction == Direction.K:
                    rev_direction = rotate60cw(rev_direction)
            else:
                h = rotate60cw_index(h)
                rev_direction = rotate60cw(rev_direction)

    c = _base_cell_lattice(h)

    if direction != Direction.CENTER:
        pentagon_rotations = 0
        direction_rotations = 0
        if origin_on_pent:
            origin_leading = leading_nonzero_digit(origin)
            if FAILED_DIRECTIONS[origin_leading][direction]:
                raise NotComparableError("Cannot unfold across a pentagon from this direction")
            direction_rotations = PENTAGON_ROTATIONS[origin_leading][direction]
            pentagon_rotations = direction_rotations
        elif index_on_pent:
            index_leading = leading_nonzero_digit(h)
            if FAILED_DIRECTIONS[index_leading][rev_direction]:
                raise NotComparableError("Cannot unfold across a pentagon into this direction")
            pentagon_rotations = PENTAGON_ROTATIONS[rev_direction][index_leading]

        c = _rotate_cw(c, pentagon_rotations)

        # base cell offset scaled down to the cell resolution
        offset = UNIT_VECS[direction]
        for r in range(res - 1, -1, -1):
            offset = down_ap7(offset) if is_class_iii(r + 1) else down_ap7r(offset)
        offset = _rotate_cw(offset, direction_rotations)

        c = ijk_normalize(ijk_add(c, offset))

    elif origin_on_pent and index_on_pent:
        origin_leading = leading_nonzero_digit(origin)
        index_leading = leading_nonzero_digit(h)
        if FAILED_DIRECTIONS[origin_leading][index_leading]:
            raise NotComparableError("Cannot unfold between these pentagon sectors")
        c = _rotate_cw(c, PENTAGON_ROTATIONS[origin_leading][index_leading])

    return c
