"""
Neighbour and Distance Engine
=============================

Neighbour stepping, grid disks and grid distance.

Stepping to a neighbour rewrites the digits from the finest resolution up.
Each level either absorbs the move inside its aperture-7 family or passes a
direction to the parent level. A move past resolution 0 switches to the
neighbouring base cell and rotates the digits into its orientation.
Pentagons have no K neighbour at their centre, so stepping that way raises
PentagonDirectionError and the disk traversal skips it.

Grid disks are a breadth-first traversal with a visited set, so each cell
is reported once at its minimal distance.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List

from .base_cells import (
    BASE_CELL_NEIGHBOR_ROTATIONS,
    BASE_CELL_NEIGHBORS,
    BASE_CELLS,
    INVALID_BASE_CELL,
    base_cell_is_cw_offset,
    is_base_cell_pentagon,
)
from .config import get_config
from .errors import DomainError, NotComparableError, PentagonDirectionError
from .ijk import DIGIT_STEPS_CLASS_II, DIGIT_STEPS_CLASS_III, Direction, ijk_distance, is_class_iii
from .index import (
    get_base_cell,
    get_digit,
    get_resolution,
    leading_nonzero_digit,
    require_valid_cell,
    rotate60ccw_index,
    rotate60cw_index,
    rotate_pent60ccw,
    set_base_cell,
    set_digit,
)
from .local_ij import cell_to_local_ijk

logger = logging.getLogger(__name__)

# traversal order of the six neighbour directions
DIRECTIONS = (Direction.J, Direction.JK, Direction.K, Direction.IK, Direction.I, Direction.IJ)


@dataclass(frozen=True)
class GridDiskEntry:
    """A cell and its grid distance from a disk origin."""
    index: int
    distance: int


def neighbor(origin: int, direction: int) -> int:
    """
    Adjacent cell in a direction of the origin's lattice.

    Raises:
        PentagonDirectionError: If the direction is the deleted K direction
            of a pentagonal cell
    """
    current = origin
    old_base = get_base_cell(current)
    old_leading = leading_nonzero_digit(current)
    new_rotations = 0

    r = get_resolution(current) - 1
    while True:
        if r == -1:
            new_base = BASE_CELL_NEIGHBORS[old_base][direction]
            new_rotations = BASE_CELL_NEIGHBOR_ROTATIONS[old_base][direction]
            if new_base == INVALID_BASE_CELL:
                # the deleted K vertex borders the IK neighbour instead
                new_base = BASE_CELL_NEIGHBORS[old_base][Direction.IK]
                new_rotations = BASE_CELL_NEIGHBOR_ROTATIONS[old_base][Direction.IK]
                current = rotate60ccw_index(current)
            current = set_base_cell(current, new_base)
            break

        steps = DIGIT_STEPS_CLASS_III if is_class_iii(r + 1) else DIGIT_STEPS_CLASS_II
        new_digit, next_direction = steps[(get_digit(current, r + 1), direction)]
        current = set_digit(current, r + 1, new_digit)
        if next_direction == Direction.CENTER:
            break
        direction = next_direction
        r -= 1

    new_base = get_base_cell(current)
    if not is_base_cell_pentagon(new_base):
        for _ in range(new_rotations):
            current = rotate60ccw_index(current)
        return current

    if leading_nonzero_digit(current) == Direction.K:
        if old_base != new_base:
            # entered the deleted K subsequence from a neighbouring base cell
            if base_cell_is_cw_offset(new_base, BASE_CELLS[old_base].face):
                current = rotate60cw_index(current)
            else:
                current = rotate60ccw_index(current)
        elif old_leading == Direction.CENTER:
            raise PentagonDirectionError(f"Cell {origin:x} has no neighbour in direction {int(direction)}")
        elif old_leading == Direction.JK:
            current = rotate60ccw_index(current)
        elif old_leading == Direction.IK:
            current = rotate60cw_index(current)
        else:
            raise NotComparableError(f"Unexpected pentagon traversal from {origin:x}")

    for _ in range(new_rotations):
        current = rotate_pent60ccw(current)
    return current


def neighbors(h: int) -> List[int]:
    """The five or six cells sharing an edge with a cell."""
    require_valid_cell(h)
    result = []
    for direction in DIRECTIONS:
        try:
            cell = neighbor(h, direction)
        except PentagonDirectionError:
            continue
        if cell not in result:
            result.append(cell)
    return result


def max_grid_disk_size(k: int) -> int:
    """
    Upper bound on the number of cells within k steps: 3k(k+1) + 1.

    Raises:
        DomainError: If k is negative or above the configured limit
    """
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise DomainError(f"Disk radius must be a non-negative integer, got {k!r}")
    limit = get_config().max_grid_disk_k
    if k > limit:
        raise DomainError(f"Disk radius {k} exceeds limit {limit}")
    return 3 * k * (k + 1) + 1


def _disk_distances(origin: int, k: int) -> Dict[int, int]:
    require_valid_cell(origin)
    max_grid_disk_size(k)

    distances = {origin: 0}
    queue = deque([origin])
    while queue:
        cell = queue.popleft()
        distance = distances[cell]
        if distance >= k:
            continue
        for direction in DIRECTIONS:
            try:
                nxt = neighbor(cell, direction)
            except PentagonDirectionError:
                continue
            if nxt not in distances:
                require_valid_cell(nxt)
                distances[nxt] = distance + 1
                queue.append(nxt)

    logger.debug(f"Disk of radius {k} around {origin:x}: {len(distances)} cells")
    return distances


def grid_disk(origin: int, k: int) -> List[int]:
    """
    Every cell within k steps of origin, origin first, without duplicates.

    Raises:
        InvalidIndexError: If origin is not a valid cell
        DomainError: If k is negative or too large
    """
    return list(_disk_distances(origin, k))


def grid_disk_distances(origin: int, k: int) -> List[GridDiskEntry]:
    """Cells within k steps of origin with their distances, nearest first."""
    return [GridDiskEntry(cell, distance) for cell, distance in _disk_distances(origin, k).items()]


def grid_distance(a: int, b: int) -> int:
    """
    Number of steps between two cells of the same resolution.

    Raises:
        InvalidIndexError: If either cell is invalid
        IncompatibleResolutionError: If the resolutions differ
        NotComparableError: If no lattice path can be unfolded between them
    """
    require_valid_cell(a)
    require_valid_cell(b)
    origin_ijk = cell_to_local_ijk(a, a)
    index_ijk = cell_to_local_ijk(a, b)
    return ijk_distance(origin_ijk, index_ijk)
