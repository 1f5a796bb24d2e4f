"""
Base Cells
==========

The 122 resolution 0 cells (110 hexagons, 12 pentagons) and their lookup
tables, built once at import.

Construction:
1. Each face's resolution 0 lattice points inside or on the face (centre,
   three interior points, three edge midpoints, three vertices) are merged
   across shared face edges, giving 20 + 60 + 30 + 12 = 122 cells.
2. BASE_CELL_HOMES numbers the cells and fixes the home face whose lattice
   defines each cell's digit orientation. Every home must land on a distinct
   merged point.
3. Per-face lookups map every lattice point within two steps of a face
   (including the points just past its edges) to a base cell and the number
   of 60 degree counter-clockwise rotations into that cell's home lattice.
   Pentagon rotations count steps around the five remaining sectors.
4. Neighbour and neighbour rotation tables follow from the face lookups.

Tables are tuples and read-only mappings; nothing here is mutated after import.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, NamedTuple, Tuple

from .constants import MAX_FACE_COORD, NUM_BASE_CELLS, NUM_ICOSA_FACES, NUM_PENTAGONS
from .faces import (
    ADJACENT_FACE_DIR,
    FACE_NEIGHBORS,
    Quadrant,
    quadrant_of,
    transform_to_neighbor,
)
from .ijk import IJK, UNIT_VECS, Direction, ijk_add, ijk_normalize

logger = logging.getLogger(__name__)

INVALID_BASE_CELL = -1

FaceLattice = Tuple[int, IJK]


class BaseCell(NamedTuple):
    """Home placement of a resolution 0 cell."""
    number: int
    face: int
    ijk: IJK
    is_pentagon: bool
    cw_offset_faces: Tuple[int, ...]


# ============================================================================
# LATTICE POINTS
# ============================================================================

_CENTER = (0, 0, 0)
_INTERIOR = ((1, 0, 0), (0, 1, 0), (0, 0, 1))
_EDGES = ((1, 1, 0), (0, 1, 1), (1, 0, 1))
_VERTICES = ((2, 0, 0), (0, 2, 0), (0, 0, 2))
_FACE_POINTS = (_CENTER,) + _INTERIOR + _EDGES + _VERTICES

# face-relative direction from a vertex towards the face interior
_VERTEX_INWARD = {(2, 0, 0): Direction.JK, (0, 2, 0): Direction.IK, (0, 0, 2): Direction.IJ}
_VERTEX_NEIGHBOR = {(2, 0, 0): (1, 0, 0), (0, 2, 0): (0, 1, 0), (0, 0, 2): (0, 0, 1)}

# sectors around a pentagon in its home lattice, starting at the home face
# and moving across the home face's IJ edge; K is the deleted sector
_PENT_SECTORS = (Direction.JK, Direction.J, Direction.IJ, Direction.I, Direction.IK)

# counter-clockwise order of the six directions, and of the five pentagon sectors
_HEX_CYCLE = (Direction.I, Direction.IJ, Direction.J, Direction.JK, Direction.K, Direction.IK)
_PENT_CYCLE = (Direction.IK, Direction.I, Direction.IJ, Direction.J, Direction.JK)


def _edges_at(pos: IJK) -> List[Quadrant]:
    """Face edges a lattice point on the face boundary lies on."""
    edges = []
    if pos[2] == 0:
        edges.append(Quadrant.IJ)
    if pos[0] == 0:
        edges.append(Quadrant.JK)
    if pos[1] == 0:
        edges.append(Quadrant.KI)
    return edges


def _cluster_face_points() -> List[List[FaceLattice]]:
    """Group per-face lattice points that are the same point on the sphere."""
    parent: Dict[FaceLattice, FaceLattice] = {}

    def find(node: FaceLattice) -> FaceLattice:
        while parent[node] != node:
            parent[node] = parent[parent[node]]
            node = parent[node]
        return node

    for face in range(NUM_ICOSA_FACES):
        for pos in _FACE_POINTS:
            parent[(face, pos)] = (face, pos)

    for face in range(NUM_ICOSA_FACES):
        for pos in _EDGES + _VERTICES:
            for quadrant in _edges_at(pos):
                other = transform_to_neighbor(face, pos, quadrant, 1)
                if other not in parent:
                    raise RuntimeError(f"Face {face} point {pos} maps off-lattice to {other}")
                a, b = find((face, pos)), find(other)
                if a != b:
                    parent[b] = a

    groups: Dict[FaceLattice, List[FaceLattice]] = {}
    for node in parent:
        groups.setdefault(find(node), []).append(node)
    return [sorted(members) for members in groups.values()]


# ============================================================================
# HOME PLACEMENTS
# ============================================================================

# Home face and lattice point of each base cell in base cell order, with the
# faces a pentagon is entered from with a clockwise rotation. The numbering
# and home faces are the published reference placement, so indexes and hex
# strings interoperate with other H3 engines.
BASE_CELL_HOMES: Tuple[Tuple[int, IJK, Tuple[int, ...]], ...] = (
    (1, (1, 0, 0), ()),  # 0
    (2, (1, 1, 0), ()),  # 1
    (1, (0, 0, 0), ()),  # 2
    (2, (1, 0, 0), ()),  # 3
    (0, (2, 0, 0), ()),  # 4
    (1, (1, 1, 0), ()),  # 5
    (1, (0, 0, 1), ()),  # 6
    (2, (0, 0, 0), ()),  # 7
    (0, (1, 0, 0), ()),  # 8
    (2, (0, 1, 0), ()),  # 9
    (1, (0, 1, 0), ()),  # 10
    (1, (0, 1, 1), ()),  # 11
    (3, (1, 0, 0), ()),  # 12
    (3, (1, 1, 0), ()),  # 13
    (11, (2, 0, 0), (2, 6)),  # 14
    (4, (1, 0, 0), ()),  # 15
    (0, (0, 0, 0), ()),  # 16
    (6, (0, 1, 0), ()),  # 17
    (0, (0, 0, 1), ()),  # 18
    (2, (0, 1, 1), ()),  # 19
    (7, (0, 0, 1), ()),  # 20
    (2, (0, 0, 1), ()),  # 21
    (0, (1, 1, 0), ()),  # 22
    (6, (0, 0, 1), ()),  # 23
    (10, (2, 0, 0), (1, 5)),  # 24
    (6, (0, 0, 0), ()),  # 25
    (3, (0, 0, 0), ()),  # 26
    (11, (1, 0, 0), ()),  # 27
    (4, (1, 1, 0), ()),  # 28
    (3, (0, 1, 0), ()),  # 29
    (0, (0, 1, 1), ()),  # 30
    (4, (0, 0, 0), ()),  # 31
    (5, (0, 1, 0), ()),  # 32
    (0, (0, 1, 0), ()),  # 33
    (7, (0, 1, 0), ()),  # 34
    (11, (1, 1, 0), ()),  # 35
    (7, (0, 0, 0), ()),  # 36
    (10, (1, 0, 0), ()),  # 37
    (12, (2, 0, 0), (3, 7)),  # 38
    (6, (1, 0, 1), ()),  # 39
    (7, (1, 0, 1), ()),  # 40
    (4, (0, 0, 1), ()),  # 41
    (3, (0, 0, 1), ()),  # 42
    (3, (0, 1, 1), ()),  # 43
    (4, (0, 1, 0), ()),  # 44
    (6, (1, 0, 0), ()),  # 45
    (11, (0, 0, 0), ()),  # 46
    (8, (0, 0, 1), ()),  # 47
    (5, (0, 0, 1), ()),  # 48
    (14, (2, 0, 0), (0, 9)),  # 49
    (5, (0, 0, 0), ()),  # 50
    (12, (1, 0, 0), ()),  # 51
    (10, (1, 1, 0), ()),  # 52
    (4, (0, 1, 1), ()),  # 53
    (12, (1, 1, 0), ()),  # 54
    (7, (1, 0, 0), ()),  # 55
    (11, (0, 1, 0), ()),  # 56
    (10, (0, 0, 0), ()),  # 57
    (13, (2, 0, 0), (4, 8)),  # 58
    (10, (0, 0, 1), ()),  # 59
    (11, (0, 0, 1), ()),  # 60
    (9, (0, 1, 0), ()),  # 61
    (8, (0, 1, 0), ()),  # 62
    (6, (2, 0, 0), (11, 15)),  # 63
    (8, (0, 0, 0), ()),  # 64
    (9, (0, 0, 1), ()),  # 65
    (14, (1, 0, 0), ()),  # 66
    (5, (1, 0, 1), ()),  # 67
    (16, (0, 1, 1), ()),  # 68
    (8, (1, 0, 1), ()),  # 69
    (5, (1, 0, 0), ()),  # 70
    (12, (0, 0, 0), ()),  # 71
    (7, (2, 0, 0), (12, 16)),  # 72
    (12, (0, 1, 0), ()),  # 73
    (10, (0, 1, 0), ()),  # 74
    (9, (0, 0, 0), ()),  # 75
    (13, (1, 0, 0), ()),  # 76
    (16, (0, 0, 1), ()),  # 77
    (15, (0, 1, 1), ()),  # 78
    (15, (0, 1, 0), ()),  # 79
    (16, (0, 1, 0), ()),  # 80
    (14, (1, 1, 0), ()),  # 81
    (13, (1, 1, 0), ()),  # 82
    (5, (2, 0, 0), (10, 19)),  # 83
    (8, (1, 0, 0), ()),  # 84
    (14, (0, 0, 0), ()),  # 85
    (9, (1, 0, 1), ()),  # 86
    (14, (0, 0, 1), ()),  # 87
    (17, (0, 0, 1), ()),  # 88
    (12, (0, 0, 1), ()),  # 89
    (16, (0, 0, 0), ()),  # 90
    (17, (0, 1, 1), ()),  # 91
    (15, (0, 0, 1), ()),  # 92
    (16, (1, 0, 1), ()),  # 93
    (9, (1, 0, 0), ()),  # 94
    (15, (0, 0, 0), ()),  # 95
    (13, (0, 0, 0), ()),  # 96
    (8, (2, 0, 0), (13, 17)),  # 97
    (13, (0, 1, 0), ()),  # 98
    (17, (1, 0, 1), ()),  # 99
    (19, (0, 1, 0), ()),  # 100
    (14, (0, 1, 0), ()),  # 101
    (19, (0, 1, 1), ()),  # 102
    (17, (0, 1, 0), ()),  # 103
    (13, (0, 0, 1), ()),  # 104
    (17, (0, 0, 0), ()),  # 105
    (16, (1, 0, 0), ()),  # 106
    (9, (2, 0, 0), (14, 18)),  # 107
    (15, (1, 0, 1), ()),  # 108
    (15, (1, 0, 0), ()),  # 109
    (18, (0, 1, 1), ()),  # 110
    (18, (0, 0, 1), ()),  # 111
    (19, (0, 0, 1), ()),  # 112
    (17, (1, 0, 0), ()),  # 113
    (19, (1, 0, 1), ()),  # 114
    (18, (0, 1, 0), ()),  # 115
    (18, (1, 0, 1), ()),  # 116
    (19, (2, 0, 0), ()),  # 117
    (19, (0, 0, 0), ()),  # 118
    (18, (0, 0, 0), ()),  # 119
    (19, (1, 0, 0), ()),  # 120
    (18, (1, 0, 0), ()),  # 121
)


def _faces_around_pentagon(home: int, vertex_on: Dict[int, IJK]) -> List[int]:
    """Faces around a pentagon in sector order starting from its home face."""
    order = [home]
    prev, cur = home, FACE_NEIGHBORS[home][Quadrant.IJ].face
    while cur != home:
        order.append(cur)
        nxt = [
            FACE_NEIGHBORS[cur][q].face
            for q in _edges_at(vertex_on[cur])
            if FACE_NEIGHBORS[cur][q].face != prev
        ]
        prev, cur = cur, nxt[0]
        if len(order) > len(_PENT_SECTORS):
            raise RuntimeError(f"Walk around pentagon on face {home} did not close")
    return order


# ============================================================================
# TABLE CONSTRUCTION
# ============================================================================

class _Tables(NamedTuple):
    base_cells: Tuple[BaseCell, ...]
    face_ijk_base_cells: Dict[FaceLattice, Tuple[int, int]]
    neighbors: Tuple[Tuple[int, ...], ...]
    neighbor_rotations: Tuple[Tuple[int, ...], ...]


def _build_tables() -> _Tables:
    clusters = _cluster_face_points()
    if len(clusters) != NUM_BASE_CELLS:
        raise RuntimeError(f"Expected {NUM_BASE_CELLS} base cells, found {len(clusters)}")

    cluster_of = {member: members for members in clusters for member in members}
    if len(BASE_CELL_HOMES) != NUM_BASE_CELLS:
        raise RuntimeError(f"Expected {NUM_BASE_CELLS} home placements, found {len(BASE_CELL_HOMES)}")

    base_cells: List[BaseCell] = []
    lattice_to_cell: Dict[FaceLattice, int] = {}
    sectors: Dict[int, Dict[int, Direction]] = {}
    vertex_positions: Dict[int, Dict[int, IJK]] = {}

    for number, (home_face, home_ijk, cw_offset) in enumerate(BASE_CELL_HOMES):
        members = cluster_of[(home_face, home_ijk)]
        if any(member in lattice_to_cell for member in members):
            raise RuntimeError(f"Base cell {number} shares its lattice point with another base cell")
        is_pentagon = len(members) > 2
        if is_pentagon:
            vertex_on = {face: pos for face, pos in members}
            around = _faces_around_pentagon(home_face, vertex_on)
            sectors[number] = dict(zip(around, _PENT_SECTORS))
            vertex_positions[number] = vertex_on
        base_cells.append(BaseCell(number, home_face, home_ijk, is_pentagon, cw_offset))
        for member in members:
            lattice_to_cell[member] = number

    # per-face lookup for points on the face
    face_table: Dict[FaceLattice, Tuple[int, int]] = {}
    for (face, pos), number in lattice_to_cell.items():
        cell = base_cells[number]
        if cell.is_pentagon:
            inward = _VERTEX_INWARD[pos]
            target = sectors[number][face]
            rot = (_PENT_CYCLE.index(target) - _PENT_CYCLE.index(inward)) % 5
        elif cell.face == face:
            rot = 0
        else:
            rot = FACE_NEIGHBORS[face][ADJACENT_FACE_DIR[face][cell.face]].ccw_rot60
        face_table[(face, pos)] = (number, rot)

    # points just past a face edge resolve through the neighbouring face
    for face in range(NUM_ICOSA_FACES):
        for i in range(MAX_FACE_COORD + 1):
            for j in range(MAX_FACE_COORD + 1):
                for k in range(MAX_FACE_COORD + 1):
                    pos = ijk_normalize((i, j, k))
                    if (face, pos) in face_table:
                        continue
                    quadrant = quadrant_of(pos)
                    orient = FACE_NEIGHBORS[face][quadrant]
                    other = transform_to_neighbor(face, pos, quadrant, 1)
                    number, rot = face_table[other]
                    if base_cells[number].is_pentagon:
                        raise RuntimeError(f"Face {face} overage point {pos} resolves to a pentagon")
                    face_table[(face, pos)] = (number, (orient.ccw_rot60 + rot) % 6)

    neighbors: List[Tuple[int, ...]] = []
    rotations: List[Tuple[int, ...]] = []
    for cell in base_cells:
        row = [cell.number]
        rots = [0]
        for direction in range(1, len(UNIT_VECS)):
            if not cell.is_pentagon:
                number, rot = face_table[(cell.face, ijk_normalize(ijk_add(cell.ijk, UNIT_VECS[direction])))]
            elif direction == Direction.K:
                number, rot = INVALID_BASE_CELL, -1
            else:
                face = next(f for f, s in sectors[cell.number].items() if s == direction)
                vertex = vertex_positions[cell.number][face]
                number, rot_in = face_table[(face, _VERTEX_NEIGHBOR[vertex])]
                inward = _VERTEX_INWARD[vertex]
                rot = (_HEX_CYCLE.index(inward) - _HEX_CYCLE.index(Direction(direction)) + rot_in) % 6
            row.append(number)
            rots.append(rot)
        neighbors.append(tuple(row))
        rotations.append(tuple(rots))

    num_pentagons = sum(cell.is_pentagon for cell in base_cells)
    if num_pentagons != NUM_PENTAGONS:
        raise RuntimeError(f"Expected {NUM_PENTAGONS} pentagons, found {num_pentagons}")

    logger.debug(
        f"Built {len(base_cells)} base cells ({num_pentagons} pentagons), "
        f"{len(face_table)} face lattice entries"
    )
    return _Tables(tuple(base_cells), face_table, tuple(neighbors), tuple(rotations))


_TABLES = _build_tables()

BASE_CELLS: Tuple[BaseCell, ...] = _TABLES.base_cells
FACE_IJK_BASE_CELLS = MappingProxyType(_TABLES.face_ijk_base_cells)
BASE_CELL_NEIGHBORS: Tuple[Tuple[int, ...], ...] = _TABLES.neighbors
BASE_CELL_NEIGHBOR_ROTATIONS: Tuple[Tuple[int, ...], ...] = _TABLES.neighbor_rotations
PENTAGON_BASE_CELLS: Tuple[int, ...] = tuple(cell.number for cell in BASE_CELLS if cell.is_pentagon)

# polar pentagons touch five faces at their i-vertex
POLAR_PENTAGON_BASE_CELLS: Tuple[int, ...] = (PENTAGON_BASE_CELLS[0], PENTAGON_BASE_CELLS[-1])


# ============================================================================
# LOOKUPS
# ============================================================================

def is_base_cell_pentagon(number: int) -> bool:
    return BASE_CELLS[number].is_pentagon


def base_cell_is_cw_offset(number: int, face: int) -> bool:
    """True when entering a pentagon from this face rotates clockwise."""
    return face in BASE_CELLS[number].cw_offset_faces


def face_ijk_to_base_cell(face: int, c: IJK) -> Tuple[int, int]:
    """
    Base cell at a resolution 0 lattice point of a face.

    Returns:
        (base cell number, ccw 60 degree rotations into its home lattice)
    """
    return FACE_IJK_BASE_CELLS[(face, ijk_normalize(c))]


def base_cell_direction(origin: int, neighbor: int) -> int:
    """Direction from one base cell to an adjacent one, INVALID if not adjacent."""
    for direction, number in enumerate(BASE_CELL_NEIGHBORS[origin]):
        if number == neighbor:
            return direction
    return Direction.INVALID
