"""
Hexagonal IJK Coordinates
=========================

Integer coordinates on a hexagonal lattice using three axes (i, j, k) spaced
120 degrees apart, plus the aperture-7 and aperture-3 moves between
resolutions.

Coordinates are plain ``(i, j, k)`` tuples. A normalized coordinate has no
negative component and at least one zero component.

Aperture-7 alternation:
- Class II resolutions (even) are aligned with the icosahedron face axes
- Class III resolutions (odd) are rotated by asin(sqrt(3/28))
- Moving to a Class III child uses the counter-clockwise step (down_ap7),
  moving to a Class II child the clockwise step (down_ap7r)
"""

from enum import IntEnum
from typing import Dict, Tuple

from .constants import M_RSIN60, M_SQRT3_2

IJK = Tuple[int, int, int]


class Direction(IntEnum):
    """Digit values and the unit vectors they name."""
    CENTER = 0
    K = 1
    J = 2
    JK = 3
    I = 4  # noqa: E741
    IK = 5
    IJ = 6
    INVALID = 7


NUM_DIGITS = 7

# digit d is the unit vector with i, j, k taken from the bits of d
UNIT_VECS: Tuple[IJK, ...] = tuple(((d >> 2) & 1, (d >> 1) & 1, d & 1) for d in range(NUM_DIGITS))


# ============================================================================
# ARITHMETIC
# ============================================================================

def ijk_add(a: IJK, b: IJK) -> IJK:
    return a[0] + b[0], a[1] + b[1], a[2] + b[2]


def ijk_sub(a: IJK, b: IJK) -> IJK:
    return a[0] - b[0], a[1] - b[1], a[2] - b[2]


def ijk_scale(a: IJK, factor: int) -> IJK:
    return a[0] * factor, a[1] * factor, a[2] * factor


def ijk_normalize(c: IJK) -> IJK:
    """Remove negative components and then the shared minimum."""
    i, j, k = c
    if i < 0:
        j -= i
        k -= i
        i = 0
    if j < 0:
        i -= j
        k -= j
        j = 0
    if k < 0:
        i -= k
        j -= k
        k = 0
    m = min(i, j, k)
    if m > 0:
        i -= m
        j -= m
        k -= m
    return i, j, k


def _combine(c: IJK, i_vec: IJK, j_vec: IJK, k_vec: IJK) -> IJK:
    i, j, k = c
    return ijk_normalize((
        i * i_vec[0] + j * j_vec[0] + k * k_vec[0],
        i * i_vec[1] + j * j_vec[1] + k * k_vec[1],
        i * i_vec[2] + j * j_vec[2] + k * k_vec[2],
    ))


def unit_ijk_to_digit(c: IJK) -> Direction:
    """Digit of a unit vector, or Direction.INVALID if c is not one."""
    c = ijk_normalize(c)
    for digit, vec in enumerate(UNIT_VECS):
        if vec == c:
            return Direction(digit)
    return Direction.INVALID


def ijk_distance(a: IJK, b: IJK) -> int:
    """Grid distance between two lattice coordinates."""
    diff = ijk_normalize(ijk_sub(a, b))
    return max(abs(diff[0]), abs(diff[1]), abs(diff[2]))


def neighbor(c: IJK, digit: int) -> IJK:
    """Step one cell in the given direction."""
    if Direction.CENTER < digit < NUM_DIGITS:
        return ijk_normalize(ijk_add(c, UNIT_VECS[digit]))
    return c


# ============================================================================
# APERTURE MOVES
# ============================================================================

def up_ap7(c: IJK) -> IJK:
    """Parent coordinate of a Class III cell (counter-clockwise aperture 7)."""
    i = c[0] - c[2]
    j = c[1] - c[2]
    return ijk_normalize((round((3 * i - j) / 7.0), round((i + 2 * j) / 7.0), 0))


def up_ap7r(c: IJK) -> IJK:
    """Parent coordinate of a Class II cell (clockwise aperture 7)."""
    i = c[0] - c[2]
    j = c[1] - c[2]
    return ijk_normalize((round((2 * i + j) / 7.0), round((3 * j - i) / 7.0), 0))


def down_ap7(c: IJK) -> IJK:
    return _combine(c, (3, 0, 1), (1, 3, 0), (0, 1, 3))


def down_ap7r(c: IJK) -> IJK:
    return _combine(c, (3, 1, 0), (0, 3, 1), (1, 0, 3))


def down_ap3(c: IJK) -> IJK:
    return _combine(c, (2, 0, 1), (1, 2, 0), (0, 1, 2))


def down_ap3r(c: IJK) -> IJK:
    return _combine(c, (2, 1, 0), (0, 2, 1), (1, 0, 2))


# ============================================================================
# ROTATIONS
# ============================================================================

def ijk_rotate60ccw(c: IJK) -> IJK:
    return _combine(c, (1, 1, 0), (0, 1, 1), (1, 0, 1))


def ijk_rotate60cw(c: IJK) -> IJK:
    return _combine(c, (1, 0, 1), (1, 1, 0), (0, 1, 1))


_CCW = {
    Direction.K: Direction.IK,
    Direction.IK: Direction.I,
    Direction.I: Direction.IJ,
    Direction.IJ: Direction.J,
    Direction.J: Direction.JK,
    Direction.JK: Direction.K,
}
_CW = {v: k for k, v in _CCW.items()}


def rotate60ccw(digit: int) -> int:
    return _CCW.get(digit, digit)


def rotate60cw(digit: int) -> int:
    return _CW.get(digit, digit)


# ============================================================================
# PLANAR CONVERSION
# ============================================================================

def ijk_to_hex2d(c: IJK) -> Tuple[float, float]:
    i = c[0] - c[2]
    j = c[1] - c[2]
    return i - 0.5 * j, j * M_SQRT3_2


def hex2d_to_ijk(x: float, y: float) -> IJK:
    """Lattice cell containing a planar point."""
    a1 = abs(x)
    a2 = abs(y)

    # reverse conversion
    x2 = a2 * M_RSIN60
    x1 = a1 + x2 / 2.0

    m1 = int(x1)
    m2 = int(x2)

    r1 = x1 - m1
    r2 = x2 - m2

    if r1 < 0.5:
        if r1 < 1.0 / 3.0:
            i = m1
            j = m2 if r2 < (1.0 + r1) / 2.0 else m2 + 1
        else:
            j = m2 if r2 < (1.0 - r1) else m2 + 1
            i = m1 + 1 if (1.0 - r1) <= r2 < (2.0 * r1) else m1
    else:
        if r1 < 2.0 / 3.0:
            j = m2 if r2 < (1.0 - r1) else m2 + 1
            i = m1 if (2.0 * r1 - 1.0) < r2 < (1.0 - r1) else m1 + 1
        else:
            i = m1 + 1
            j = m2 if r2 < (r1 / 2.0) else m2 + 1

    # fold across the axes
    if x < 0.0:
        if j % 2 == 0:
            axis_i = j // 2
            i = i - 2 * (i - axis_i)
        else:
            axis_i = (j + 1) // 2
            i = i - (2 * (i - axis_i) + 1)

    if y < 0.0:
        i = i - (2 * j + 1) // 2
        j = -j

    return ijk_normalize((i, j, 0))


# ============================================================================
# DIGIT STEPPING
# ============================================================================

def _build_digit_steps(class_iii: bool) -> Dict[Tuple[int, int], Tuple[int, int]]:
    """
    Digit arithmetic for moving one cell inside an aperture-7 family.

    Maps (current digit, direction) to (new digit, parent direction). The
    parent direction is CENTER when the move stays inside the same parent.
    """
    down = down_ap7 if class_iii else down_ap7r
    parent_centers = {d: down(UNIT_VECS[d]) for d in range(1, NUM_DIGITS)}
    steps = {}
    for digit in range(NUM_DIGITS):
        for direction in range(NUM_DIGITS):
            pos = ijk_normalize(ijk_add(UNIT_VECS[digit], UNIT_VECS[direction]))
            new_digit = unit_ijk_to_digit(pos)
            if new_digit != Direction.INVALID:
                steps[(digit, direction)] = (int(new_digit), int(Direction.CENTER))
                continue
            for parent_dir, center in parent_centers.items():
                new_digit = unit_ijk_to_digit(ijk_sub(pos, center))
                if new_digit != Direction.INVALID:
                    steps[(digit, direction)] = (int(new_digit), parent_dir)
                    break
            else:
                raise RuntimeError(f"No aperture-7 parent for digit {digit} direction {direction}")
    return steps


DIGIT_STEPS_CLASS_III = _build_digit_steps(class_iii=True)
DIGIT_STEPS_CLASS_II = _build_digit_steps(class_iii=False)


def is_class_iii(res: int) -> bool:
    return res % 2 == 1
