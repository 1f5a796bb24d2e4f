"""
Cell Index Layout
=================

Bit-level access to 64-bit grid indexes, index validation and the canonical
hexadecimal string form.

Layout (most significant first):
- 1 reserved high bit (0)
- 4 bit mode (1 = cell, 2 = directed edge, 4 = vertex)
- 3 reserved bits (0 for cells; edge direction or vertex number otherwise)
- 4 bit resolution (0-15)
- 7 bit base cell (0-121)
- 15 digits of 3 bits, resolution 1 first; digits past the resolution are 7

Indexes are plain Python ints.
"""

import re
from typing import Iterator

from .base_cells import is_base_cell_pentagon
from .constants import MAX_RES, NUM_BASE_CELLS
from .errors import InvalidIndexError, InvalidResolutionError, MalformedStringError
from .ijk import NUM_DIGITS, Direction, rotate60ccw, rotate60cw

NULL_INDEX = 0

CELL_MODE = 1
DIRECTED_EDGE_MODE = 2
VERTEX_MODE = 4

_MAX_UINT64 = (1 << 64) - 1

_HIGH_BIT_OFFSET = 63
_MODE_OFFSET = 59
_RESERVED_OFFSET = 56
_RES_OFFSET = 52
_BC_OFFSET = 45
_PER_DIGIT_OFFSET = 3

_MODE_MASK = 0xF << _MODE_OFFSET
_RESERVED_MASK = 0x7 << _RESERVED_OFFSET
_RES_MASK = 0xF << _RES_OFFSET
_BC_MASK = 0x7F << _BC_OFFSET
_DIGIT_MASK = 0x7

# mode 0, resolution 0, base cell 0, every digit 7
_INIT = (1 << _BC_OFFSET) - 1

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{1,16}")


# ============================================================================
# FIELD ACCESS
# ============================================================================

def get_high_bit(h: int) -> int:
    return (h >> _HIGH_BIT_OFFSET) & 1


def get_mode(h: int) -> int:
    return (h & _MODE_MASK) >> _MODE_OFFSET


def set_mode(h: int, mode: int) -> int:
    return (h & ~_MODE_MASK) | (mode << _MODE_OFFSET)


def get_reserved_bits(h: int) -> int:
    return (h & _RESERVED_MASK) >> _RESERVED_OFFSET


def set_reserved_bits(h: int, value: int) -> int:
    return (h & ~_RESERVED_MASK) | (value << _RESERVED_OFFSET)


def get_resolution(h: int) -> int:
    return (h & _RES_MASK) >> _RES_OFFSET


def set_resolution(h: int, res: int) -> int:
    return (h & ~_RES_MASK) | (res << _RES_OFFSET)


def get_base_cell(h: int) -> int:
    return (h & _BC_MASK) >> _BC_OFFSET


def set_base_cell(h: int, number: int) -> int:
    return (h & ~_BC_MASK) | (number << _BC_OFFSET)


def _digit_offset(res: int) -> int:
    return (MAX_RES - res) * _PER_DIGIT_OFFSET


def get_digit(h: int, res: int) -> int:
    return (h >> _digit_offset(res)) & _DIGIT_MASK


def set_digit(h: int, res: int, digit: int) -> int:
    offset = _digit_offset(res)
    return (h & ~(_DIGIT_MASK << offset)) | (digit << offset)


def new_cell(res: int, base_cell: int, init_digit: int = Direction.INVALID) -> int:
    """Cell index with every digit up to res set to init_digit."""
    h = set_resolution(set_mode(_INIT, CELL_MODE), res)
    h = set_base_cell(h, base_cell)
    for r in range(1, res + 1):
        h = set_digit(h, r, init_digit)
    return h


def digits(h: int) -> Iterator[int]:
    """Digits from resolution 1 down to the index resolution."""
    for r in range(1, get_resolution(h) + 1):
        yield get_digit(h, r)


def leading_nonzero_digit(h: int) -> int:
    for digit in digits(h):
        if digit != Direction.CENTER:
            return digit
    return Direction.CENTER


# ============================================================================
# ROTATION
# ============================================================================

def rotate60ccw_index(h: int) -> int:
    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate60ccw(get_digit(h, r)))
    return h


def rotate60cw_index(h: int) -> int:
    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate60cw(get_digit(h, r)))
    return h


def rotate_pent60ccw(h: int) -> int:
    """Rotate a pentagon-lineage index, stepping over the deleted K sector."""
    found_first_nonzero = False
    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate60ccw(get_digit(h, r)))
        if not found_first_nonzero and get_digit(h, r) != Direction.CENTER:
            found_first_nonzero = True
            if leading_nonzero_digit(h) == Direction.K:
                h = rotate60ccw_index(h)
    return h


def rotate_pent60cw(h: int) -> int:
    found_first_nonzero = False
    for r in range(1, get_resolution(h) + 1):
        h = set_digit(h, r, rotate60cw(get_digit(h, r)))
        if not found_first_nonzero and get_digit(h, r) != Direction.CENTER:
            found_first_nonzero = True
            if leading_nonzero_digit(h) == Direction.K:
                h = rotate60cw_index(h)
    return h


# ============================================================================
# VALIDATION
# ============================================================================

def _is_index_int(h) -> bool:
    return isinstance(h, int) and not isinstance(h, bool) and 0 <= h <= _MAX_UINT64


def _digits_well_formed(h: int, pentagon_rule: bool) -> bool:
    if get_base_cell(h) >= NUM_BASE_CELLS:
        return False
    res = get_resolution(h)
    pentagon = pentagon_rule and is_base_cell_pentagon(get_base_cell(h))
    found_first_nonzero = False
    for r in range(1, res + 1):
        digit = get_digit(h, r)
        if digit >= NUM_DIGITS:
            return False
        if not found_first_nonzero and digit != Direction.CENTER:
            found_first_nonzero = True
            if pentagon and digit == Direction.K:
                return False
    for r in range(res + 1, MAX_RES + 1):
        if get_digit(h, r) != Direction.INVALID:
            return False
    return True


def is_valid_cell(h) -> bool:
    """
    Check that a value is a well-formed cell index.

    Rejects a set high bit, a non-cell mode, non-zero reserved bits, base cells
    past 121, digits outside 0-6 below the resolution, non-sentinel digits past
    it, and a pentagon whose first non-zero digit is K.
    """
    if not _is_index_int(h):
        return False
    if get_high_bit(h) != 0 or get_mode(h) != CELL_MODE or get_reserved_bits(h) != 0:
        return False
    return _digits_well_formed(h, pentagon_rule=True)


def is_valid_index(h) -> bool:
    """
    Structural check accepting cell, directed edge and vertex indexes.

    Only the layout is checked; the pentagon digit rule is not applied.
    """
    if not _is_index_int(h) or get_high_bit(h) != 0:
        return False
    mode = get_mode(h)
    reserved = get_reserved_bits(h)
    if mode == CELL_MODE:
        if reserved != 0:
            return False
    elif mode == DIRECTED_EDGE_MODE:
        if not Direction.K <= reserved <= Direction.IJ:
            return False
    elif mode == VERTEX_MODE:
        if reserved > 5:
            return False
    else:
        return False
    return _digits_well_formed(h, pentagon_rule=False)


def require_valid_cell(h) -> int:
    if not is_valid_cell(h):
        shown = f"{h:x}" if _is_index_int(h) else repr(h)
        raise InvalidIndexError(f"Invalid cell index {shown}")
    return h


def require_resolution(res) -> int:
    if isinstance(res, bool) or not isinstance(res, int) or not 0 <= res <= MAX_RES:
        raise InvalidResolutionError(f"Resolution {res!r} outside [0, {MAX_RES}]")
    return res


def is_pentagon(h: int) -> bool:
    """True for the pentagonal cells: a pentagon base cell with all digits 0."""
    return is_base_cell_pentagon(get_base_cell(h)) and leading_nonzero_digit(h) == Direction.CENTER


# ============================================================================
# STRING FORM
# ============================================================================

def to_string(h: int) -> str:
    """Lowercase hexadecimal without prefix or padding."""
    if not _is_index_int(h):
        raise InvalidIndexError(f"Index {h!r} is not a 64-bit unsigned integer")
    return format(h, "x")


def from_string(text: str) -> int:
    """
    Parse the hexadecimal form of an index.

    Raises:
        MalformedStringError: On empty input, non-hex characters or more than 16 digits
    """
    if not isinstance(text, str):
        raise MalformedStringError(f"Expected a string, got {type(text).__name__}")
    if not _HEX_PATTERN.fullmatch(text):
        raise MalformedStringError(f"Malformed index string {text!r}")
    return int(text, 16)
