"""
Hierarchy Navigation
====================

Parent and child traversal across resolutions. These operations only touch
the index digits; no geometry is recomputed.

Child counts follow the aperture-7 tree:
- Hexagon: 7^n descendants n levels down
- Pentagon: 1 + 5 * (7^n - 1) / 6, since the pentagonal centre child has no
  K branch at any level while its hexagonal children branch fully
"""

from typing import Iterator, List

from .errors import InvalidResolutionError
from .ijk import NUM_DIGITS, Direction
from .index import (
    get_resolution,
    is_pentagon,
    require_resolution,
    require_valid_cell,
    set_digit,
    set_resolution,
)


def _require_finer(h: int, res: int) -> int:
    require_resolution(res)
    current = get_resolution(h)
    if res < current:
        raise InvalidResolutionError(f"Child resolution {res} is coarser than cell resolution {current}")
    return current


def parent(h: int, res: int) -> int:
    """
    Ancestor of a cell at a coarser (or equal) resolution.

    Raises:
        InvalidIndexError: If h is not a valid cell
        InvalidResolutionError: If res is out of range or finer than the cell
    """
    require_valid_cell(h)
    require_resolution(res)
    current = get_resolution(h)
    if res > current:
        raise InvalidResolutionError(f"Parent resolution {res} is finer than cell resolution {current}")

    result = set_resolution(h, res)
    for r in range(res + 1, current + 1):
        result = set_digit(result, r, Direction.INVALID)
    return require_valid_cell(result)


def child_count(h: int, res: int) -> int:
    """
    Number of descendants of a cell at a finer resolution.

    Examples:
        - Hexagon, 2 levels down: 7^2 = 49
        - Pentagon, 2 levels down: 1 + 5 * 48 / 6 = 41
    """
    require_valid_cell(h)
    n = res - _require_finer(h, res)
    if is_pentagon(h):
        return 1 + 5 * (7 ** n - 1) // 6
    return 7 ** n


def _iter_children(h: int, current: int, res: int) -> Iterator[int]:
    if current == res:
        yield require_valid_cell(h)
        return
    skip_k = is_pentagon(h)
    child = set_resolution(h, current + 1)
    for digit in range(NUM_DIGITS):
        if skip_k and digit == Direction.K:
            continue
        yield from _iter_children(set_digit(child, current + 1, digit), current + 1, res)


def iter_children(h: int, res: int) -> Iterator[int]:
    """Lazily yield descendants in ascending digit order."""
    require_valid_cell(h)
    current = _require_finer(h, res)
    return _iter_children(h, current, res)


def children(h: int, res: int) -> List[int]:
    """
    All descendants of a cell at a resolution, in ascending digit order.

    Raises:
        InvalidIndexError: If h is not a valid cell
        InvalidResolutionError: If res is out of range or coarser than the cell
    """
    return list(iter_children(h, res))


def center_child(h: int, res: int) -> int:
    """Descendant that shares the cell's centre."""
    require_valid_cell(h)
    current = _require_finer(h, res)
    result = set_resolution(h, res)
    for r in range(current + 1, res + 1):
        result = set_digit(result, r, Direction.CENTER)
    return require_valid_cell(result)
