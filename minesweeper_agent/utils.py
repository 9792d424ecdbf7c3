"""Grid geometry shared by the agent's board and the reference host."""

from typing import Dict, Tuple

Coord = Tuple[int, int]

Neighborhoods = Dict[Coord, Tuple[Coord, ...]]

# Offsets of the 8 surrounding cells, already in row-major order.
_OFFSETS: Tuple[Coord, ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)

_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Neighborhoods] = {}


def row_major(cell: Coord) -> Tuple[int, int]:
    """Sort key ordering cells row by row, left to right."""
    return cell[1], cell[0]


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def get_neighborhoods(width: int, height: int) -> Neighborhoods:
    """
    Return the 8-neighbors of every cell of a width x height grid.

    Tables are built once per grid size and shared, so callers must treat
    them as read-only.

    Raises:
        ValueError: If width or height is non-positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    table = _NEIGHBORHOODS_CACHE.get((width, height))
    if table is None:
        table = {
            (x, y): tuple(
                (x + dx, y + dy) for dx, dy in _OFFSETS if in_bounds(x + dx, y + dy, width, height)
            )
            for y in range(height)
            for x in range(width)
        }
        _NEIGHBORHOODS_CACHE[(width, height)] = table
    return table
