"""Coordinate helpers shared by the board, solver, generator and hint index."""

from typing import Dict, List, NamedTuple, Tuple


class Position(NamedTuple):
    """A (row, col) grid coordinate. Hashable, so it doubles as a set key."""

    row: int
    col: int


Neighborhoods = Dict[Position, Tuple[Position, ...]]

# Module-level cache: (rows, cols) -> {Position: (Position, ...), ...}
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Neighborhoods] = {}


def get_neighborhoods(rows: int, cols: int) -> Neighborhoods:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Args:
        rows: Grid height (number of rows). Must be positive.
        cols: Grid width (number of columns). Must be positive.

    Returns:
        Mapping from each Position to a tuple of valid neighboring
        Positions under 8-connectivity. Boundary cells have fewer neighbors.

    Raises:
        ValueError: If rows or cols is non-positive.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Neighborhoods = {}
    for row in range(rows):
        for col in range(cols):
            nbrs: List[Position] = []
            for d_row in (-1, 0, 1):
                for d_col in (-1, 0, 1):
                    if d_row == 0 and d_col == 0:
                        continue
                    n_row, n_col = row + d_row, col + d_col
                    if 0 <= n_row < rows and 0 <= n_col < cols:
                        nbrs.append(Position(n_row, n_col))
            neighborhoods[Position(row, col)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def position_key(row: int, col: int) -> str:
    """Return the canonical "row-col" string key for a cell."""
    return f"{row}-{col}"


def parse_position_key(key: str) -> Position:
    """
    Convert a "row-col" key back into a Position.

    Raises:
        ValueError: If the key is not two dash-separated integers.
    """
    parts = key.split("-")
    if len(parts) != 2:
        raise ValueError(f"Malformed position key: {key!r}")
    return Position(int(parts[0]), int(parts[1]))
