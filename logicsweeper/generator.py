"""Random board generation and safe-zone-preserving mutation."""

import math
import random
from typing import List, Optional

from .board import Board, compute_adjacency, create_empty_board
from .utils import Position


def generate_random_board(
    rows: int,
    cols: int,
    bomb_count: int,
    safe: Position,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Build a random board with bombs placed anywhere except the safe cell.

    Neighbors of ``safe`` may hold bombs; callers that need an opening
    region filter on the safe cell's adjacency.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        bomb_count: Bombs to place. If it exceeds the number of cells other
            than ``safe``, every such cell becomes a bomb.
        safe: The first-click cell, never a bomb.
        rng: Random source; a fresh unseeded generator when omitted.

    Returns:
        A new board with adjacency counts computed.
    """
    rng = rng if rng is not None else random.Random()
    board = create_empty_board(rows, cols)

    eligible: List[Position] = [
        Position(row, col)
        for row in range(rows)
        for col in range(cols)
        if (row, col) != safe
    ]

    # Sample mines uniformly without replacement.
    for pos in rng.sample(eligible, min(bomb_count, len(eligible))):
        board.cell(pos).is_bomb = True

    compute_adjacency(board)
    return board


def is_in_safe_zone(row: int, col: int, safe: Position) -> bool:
    """Return True for cells in the 3x3 block centered on ``safe``."""
    return abs(row - safe.row) <= 1 and abs(col - safe.col) <= 1


def swap_count_for(bomb_count: int, percent: float) -> int:
    """Number of bomb/non-bomb swaps per mutation: ``percent`` of the bombs, at least 1."""
    return max(1, math.ceil(bomb_count * percent / 100))


def mutate_board(
    parent: Board,
    safe: Position,
    swap_count: int,
    rng: Optional[random.Random] = None,
) -> Optional[Board]:
    """
    Derive a nearby board by moving ``swap_count`` bombs outside the safe zone.

    Each swap turns a distinct bomb into a non-bomb and a distinct non-bomb
    into a bomb, so the total bomb count is preserved. Cells within the 3x3
    safe zone are never touched, and the parent board is never modified.

    Args:
        parent: Board whose bomb layout is copied.
        safe: The first-click cell anchoring the safe zone.
        swap_count: Number of paired swaps, must be >= 1.
        rng: Random source; a fresh unseeded generator when omitted.

    Returns:
        The mutated board, or None if fewer than ``swap_count`` bombs or
        non-bombs exist outside the safe zone.

    Raises:
        ValueError: If swap_count is less than 1.
    """
    if swap_count < 1:
        raise ValueError("swap_count must be at least 1.")

    rng = rng if rng is not None else random.Random()

    bombs: List[Position] = []
    empties: List[Position] = []
    for cell in parent.iter_cells():
        if is_in_safe_zone(cell.row, cell.col, safe):
            continue
        if cell.is_bomb:
            bombs.append(Position(cell.row, cell.col))
        else:
            empties.append(Position(cell.row, cell.col))

    if len(bombs) < swap_count or len(empties) < swap_count:
        return None

    child = parent.copy_layout()
    for pos in rng.sample(bombs, swap_count):
        child.cell(pos).is_bomb = False
    for pos in rng.sample(empties, swap_count):
        child.cell(pos).is_bomb = True

    compute_adjacency(child)
    return child
