"""Grid model: cells, boards, adjacency counts and the live-play reveal/flag rules."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Set, Tuple

from .utils import Position, get_neighborhoods


@dataclass
class Cell:
    """One grid square. ``revealed``/``flagged`` only change during live play."""

    row: int
    col: int
    is_bomb: bool = False
    adjacent_bomb_count: int = 0
    revealed: bool = False
    flagged: bool = False


class Board:
    """A rows x cols grid of cells indexed ``cells[row][col]``."""

    def __init__(self, rows: int, cols: int) -> None:
        """
        Initialize an empty board.

        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.

        Raises:
            ValueError: If dimensions are invalid.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")

        self.rows: int = rows
        self.cols: int = cols
        self.cells: List[List[Cell]] = [
            [Cell(row, col) for col in range(cols)] for row in range(rows)
        ]
        self._neighborhoods = get_neighborhoods(rows, cols)

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, bombs={count_bombs(self)})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, position: Position) -> Cell:
        return self.cells[position.row][position.col]

    def neighbors(self, row: int, col: int) -> Tuple[Position, ...]:
        """Return precomputed neighbor coordinates for a cell."""
        return self._neighborhoods[Position(row, col)]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def bomb_positions(self) -> Set[Position]:
        return {Position(c.row, c.col) for c in self.iter_cells() if c.is_bomb}

    def copy_layout(self) -> "Board":
        """
        Return an independent board carrying only this board's bomb layout.

        Live-play state (revealed/flagged) is not copied, and adjacency is
        recomputed on the copy.
        """
        clone = Board(self.rows, self.cols)
        for cell in self.iter_cells():
            if cell.is_bomb:
                clone.cells[cell.row][cell.col].is_bomb = True
        compute_adjacency(clone)
        return clone


def create_empty_board(rows: int, cols: int) -> Board:
    """Create a board with no bombs and every count/flag zeroed."""
    return Board(rows, cols)


def compute_adjacency(board: Board) -> None:
    """Populate every non-mine cell with its adjacent mine count."""
    for cell in board.iter_cells():
        if cell.is_bomb:
            cell.adjacent_bomb_count = 0
            continue

        cell.adjacent_bomb_count = sum(
            1 for n in board.neighbors(cell.row, cell.col) if board.cell(n).is_bomb
        )


def count_bombs(board: Board) -> int:
    return sum(1 for cell in board.iter_cells() if cell.is_bomb)


# -----------------------------------------------------------------------------
# Live-play rules
# -----------------------------------------------------------------------------


def reveal_cell(board: Board, row: int, col: int) -> List[Position]:
    """
    Reveal a cell in place using Minesweeper flood fill rules.

    A flagged or already revealed cell is left alone. A bomb or a numbered
    cell is revealed on its own; a zero cell floods through every connected
    non-flagged, non-bomb neighbor.

    Args:
        board: The live-play board to update.
        row: Row of the cell to reveal.
        col: Column of the cell to reveal.

    Returns:
        Newly revealed positions in reveal order (empty for a no-op).

    Raises:
        ValueError: If coordinates are out of bounds.
    """
    if not board.in_bounds(row, col):
        raise ValueError("Cell coordinates are outside the board.")

    start = board.cells[row][col]
    if start.revealed or start.flagged:
        return []

    if start.is_bomb or start.adjacent_bomb_count > 0:
        start.revealed = True
        return [Position(row, col)]

    frontier: Deque[Position] = deque([Position(row, col)])
    revealed: List[Position] = []

    while frontier:
        pos = frontier.popleft()
        cell = board.cell(pos)
        if cell.revealed or cell.flagged:
            continue

        cell.revealed = True
        revealed.append(pos)

        if cell.adjacent_bomb_count != 0:
            continue

        for n in board.neighbors(pos.row, pos.col):
            neighbor = board.cell(n)
            if not neighbor.revealed and not neighbor.flagged and not neighbor.is_bomb:
                frontier.append(n)

    return revealed


def toggle_flag(board: Board, row: int, col: int) -> int:
    """
    Toggle the flag on an unrevealed cell.

    Returns:
        +1 if a flag was placed, -1 if one was removed, 0 for a revealed cell.

    Raises:
        ValueError: If coordinates are out of bounds.
    """
    if not board.in_bounds(row, col):
        raise ValueError("Cell coordinates are outside the board.")

    cell = board.cells[row][col]
    if cell.revealed:
        return 0

    cell.flagged = not cell.flagged
    return 1 if cell.flagged else -1


# -----------------------------------------------------------------------------
# Display
# -----------------------------------------------------------------------------

_ANSI_RESET = "\033[0m"
_ANSI_COORD = "\033[96m"
_ANSI_MINE = "\033[91m"


def format_board(board: Board, reveal_all: bool = False, color: bool = False) -> str:
    """
    Render the board as a multi-line string for terminal display.

    Args:
        board: Board to render.
        reveal_all: If True, show bombs and all underlying counts.
        color: If True, wrap coordinates and bombs in ANSI colors.

    Returns:
        A formatted multi-line string with coordinate labels and the grid.
        Hidden cells are '.', flags 'F', bombs 'M'.
    """

    def c(s: str) -> str:
        return f"{_ANSI_COORD}{s}{_ANSI_RESET}" if color else s

    def m(s: str) -> str:
        return f"{_ANSI_MINE}{s}{_ANSI_RESET}" if color else s

    def cell_str(cell: Cell) -> str:
        if reveal_all or cell.revealed:
            if cell.is_bomb:
                return m("M")
            return str(cell.adjacent_bomb_count)
        if cell.flagged:
            return "F"
        return "."

    # Header: column indices
    header_cells = " ".join(f"{col:2d}" for col in range(board.cols))
    out = [c("   ") + c(header_cells)]
    out.append(c("   " + "-" * (3 * board.cols - 1)))

    for row in range(board.rows):
        row_cells = " ".join(f" {cell_str(cell)}" for cell in board.cells[row])
        out.append(c(f"{row:2d} ") + c("|") + row_cells)

    return "\n".join(out)
