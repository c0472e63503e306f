"""Deterministic deduction solver used to certify that a board needs no guessing."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, FrozenSet, List, Optional, Sequence, Set, Tuple

from .board import Board, count_bombs
from .utils import Position


@dataclass(frozen=True)
class Constraint:
    """``remaining`` bombs are hidden among ``unknowns``."""

    unknowns: FrozenSet[Position]
    remaining: int


@dataclass(frozen=True)
class SolverResult:
    solved: bool
    score: int


def subset_infer(
    constraints: Sequence[Constraint],
) -> Tuple[Set[Position], Set[Position]]:
    """
    Apply the subset rule to every ordered pair of constraints.

    For a pair (A, B) where A's unknowns are a strict subset of B's, the
    cells in ``B - A`` hold exactly ``B.remaining - A.remaining`` bombs.
    When that difference is 0 they are all safe; when it equals their
    count they are all bombs.

    Args:
        constraints: Constraints collected in one deduction round.

    Returns:
        Tuple of (safe_cells, bomb_cells) proven by the rule.
    """
    safe_cells: Set[Position] = set()
    bomb_cells: Set[Position] = set()

    for a in constraints:
        for b in constraints:
            if not a.unknowns < b.unknowns:
                continue

            diff = b.unknowns - a.unknowns
            remaining_diff = b.remaining - a.remaining

            if remaining_diff == 0:
                safe_cells |= diff
            elif remaining_diff == len(diff):
                bomb_cells |= diff

    return safe_cells, bomb_cells


class DeductionSolver:
    """
    Simulates a logical player that never guesses.

    The solver keeps its own ``revealed``/``flagged`` matrices and never
    touches the board's live-play fields. Two local rule families are used:

    1. Single-constraint rules on each revealed number: saturation (all
       bombs flagged, so the rest is safe) and exhaustion (every unknown
       must be a bomb).
    2. The subset rule between two constraints, tried only when a round of
       single-constraint rules finds nothing.
    """

    def __init__(self, board: Board, safe: Position) -> None:
        """
        Bind a solver to a board and its first-click cell.

        Args:
            board: Candidate board; read only.
            safe: First revealed cell.

        Raises:
            ValueError: If ``safe`` is outside the board or holds a bomb.
        """
        if not board.in_bounds(safe.row, safe.col):
            raise ValueError("Safe cell is outside the board.")
        if board.cells[safe.row][safe.col].is_bomb:
            raise ValueError("Safe cell holds a bomb.")

        self.board = board
        self.safe = Position(safe.row, safe.col)

        self.revealed: List[List[bool]] = [
            [False] * board.cols for _ in range(board.rows)
        ]
        self.flagged: List[List[bool]] = [
            [False] * board.cols for _ in range(board.rows)
        ]

        self.revealed_count: int = 0
        self.flagged_count: int = 0
        self.total_safe: int = board.rows * board.cols - count_bombs(board)

        # Metrics / counters (for analysis)
        self.rounds: int = 0
        self.inferred_single_count: int = 0
        self.attempted_subset_count: int = 0
        self.inferred_subset_count: int = 0

    # -------------------------------------------------------------------------
    # Shadow-state updates
    # -------------------------------------------------------------------------

    def reveal_at(self, row: int, col: int) -> int:
        """
        Reveal a cell in the shadow state using the flood rule.

        Returns:
            The number of newly revealed cells. Bombs, flagged cells and
            already revealed cells yield 0.
        """
        if self.revealed[row][col] or self.flagged[row][col]:
            return 0
        if self.board.cells[row][col].is_bomb:
            return 0

        added = 0
        frontier: Deque[Position] = deque([Position(row, col)])

        while frontier:
            r, c = frontier.popleft()
            if self.revealed[r][c] or self.flagged[r][c]:
                continue
            cell = self.board.cells[r][c]
            if cell.is_bomb:
                continue

            self.revealed[r][c] = True
            added += 1

            if cell.adjacent_bomb_count != 0:
                continue

            for n in self.board.neighbors(r, c):
                if not self.revealed[n.row][n.col]:
                    frontier.append(n)

        self.revealed_count += added
        return added

    def flag_at(self, row: int, col: int) -> bool:
        if self.flagged[row][col] or self.revealed[row][col]:
            return False
        self.flagged[row][col] = True
        self.flagged_count += 1
        return True

    # -------------------------------------------------------------------------
    # Deduction
    # -------------------------------------------------------------------------

    def deduction_round(self) -> bool:
        """
        Run one round of deductions and apply them.

        Returns:
            True if at least one cell changed state.
        """
        self.rounds += 1
        to_reveal: List[Position] = []
        to_flag: List[Position] = []
        constraints: List[Constraint] = []

        for row in range(self.board.rows):
            for col in range(self.board.cols):
                if not self.revealed[row][col]:
                    continue

                count = self.board.cells[row][col].adjacent_bomb_count
                flags = 0
                unknowns: List[Position] = []
                for n in self.board.neighbors(row, col):
                    if self.flagged[n.row][n.col]:
                        flags += 1
                    elif not self.revealed[n.row][n.col]:
                        unknowns.append(n)

                if not unknowns:
                    continue

                if count == flags:
                    to_reveal.extend(unknowns)
                elif count == flags + len(unknowns):
                    to_flag.extend(unknowns)

                remaining = count - flags
                if remaining >= 0:
                    constraints.append(Constraint(frozenset(unknowns), remaining))

        if to_reveal or to_flag:
            self.inferred_single_count += len(to_reveal) + len(to_flag)
        elif len(constraints) >= 2:
            self.attempted_subset_count += 1
            safe_cells, bomb_cells = subset_infer(constraints)
            self.inferred_subset_count += len(safe_cells) + len(bomb_cells)
            # Sorted so the apply order does not depend on set iteration.
            to_reveal = sorted(safe_cells)
            to_flag = sorted(bomb_cells)

        # Flags first so reveals see the updated constraints.
        progress = False
        for pos in to_flag:
            if self.flag_at(pos.row, pos.col):
                progress = True

        for pos in to_reveal:
            if self.reveal_at(pos.row, pos.col) > 0:
                progress = True

        return progress

    def solve(self) -> SolverResult:
        """
        Reveal the safe cell, then deduce until a round makes no progress
        or every non-bomb cell is revealed.

        Returns:
            SolverResult with ``solved`` set when every non-bomb cell was
            revealed, and ``score`` = revealed + flagged cells.
        """
        self.reveal_at(self.safe.row, self.safe.col)

        while self.revealed_count < self.total_safe and self.deduction_round():
            pass

        return SolverResult(
            solved=self.revealed_count >= self.total_safe,
            score=self.revealed_count + self.flagged_count,
        )

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def knowledge_grid(self) -> List[List[Optional[str]]]:
        """
        Return the solver's view of the board.

        None -> unknown, "F" -> flagged as bomb, "0".."8" -> revealed count.
        """
        grid: List[List[Optional[str]]] = []
        for row in range(self.board.rows):
            line: List[Optional[str]] = []
            for col in range(self.board.cols):
                if self.flagged[row][col]:
                    line.append("F")
                elif self.revealed[row][col]:
                    line.append(str(self.board.cells[row][col].adjacent_bomb_count))
                else:
                    line.append(None)
            grid.append(line)
        return grid

    def format_knowledge(self, *, show_coords: bool = True) -> str:
        """Format the knowledge grid as text, unknown cells shown as '.'."""
        lines: List[str] = []
        if show_coords:
            header = " ".join(f"{col:2d}" for col in range(self.board.cols))
            lines.append("   " + header)
            lines.append("   " + "-" * (3 * self.board.cols - 1))

        for row, values in enumerate(self.knowledge_grid()):
            text = " ".join(f" {v if v is not None else '.'}" for v in values)
            lines.append(f"{row:2d} |" + text if show_coords else text)

        return "\n".join(lines)


def run_solver(board: Board, safe: Position) -> SolverResult:
    """Solve ``board`` from ``safe`` with a fresh solver."""
    return DeductionSolver(board, safe).solve()
