"""
Time-budgeted search for boards that can be cleared without guessing.

Each iteration produces a candidate, either a fresh random board or a
mutation of the best board of the current lineage, and scores it with the
deduction solver:

1. Candidates whose first-click cell is not a zero are rejected unscored,
   so the player always gets an opening region.
2. A board the solver fully clears is accepted immediately.
3. Otherwise the highest scoring board (reveals + flags) becomes the new
   mutation parent. A lineage that fails to improve for
   ``mutation_patience`` iterations is dropped and the search restarts from
   random boards.

When the budget runs out the best candidate found is returned instead.
"""

import json
import logging
import random
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .board import Board, count_bombs
from .generator import generate_random_board, mutate_board, swap_count_for
from .solver import run_solver
from .utils import Position

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Diagnostic record describing one generation call."""

    rows: int
    cols: int
    bombs: int
    safe: Tuple[int, int]
    safe_adjacent: Optional[int]
    selection: str  # "solved" | "best" | "safe" | "last" | "fallback"
    score: Optional[int]
    percent_solved: Optional[float]
    attempts: int
    attempts_for_selection: int
    mutations: int
    time_budget_ms: float
    elapsed_ms: float
    seed: Optional[int]

    @property
    def solved(self) -> bool:
        return self.selection == "solved"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


ReportObserver = Callable[[GenerationReport], None]


@dataclass
class GenerateOptions:
    """
    Tuning knobs for generate_solvable_board.

    Attributes:
        time_budget_ms: Wall-clock budget; at least one candidate is always tried.
        mutation_swap_percent: Percent of the bomb count swapped per mutation
            (rounded up, at least one swap).
        mutation_patience: Non-improving iterations tolerated before the
            current lineage is discarded.
        opening_attempt_limit: Total attempts allowed, past the budget, while
            no candidate has passed the zero-opening check. Only applies when
            the bomb count leaves the safe zone room to be bomb-free.
        debug: Log a JSON GenerationReport and pass it to ``observer``.
        seed: Seed for the search's random generator; None for OS entropy.
        observer: Optional callback receiving the report when ``debug`` is set.
    """

    time_budget_ms: float = 250
    mutation_swap_percent: float = 4.0
    mutation_patience: int = 100
    opening_attempt_limit: int = 1000
    debug: bool = False
    seed: Optional[int] = None
    observer: Optional[ReportObserver] = None

    def validate(self) -> None:
        if self.time_budget_ms < 0:
            raise ValueError("time_budget_ms must be non-negative.")
        if self.mutation_swap_percent <= 0:
            raise ValueError("mutation_swap_percent must be positive.")
        if self.mutation_patience < 1:
            raise ValueError("mutation_patience must be at least 1.")
        if self.opening_attempt_limit < 1:
            raise ValueError("opening_attempt_limit must be at least 1.")


def _validate_request(rows: int, cols: int, bomb_count: int, safe: Position) -> None:
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive.")
    if not (0 <= safe.row < rows and 0 <= safe.col < cols):
        raise ValueError(
            f"Safe cell ({safe.row}, {safe.col}) is outside the {rows}x{cols} board."
        )
    if not 0 <= bomb_count < rows * cols:
        raise ValueError(
            f"bomb_count must be in [0, {rows * cols - 1}] for a {rows}x{cols} board."
        )


def generate_solvable_board_with_report(
    rows: int,
    cols: int,
    bomb_count: int,
    safe: Tuple[int, int],
    options: Optional[GenerateOptions] = None,
) -> Tuple[Board, GenerationReport]:
    """
    Search for a guess-free board and describe how it was chosen.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        bomb_count: Bombs to place; must leave the safe cell free.
        safe: (row, col) of the first click.
        options: Search tuning; defaults to GenerateOptions().

    Returns:
        Tuple of (board, report). The board is never None.

    Raises:
        ValueError: If dimensions, bomb count, safe cell or options are invalid.
    """
    options = options if options is not None else GenerateOptions()
    options.validate()
    safe = Position(*safe)
    _validate_request(rows, cols, bomb_count, safe)

    rng = random.Random(options.seed)
    swap_count = swap_count_for(bomb_count, options.mutation_swap_percent)
    budget_s = options.time_budget_ms / 1000.0
    start = time.perf_counter()

    attempts = 0
    mutations = 0

    best_board: Optional[Board] = None
    best_score = -1
    best_attempt = 0
    last_board: Optional[Board] = None
    last_safe_board: Optional[Board] = None
    solved_board: Optional[Board] = None
    solved_score = 0
    solved_attempt = 0

    parent: Optional[Board] = None
    stale = 0

    zone_size = sum(
        1
        for row in range(safe.row - 1, safe.row + 2)
        for col in range(safe.col - 1, safe.col + 2)
        if 0 <= row < rows and 0 <= col < cols
    )
    opening_possible = bomb_count <= rows * cols - zone_size

    def keep_searching() -> bool:
        if attempts == 0 or time.perf_counter() - start < budget_s:
            return True
        return (
            last_safe_board is None
            and opening_possible
            and attempts < options.opening_attempt_limit
        )

    while keep_searching():
        attempts += 1

        if parent is not None and stale >= options.mutation_patience:
            logger.debug(
                "Dropping mutation lineage after %d stale iterations (attempt %d)",
                stale,
                attempts,
            )
            parent = None
            stale = 0

        board: Optional[Board] = None
        if parent is not None:
            board = mutate_board(parent, safe, swap_count, rng)
            if board is None:
                logger.debug(
                    "Mutation of %d swaps infeasible, sampling a fresh board", swap_count
                )
            else:
                mutations += 1
        if board is None:
            board = generate_random_board(rows, cols, bomb_count, safe, rng)

        last_board = board

        # Require the first click to be empty so the player gets a guaranteed region.
        if board.cells[safe.row][safe.col].adjacent_bomb_count != 0:
            continue

        last_safe_board = board

        result = run_solver(board, safe)
        if result.solved:
            solved_board = board
            solved_score = result.score
            solved_attempt = attempts
            break

        if result.score > best_score:
            best_score = result.score
            best_attempt = attempts
            best_board = board
            parent = board
            stale = 0
        else:
            stale += 1

    elapsed_ms = (time.perf_counter() - start) * 1000.0

    # Prefer solved boards, otherwise fall back to the best-scoring candidate.
    score: Optional[int] = None
    if solved_board is not None:
        selected, selection = solved_board, "solved"
        score, selection_attempt = solved_score, solved_attempt
    elif best_board is not None:
        selected, selection = best_board, "best"
        score, selection_attempt = best_score, best_attempt
    elif last_safe_board is not None:
        selected, selection, selection_attempt = last_safe_board, "safe", attempts
    elif last_board is not None:
        selected, selection, selection_attempt = last_board, "last", attempts
    else:
        selected = generate_random_board(rows, cols, bomb_count, safe, rng)
        selection, selection_attempt = "fallback", attempts

    report = GenerationReport(
        rows=rows,
        cols=cols,
        bombs=count_bombs(selected),
        safe=(safe.row, safe.col),
        safe_adjacent=selected.cells[safe.row][safe.col].adjacent_bomb_count,
        selection=selection,
        score=score,
        percent_solved=(score / (rows * cols)) if score is not None else None,
        attempts=attempts,
        attempts_for_selection=selection_attempt,
        mutations=mutations,
        time_budget_ms=options.time_budget_ms,
        elapsed_ms=elapsed_ms,
        seed=options.seed,
    )

    if options.debug:
        _emit_report(report, options.observer)

    return selected, report


def _emit_report(report: GenerationReport, observer: Optional[ReportObserver]) -> None:
    """Log the report and hand it to the observer; never raises."""
    try:
        logger.info("generate_solvable_board %s", json.dumps(report.to_dict()))
    except Exception:
        logger.exception("Generation report could not be logged")

    if observer is None:
        return
    try:
        observer(report)
    except Exception:
        logger.exception("Generation report observer failed")


def generate_solvable_board(
    rows: int,
    cols: int,
    bomb_count: int,
    safe: Tuple[int, int],
    options: Optional[GenerateOptions] = None,
) -> Board:
    """
    Generate a board that can be cleared by deduction from ``safe``, if one
    is found within the time budget.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        bomb_count: Bombs to place, in [0, rows * cols - 1]. Leave room for
            the 3x3 safe zone or the opening guarantee degrades.
        safe: (row, col) of the first click; always a zero cell on any
            board that passed the opening check.
        options: Search tuning; defaults to GenerateOptions().

    Returns:
        The selected board: solved > best scoring > last safe > last
        generated > a fresh random board.

    Raises:
        ValueError: If dimensions, bomb count, safe cell or options are invalid.
    """
    board, _ = generate_solvable_board_with_report(rows, cols, bomb_count, safe, options)
    return board
