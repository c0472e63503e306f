"""
Logicsweeper

Generates Minesweeper boards that can be cleared from the first click by
pure deduction:
- Deduction solver: saturation, exhaustion and subset rules, no guessing
- Candidate generation: random layouts plus safe-zone-preserving mutation
- Search: time-budgeted sampling and hill climbing with a best-effort fallback
- Hint index: incremental edge-candidate tracking for live play
"""

from .analysis import (
    run_generation_level_analysis,
    run_generation_many_tests,
    run_generation_single_test,
    summarize_selection_mix,
)
from .board import (
    Board,
    Cell,
    compute_adjacency,
    count_bombs,
    create_empty_board,
    format_board,
    reveal_cell,
    toggle_flag,
)
from .difficulty import CLASSIC_LEVELS, BoardConfig, compute_board_config
from .generator import generate_random_board, is_in_safe_zone, mutate_board
from .hint import HintIndex
from .search import (
    GenerateOptions,
    GenerationReport,
    generate_solvable_board,
    generate_solvable_board_with_report,
)
from .solver import Constraint, DeductionSolver, SolverResult, run_solver, subset_infer
from .utils import Position

__version__ = "1.0.0"

__all__ = [
    # Core types
    "Board",
    "Cell",
    "Position",
    "Constraint",
    "SolverResult",
    "GenerateOptions",
    "GenerationReport",
    "BoardConfig",
    # Grid model
    "create_empty_board",
    "compute_adjacency",
    "count_bombs",
    "format_board",
    "reveal_cell",
    "toggle_flag",
    # Generation
    "generate_random_board",
    "is_in_safe_zone",
    "mutate_board",
    "generate_solvable_board",
    "generate_solvable_board_with_report",
    # Solving
    "DeductionSolver",
    "run_solver",
    "subset_infer",
    # Live play
    "HintIndex",
    # Sizing
    "CLASSIC_LEVELS",
    "compute_board_config",
    # Analysis functions
    "run_generation_single_test",
    "run_generation_many_tests",
    "run_generation_level_analysis",
    "summarize_selection_mix",
]
