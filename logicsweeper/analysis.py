"""Analysis and benchmarking tools for the solvable-board generator."""

from collections import Counter
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .board import format_board
from .difficulty import CLASSIC_LEVELS
from .search import GenerateOptions, generate_solvable_board_with_report
from .solver import DeductionSolver
from .utils import Position

SELECTIONS: Tuple[str, ...] = ("solved", "best", "safe", "last", "fallback")


def _center(rows: int, cols: int) -> Tuple[int, int]:
    return rows // 2, cols // 2


def run_generation_single_test(
    rows: int,
    cols: int,
    bombs: int,
    options: Optional[GenerateOptions] = None,
    *,
    show_board: bool = False,
) -> Dict[str, object]:
    """
    Generate one board from the center cell and describe the result.

    Args:
        rows: Board rows.
        cols: Board columns.
        bombs: Total number of bombs.
        options: Search tuning passed to the generator.
        show_board: If True, print the board and the solver's final knowledge.

    Returns:
        The generation report as a dict, plus "solved".
    """
    safe = _center(rows, cols)
    board, report = generate_solvable_board_with_report(rows, cols, bombs, safe, options)

    if show_board:
        solver = DeductionSolver(board, Position(*safe))
        solver.solve()
        print(f"Selection: {report.selection} after {report.attempts} attempts")
        print("Underlying board (bombs visible):")
        print(format_board(board, reveal_all=True))
        print()
        print("Solver knowledge (unknowns shown as '.'):")
        print(solver.format_knowledge(show_coords=True))

    out: Dict[str, object] = report.to_dict()
    out["solved"] = report.solved
    return out


def run_generation_many_tests(
    rows: int,
    cols: int,
    bombs: int,
    runs: int,
    options: Optional[GenerateOptions] = None,
) -> Dict[str, float]:
    """
    Run many independent generations and return averaged metrics.

    Args:
        rows: Board rows.
        cols: Board columns.
        bombs: Total number of bombs.
        runs: Number of independent generations, must be > 0.
        options: Search tuning passed to every generation. A fixed seed makes
            every run identical, so leave it unset for benchmarks.

    Returns:
        Dict with:
        - solved_rate
        - avg_attempts, avg_mutations
        - avg_elapsed_ms, p95_elapsed_ms
        - avg_percent_solved (unsolved selections without a score count as 0)
        - frac_<selection> for every selection branch

    Raises:
        ValueError: If runs is not positive.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    attempts: List[int] = []
    mutations: List[int] = []
    elapsed: List[float] = []
    percent: List[float] = []
    selections: Counter = Counter()

    for _ in range(runs):
        _, report = generate_solvable_board_with_report(
            rows, cols, bombs, _center(rows, cols), options
        )
        attempts.append(report.attempts)
        mutations.append(report.mutations)
        elapsed.append(report.elapsed_ms)
        percent.append(report.percent_solved or 0.0)
        selections[report.selection] += 1

    elapsed_arr = np.asarray(elapsed, dtype=float)
    out: Dict[str, float] = {
        "solved_rate": selections["solved"] / runs,
        "avg_attempts": float(np.mean(attempts)),
        "avg_mutations": float(np.mean(mutations)),
        "avg_elapsed_ms": float(np.mean(elapsed_arr)),
        "p95_elapsed_ms": float(np.percentile(elapsed_arr, 95)),
        "avg_percent_solved": float(np.mean(percent)),
    }
    for name in SELECTIONS:
        out[f"frac_{name}"] = selections[name] / runs

    return out


def run_generation_level_analysis(
    runs: int,
    options: Optional[GenerateOptions] = None,
    *,
    show_plots: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Benchmark the generator on the classic difficulty levels and plot summaries.

    Args:
        runs: Number of generations per level.
        options: Search tuning passed to every generation.
        show_plots: If True, draw the summary charts with matplotlib.

    Returns:
        Mapping from level name to the stats of run_generation_many_tests().

    Classic levels:
        - Beginner: 9x9, 10 bombs
        - Intermediate: 16x16, 40 bombs
        - Expert: 16x30, 99 bombs
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, (rows, cols, bombs) in CLASSIC_LEVELS.items():
        results[level] = run_generation_many_tests(rows, cols, bombs, runs, options)

    if not show_plots:
        return results

    level_names = list(CLASSIC_LEVELS.keys())
    x = np.arange(len(level_names))

    # 1) Solved rate by level
    plt.figure()  # type: ignore[misc]
    plt.bar(x, [results[n]["solved_rate"] for n in level_names])  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Solved rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Guess-free boards found within budget")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Selection branch mix
    bar_w = 0.2
    plt.figure()  # type: ignore[misc]
    for i, name in enumerate(("solved", "best", "safe", "last")):
        plt.bar(  # type: ignore[misc]
            x + (i - 1.5) * bar_w,
            [results[n][f"frac_{name}"] for n in level_names],
            width=bar_w,
            label=name,
        )
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Fraction of generations")  # type: ignore[misc]
    plt.title("Selected candidate by branch")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 3) Time spent
    plt.figure()  # type: ignore[misc]
    plt.bar(  # type: ignore[misc]
        x - bar_w / 2,
        [results[n]["avg_elapsed_ms"] for n in level_names],
        width=bar_w,
        label="avg_elapsed_ms",
    )
    plt.bar(  # type: ignore[misc]
        x + bar_w / 2,
        [results[n]["p95_elapsed_ms"] for n in level_names],
        width=bar_w,
        label="p95_elapsed_ms",
    )
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Milliseconds")  # type: ignore[misc]
    plt.title("Generation time per board")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results


def summarize_selection_mix(
    results: Dict[str, Dict[str, float]],
    *,
    level: str = "expert",
) -> Dict[str, float]:
    """
    Summarize how often each selection branch won for one level.

    Args:
        results: Dict[level_name -> metrics_dict] from run_generation_level_analysis().
        level: Which level to summarize.

    Returns:
        Dict with the selection fractions (renormalized to sum to 1), the
        fallback rate (any non-solved selection) and avg_percent_solved.

    Raises:
        KeyError: If the level or a selection fraction is missing.
    """
    if level not in results:
        raise KeyError(f"Level {level!r} not found in results.")
    m = results[level]

    fractions: Dict[str, float] = {}
    for name in SELECTIONS:
        key = f"frac_{name}"
        if key not in m:
            raise KeyError(f"Missing key {key!r} in metrics for level {level!r}.")
        fractions[name] = float(m[key])

    total = sum(fractions.values())
    if total == 0.0:
        raise ZeroDivisionError("Selection fractions sum to 0; cannot normalize.")

    out = {f"{name}_frac": value / total for name, value in fractions.items()}
    out["fallback_rate"] = 1.0 - out["solved_frac"]
    out["avg_percent_solved"] = float(m.get("avg_percent_solved", 0.0))
    return out
