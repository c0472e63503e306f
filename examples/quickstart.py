"""
Quickstart example for Logicsweeper.

This script demonstrates basic usage of the generator and solver.
"""

import logging

from logicsweeper import (
    DeductionSolver,
    GenerateOptions,
    Position,
    format_board,
    generate_solvable_board,
    run_generation_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Logicsweeper - Quickstart Example")
    print("=" * 60)

    # Example 1: Generate a single board with diagnostics
    print("\n1. Generating an Intermediate board (16x16, 40 bombs)...")
    print("-" * 60)

    safe = Position(8, 8)
    board = generate_solvable_board(
        16, 16, 40, safe, GenerateOptions(time_budget_ms=250, debug=True)
    )

    solver = DeductionSolver(board, safe)
    result = solver.solve()

    print(f"Solved by deduction: {result.solved}")
    print(f"Score (reveals + flags): {result.score}")
    print(f"Single-rule inferences: {solver.inferred_single_count}")
    print(f"Subset-rule inferences: {solver.inferred_subset_count}")

    # Example 2: Show the board
    print("\n2. Generated board:")
    print("-" * 60)
    print(format_board(board, reveal_all=True, color=True))

    # Example 3: Compare difficulty levels
    print("\n3. Solved rates by difficulty level (10 boards each)...")
    print("-" * 60)

    difficulties = [
        ("Beginner", 9, 9, 10),
        ("Intermediate", 16, 16, 40),
        ("Expert", 16, 30, 99),
    ]

    for name, rows, cols, bombs in difficulties:
        results = run_generation_many_tests(rows, cols, bombs, runs=10)
        print(
            f"{name:15s} ({rows}x{cols}, {bombs:2d} bombs): "
            f"{results['solved_rate']*100:5.1f}% solved, "
            f"{results['avg_elapsed_ms']:6.1f} ms avg"
        )

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
