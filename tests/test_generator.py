import random

import pytest

from logicsweeper.board import count_bombs
from logicsweeper.generator import (
    generate_random_board,
    is_in_safe_zone,
    mutate_board,
    swap_count_for,
)
from logicsweeper.utils import Position
from tests.helpers import adjacency_mismatches, board_from_rows


def test_random_board_has_exact_bomb_count_and_safe_cell():
    rng = random.Random(7)
    safe = Position(4, 5)
    for _ in range(25):
        board = generate_random_board(9, 11, 20, safe, rng)
        assert count_bombs(board) == 20
        assert not board.cells[safe.row][safe.col].is_bomb
        assert adjacency_mismatches(board) == []


def test_random_board_caps_bombs_at_available_cells():
    board = generate_random_board(3, 3, 50, Position(1, 1), random.Random(1))
    assert count_bombs(board) == 8
    assert not board.cells[1][1].is_bomb


def test_random_board_is_reproducible_with_seed():
    a = generate_random_board(8, 8, 10, Position(0, 0), random.Random(42))
    b = generate_random_board(8, 8, 10, Position(0, 0), random.Random(42))
    assert a.bomb_positions() == b.bomb_positions()


def test_safe_zone_is_three_by_three_block():
    safe = Position(2, 2)
    zone = {(r, c) for r in range(5) for c in range(5) if is_in_safe_zone(r, c, safe)}
    assert zone == {(r, c) for r in (1, 2, 3) for c in (1, 2, 3)}
    assert is_in_safe_zone(0, 0, Position(0, 0))
    assert not is_in_safe_zone(0, 2, Position(0, 0))


def test_swap_count_rounds_up_with_minimum_of_one():
    assert swap_count_for(40, 4) == 2
    assert swap_count_for(99, 4) == 4
    assert swap_count_for(10, 4) == 1
    assert swap_count_for(0, 4) == 1


def test_mutation_preserves_bomb_count_and_safe_zone():
    rng = random.Random(3)
    safe = Position(5, 5)
    parent = generate_random_board(12, 12, 30, safe, rng)
    parent_bombs = parent.bomb_positions()

    for _ in range(20):
        child = mutate_board(parent, safe, 3, rng)
        assert child is not None
        assert count_bombs(child) == 30
        assert adjacency_mismatches(child) == []

        changed = parent_bombs ^ child.bomb_positions()
        assert len(changed) == 6
        assert not any(is_in_safe_zone(p.row, p.col, safe) for p in changed)

    # The parent is never modified.
    assert parent.bomb_positions() == parent_bombs


def test_mutation_does_not_alias_parent():
    parent = generate_random_board(6, 6, 5, Position(0, 0), random.Random(5))
    child = mutate_board(parent, Position(0, 0), 1, random.Random(6))
    assert child is not None
    assert child is not parent
    assert child.cells is not parent.cells
    before = parent.cells[5][5].is_bomb
    child.cells[5][5].is_bomb = not child.cells[5][5].is_bomb
    assert parent.cells[5][5].is_bomb == before


def test_mutation_infeasible_returns_none():
    # Only one bomb outside the safe zone.
    board = board_from_rows([
        ".....",
        ".....",
        ".....",
        ".....",
        "....*",
    ])
    safe = Position(2, 2)
    assert mutate_board(board, safe, 2, random.Random(0)) is None
    assert mutate_board(board, safe, 1, random.Random(0)) is not None


def test_mutation_infeasible_without_free_cells():
    board = board_from_rows([
        "***",
        "*.*",
        "***",
    ])
    assert mutate_board(board, Position(0, 0), 1, random.Random(0)) is None


def test_mutation_rejects_non_positive_swap_count():
    board = board_from_rows(["*....", "....."])
    with pytest.raises(ValueError):
        mutate_board(board, Position(0, 4), 0)
