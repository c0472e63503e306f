import random

import pytest

from logicsweeper.board import reveal_cell, toggle_flag
from logicsweeper.hint import HintIndex, has_revealed_neighbor, is_edge_candidate
from logicsweeper.utils import Position
from tests.helpers import board_from_rows

P = Position

LAYOUT = [
    ".**.",
    "....",
    "....",
]


def _opened_board():
    board = board_from_rows(LAYOUT)
    revealed = reveal_cell(board, 2, 1)
    return board, revealed


def test_rebuild_collects_edge_cells():
    board, _ = _opened_board()
    index = HintIndex.from_board(board)
    assert set(index) == {P(0, 0), P(0, 1), P(0, 2), P(0, 3)}


def test_incremental_reveal_matches_rebuild():
    board = board_from_rows(LAYOUT)
    index = HintIndex()
    index.update_from_reveal(board, reveal_cell(board, 2, 1))
    assert set(index) == set(HintIndex.from_board(board))

    index.update_from_reveal(board, reveal_cell(board, 0, 0))
    assert P(0, 0) not in index
    assert set(index) == set(HintIndex.from_board(board))


def test_empty_reveal_batch_is_a_no_op():
    board, revealed = _opened_board()
    index = HintIndex()
    index.update_from_reveal(board, revealed)
    before = set(index)
    index.update_from_reveal(board, [])
    assert set(index) == before


def test_flag_toggle_updates_single_cell():
    board, _ = _opened_board()
    index = HintIndex.from_board(board)

    toggle_flag(board, 0, 1)
    index.update_for_cell(board, 0, 1)
    assert P(0, 1) not in index

    toggle_flag(board, 0, 1)
    index.update_for_cell(board, 0, 1)
    assert P(0, 1) in index


def test_cells_without_revealed_neighbors_are_not_candidates():
    board = board_from_rows(LAYOUT)
    assert not has_revealed_neighbor(board, 0, 1)
    assert not is_edge_candidate(board, 0, 1)
    index = HintIndex()
    index.update_for_cell(board, 0, 1)
    assert len(index) == 0


def test_select_returns_live_candidate():
    board, _ = _opened_board()
    index = HintIndex.from_board(board)
    rng = random.Random(4)
    for _ in range(10):
        assert index.select(board, rng) in set(index)


def test_select_skips_stale_entries():
    board, _ = _opened_board()
    index = HintIndex.from_board(board)

    # State changes that bypassed the index must not produce ghost hints.
    reveal_cell(board, 0, 0)
    reveal_cell(board, 0, 3)
    toggle_flag(board, 0, 1)
    rng = random.Random(0)
    for _ in range(10):
        assert index.select(board, rng) == P(0, 2)

    toggle_flag(board, 0, 2)
    assert index.select(board, rng) is None


def test_select_on_empty_index():
    board, _ = _opened_board()
    assert HintIndex().select(board) is None


def test_select_drops_stale_entries_from_index():
    board, _ = _opened_board()
    index = HintIndex.from_board(board)

    reveal_cell(board, 0, 0)
    toggle_flag(board, 0, 1)
    toggle_flag(board, 0, 2)
    toggle_flag(board, 0, 3)
    assert index.select(board, random.Random(1)) is None
    assert len(index) == 0


def test_seeded_select_is_reproducible():
    board, _ = _opened_board()
    first = HintIndex.from_board(board)
    second = HintIndex.from_board(board)
    picks_a = [first.select(board, random.Random(7)) for _ in range(3)]
    picks_b = [second.select(board, random.Random(7)) for _ in range(3)]
    assert picks_a == picks_b


def test_discard_keeps_remaining_candidates():
    index = HintIndex([P(0, 0), P(0, 1), P(0, 2)])
    index.discard(P(0, 0))
    index.discard(P(5, 5))
    assert set(index) == {P(0, 1), P(0, 2)}
    index.add(P(0, 1))
    assert len(index) == 2


def test_keys_restore_the_same_index():
    board, _ = _opened_board()
    index = HintIndex.from_board(board)
    keys = index.to_keys()
    assert "0-1" in keys
    restored = HintIndex.from_keys(keys)
    assert set(restored) == set(index)
    assert restored.to_keys() == keys


def test_malformed_key_rejected():
    with pytest.raises(ValueError):
        HintIndex.from_keys(["0-1", "oops"])
