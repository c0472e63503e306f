import pytest

from logicsweeper.difficulty import CLASSIC_LEVELS, BoardConfig, compute_board_config


def test_easy_desktop_viewport():
    config = compute_board_config("easy", 1000, 800)
    assert config == BoardConfig(
        rows=14, cols=17, bombs=36, cell_px=56, board_width=1000.0, board_height=800.0
    )


def test_small_viewport_clamps_cell_size_up():
    config = compute_board_config("hard", 300, 300)
    assert config.cell_px == 28
    assert (config.rows, config.cols) == (10, 10)
    assert config.bombs == 28


def test_nav_height_is_subtracted():
    config = compute_board_config("medium", 1000, 900, nav_height=100)
    assert config.board_height == 800.0


def test_dimensions_clamped_to_row_limits():
    big = compute_board_config("hard", 5000, 5000)
    assert (big.rows, big.cols) == (40, 40)
    assert big.bombs == 448

    tiny = compute_board_config("easy", 100, 100)
    assert (tiny.rows, tiny.cols) == (8, 8)


def test_unknown_difficulty_rejected():
    with pytest.raises(ValueError):
        compute_board_config("nightmare", 800, 600)


def test_classic_levels_leave_room_for_safe_zone():
    for rows, cols, bombs in CLASSIC_LEVELS.values():
        assert bombs <= rows * cols - 9
