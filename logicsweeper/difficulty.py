"""
Difficulty presets and viewport-based board sizing.

Higher difficulty means a smaller target cell size (more cells on screen) and
a denser bomb layout. Cell size and board dimensions are clamped so the
board stays usable on small screens.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class DifficultySettings:
    cell_pct: float
    bomb_pct: float


@dataclass(frozen=True)
class BoardConfig:
    rows: int
    cols: int
    bombs: int
    cell_px: float
    board_width: float
    board_height: float


DIFFICULTY_SETTINGS: Dict[str, DifficultySettings] = {
    "easy": DifficultySettings(cell_pct=0.075, bomb_pct=0.15),
    "medium": DifficultySettings(cell_pct=0.06, bomb_pct=0.2),
    "hard": DifficultySettings(cell_pct=0.05, bomb_pct=0.28),
}

# Classic fixed levels: name -> (rows, cols, bombs)
CLASSIC_LEVELS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (16, 30, 99),
}


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def compute_board_config(
    difficulty: str,
    viewport_width: float,
    viewport_height: float,
    nav_height: float = 0,
    *,
    min_cell_px: float = 28,
    max_cell_px: float = 56,
    min_rows: int = 8,
    max_rows: int = 40,
) -> BoardConfig:
    """
    Compute board dimensions and bomb count from the viewport and difficulty.

    Args:
        difficulty: One of "easy", "medium", "hard".
        viewport_width: Available width in pixels.
        viewport_height: Available height in pixels, including the nav bar.
        nav_height: Height taken by the navigation bar.
        min_cell_px: Smallest allowed cell size.
        max_cell_px: Largest allowed cell size.
        min_rows: Lower clamp for both rows and columns.
        max_rows: Upper clamp for both rows and columns.

    Returns:
        The derived BoardConfig.

    Raises:
        ValueError: If the difficulty is unknown.
    """
    if difficulty not in DIFFICULTY_SETTINGS:
        raise ValueError(
            f"difficulty must be one of {sorted(DIFFICULTY_SETTINGS)}, got {difficulty!r}."
        )

    settings = DIFFICULTY_SETTINGS[difficulty]
    board_width = max(0.0, float(viewport_width))
    board_height = max(0.0, float(viewport_height - nav_height))
    target_cell_px = min(board_width, board_height) * settings.cell_pct
    cell_px = _clamp(target_cell_px, min_cell_px, max_cell_px)

    cols = int(_clamp(math.floor(board_width / cell_px), min_rows, max_rows))
    rows = int(_clamp(math.floor(board_height / cell_px), min_rows, max_rows))
    # Round half up.
    bombs = math.floor(rows * cols * settings.bomb_pct + 0.5)

    return BoardConfig(
        rows=rows,
        cols=cols,
        bombs=bombs,
        cell_px=cell_px,
        board_width=board_width,
        board_height=board_height,
    )
