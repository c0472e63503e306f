from typing import List, Sequence

from logicsweeper.board import Board, compute_adjacency, create_empty_board


def board_from_rows(layout: Sequence[str]) -> Board:
    """Build a board from strings where '*' marks a bomb and anything else is empty."""
    board = create_empty_board(len(layout), len(layout[0]))
    for row, line in enumerate(layout):
        for col, ch in enumerate(line):
            board.cells[row][col].is_bomb = ch == "*"
    compute_adjacency(board)
    return board


def expected_adjacency(board: Board, row: int, col: int) -> int:
    count = 0
    for d_row in (-1, 0, 1):
        for d_col in (-1, 0, 1):
            if d_row == 0 and d_col == 0:
                continue
            r, c = row + d_row, col + d_col
            if 0 <= r < board.rows and 0 <= c < board.cols and board.cells[r][c].is_bomb:
                count += 1
    return count


def adjacency_mismatches(board: Board) -> List[tuple]:
    return [
        (cell.row, cell.col)
        for cell in board.iter_cells()
        if not cell.is_bomb
        and cell.adjacent_bomb_count != expected_adjacency(board, cell.row, cell.col)
    ]
