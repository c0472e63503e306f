"""
Edge-candidate bookkeeping for hints.

An edge candidate is an unrevealed, unflagged, non-empty cell (a bomb or a
positive count) next to at least one revealed cell. The index is updated
incrementally after each reveal or flag change, so picking a hint never
rescans the board.
"""

import random
from typing import Dict, Iterable, Iterator, List, Optional

from .board import Board, Cell
from .utils import Position, parse_position_key, position_key


def _is_non_empty(cell: Cell) -> bool:
    return cell.is_bomb or cell.adjacent_bomb_count > 0


def _is_open(cell: Cell) -> bool:
    return not cell.revealed and not cell.flagged and _is_non_empty(cell)


def has_revealed_neighbor(board: Board, row: int, col: int) -> bool:
    return any(board.cell(n).revealed for n in board.neighbors(row, col))


def is_edge_candidate(board: Board, row: int, col: int) -> bool:
    return _is_open(board.cells[row][col]) and has_revealed_neighbor(board, row, col)


class HintIndex:
    """
    Set of edge candidates for one live-play board.

    Candidates are kept in a list with a position -> slot map, so adding,
    discarding and picking a random entry are all O(1).
    """

    def __init__(self, candidates: Optional[Iterable[Position]] = None) -> None:
        self._positions: List[Position] = []
        self._slots: Dict[Position, int] = {}
        for pos in candidates or ():
            self.add(Position(*pos))

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, position: object) -> bool:
        return position in self._slots

    def __iter__(self) -> Iterator[Position]:
        return iter(list(self._positions))

    # -------------------------------------------------------------------------
    # Set maintenance
    # -------------------------------------------------------------------------

    def add(self, pos: Position) -> None:
        if pos in self._slots:
            return
        self._slots[pos] = len(self._positions)
        self._positions.append(pos)

    def discard(self, pos: Position) -> None:
        slot = self._slots.pop(pos, None)
        if slot is None:
            return
        last = self._positions.pop()
        if slot < len(self._positions):
            # Move the tail entry into the freed slot.
            self._positions[slot] = last
            self._slots[last] = slot

    def clear(self) -> None:
        self._positions = []
        self._slots = {}

    @classmethod
    def from_board(cls, board: Board) -> "HintIndex":
        index = cls()
        index.rebuild(board)
        return index

    def rebuild(self, board: Board) -> None:
        """Recompute the candidate set by scanning every revealed cell."""
        self.clear()
        for cell in board.iter_cells():
            if not cell.revealed:
                continue
            for n in board.neighbors(cell.row, cell.col):
                if _is_open(board.cell(n)):
                    self.add(n)

    def update_from_reveal(self, board: Board, revealed: Iterable[Position]) -> None:
        """
        Update the set after a batch of cells was revealed.

        Args:
            board: The live board, already carrying the new reveals.
            revealed: Positions revealed by the last action.
        """
        for pos in revealed:
            self.discard(Position(*pos))
            for n in board.neighbors(pos[0], pos[1]):
                if _is_open(board.cell(n)):
                    self.add(n)

    def update_for_cell(self, board: Board, row: int, col: int) -> None:
        """Re-evaluate a single cell after its flag was toggled."""
        pos = Position(row, col)
        if is_edge_candidate(board, row, col):
            self.add(pos)
        else:
            self.discard(pos)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def select(
        self, board: Board, rng: Optional[random.Random] = None
    ) -> Optional[Position]:
        """
        Pick a random live candidate for a hint.

        Entries that were revealed or flagged since insertion are dropped
        from the index as they are drawn, so each call costs O(1) amortized.

        Returns:
            A candidate position, or None if no candidate is left.
        """
        rng = rng if rng is not None else random.Random()
        while self._positions:
            pos = rng.choice(self._positions)
            if _is_open(board.cell(pos)):
                return pos
            self.discard(pos)
        return None

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_keys(self) -> List[str]:
        """Return the candidates as "row-col" keys, in index order."""
        return [position_key(pos.row, pos.col) for pos in self._positions]

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "HintIndex":
        """
        Restore an index saved with to_keys.

        Raises:
            ValueError: If a key is malformed.
        """
        return cls(parse_position_key(key) for key in keys)
