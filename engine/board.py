"""Quarto board state: cells, piece usage, and terminal detection."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from engine.pieces import PIECE_COUNT, Piece, get_piece, is_valid_piece_id
from engine.rules import (
    BOARD_COLS,
    BOARD_ROWS,
    CELL_COUNT,
    WinMatch,
    empty_cells,
    find_win,
    in_bounds,
    would_win,
)

Cell = Optional[int]


class Board:
    """4x4 Quarto board holding piece ids, plus the per-piece usage set."""

    rows: int = BOARD_ROWS
    cols: int = BOARD_COLS

    def __init__(self) -> None:
        self.cells: List[Cell] = [None] * CELL_COUNT
        self.used: List[bool] = [False] * PIECE_COUNT

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> "Board":
        """Build a board from a 16-cell snapshot; usage is derived from the cells."""
        board = cls()
        for index, piece_id in enumerate(cells):
            if piece_id is not None:
                board.place(index, piece_id)
        return board

    def clone(self) -> "Board":
        cloned = Board.__new__(Board)
        cloned.cells = list(self.cells)
        cloned.used = list(self.used)
        return cloned

    def get_cell(self, index: int) -> Cell:
        return self.cells[index]

    def is_empty(self, index: int) -> bool:
        return isinstance(index, int) and in_bounds(index) and self.cells[index] is None

    def is_available(self, piece_id: int) -> bool:
        """Return whether a piece id is valid and not yet placed."""
        return is_valid_piece_id(piece_id) and not self.used[piece_id]

    def empty_cells(self) -> List[int]:
        return empty_cells(self.cells)

    def unused_pieces(self, exclude: Optional[int] = None) -> List[int]:
        """Unplaced piece ids, ascending, optionally without ``exclude``."""
        return [piece_id for piece_id in range(PIECE_COUNT) if not self.used[piece_id] and piece_id != exclude]

    def placed_pieces(self) -> List[Piece]:
        return [get_piece(piece_id) for piece_id in self.cells if piece_id is not None]

    def place(self, index: int, piece_id: int) -> None:
        """Put a piece on an empty cell and mark it used."""
        if not self.is_empty(index):
            raise ValueError(f"Illegal placement: cell {index} is not an empty board cell")
        if not self.is_available(piece_id):
            raise ValueError(f"Illegal placement: piece {piece_id} is unknown or already used")
        self.cells[index] = piece_id
        self.used[piece_id] = True

    def find_win(self) -> Optional[WinMatch]:
        return find_win(self.cells)

    def would_win(self, index: int, piece_id: int) -> bool:
        return would_win(self.cells, index, piece_id)

    def is_full(self) -> bool:
        return all(piece_id is not None for piece_id in self.cells)

    def game_over(self) -> Tuple[bool, Optional[WinMatch], bool]:
        """Return (is_terminal, win_match, is_draw)."""
        match = self.find_win()
        if match is not None:
            return True, match, False
        if self.is_full():
            return True, None, True
        return False, None, False

    def snapshot(self) -> Tuple[Tuple[Cell, ...], Tuple[bool, ...]]:
        return tuple(self.cells), tuple(self.used)

    def render_ascii(self) -> str:
        """Return a human-readable board: piece symbols, or the index of empty cells."""
        lines: List[str] = []
        header = "     " + " ".join(f"{c:^4d}" for c in range(self.cols))
        lines.append(header)
        for row in range(self.rows):
            row_cells: List[str] = []
            for col in range(self.cols):
                index = row * self.cols + col
                piece_id = self.cells[index]
                if piece_id is None:
                    row_cells.append(f"{index:^4d}".replace(" ", "."))
                else:
                    row_cells.append(get_piece(piece_id).symbol)
            lines.append(f"{row:>2d}   " + " ".join(row_cells))
        return "\n".join(lines)
