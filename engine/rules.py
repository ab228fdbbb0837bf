"""Rules helpers for Quarto: win lines and win evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

from engine.pieces import ATTRIBUTE_ORDER, Attribute, get_piece

BOARD_ROWS = 4
BOARD_COLS = 4
CELL_COUNT = BOARD_ROWS * BOARD_COLS

Position = Tuple[int, int]
Cells = Sequence[Optional[int]]


@dataclass(frozen=True)
class WinLine:
    """Four board indices that win when their pieces share an attribute."""

    cells: Tuple[int, int, int, int]
    label: str


WIN_LINES: Tuple[WinLine, ...] = (
    WinLine((0, 1, 2, 3), "row 1"),
    WinLine((4, 5, 6, 7), "row 2"),
    WinLine((8, 9, 10, 11), "row 3"),
    WinLine((12, 13, 14, 15), "row 4"),
    WinLine((0, 4, 8, 12), "column 1"),
    WinLine((1, 5, 9, 13), "column 2"),
    WinLine((2, 6, 10, 14), "column 3"),
    WinLine((3, 7, 11, 15), "column 4"),
    WinLine((0, 5, 10, 15), "top-left to bottom-right"),
    WinLine((3, 6, 9, 12), "top-right to bottom-left"),
)

CENTER_CELLS: FrozenSet[int] = frozenset({5, 6, 9, 10})
CORNER_CELLS: FrozenSet[int] = frozenset({0, 3, 12, 15})


@dataclass(frozen=True)
class WinMatch:
    """A completed line and the first attribute its pieces share."""

    line: WinLine
    attribute: Attribute

    @property
    def line_label(self) -> str:
        return self.line.label

    @property
    def cells(self) -> Tuple[int, int, int, int]:
        return self.line.cells


def in_bounds(index: int) -> bool:
    """Return whether an index addresses a board cell."""
    return 0 <= index < CELL_COUNT


def index_to_pos(index: int) -> Position:
    return (index // BOARD_COLS, index % BOARD_COLS)


def pos_to_index(pos: Position) -> int:
    return pos[0] * BOARD_COLS + pos[1]


def empty_cells(cells: Cells) -> List[int]:
    """Indices of empty cells, ascending."""
    return [index for index, piece_id in enumerate(cells) if piece_id is None]


def shared_attribute(piece_ids: Sequence[int]) -> Optional[Attribute]:
    """First attribute (in declared order) on which all pieces agree."""
    pieces = [get_piece(piece_id) for piece_id in piece_ids]
    for attribute in ATTRIBUTE_ORDER:
        first = pieces[0].value_of(attribute)
        if all(piece.value_of(attribute) == first for piece in pieces[1:]):
            return attribute
    return None


def find_win(cells: Cells) -> Optional[WinMatch]:
    """Return the first winning line in line order, or None."""
    for line in WIN_LINES:
        ids = [cells[index] for index in line.cells]
        if any(piece_id is None for piece_id in ids):
            continue
        attribute = shared_attribute(ids)
        if attribute is not None:
            return WinMatch(line=line, attribute=attribute)
    return None


def would_win(cells: Cells, index: int, piece_id: int) -> bool:
    """Return whether placing ``piece_id`` at ``index`` yields a win. Input is not mutated."""
    trial = list(cells)
    trial[index] = piece_id
    return find_win(trial) is not None


def cell_bonus(index: int) -> int:
    """Positional preference: center 2, corner 1, edge 0."""
    if index in CENTER_CELLS:
        return 2
    if index in CORNER_CELLS:
        return 1
    return 0
