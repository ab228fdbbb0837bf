"""Piece definitions and attribute order for Quarto."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple

PIECE_COUNT = 16


class Attribute(str, Enum):
    """Binary piece attribute."""

    COLOR = "color"
    HEIGHT = "height"
    SHAPE = "shape"
    HOLLOW = "hollow"

    @property
    def label(self) -> str:
        return ATTRIBUTE_LABELS[self]


# Win reporting walks attributes in this order; keep it stable.
ATTRIBUTE_ORDER: List[Attribute] = [
    Attribute.COLOR,
    Attribute.HEIGHT,
    Attribute.SHAPE,
    Attribute.HOLLOW,
]

ATTRIBUTE_BITS: Dict[Attribute, int] = {
    Attribute.COLOR: 3,
    Attribute.HEIGHT: 2,
    Attribute.SHAPE: 1,
    Attribute.HOLLOW: 0,
}

ATTRIBUTE_LABELS: Dict[Attribute, str] = {
    Attribute.COLOR: "color",
    Attribute.HEIGHT: "height",
    Attribute.SHAPE: "shape",
    Attribute.HOLLOW: "hollow / solid",
}

# (symbol for value 0, symbol for value 1)
ATTRIBUTE_SYMBOLS: Dict[Attribute, Tuple[str, str]] = {
    Attribute.COLOR: ("P", "B"),
    Attribute.HEIGHT: ("S", "T"),
    Attribute.SHAPE: ("R", "Q"),
    Attribute.HOLLOW: ("F", "H"),
}

ATTRIBUTE_WORDS: Dict[Attribute, Tuple[str, str]] = {
    Attribute.COLOR: ("pink", "blue"),
    Attribute.HEIGHT: ("short", "tall"),
    Attribute.SHAPE: ("round", "square"),
    Attribute.HOLLOW: ("solid", "hollow"),
}


@dataclass(frozen=True)
class Piece:
    """One of the 16 Quarto pieces; every attribute is one bit of ``id``."""

    id: int
    color: int
    height: int
    shape: int
    hollow: int

    def value_of(self, attribute: Attribute) -> int:
        return ATTRIBUTE_ACCESSORS[attribute](self)

    @property
    def symbol(self) -> str:
        return "".join(ATTRIBUTE_SYMBOLS[attr][self.value_of(attr)] for attr in ATTRIBUTE_ORDER)

    def describe(self) -> str:
        return " ".join(ATTRIBUTE_WORDS[attr][self.value_of(attr)] for attr in ATTRIBUTE_ORDER)


ATTRIBUTE_ACCESSORS: Dict[Attribute, Callable[[Piece], int]] = {
    Attribute.COLOR: lambda piece: piece.color,
    Attribute.HEIGHT: lambda piece: piece.height,
    Attribute.SHAPE: lambda piece: piece.shape,
    Attribute.HOLLOW: lambda piece: piece.hollow,
}


def piece_from_id(piece_id: int) -> Piece:
    """Build the piece whose attributes are the bits of ``piece_id``."""
    if not 0 <= piece_id < PIECE_COUNT:
        raise ValueError(f"Piece id out of range: {piece_id}")
    values = {attr.value: (piece_id >> bit) & 1 for attr, bit in ATTRIBUTE_BITS.items()}
    return Piece(id=piece_id, **values)


def build_piece_catalog() -> List[Piece]:
    """Build the full 16-piece catalog, ordered by id."""
    return [piece_from_id(piece_id) for piece_id in range(PIECE_COUNT)]


PIECES: Tuple[Piece, ...] = tuple(build_piece_catalog())


def get_piece(piece_id: int) -> Piece:
    return PIECES[piece_id]


def is_valid_piece_id(piece_id: object) -> bool:
    return isinstance(piece_id, int) and not isinstance(piece_id, bool) and 0 <= piece_id < PIECE_COUNT
