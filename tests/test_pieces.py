"""Tests for the piece catalog."""

import pytest

from engine.pieces import (
    ATTRIBUTE_ACCESSORS,
    ATTRIBUTE_ORDER,
    PIECES,
    Attribute,
    build_piece_catalog,
    is_valid_piece_id,
    piece_from_id,
)


class TestCatalog:
    def test_sixteen_distinct_pieces(self) -> None:
        catalog = build_piece_catalog()
        assert len(catalog) == 16
        assert [piece.id for piece in catalog] == list(range(16))
        signatures = {tuple(piece.value_of(attr) for attr in ATTRIBUTE_ORDER) for piece in catalog}
        assert len(signatures) == 16

    def test_attributes_are_bits_of_id(self) -> None:
        piece = piece_from_id(0b1011)
        assert (piece.color, piece.height, piece.shape, piece.hollow) == (1, 0, 1, 1)

    def test_catalog_constant_matches_builder(self) -> None:
        assert list(PIECES) == build_piece_catalog()

    def test_out_of_range_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            piece_from_id(16)
        with pytest.raises(ValueError):
            piece_from_id(-1)

    def test_pieces_are_immutable(self) -> None:
        with pytest.raises(AttributeError):
            PIECES[0].color = 1  # type: ignore[misc]


class TestAttributes:
    def test_declared_order(self) -> None:
        assert ATTRIBUTE_ORDER == [Attribute.COLOR, Attribute.HEIGHT, Attribute.SHAPE, Attribute.HOLLOW]

    def test_every_attribute_has_an_accessor(self) -> None:
        assert set(ATTRIBUTE_ACCESSORS) == set(ATTRIBUTE_ORDER)
        piece = piece_from_id(0b0110)
        assert [ATTRIBUTE_ACCESSORS[attr](piece) for attr in ATTRIBUTE_ORDER] == [0, 1, 1, 0]
        assert [piece.value_of(attr) for attr in ATTRIBUTE_ORDER] == [0, 1, 1, 0]

    def test_labels(self) -> None:
        assert Attribute.HOLLOW.label == "hollow / solid"
        assert Attribute.COLOR.label == "color"

    def test_symbols_and_descriptions(self) -> None:
        assert PIECES[0].symbol == "PSRF"
        assert PIECES[15].symbol == "BTQH"
        assert PIECES[15].describe() == "blue tall square hollow"

    @pytest.mark.parametrize("value,expected", [(0, True), (15, True), (16, False), (-1, False), (True, False), ("3", False)])
    def test_valid_piece_id(self, value, expected) -> None:
        assert is_valid_piece_id(value) is expected
