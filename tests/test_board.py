"""Tests for board state and usage tracking."""

import pytest

from conftest import DRAW_CELLS

from engine.board import Board


class TestPlacement:
    def test_place_marks_piece_used(self) -> None:
        board = Board()
        board.place(5, 9)
        assert board.get_cell(5) == 9
        assert board.used[9]
        assert not board.is_available(9)
        assert 5 not in board.empty_cells()
        assert 9 not in board.unused_pieces()

    def test_occupied_cell_rejected(self) -> None:
        board = Board()
        board.place(0, 1)
        with pytest.raises(ValueError):
            board.place(0, 2)

    def test_used_piece_rejected(self) -> None:
        board = Board()
        board.place(0, 1)
        with pytest.raises(ValueError):
            board.place(1, 1)

    @pytest.mark.parametrize("index", [-1, 16])
    def test_out_of_range_cell_rejected(self, index) -> None:
        with pytest.raises(ValueError):
            Board().place(index, 0)

    def test_unused_pieces_exclude(self) -> None:
        board = Board()
        board.place(0, 0)
        assert board.unused_pieces(exclude=3) == [1, 2] + list(range(4, 16))


class TestSnapshots:
    def test_from_cells_derives_usage(self) -> None:
        board = Board.from_cells([3, None, 7] + [None] * 13)
        assert [i for i, used in enumerate(board.used) if used] == [3, 7]

    def test_clone_is_independent(self) -> None:
        board = Board()
        board.place(0, 0)
        cloned = board.clone()
        cloned.place(1, 1)
        assert board.get_cell(1) is None
        assert not board.used[1]

    def test_snapshot_is_immutable_copy(self) -> None:
        board = Board()
        cells, used = board.snapshot()
        board.place(0, 0)
        assert cells[0] is None
        assert not used[0]

    def test_render_ascii_shows_symbols_and_indices(self) -> None:
        board = Board()
        board.place(0, 15)
        text = board.render_ascii()
        assert "BTQH" in text
        assert ".15." in text


class TestGameOver:
    def test_open_board(self) -> None:
        assert Board().game_over() == (False, None, False)

    def test_win(self) -> None:
        board = Board.from_cells([0, 2, 4, 6] + [None] * 12)
        terminal, match, is_draw = board.game_over()
        assert terminal and not is_draw
        assert match.line_label == "row 1"

    def test_full_board_draw(self) -> None:
        board = Board.from_cells(DRAW_CELLS)
        assert board.is_full()
        assert board.game_over() == (True, None, True)
