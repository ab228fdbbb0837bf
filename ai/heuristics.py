"""Shared scoring helpers for the Quarto AIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from engine.board import Board
from engine.pieces import ATTRIBUTE_ORDER, get_piece
from engine.rules import cell_bonus


@dataclass
class PlacementCandidate:
    """One empty index scored for placement."""

    index: int
    danger: int
    bonus: int
    tiebreak: float = 0.0


def winning_cells(board: Board, piece_id: int) -> List[int]:
    """Empty indices where ``piece_id`` completes a line."""
    return [index for index in board.empty_cells() if board.would_win(index, piece_id)]


def immediate_win_count(board: Board, piece_id: int) -> int:
    return len(winning_cells(board, piece_id))


def gives_immediate_win(board: Board, piece_id: int) -> bool:
    """Return whether the receiver of ``piece_id`` could win with it right away."""
    return any(board.would_win(index, piece_id) for index in board.empty_cells())


def estimate_danger(board: Board, index: int, piece_id: int, opponent_pieces: Sequence[int]) -> int:
    """
    Count opponent pieces that would win on the next move after placing here.

    The input board is not modified.
    """
    trial = board.clone()
    trial.cells[index] = piece_id
    return sum(1 for candidate in opponent_pieces if gives_immediate_win(trial, candidate))


def similarity_score(board: Board, piece_id: int) -> int:
    """Number of attributes whose value for this piece is already on the board."""
    piece = get_piece(piece_id)
    placed = board.placed_pieces()
    score = 0
    for attribute in ATTRIBUTE_ORDER:
        if any(other.value_of(attribute) == piece.value_of(attribute) for other in placed):
            score += 1
    return score


def score_placement(board: Board, index: int, piece_id: int, opponent_pieces: Sequence[int]) -> PlacementCandidate:
    return PlacementCandidate(
        index=index,
        danger=estimate_danger(board, index, piece_id, opponent_pieces),
        bonus=cell_bonus(index),
    )
