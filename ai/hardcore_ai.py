"""Deterministic "hardcore" Quarto AI: win when possible, otherwise play safe."""

from __future__ import annotations

import logging
from typing import List, Optional

from ai.base_ai import BaseAI
from ai.heuristics import PlacementCandidate, immediate_win_count, score_placement, similarity_score
from ai.profiles import LOCKED_MOOD, AIProfile, apply_mood, get_profile
from engine.board import Board

LOGGER = logging.getLogger(__name__)


class HardcoreAI(BaseAI):
    """No sampling, no random tie-breaks, no mistakes."""

    def __init__(self, profile: Optional[AIProfile] = None, debug_top_k: int = 3) -> None:
        self.profile = profile or get_profile("hardcore")
        self.mood = apply_mood(self.profile, LOCKED_MOOD)
        self.debug_top_k = max(1, debug_top_k)

    def place_piece(self, board: Board, piece_id: int) -> int:
        empties = board.empty_cells()
        if not empties:
            raise RuntimeError("No empty cells available.")

        for index in empties:
            if board.would_win(index, piece_id):
                LOGGER.debug("Hardcore takes win at %d with piece %d", index, piece_id)
                return index

        opponent_pieces = board.unused_pieces(exclude=piece_id)
        candidates = [score_placement(board, index, piece_id, opponent_pieces) for index in empties]
        candidates.sort(key=lambda c: (c.danger, -c.bonus, c.index))
        self._log_candidates(candidates)
        return candidates[0].index

    def select_piece(self, board: Board, exclude_id: Optional[int] = None) -> int:
        candidates = board.unused_pieces(exclude=exclude_id)
        if not candidates:
            raise RuntimeError("No unused pieces available.")

        ranked = sorted(
            candidates,
            key=lambda piece_id: (
                immediate_win_count(board, piece_id),
                similarity_score(board, piece_id),
                piece_id,
            ),
        )
        LOGGER.debug("Hardcore hands over piece %d", ranked[0])
        return ranked[0]

    def _log_candidates(self, candidates: List[PlacementCandidate]) -> None:
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        for rank, candidate in enumerate(candidates[: self.debug_top_k], start=1):
            LOGGER.debug(
                "Candidate #%d index=%d danger=%d bonus=%d",
                rank,
                candidate.index,
                candidate.danger,
                candidate.bonus,
            )
