"""Probabilistic Quarto AI with sampling, top-k picks, moods and occasional mistakes."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from ai.base_ai import BaseAI
from ai.heuristics import (
    PlacementCandidate,
    gives_immediate_win,
    score_placement,
    similarity_score,
    winning_cells,
)
from ai.profiles import AIProfile, Mood, MoodState, apply_mood, get_profile, roll_mood
from engine.board import Board

LOGGER = logging.getLogger(__name__)

MISTAKE_WINDOW = 4


@dataclass(frozen=True)
class PlacementDecision:
    """How the last placement was chosen. ``defense_on``/``mistake`` are None when the win branch fired."""

    index: int
    win_available: bool
    took_win: bool
    defense_on: Optional[bool] = None
    mistake: Optional[bool] = None


class NormalAI(BaseAI):
    """Soft opponent: usually takes wins, usually defends, sometimes slips."""

    def __init__(
        self,
        profile: Optional[AIProfile] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        fixed_mood: Optional[Mood] = None,
        debug_top_k: int = 3,
    ) -> None:
        self.profile = profile or get_profile("normal")
        self._rng = rng or random.Random(seed)
        self.fixed_mood = fixed_mood
        self.debug_top_k = max(1, debug_top_k)
        self.last_decision: Optional[PlacementDecision] = None
        self.mood = self._roll_mood()

    def _roll_mood(self) -> MoodState:
        if self.fixed_mood is not None:
            return apply_mood(self.profile, self.fixed_mood)
        return roll_mood(self.profile, self._rng)

    def new_game(self) -> None:
        self.mood = self._roll_mood()
        self.last_decision = None
        LOGGER.info("AI %s mood for this game: %s", self.name, self.mood.name)

    def place_piece(self, board: Board, piece_id: int) -> int:
        empties = board.empty_cells()
        if not empties:
            raise RuntimeError("No empty cells available.")

        wins = winning_cells(board, piece_id)
        if wins and self._rng.random() < self.profile.win_prob:
            index = self._rng.choice(wins)
            self.last_decision = PlacementDecision(index=index, win_available=True, took_win=True)
            LOGGER.debug("AI %s takes win at %d", self.name, index)
            return index

        opponent_pool = board.unused_pieces(exclude=piece_id)
        candidates: List[PlacementCandidate] = []
        for index in empties:
            candidate = score_placement(board, index, piece_id, self._sample_opponents(opponent_pool))
            candidate.tiebreak = self._rng.random()
            candidates.append(candidate)

        defense_on = self._rng.random() < self.mood.defense
        if defense_on:
            candidates.sort(key=lambda c: (c.danger, -c.bonus, c.tiebreak))
        else:
            candidates.sort(key=lambda c: (-c.bonus, c.tiebreak))

        top_k = min(self.profile.top_k, len(candidates))
        mistake = self._rng.random() < self.mood.mistake
        if not mistake:
            chosen = candidates[self._rng.randrange(top_k)]
        else:
            start = top_k
            end = min(len(candidates), top_k + MISTAKE_WINDOW)
            chosen = candidates[self._rng.randrange(start, end)] if end > start else candidates[-1]

        self._log_candidates(candidates, chosen, defense_on, mistake)
        self.last_decision = PlacementDecision(
            index=chosen.index,
            win_available=bool(wins),
            took_win=False,
            defense_on=defense_on,
            mistake=mistake,
        )
        return chosen.index

    def _sample_opponents(self, pool: List[int]) -> List[int]:
        if self.profile.sample_pieces >= len(pool):
            return pool
        return self._rng.sample(pool, self.profile.sample_pieces)

    def select_piece(self, board: Board, exclude_id: Optional[int] = None) -> int:
        candidates = board.unused_pieces(exclude=exclude_id)
        if not candidates:
            raise RuntimeError("No unused pieces available.")

        safe = [piece_id for piece_id in candidates if not gives_immediate_win(board, piece_id)]
        pool = safe or candidates
        # Stable sort: equal scores keep ascending id order.
        pool = sorted(pool, key=lambda piece_id: similarity_score(board, piece_id), reverse=True)
        LOGGER.debug("AI %s hands over piece %d (safe=%d/%d)", self.name, pool[0], len(safe), len(candidates))
        return pool[0]

    def _log_candidates(
        self,
        candidates: List[PlacementCandidate],
        chosen: PlacementCandidate,
        defense_on: bool,
        mistake: bool,
    ) -> None:
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        LOGGER.debug("AI %s placement defense=%s mistake=%s mood=%s", self.name, defense_on, mistake, self.mood.name)
        for rank, candidate in enumerate(candidates[: self.debug_top_k], start=1):
            LOGGER.debug(
                "Candidate #%d index=%d danger=%d bonus=%d chosen=%s",
                rank,
                candidate.index,
                candidate.danger,
                candidate.bonus,
                candidate is chosen,
            )
