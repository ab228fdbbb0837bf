"""Measure how often a probabilistic profile takes wins, defends and slips."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from ai.normal_ai import NormalAI, PlacementDecision
from ai.profiles import LOCKED_MOOD, AIProfile, Mood, apply_mood
from engine.board import Board
from engine.pieces import PIECE_COUNT

LOGGER = logging.getLogger(__name__)


@dataclass
class CalibrationReport:
    """Configured vs observed decision rates for one profile at one mood."""

    profile: str
    mood: str
    trials: int
    win_opportunities: int
    scored_placements: int
    expected_win_take: float
    observed_win_take: float
    expected_defense: float
    observed_defense: float
    expected_mistake: float
    observed_mistake: float

    def deviations(self) -> Dict[str, float]:
        return {
            "win_take": abs(self.observed_win_take - self.expected_win_take),
            "defense": abs(self.observed_defense - self.expected_defense),
            "mistake": abs(self.observed_mistake - self.expected_mistake),
        }

    def within(self, tolerance: float) -> bool:
        return all(value <= tolerance for value in self.deviations().values())


def random_position(rng: random.Random, placed: int) -> Tuple[Board, int]:
    """
    Random non-terminal board with up to ``placed`` pieces, plus an unused piece to hand over.

    Placements that would complete a line are skipped, so the board never holds a win.
    """
    board = Board()
    order = list(range(PIECE_COUNT))
    rng.shuffle(order)
    for piece_id in order[: min(placed, PIECE_COUNT - 1)]:
        safe = [index for index in board.empty_cells() if not board.would_win(index, piece_id)]
        if not safe:
            break
        board.place(rng.choice(safe), piece_id)
    return board, rng.choice(board.unused_pieces())


def _rate(flags: List[bool]) -> float:
    if not flags:
        return 0.0
    return float(np.mean(np.array(flags, dtype=np.float64)))


def measure_placement_rates(
    profile: AIProfile,
    trials: int = 500,
    seed: Optional[int] = None,
    mood: Mood = LOCKED_MOOD,
    placed_range: Tuple[int, int] = (4, 11),
) -> CalibrationReport:
    """Run ``trials`` placements on random positions with the mood pinned."""
    rng = random.Random(seed)
    agent = NormalAI(profile=profile, rng=random.Random(rng.getrandbits(32)), fixed_mood=mood)
    expected = apply_mood(profile, mood)

    decisions: List[PlacementDecision] = []
    for _ in range(trials):
        board, piece_id = random_position(rng, rng.randint(*placed_range))
        agent.place_piece(board, piece_id)
        decisions.append(agent.last_decision)

    win_flags = [decision.took_win for decision in decisions if decision.win_available]
    defense_flags = [decision.defense_on for decision in decisions if decision.defense_on is not None]
    mistake_flags = [decision.mistake for decision in decisions if decision.mistake is not None]

    report = CalibrationReport(
        profile=profile.name,
        mood=mood.name,
        trials=trials,
        win_opportunities=len(win_flags),
        scored_placements=len(defense_flags),
        expected_win_take=profile.win_prob,
        observed_win_take=_rate(win_flags),
        expected_defense=expected.defense,
        observed_defense=_rate(defense_flags),
        expected_mistake=expected.mistake,
        observed_mistake=_rate(mistake_flags),
    )
    LOGGER.info(
        "Calibration %s/%s: win_take %.3f (%.3f) defense %.3f (%.3f) mistake %.3f (%.3f)",
        report.profile,
        report.mood,
        report.observed_win_take,
        report.expected_win_take,
        report.observed_defense,
        report.expected_defense,
        report.observed_mistake,
        report.expected_mistake,
    )
    return report
