"""Snapshot handed to the presentation layer, and the sink interface it arrives through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from engine.turns import Actor, Outcome, Phase
from game.storage import ScoreRecord
from game.timer import format_mmss

PHASE_HINTS: Dict[Phase, str] = {
    Phase.SELECT_FOR_OPPONENT: "Pick a piece for the AI to place.",
    Phase.OPPONENT_PLACING: "The AI is placing the piece you picked...",
    Phase.OPPONENT_SELECTING: "The AI is picking a piece for you...",
    Phase.PLAYER_PLACING: "Place the highlighted piece on the board.",
}


@dataclass(frozen=True)
class GameView:
    """Everything a front-end needs to draw one state."""

    phase: Phase
    cells: Tuple[Optional[int], ...]
    used: Tuple[bool, ...]
    selected: Optional[int]
    last_move_index: Optional[int]
    outcome: Optional[Outcome]
    score: ScoreRecord
    profile_name: str
    mood_name: str
    elapsed_seconds: float

    @property
    def game_over(self) -> bool:
        return self.outcome is not None

    @property
    def winning_cells(self) -> Tuple[int, ...]:
        return () if self.outcome is None else self.outcome.winning_cells

    def badge(self) -> str:
        if self.game_over:
            return "[game over]"
        return "[your turn]" if self.phase.actor is Actor.HUMAN else "[AI turn]"

    def hint(self) -> str:
        if self.outcome is None:
            return PHASE_HINTS[self.phase]
        return describe_outcome(self.outcome)

    def status_line(self) -> str:
        return f"{self.badge()} ({self.profile_name}) {self.hint()}"


def describe_outcome(outcome: Outcome) -> str:
    elapsed = "" if outcome.elapsed_seconds is None else f" Time: {format_mmss(outcome.elapsed_seconds)}."
    if outcome.is_draw:
        return f"Draw: every piece has been placed.{elapsed}"
    who = "You win" if outcome.winner is Actor.HUMAN else "The AI wins"
    return f"{who} on {outcome.line_label} by {outcome.attribute_name}.{elapsed}"


class PresentationSink(ABC):
    """Receives a view after every state change."""

    @abstractmethod
    def render(self, view: GameView) -> None:
        raise NotImplementedError


class NullSink(PresentationSink):
    """Sink for headless sessions."""

    def render(self, view: GameView) -> None:
        return None
