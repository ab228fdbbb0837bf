"""Turn phases and the selection/placement state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from engine.board import Board
from engine.pieces import Attribute

LOGGER = logging.getLogger(__name__)


class Actor(str, Enum):
    """Who acts in a phase."""

    HUMAN = "human"
    AI = "ai"

    def opponent(self) -> "Actor":
        return Actor.AI if self is Actor.HUMAN else Actor.HUMAN


class Phase(str, Enum):
    """The four steps of one full round."""

    SELECT_FOR_OPPONENT = "select_for_opponent"
    OPPONENT_PLACING = "opponent_placing"
    OPPONENT_SELECTING = "opponent_selecting"
    PLAYER_PLACING = "player_placing"

    @property
    def actor(self) -> Actor:
        return PHASE_ACTOR[self]

    @property
    def is_selection(self) -> bool:
        return self in (Phase.SELECT_FOR_OPPONENT, Phase.OPPONENT_SELECTING)


PHASE_ACTOR: Dict[Phase, Actor] = {
    Phase.SELECT_FOR_OPPONENT: Actor.HUMAN,
    Phase.OPPONENT_PLACING: Actor.AI,
    Phase.OPPONENT_SELECTING: Actor.AI,
    Phase.PLAYER_PLACING: Actor.HUMAN,
}

NEXT_PHASE: Dict[Phase, Phase] = {
    Phase.SELECT_FOR_OPPONENT: Phase.OPPONENT_PLACING,
    Phase.OPPONENT_PLACING: Phase.OPPONENT_SELECTING,
    Phase.OPPONENT_SELECTING: Phase.PLAYER_PLACING,
    Phase.PLAYER_PLACING: Phase.SELECT_FOR_OPPONENT,
}


@dataclass(frozen=True)
class Outcome:
    """Terminal result. ``winner`` is None on a draw."""

    winner: Optional[Actor]
    is_draw: bool
    line_label: Optional[str] = None
    attribute: Optional[Attribute] = None
    winning_cells: Tuple[int, ...] = ()
    elapsed_seconds: Optional[float] = None

    @property
    def result(self) -> str:
        """``human``, ``ai`` or ``draw``."""
        if self.is_draw or self.winner is None:
            return "draw"
        return self.winner.value

    @property
    def attribute_name(self) -> Optional[str]:
        return None if self.attribute is None else self.attribute.label


@dataclass(frozen=True)
class MoveResult:
    """Result metadata for an applied placement."""

    actor: Actor
    index: int
    piece_id: int
    outcome: Optional[Outcome]


class TurnStateMachine:
    """Owns the board and enforces who may select or place, and when.

    Invalid actions return ``False``/``None`` and leave state untouched.
    """

    def __init__(self, board: Optional[Board] = None) -> None:
        self.board = board or Board()
        self.phase = Phase.SELECT_FOR_OPPONENT
        self.selected: Optional[int] = None
        self.outcome: Optional[Outcome] = None
        self.last_move_index: Optional[int] = None

    def reset(self) -> None:
        self.board = Board()
        self.phase = Phase.SELECT_FOR_OPPONENT
        self.selected = None
        self.outcome = None
        self.last_move_index = None

    @property
    def game_over(self) -> bool:
        return self.outcome is not None

    @property
    def actor(self) -> Optional[Actor]:
        """Actor expected to move next, or None once the game is over."""
        if self.game_over:
            return None
        return self.phase.actor

    @property
    def winning_cells(self) -> Tuple[int, ...]:
        return () if self.outcome is None else self.outcome.winning_cells

    def can_select(self, actor: Actor, piece_id: int) -> bool:
        return (
            not self.game_over
            and self.phase.is_selection
            and self.phase.actor is actor
            and self.board.is_available(piece_id)
        )

    def can_place(self, actor: Actor, index: int) -> bool:
        return (
            not self.game_over
            and not self.phase.is_selection
            and self.phase.actor is actor
            and self.selected is not None
            and self.board.is_empty(index)
        )

    def select_piece(self, actor: Actor, piece_id: int) -> bool:
        """Hand ``piece_id`` to the other side. Returns False on an ignored action."""
        if not self.can_select(actor, piece_id):
            LOGGER.debug("Ignored selection actor=%s piece=%s phase=%s", actor.value, piece_id, self.phase.value)
            return False
        self.selected = piece_id
        self.phase = NEXT_PHASE[self.phase]
        return True

    def place_selected(self, actor: Actor, index: int) -> Optional[MoveResult]:
        """Place the piece in hand at ``index``. Returns None on an ignored action."""
        if not self.can_place(actor, index):
            LOGGER.debug("Ignored placement actor=%s index=%s phase=%s", actor.value, index, self.phase.value)
            return None

        piece_id = self.selected
        self.board.place(index, piece_id)
        self.selected = None
        self.last_move_index = index

        terminal, match, is_draw = self.board.game_over()
        if terminal:
            if is_draw:
                self.outcome = Outcome(winner=None, is_draw=True)
            else:
                self.outcome = Outcome(
                    winner=actor,
                    is_draw=False,
                    line_label=match.line_label,
                    attribute=match.attribute,
                    winning_cells=match.cells,
                )
        else:
            self.phase = NEXT_PHASE[self.phase]
        return MoveResult(actor=actor, index=index, piece_id=piece_id, outcome=self.outcome)
