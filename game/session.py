"""Game session: owns one human-vs-AI game and wires the engine to its collaborators."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ai.base_ai import BaseAI
from ai.factory import build_ai
from engine.board import Board
from engine.turns import Actor, MoveResult, Outcome, Phase, TurnStateMachine
from game.config import GameConfig
from game.scheduler import CancellationToken, ImmediateScheduler, Scheduler, guarded
from game.storage import ProfileStore, ScoreRecord, ScoreStore
from game.timer import GameTimer
from game.view import GameView, NullSink, PresentationSink

LOGGER = logging.getLogger(__name__)


class GameSession:
    """
    Single owner of board, usage, phase, selected piece, score and AI.

    Human actions come in through ``select_for_opponent`` and ``place_for_human``.
    The AI half of a round runs through ``place_for_opponent`` and
    ``select_for_player``, which the session schedules itself after a human
    selection. Invalid actions are ignored and return False/None.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        score_store: Optional[ScoreStore] = None,
        profile_store: Optional[ProfileStore] = None,
        sink: Optional[PresentationSink] = None,
        timer: Optional[GameTimer] = None,
        scheduler: Optional[Scheduler] = None,
        profile_name: Optional[str] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.score_store = score_store or ScoreStore(self.config.score_path)
        self.profile_store = profile_store or ProfileStore(self.config.profile_path, default=self.config.default_profile)
        self.sink = sink or NullSink()
        self.timer = timer or GameTimer()
        self.scheduler = scheduler or ImmediateScheduler()

        self.score: ScoreRecord = self.score_store.load()
        self.profile = self.config.resolve_profile(profile_name or self.profile_store.load())
        self.ai: BaseAI = build_ai(self.profile, seed=self.config.seed)
        self.machine = TurnStateMachine()
        self._token = CancellationToken()
        self.timer.start()
        LOGGER.info("Session started with profile=%s mood=%s", self.profile.name, self.ai.mood.name)
        self._publish()

    @property
    def board(self) -> Board:
        return self.machine.board

    @property
    def phase(self) -> Phase:
        return self.machine.phase

    @property
    def selected(self) -> Optional[int]:
        return self.machine.selected

    @property
    def outcome(self) -> Optional[Outcome]:
        return self.machine.outcome

    @property
    def game_over(self) -> bool:
        return self.machine.game_over

    def select_for_opponent(self, piece_id: int) -> bool:
        """Human hands ``piece_id`` to the AI; the AI placement is then scheduled."""
        if not self.machine.select_piece(Actor.HUMAN, piece_id):
            return False
        LOGGER.debug("Human hands over piece %d", piece_id)
        self._publish()
        self._schedule(self.config.ai_place_delay_ms, self.place_for_opponent, "AI placement")
        return True

    def place_for_opponent(self) -> Optional[MoveResult]:
        """AI places the piece it was handed; on a non-terminal board its selection is scheduled."""
        if self.machine.actor is not Actor.AI or self.phase is not Phase.OPPONENT_PLACING:
            return None
        index = self.ai.place_piece(self.board, self.selected)
        result = self.machine.place_selected(Actor.AI, index)
        if result is None:
            raise RuntimeError(f"AI {self.ai.name} chose an illegal cell {index}")
        LOGGER.debug("AI placed piece %d at %d", result.piece_id, result.index)
        self._after_placement(result)
        if not self.game_over:
            self._schedule(self.config.ai_select_delay_ms, self.select_for_player, "AI selection")
        return replace(result, outcome=self.outcome)

    def select_for_player(self) -> Optional[int]:
        """AI picks the piece the human must place next."""
        if self.machine.actor is not Actor.AI or self.phase is not Phase.OPPONENT_SELECTING:
            return None
        piece_id = self.ai.select_piece(self.board)
        if not self.machine.select_piece(Actor.AI, piece_id):
            raise RuntimeError(f"AI {self.ai.name} chose an unavailable piece {piece_id}")
        LOGGER.debug("AI hands over piece %d", piece_id)
        self._publish()
        return piece_id

    def place_for_human(self, index: int) -> Optional[MoveResult]:
        """Human places the piece in hand at ``index``."""
        result = self.machine.place_selected(Actor.HUMAN, index)
        if result is None:
            return None
        LOGGER.debug("Human placed piece %d at %d", result.piece_id, result.index)
        self._after_placement(result)
        return replace(result, outcome=self.outcome)

    def new_game(self) -> None:
        """Reset the board and drop any AI step still waiting to run."""
        self._token.cancel()
        self._token = CancellationToken()
        self.machine.reset()
        self.ai.new_game()
        self.timer.start()
        LOGGER.info("New game (profile=%s mood=%s)", self.profile.name, self.ai.mood.name)
        self._publish()

    def set_difficulty(self, profile_name: str) -> str:
        """Swap the AI profile and remember it. Callers follow up with ``new_game``."""
        self.profile = self.config.resolve_profile(profile_name)
        self.ai = build_ai(self.profile, seed=self.config.seed)
        self.profile_store.save(self.profile.name)
        LOGGER.info("Difficulty set to %s", self.profile.name)
        return self.profile.name

    def reset_score(self) -> None:
        self.score = ScoreRecord()
        self.score_store.save(self.score)
        self._publish()

    def view(self) -> GameView:
        cells, used = self.board.snapshot()
        return GameView(
            phase=self.phase,
            cells=cells,
            used=used,
            selected=self.selected,
            last_move_index=self.machine.last_move_index,
            outcome=self.outcome,
            score=replace(self.score),
            profile_name=self.profile.name,
            mood_name=self.ai.mood.name,
            elapsed_seconds=self.timer.elapsed_seconds,
        )

    def _after_placement(self, result: MoveResult) -> None:
        if result.outcome is not None:
            self._finish(result.outcome)
        else:
            self._publish()

    def _finish(self, outcome: Outcome) -> None:
        self.timer.stop()
        outcome = replace(outcome, elapsed_seconds=self.timer.elapsed_seconds)
        self.machine.outcome = outcome
        self.score.record(outcome)
        self.score_store.save(self.score)
        LOGGER.info(
            "Game over: result=%s line=%s attribute=%s elapsed=%.1fs",
            outcome.result,
            outcome.line_label,
            outcome.attribute_name,
            outcome.elapsed_seconds,
        )
        self._publish()

    def _schedule(self, delay_ms: int, step: Callable[[], object], label: str) -> None:
        self.scheduler.schedule(delay_ms, guarded(self._token, step, label))

    def _publish(self) -> None:
        self.sink.render(self.view())
