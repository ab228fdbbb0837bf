"""Shared fixtures for the Quarto test suite."""

from __future__ import annotations

from typing import List, Optional

import pytest

from game.config import GameConfig
from game.scheduler import ManualScheduler
from game.session import GameSession
from game.storage import ProfileStore, ScoreStore
from game.timer import GameTimer
from game.view import GameView, PresentationSink

# Full board in which no row, column or diagonal shares an attribute.
DRAW_CELLS: List[int] = [0, 7, 13, 10, 12, 11, 1, 6, 3, 4, 14, 9, 15, 8, 2, 5]


class RecordingSink(PresentationSink):
    """Keeps every published view."""

    def __init__(self) -> None:
        self.views: List[GameView] = []

    def render(self, view: GameView) -> None:
        self.views.append(view)

    @property
    def last(self) -> GameView:
        return self.views[-1]


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(tmp_path) -> GameConfig:
    return GameConfig({"seed": 1234, "storage": {"data_dir": str(tmp_path / "data")}})


@pytest.fixture
def make_session(config, sink, clock):
    """Factory for sessions wired to temp stores, a fake clock and the given scheduler."""

    def _make(profile_name: Optional[str] = "hardcore", scheduler=None) -> GameSession:
        return GameSession(
            config=config,
            score_store=ScoreStore(config.score_path),
            profile_store=ProfileStore(config.profile_path),
            sink=sink,
            timer=GameTimer(clock=clock),
            scheduler=scheduler or ManualScheduler(),
            profile_name=profile_name,
        )

    return _make
