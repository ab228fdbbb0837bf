"""Tests for terminal command parsing and view text."""

import pytest

from cli.main import Command, parse_user_command, render_tray
from engine.pieces import Attribute
from engine.turns import Actor, Outcome, Phase
from game.storage import ScoreRecord
from game.view import GameView, describe_outcome


def _view(**overrides) -> GameView:
    values = dict(
        phase=Phase.SELECT_FOR_OPPONENT,
        cells=(None,) * 16,
        used=(False,) * 16,
        selected=None,
        last_move_index=None,
        outcome=None,
        score=ScoreRecord(),
        profile_name="normal",
        mood_name="serious",
        elapsed_seconds=0.0,
    )
    values.update(overrides)
    return GameView(**values)


class TestParseUserCommand:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("give 3", Command(name="give", args=(3,))),
            ("place 7", Command(name="place", args=(7,))),
            ("place 1 2", Command(name="place", args=(6,))),
            ("MODE Hardcore", Command(name="mode", text="hardcore")),
            ("new", Command(name="new")),
            ("reset-score", Command(name="reset-score")),
            ("exit", Command(name="quit")),
        ],
    )
    def test_valid(self, text, expected) -> None:
        assert parse_user_command(text) == expected

    @pytest.mark.parametrize("text", ["", "give", "give x", "place 4 0", "place 1 2 3", "dance", "new now"])
    def test_invalid(self, text) -> None:
        assert parse_user_command(text) is None


class TestViewText:
    def test_tray_hides_used_and_marks_selected(self) -> None:
        used = tuple(piece_id < 14 for piece_id in range(16))
        assert render_tray(_view(used=used, selected=15)) == " 14:BTQF *15:BTQH"

    def test_status_line_for_turns(self) -> None:
        assert _view().status_line().startswith("[your turn] (normal)")
        assert _view(phase=Phase.OPPONENT_PLACING).badge() == "[AI turn]"

    def test_outcome_text(self) -> None:
        outcome = Outcome(winner=Actor.AI, is_draw=False, line_label="row 2", attribute=Attribute.HEIGHT, elapsed_seconds=65)
        assert describe_outcome(outcome) == "The AI wins on row 2 by height. Time: 01:05."
        draw = Outcome(winner=None, is_draw=True)
        view = _view(outcome=draw)
        assert view.badge() == "[game over]"
        assert view.hint() == "Draw: every piece has been placed."
