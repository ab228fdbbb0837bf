"""Tests for the probabilistic normal AI."""

import random

from conftest import DRAW_CELLS

from ai.normal_ai import NormalAI
from ai.profiles import LOCKED_MOOD, PROFILES
from engine.board import Board


def _board(placements) -> Board:
    cells = [None] * 16
    for index, piece_id in placements.items():
        cells[index] = piece_id
    return Board.from_cells(cells)


def _agent(seed=0, **overrides) -> NormalAI:
    profile = PROFILES["normal"].with_overrides(overrides)
    return NormalAI(profile=profile, seed=seed, fixed_mood=LOCKED_MOOD)


class TestPlacement:
    def test_always_takes_win_when_win_prob_is_one(self) -> None:
        board = _board({1: 0, 9: 2, 13: 4})
        for seed in range(20):
            agent = _agent(seed=seed, win_prob=1.0)
            assert agent.place_piece(board, 6) == 5
            assert agent.last_decision.took_win

    def test_can_skip_win_when_win_prob_is_zero(self) -> None:
        board = _board({1: 0, 9: 2, 13: 4})
        agent = _agent(win_prob=0.0)
        index = agent.place_piece(board, 6)
        assert board.is_empty(index)
        assert agent.last_decision.win_available
        assert not agent.last_decision.took_win

    def test_full_defense_picks_a_safe_center(self) -> None:
        board = _board({1: 0, 9: 2})
        for seed in range(10):
            agent = _agent(seed=seed, win_prob=0.0, defense_prob=1.0, mistake_prob=0.0, top_k=1, sample_pieces=16)
            assert agent.place_piece(board, 4) in {6, 10}
            assert agent.last_decision.defense_on
            assert not agent.last_decision.mistake

    def test_mistake_picks_outside_top_k(self) -> None:
        board = _board({1: 0, 9: 2})
        agent = _agent(win_prob=0.0, defense_prob=1.0, mistake_prob=1.0, top_k=1, sample_pieces=16)
        index = agent.place_piece(board, 4)
        assert agent.last_decision.mistake
        assert board.is_empty(index)

    def test_mistake_with_no_room_past_top_k_uses_last_candidate(self) -> None:
        board = Board.from_cells(DRAW_CELLS[:15] + [None])
        agent = _agent(win_prob=0.0, mistake_prob=1.0, top_k=16)
        assert agent.place_piece(board, DRAW_CELLS[15]) == 15

    def test_input_board_not_mutated(self) -> None:
        board = _board({1: 0, 9: 2})
        before = board.snapshot()
        _agent(seed=4).place_piece(board, 4)
        assert board.snapshot() == before

    def test_same_seed_same_choices(self) -> None:
        board = _board({1: 0, 9: 2, 3: 15})
        first = [_agent(seed=9).place_piece(board, 4) for _ in range(3)]
        assert len(set(first)) == 1

    def test_win_take_rate_tracks_profile(self) -> None:
        board = _board({1: 0, 9: 2, 13: 4})
        agent = NormalAI(profile=PROFILES["chill"], rng=random.Random(21), fixed_mood=LOCKED_MOOD)
        taken = 0
        for _ in range(1000):
            agent.place_piece(board, 6)
            taken += agent.last_decision.took_win
        assert abs(taken / 1000 - PROFILES["chill"].win_prob) < 0.05


class TestSelection:
    def test_prefers_piece_that_cannot_win(self) -> None:
        board = _board({0: 0, 1: 2, 2: 4})
        assert _agent().select_piece(board) == 9

    def test_falls_back_to_full_pool_when_nothing_is_safe(self) -> None:
        board = _board({0: 0, 1: 2, 2: 4, 4: 9, 5: 11, 6: 13})
        assert _agent().select_piece(board) == 1

    def test_ranking_prefers_similar_pieces(self) -> None:
        board = _board({0: 0})
        # Every piece is safe on a one-piece board; piece 1 shares three attributes with piece 0.
        assert _agent().select_piece(board) == 1


class TestMood:
    def test_new_game_rerolls_mood(self) -> None:
        agent = NormalAI(profile=PROFILES["normal"], seed=2)
        seen = set()
        for _ in range(40):
            agent.new_game()
            seen.add(agent.mood.name)
        assert seen == {"serious", "playful", "chaos"}

    def test_fixed_mood_survives_new_game(self) -> None:
        agent = _agent()
        agent.new_game()
        assert agent.mood.mood is LOCKED_MOOD
        assert agent.mood.defense == PROFILES["normal"].defense_prob

    def test_mood_adjusts_probabilities(self) -> None:
        agent = NormalAI(profile=PROFILES["normal"], seed=2)
        profile = PROFILES["normal"]
        assert agent.mood.defense == min(1.0, max(0.0, profile.defense_prob + agent.mood.mood.defense_boost))
