"""Tests for difficulty presets and moods."""

import random

import pytest

from ai.profiles import (
    LOCKED_MOOD,
    MOODS,
    PROFILES,
    apply_mood,
    get_profile,
    normalize_profile_name,
    profile_names,
    roll_mood,
)


class TestPresets:
    def test_known_profiles(self) -> None:
        assert profile_names() == ("normal", "hardcore", "chill")

    def test_hardcore_is_deterministic(self) -> None:
        hardcore = get_profile("hardcore")
        assert hardcore.deterministic
        assert hardcore.win_prob == 1.0 and hardcore.mistake_prob == 0.0 and hardcore.top_k == 1

    def test_unknown_name_falls_back_to_normal(self) -> None:
        assert normalize_profile_name("impossible") == "normal"
        assert normalize_profile_name(None) == "normal"
        assert get_profile("impossible") is PROFILES["normal"]

    def test_overrides_cast_and_validate(self) -> None:
        tuned = PROFILES["normal"].with_overrides({"top_k": "2", "win_prob": 1})
        assert tuned.top_k == 2 and tuned.win_prob == 1.0
        assert tuned.name == "normal"
        with pytest.raises(ValueError):
            PROFILES["normal"].with_overrides({"aggression": 0.5})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"top_k": 0},
            {"sample_pieces": -3},
            {"win_prob": 7.5},
            {"defense_prob": -0.1},
            {"mistake_prob": 1.01},
        ],
    )
    def test_out_of_range_overrides_rejected(self, overrides) -> None:
        with pytest.raises(ValueError):
            PROFILES["normal"].with_overrides(overrides)

    def test_boundary_overrides_accepted(self) -> None:
        tuned = PROFILES["chill"].with_overrides({"win_prob": 0, "mistake_prob": 1, "top_k": 1, "sample_pieces": 0})
        assert (tuned.win_prob, tuned.mistake_prob, tuned.top_k, tuned.sample_pieces) == (0.0, 1.0, 1, 0)


class TestMoods:
    def test_apply_mood_clamps(self) -> None:
        chaos = next(mood for mood in MOODS if mood.name == "chaos")
        state = apply_mood(PROFILES["chill"].with_overrides({"defense_prob": 0.1}), chaos)
        assert state.defense == 0.0
        assert state.mistake == pytest.approx(0.43)

    def test_deterministic_profile_is_always_locked(self) -> None:
        rng = random.Random(0)
        for _ in range(10):
            state = roll_mood(PROFILES["hardcore"], rng)
            assert state.mood is LOCKED_MOOD
            assert state.defense == 1.0 and state.mistake == 0.0

    def test_roll_covers_every_mood(self) -> None:
        rng = random.Random(3)
        names = {roll_mood(PROFILES["normal"], rng).name for _ in range(60)}
        assert names == {"serious", "playful", "chaos"}
