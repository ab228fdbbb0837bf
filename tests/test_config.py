"""Tests for game configuration loading."""

import json
from pathlib import Path

import pytest

from game.config import GameConfig

SAMPLE_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "game_config.json"


class TestGameConfig:
    def test_defaults(self) -> None:
        config = GameConfig()
        assert config.seed is None
        assert config.default_profile == "normal"
        assert (config.ai_place_delay_ms, config.ai_select_delay_ms) == (400, 300)
        assert config.score_path == Path(".quarto") / "score.json"
        assert config.profile_path == Path(".quarto") / "profile.json"

    def test_payload_overrides(self, tmp_path) -> None:
        config = GameConfig(
            {
                "seed": "7",
                "default_profile": "chill",
                "ai": {"place_delay_ms": 0},
                "storage": {"data_dir": str(tmp_path), "score_file": "s.json"},
                "profiles": {"normal": {"top_k": 2}},
            }
        )
        assert config.seed == 7
        assert config.default_profile == "chill"
        assert config.ai_place_delay_ms == 0
        assert config.ai_select_delay_ms == 300
        assert config.score_path == tmp_path / "s.json"
        assert config.resolve_profile("normal").top_k == 2
        assert config.resolve_profile("hardcore").top_k == 1

    def test_unknown_profile_section_rejected(self) -> None:
        with pytest.raises(ValueError):
            GameConfig({"profiles": {"nightmare": {"top_k": 1}}})

    @pytest.mark.parametrize(
        "overrides",
        [{"top_k": 0}, {"win_prob": 7.5, "sample_pieces": -3}],
    )
    def test_out_of_range_profile_override_rejected_at_load(self, overrides) -> None:
        with pytest.raises(ValueError):
            GameConfig({"profiles": {"normal": overrides}})

    def test_null_sections_use_defaults(self) -> None:
        config = GameConfig({"ai": None, "storage": None, "profiles": {"normal": None}})
        assert (config.ai_place_delay_ms, config.ai_select_delay_ms) == (400, 300)
        assert config.score_path == Path(".quarto") / "score.json"
        assert config.resolve_profile("normal").top_k == 4

        assert GameConfig({"profiles": None}).resolve_profile("chill").top_k == 6

    def test_unknown_names_resolve_to_normal(self) -> None:
        config = GameConfig({"default_profile": "nightmare"})
        assert config.default_profile == "normal"
        assert config.resolve_profile("nightmare").name == "normal"

    def test_from_json(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"seed": 3}), encoding="utf-8")
        assert GameConfig.from_json(path).seed == 3

    def test_sample_config_loads(self) -> None:
        config = GameConfig.from_json(SAMPLE_CONFIG)
        assert config.default_profile == "normal"
