"""Game configuration loaded from an optional JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping, Optional

from ai.profiles import PROFILES, AIProfile, normalize_profile_name


class GameConfig:
    """Container for session settings loaded from a config payload."""

    def __init__(self, payload: Optional[Dict[str, object]] = None) -> None:
        payload = payload or {}
        seed = payload.get("seed")
        self.seed = None if seed is None else int(seed)
        self.default_profile = normalize_profile_name(payload.get("default_profile"))

        ai = payload.get("ai") or {}
        self.ai_place_delay_ms = int(ai.get("place_delay_ms", 400))
        self.ai_select_delay_ms = int(ai.get("select_delay_ms", 300))

        storage = payload.get("storage") or {}
        self.data_dir = Path(storage.get("data_dir", ".quarto"))
        self.score_file = str(storage.get("score_file", "score.json"))
        self.profile_file = str(storage.get("profile_file", "profile.json"))

        overrides: Mapping[str, Mapping[str, object]] = payload.get("profiles") or {}
        unknown = set(overrides) - set(PROFILES)
        if unknown:
            raise ValueError(f"Unknown AI profiles in config: {sorted(unknown)}")
        self.profiles: Dict[str, AIProfile] = {
            name: profile.with_overrides(overrides.get(name) or {}) for name, profile in PROFILES.items()
        }

    @classmethod
    def from_json(cls, path: str | Path) -> "GameConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)

    @property
    def score_path(self) -> Path:
        return self.data_dir / self.score_file

    @property
    def profile_path(self) -> Path:
        return self.data_dir / self.profile_file

    def resolve_profile(self, name: Optional[str]) -> AIProfile:
        """Profile for ``name`` with config overrides applied; unknown names fall back to the default."""
        return self.profiles[normalize_profile_name(name)]
