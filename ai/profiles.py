"""AI difficulty presets and the per-game mood roll."""

from __future__ import annotations

import random
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional, Tuple

DEFAULT_PROFILE = "normal"


@dataclass(frozen=True)
class AIProfile:
    """Tunable knobs of one difficulty level."""

    name: str
    win_prob: float
    defense_prob: float
    mistake_prob: float
    sample_pieces: int
    top_k: int
    deterministic: bool = False

    def __post_init__(self) -> None:
        for key in ("win_prob", "defense_prob", "mistake_prob"):
            value = getattr(self, key)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"AI profile {self.name}: {key} must be in [0, 1], got {value}")
        if self.top_k < 1:
            raise ValueError(f"AI profile {self.name}: top_k must be >= 1, got {self.top_k}")
        if self.sample_pieces < 0:
            raise ValueError(f"AI profile {self.name}: sample_pieces must be >= 0, got {self.sample_pieces}")

    def with_overrides(self, overrides: Mapping[str, object]) -> "AIProfile":
        """Copy with fields replaced from a config payload; unknown keys and out-of-range values are rejected."""
        known = {field.name for field in fields(self)} - {"name"}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown AI profile fields: {sorted(unknown)}")
        casts = {
            "win_prob": float,
            "defense_prob": float,
            "mistake_prob": float,
            "sample_pieces": int,
            "top_k": int,
            "deterministic": bool,
        }
        return replace(self, **{key: casts[key](value) for key, value in overrides.items()})


PROFILES: Dict[str, AIProfile] = {
    "normal": AIProfile(
        name="normal",
        win_prob=0.95,
        defense_prob=0.75,
        mistake_prob=0.12,
        sample_pieces=8,
        top_k=4,
    ),
    "hardcore": AIProfile(
        name="hardcore",
        win_prob=1.0,
        defense_prob=1.0,
        mistake_prob=0.0,
        sample_pieces=16,
        top_k=1,
        deterministic=True,
    ),
    "chill": AIProfile(
        name="chill",
        win_prob=0.80,
        defense_prob=0.50,
        mistake_prob=0.25,
        sample_pieces=4,
        top_k=6,
    ),
}


def profile_names() -> Tuple[str, ...]:
    return tuple(PROFILES)


def normalize_profile_name(name: Optional[str]) -> str:
    """Map unknown or missing names to the default profile."""
    if name in PROFILES:
        return name
    return DEFAULT_PROFILE


def get_profile(name: Optional[str]) -> AIProfile:
    return PROFILES[normalize_profile_name(name)]


@dataclass(frozen=True)
class Mood:
    """Per-game offsets applied to the defense and mistake probabilities."""

    name: str
    defense_boost: float
    mistake_boost: float


MOODS: Tuple[Mood, ...] = (
    Mood("serious", defense_boost=0.12, mistake_boost=-0.03),
    Mood("playful", defense_boost=-0.18, mistake_boost=0.10),
    Mood("chaos", defense_boost=-0.30, mistake_boost=0.18),
)

LOCKED_MOOD = Mood("locked", defense_boost=0.0, mistake_boost=0.0)


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class MoodState:
    """Mood in effect for one game, with the adjusted probabilities."""

    mood: Mood
    defense: float
    mistake: float

    @property
    def name(self) -> str:
        return self.mood.name


def apply_mood(profile: AIProfile, mood: Mood) -> MoodState:
    return MoodState(
        mood=mood,
        defense=clamp01(profile.defense_prob + mood.defense_boost),
        mistake=clamp01(profile.mistake_prob + mood.mistake_boost),
    )


def roll_mood(profile: AIProfile, rng: random.Random) -> MoodState:
    """Draw this game's mood. Deterministic profiles are always locked."""
    if profile.deterministic:
        return apply_mood(profile, LOCKED_MOOD)
    return apply_mood(profile, MOODS[rng.randrange(len(MOODS))])
