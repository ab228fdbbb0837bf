"""JSON-file stores for the running score and the chosen difficulty."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ai.profiles import DEFAULT_PROFILE, PROFILES
from engine.turns import Actor, Outcome

LOGGER = logging.getLogger(__name__)


@dataclass
class ScoreRecord:
    """Running tally across games."""

    human_wins: int = 0
    ai_wins: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome.is_draw:
            self.draws += 1
        elif outcome.winner is Actor.HUMAN:
            self.human_wins += 1
        elif outcome.winner is Actor.AI:
            self.ai_wins += 1

    @property
    def games(self) -> int:
        return self.human_wins + self.ai_wins + self.draws

    def describe(self) -> str:
        return f"You {self.human_wins} · AI {self.ai_wins} · Draws {self.draws}"


def _read_json(path: Path) -> Optional[object]:
    """Parsed file content, or None when the file is missing or unreadable."""
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        LOGGER.warning("Ignoring unreadable file %s: %s", path, exc)
        return None


def _write_json(path: Path, payload: object) -> bool:
    """Write ``payload``; an unwritable location is logged and reported as False."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Could not write %s: %s", path, exc)
        return False
    return True


class ScoreStore:
    """Persists the score record; missing or corrupt files read as zeros."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> ScoreRecord:
        payload = _read_json(self.path)
        if payload is None:
            return ScoreRecord()
        try:
            values = {key: payload[key] for key in ("human_wins", "ai_wins", "draws")}
        except (KeyError, TypeError):
            LOGGER.warning("Score file %s has unexpected content; starting from zero", self.path)
            return ScoreRecord()
        if not all(isinstance(value, int) and not isinstance(value, bool) and value >= 0 for value in values.values()):
            LOGGER.warning("Score file %s has invalid counters; starting from zero", self.path)
            return ScoreRecord()
        return ScoreRecord(**values)

    def save(self, record: ScoreRecord) -> None:
        if _write_json(self.path, asdict(record)):
            LOGGER.debug("Saved score to %s: %s", self.path, record)


class ProfileStore:
    """Persists the last selected difficulty name."""

    def __init__(self, path: str | Path, default: str = DEFAULT_PROFILE) -> None:
        self.path = Path(path)
        self.default = default

    def load(self) -> str:
        payload = _read_json(self.path)
        name = payload.get("profile") if isinstance(payload, dict) else None
        if not isinstance(name, str) or name not in PROFILES:
            if payload is not None:
                LOGGER.warning("Profile file %s names no known profile; using %s", self.path, self.default)
            return self.default
        return name

    def save(self, name: str) -> None:
        if _write_json(self.path, {"profile": name}):
            LOGGER.debug("Saved profile %s to %s", name, self.path)
