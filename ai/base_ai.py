"""Base AI interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ai.profiles import AIProfile, MoodState
from engine.board import Board


class BaseAI(ABC):
    """Abstract Quarto strategy: place the piece it was handed, pick one for the opponent."""

    profile: AIProfile
    mood: MoodState

    @property
    def name(self) -> str:
        return self.profile.name

    def new_game(self) -> None:
        """Hook called when a new game starts."""

    @abstractmethod
    def place_piece(self, board: Board, piece_id: int) -> int:
        """Choose an empty board index for ``piece_id``."""
        raise NotImplementedError

    @abstractmethod
    def select_piece(self, board: Board, exclude_id: Optional[int] = None) -> int:
        """Choose an unused piece id to hand to the opponent."""
        raise NotImplementedError
