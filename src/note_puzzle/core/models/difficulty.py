"""
Module: difficulty

Purpose:
    Difficulty levels and the prefill/decoy settings each one maps to.

Key Classes:
    - Difficulty: Three-level enum (easy, medium, hard)
    - DifficultySettings: Prefill fraction, decoy count and display label

Used By:
    - session.config.SessionConfig
    - session.generator
    - gui.controller.GameController
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class DifficultySettings:
    """
    Parameters of one difficulty level (immutable).

    Attributes:
        prefill_fraction: Share of playable positions locked at session start
        decoy_count: Number of decoy draws from other groups
        label: Display name

    Invariants:
        - 0.0 <= prefill_fraction <= 1.0
        - decoy_count >= 0
    """

    prefill_fraction: float
    decoy_count: int
    label: str

    def __post_init__(self) -> None:
        if not 0.0 <= self.prefill_fraction <= 1.0:
            raise ValueError(f"prefill_fraction must be within [0, 1]: {self.prefill_fraction}")
        if self.decoy_count < 0:
            raise ValueError(f"decoy_count must be non-negative: {self.decoy_count}")


class Difficulty(str, Enum):
    """
    Puzzle difficulty.

    Each level trades pre-filled slots for decoys:
        EASY:   70% prefilled, 1 decoy
        MEDIUM: 40% prefilled, 3 decoys
        HARD:   10% prefilled, 6 decoys

    Example:
        >>> Difficulty("hard").settings.decoy_count
        6
    """

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    def __str__(self) -> str:
        return self.value

    @property
    def settings(self) -> DifficultySettings:
        return DIFFICULTY_SETTINGS[self]

    @property
    def label(self) -> str:
        return self.settings.label


DIFFICULTY_SETTINGS: dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(prefill_fraction=0.7, decoy_count=1, label="Easy"),
    Difficulty.MEDIUM: DifficultySettings(prefill_fraction=0.4, decoy_count=3, label="Medium"),
    Difficulty.HARD: DifficultySettings(prefill_fraction=0.1, decoy_count=6, label="Hard"),
}

DEFAULT_DIFFICULTY = Difficulty.MEDIUM
