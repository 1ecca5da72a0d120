"""
Module: session.config

Purpose:
    Configuration dataclass for session generation.
    Immutable configuration with validation on construction.

Key Classes:
    - SessionConfig: Difficulty, seed and stability-score parameters

Dependencies:
    - dataclasses (std)

Used By:
    - session.generator: Session generation
    - gui.controller: Builds one per started session
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from note_puzzle.core.models import Difficulty, DifficultySettings, DEFAULT_DIFFICULTY


@dataclass(frozen=True)
class SessionConfig:
    """
    Configuration for generating a puzzle session (immutable).

    Attributes:
        difficulty: Difficulty level (prefill fraction and decoy count)
        seed: Random seed; None for a fresh, unseeded generator
        base_score: Stability score of a top-level fragment before jitter
        indent_step: Indentation width of one nesting level
        stability_jitter: Upper bound of the random jitter added to scores
        sub_heading_score: Fixed score for sub-headings (always prefilled first)

    Invariants:
        - base_score > 0
        - indent_step > 0
        - stability_jitter >= 0

    Example:
        >>> config = SessionConfig(difficulty=Difficulty.EASY, seed=7)
        >>> config.settings.decoy_count
        1
    """

    difficulty: Difficulty = DEFAULT_DIFFICULTY
    seed: Optional[int] = None

    # Stability scoring
    base_score: float = 100.0
    indent_step: int = 4
    stability_jitter: float = 20.0
    sub_heading_score: float = 999.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.base_score <= 0:
            raise ValueError(f"base_score must be positive: {self.base_score}")
        if self.indent_step <= 0:
            raise ValueError(f"indent_step must be positive: {self.indent_step}")
        if self.stability_jitter < 0:
            raise ValueError(f"stability_jitter must be non-negative: {self.stability_jitter}")

    @property
    def settings(self) -> DifficultySettings:
        return self.difficulty.settings
