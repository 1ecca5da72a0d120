"""
Module: gui.config

Purpose:
    Configuration dataclass for the game controller.
    Immutable configuration with validation on construction.

Key Classes:
    - GameConfig: Win delay, render cache size, seed and default difficulty

Dependencies:
    - dataclasses (std)

Used By:
    - gui.controller: GameController
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from note_puzzle.core.models import Difficulty, DEFAULT_DIFFICULTY


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for one game view (immutable).

    Attributes:
        win_delay_ms: Delay between a win and the return to the lobby
        render_cache_size: Maximum entries of the view's render cache
        seed: Seed for every session started by the controller; None for
            unseeded play
        default_difficulty: Difficulty selected when the view opens

    Example:
        >>> GameConfig(win_delay_ms=0, seed=3).render_cache_size
        256
    """

    win_delay_ms: int = 1000
    render_cache_size: int = 256
    seed: Optional[int] = None
    default_difficulty: Difficulty = DEFAULT_DIFFICULTY

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.win_delay_ms < 0:
            raise ValueError(f"win_delay_ms must be non-negative: {self.win_delay_ms}")
        if self.render_cache_size <= 0:
            raise ValueError(f"render_cache_size must be positive: {self.render_cache_size}")
        if not isinstance(self.default_difficulty, Difficulty):
            raise ValueError(f"default_difficulty must be a Difficulty: {self.default_difficulty!r}")
