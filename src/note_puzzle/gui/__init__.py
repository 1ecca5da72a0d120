"""
Qt integration for the puzzle engine.

GameController exposes the session engine to widgets through Qt signals
and owns the timer that returns to the lobby after a win.
"""

from .config import GameConfig
from .controller import GameController

__all__ = [
    "GameConfig",
    "GameController",
]
