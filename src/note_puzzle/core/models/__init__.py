"""
Core Models Package

Data models shared by the parser, the session engine and the controller.

Fragments are frozen: they are created once at parse time and only ever
replaced (never mutated) when the flexible-group pass assigns their
flex_group_id. Groups, Documents and PuzzleSessions are mutable play state.
"""

from .fragments import Fragment
from .groups import Group, Document, DEFAULT_GROUP_TITLE
from .difficulty import Difficulty, DifficultySettings, DIFFICULTY_SETTINGS, DEFAULT_DIFFICULTY
from .session import PuzzleSession

__all__ = [
    "Fragment",
    "Group",
    "Document",
    "DEFAULT_GROUP_TITLE",
    "Difficulty",
    "DifficultySettings",
    "DIFFICULTY_SETTINGS",
    "DEFAULT_DIFFICULTY",
    "PuzzleSession",
]
