"""
Note Puzzle Core Package

Shared data models and serialization helpers. These models are the single
source of truth for the parser, the session engine and the controller.
"""

from .models import Fragment, Group, Document, Difficulty, PuzzleSession

__all__ = [
    "Fragment",
    "Group",
    "Document",
    "Difficulty",
    "PuzzleSession",
]
