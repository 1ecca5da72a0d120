"""
Module: parsing

Purpose:
    Markdown note to fragment groups. Segments text into typed, ordered,
    indentation-aware fragments, detects atomic blocks (tables, callouts)
    and flexible groups of interchangeable bullets.

Key Functions:
    - parse_document(): Parse note text into a Document
    - assign_flex_groups(): Flexible-group pass over one group

Dependencies:
    - note_puzzle.core.models: Fragment, Group, Document

Used By:
    - gui.controller: GameController.from_text()
"""

from .parser import parse_document, GroupBuilder
from .flex_groups import assign_flex_groups

__all__ = [
    "parse_document",
    "GroupBuilder",
    "assign_flex_groups",
]
