"""
Module: session

Purpose:
    The puzzle-state engine: generates a session for a group, applies
    place/unplace operations and judges correctness and the win condition.

Key Functions:
    - generate_session(): Build slots, prefilled set and shuffled pool
    - place_fragment() / unplace_fragment(): Placement engine
    - is_slot_correct() / is_block_fully_restored() / check_win_condition()
    - visible_pool(): Derived pool
    - lobby_cards() / document_rows(): View model

Key Classes:
    - SessionConfig: Configuration for generation
    - SessionGenerator: Generation with an explicit random source

Dependencies:
    - note_puzzle.core.models: Document, Group, Fragment, PuzzleSession

Used By:
    - gui.controller: Game controller
"""

from .config import SessionConfig
from .generator import generate_session, SessionGenerator, SessionError
from .placement import place_fragment, unplace_fragment, PlacementResult
from .evaluator import (
    SlotStatus,
    is_slot_correct,
    is_block_fully_restored,
    is_puzzle_solved,
    check_win_condition,
    visible_pool,
    slot_status,
    slot_statuses,
)
from .view_model import LobbyCard, DocumentRow, RowKind, lobby_cards, document_rows

__all__ = [
    # Config
    "SessionConfig",
    # Generation
    "generate_session",
    "SessionGenerator",
    "SessionError",
    # Placement
    "place_fragment",
    "unplace_fragment",
    "PlacementResult",
    # Evaluation
    "SlotStatus",
    "is_slot_correct",
    "is_block_fully_restored",
    "is_puzzle_solved",
    "check_win_condition",
    "visible_pool",
    "slot_status",
    "slot_statuses",
    # View model
    "LobbyCard",
    "DocumentRow",
    "RowKind",
    "lobby_cards",
    "document_rows",
]
