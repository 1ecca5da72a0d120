"""
Module: session

Purpose:
    Provides the PuzzleSession dataclass - transient play state for one
    group: the slot array, the locked (prefilled) positions and the
    candidate pool including decoys.

Key Functions:
    - PuzzleSession.is_locked(): Static or prefilled slot
    - PuzzleSession.occupied_ids: Ids of fragments currently in slots

Dependencies:
    - dataclasses (std)
    - uuid (std)
    - .fragments.Fragment
    - .difficulty.Difficulty

Used By:
    - session.generator
    - session.placement
    - session.evaluator
    - gui.controller

Design Note:
    pool_items is fixed at generation time. The pool the player sees is
    always derived (pool_items minus occupied ids, see
    session.evaluator.visible_pool), so there is no second membership
    collection to keep in sync.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set
from uuid import uuid4

from .difficulty import Difficulty
from .fragments import Fragment


@dataclass
class PuzzleSession:
    """
    Play state for one group.

    Attributes:
        group_index: Index of the active group in the document
        difficulty: Difficulty the session was generated with
        slots: One entry per group fragment; None when empty
        prefilled_indices: Positions filled and locked at session start
        pool_items: Fragments available at generation time (decoys included)
        session_id: Identity of this session instance

    Invariants:
        - len(slots) == len(group.fragments)
        - every prefilled index holds the group's own fragment
    """

    group_index: int
    difficulty: Difficulty
    slots: List[Optional[Fragment]]
    prefilled_indices: Set[int] = field(default_factory=set)
    pool_items: List[Fragment] = field(default_factory=list)
    session_id: str = field(default_factory=lambda: uuid4().hex)

    def __len__(self) -> int:
        return len(self.slots)

    def in_range(self, slot_index: int) -> bool:
        return 0 <= slot_index < len(self.slots)

    def is_locked(self, slot_index: int) -> bool:
        """True for prefilled slots and slots holding a static fragment."""
        if slot_index in self.prefilled_indices:
            return True
        occupant = self.slots[slot_index]
        return occupant is not None and occupant.is_static

    @property
    def occupied_ids(self) -> Set[str]:
        return {fragment.id for fragment in self.slots if fragment is not None}

    @property
    def empty_indices(self) -> List[int]:
        return [idx for idx, fragment in enumerate(self.slots) if fragment is None]

    def __repr__(self) -> str:
        filled = len(self.slots) - len(self.empty_indices)
        return (
            f"PuzzleSession(group={self.group_index}, {self.difficulty}, "
            f"filled={filled}/{len(self.slots)}, pool={len(self.pool_items)})"
        )
