"""
Module: session.evaluator

Purpose:
    Correctness rules for a session: per-slot correctness (exact position
    or flexible-group equivalence), atomic-block restoration, the win
    condition and the derived pool.

Key Functions:
    - is_slot_correct(): One slot against the group's original fragment
    - is_block_fully_restored(): Every member of a block correct
    - is_puzzle_solved(): Every slot correct
    - check_win_condition(): Solved check that marks the group restored
    - visible_pool(): pool_items minus fragments occupying a slot
    - slot_status(): LOCKED / CORRECT / WRONG / EMPTY for styling

Dependencies:
    - note_puzzle.core.models: Fragment, Group, PuzzleSession

Used By:
    - session.placement
    - session.view_model
    - gui.controller
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence

from note_puzzle.core.models import Fragment, Group, PuzzleSession

logger = logging.getLogger(__name__)


class SlotStatus(str, Enum):
    """Visual status of a slot."""
    EMPTY = "empty"
    LOCKED = "locked"    # Static or prefilled, cannot be removed
    CORRECT = "correct"
    WRONG = "wrong"

    def __str__(self) -> str:
        return self.value


def is_slot_correct(fragment: Optional[Fragment], slot_index: int, group: Group) -> bool:
    """
    Check whether a fragment is acceptable at a slot.

    Correct when the fragment is the group's own fragment for that exact
    position, or when the original fragment at the slot belongs to a
    flexible group and the placed fragment shares its flex id. The flex
    rule does not look at the source group; decoys carry flex ids of
    their own group and so never match.

    Args:
        fragment: Fragment in the slot, or None
        slot_index: Slot position
        group: Active group

    Returns:
        False for an empty slot, otherwise whether it is correct
    """
    if fragment is None:
        return False
    if fragment.original_index == slot_index and fragment.original_group == group.title:
        return True
    original = group.fragments[slot_index]
    return original.flex_group_id is not None and fragment.flex_group_id == original.flex_group_id


def is_block_fully_restored(
    block_id: str,
    group: Group,
    slots: Sequence[Optional[Fragment]],
) -> bool:
    """True iff every fragment of the block is correct at its original index."""
    return all(
        is_slot_correct(slots[idx], idx, group)
        for idx in group.block_members(block_id)
    )


def is_puzzle_solved(group: Group, slots: Sequence[Optional[Fragment]]) -> bool:
    """Every slot correct; vacuously true when there are no slots."""
    return all(is_slot_correct(fragment, idx, group) for idx, fragment in enumerate(slots))


def check_win_condition(session: PuzzleSession, group: Group) -> bool:
    """
    Evaluate the win condition and mark the group restored on success.

    The delayed return to the lobby is scheduled by the caller.

    Returns:
        True when the puzzle is solved
    """
    if not is_puzzle_solved(group, session.slots):
        return False
    if not group.is_restored:
        group.is_restored = True
        logger.info(f"Group {group.title!r} restored")
    return True


def visible_pool(session: PuzzleSession) -> List[Fragment]:
    """
    Fragments the player can currently pick.

    Derived on every call as pool_items minus any fragment whose id
    occupies a slot, preserving pool order.
    """
    occupied = session.occupied_ids
    return [fragment for fragment in session.pool_items if fragment.id not in occupied]


def slot_status(session: PuzzleSession, group: Group, slot_index: int) -> SlotStatus:
    """Status of one slot for visual styling."""
    fragment = session.slots[slot_index]
    if fragment is None:
        return SlotStatus.EMPTY
    if session.is_locked(slot_index):
        return SlotStatus.LOCKED
    if is_slot_correct(fragment, slot_index, group):
        return SlotStatus.CORRECT
    return SlotStatus.WRONG


def slot_statuses(session: PuzzleSession, group: Group) -> List[SlotStatus]:
    return [slot_status(session, group, idx) for idx in range(len(session.slots))]
