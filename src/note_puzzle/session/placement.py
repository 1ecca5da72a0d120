"""
Module: session.placement

Purpose:
    Pure-state place/unplace operations on a PuzzleSession. No I/O; the
    caller runs the win check after a successful mutation.

Key Functions:
    - place_fragment(): Put a pool fragment into a slot
    - unplace_fragment(): Clear a player-filled slot

Key Classes:
    - PlacementResult: Outcome of an operation (truthy only when OK)

Dependencies:
    - session.evaluator.visible_pool: Pool membership

Used By:
    - gui.controller
"""

from __future__ import annotations

import logging
from enum import Enum

from note_puzzle.core.models import Fragment, PuzzleSession

from .evaluator import visible_pool

logger = logging.getLogger(__name__)


class PlacementResult(str, Enum):
    """
    Outcome of a placement operation.

    Failures are no-ops: the session is left untouched.
    """
    OK = "ok"
    OUT_OF_RANGE = "out_of_range"
    LOCKED = "locked"
    EMPTY = "empty"
    NOT_IN_POOL = "not_in_pool"

    def __bool__(self) -> bool:
        return self is PlacementResult.OK

    def __str__(self) -> str:
        return self.value


def place_fragment(session: PuzzleSession, slot_index: int, fragment: Fragment) -> PlacementResult:
    """
    Place a pool fragment into a slot.

    An unlocked slot that already holds a fragment is overwritten; its
    previous occupant shows up in the pool again. The placed fragment
    leaves the visible pool because the pool is derived from the slots.

    Args:
        session: Active session (modified in place on success)
        slot_index: Target slot
        fragment: Fragment picked from the visible pool

    Returns:
        PlacementResult.OK, or the reason the placement was refused
    """
    if not session.in_range(slot_index):
        result = PlacementResult.OUT_OF_RANGE
    elif session.is_locked(slot_index):
        result = PlacementResult.LOCKED
    elif all(candidate.id != fragment.id for candidate in visible_pool(session)):
        result = PlacementResult.NOT_IN_POOL
    else:
        session.slots[slot_index] = fragment
        logger.debug(f"Placed {fragment!r} at slot {slot_index}")
        return PlacementResult.OK

    logger.debug(f"Refused placement of {fragment!r} at slot {slot_index}: {result}")
    return result


def unplace_fragment(session: PuzzleSession, slot_index: int) -> PlacementResult:
    """
    Remove a player-placed fragment from a slot.

    The fragment becomes available again through the derived pool.

    Returns:
        PlacementResult.OK, or OUT_OF_RANGE / EMPTY / LOCKED
    """
    if not session.in_range(slot_index):
        return PlacementResult.OUT_OF_RANGE
    if session.slots[slot_index] is None:
        return PlacementResult.EMPTY
    if session.is_locked(slot_index):
        return PlacementResult.LOCKED

    fragment = session.slots[slot_index]
    session.slots[slot_index] = None
    logger.debug(f"Removed {fragment!r} from slot {slot_index}")
    return PlacementResult.OK
