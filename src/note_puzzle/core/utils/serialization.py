"""
Serialization Utilities

Provides to/from JSON utilities for documents, sessions and the combined
game state a host needs to resume a view.

Sessions reference fragments by id. Ids are unique across a parsed
document, so a snapshot is resolved against the Document it was taken
from (either re-parsed by the host or restored with deserialize_document).

JSON has no set type: prefilled_indices is written as a sorted list and
turned back into a set on load.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..models.difficulty import Difficulty, DEFAULT_DIFFICULTY
from ..models.fragments import Fragment
from ..models.groups import Document, Group
from ..models.session import PuzzleSession

logger = logging.getLogger(__name__)

STATE_SCHEMA_VERSION = 1


class StateError(Exception):
    """Raised when a snapshot is malformed or does not match the document."""
    pass


@dataclass
class GameState:
    """
    Everything a host needs to resume a view.

    Attributes:
        document: Parsed note (restored flags included)
        difficulty: Difficulty selected in the lobby
        session: Active session, or None while in the lobby
    """
    document: Document
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    session: Optional[PuzzleSession] = None


# ─────────────────────────────────────────────────────────────────────────────
# Document Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_document(document: Document) -> dict[str, Any]:
    """
    Serialize a Document including every fragment.

    Args:
        document: Parsed document

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "file_name": document.file_name,
        "file_path": document.file_path,
        "groups": [
            {
                "title": group.title,
                "is_restored": group.is_restored,
                "fragments": [fragment.to_dict() for fragment in group.fragments],
            }
            for group in document.groups
        ],
    }


def deserialize_document(data: dict[str, Any]) -> Document:
    """
    Deserialize a Document produced by serialize_document().

    Raises:
        StateError: If required fields are missing or fragments are out of order
    """
    try:
        groups = []
        for group_data in data["groups"]:
            fragments = [Fragment.from_dict(item) for item in group_data["fragments"]]
            for idx, fragment in enumerate(fragments):
                if fragment.original_index != idx:
                    raise StateError(
                        f"Fragment {fragment.id} has original_index "
                        f"{fragment.original_index}, expected {idx}"
                    )
            groups.append(Group(
                title=str(group_data["title"]),
                fragments=fragments,
                is_restored=bool(group_data.get("is_restored", False)),
            ))
    except (KeyError, TypeError, ValueError) as e:
        raise StateError(f"Invalid document data: {e}") from e

    return Document(
        file_name=str(data.get("file_name", "")),
        file_path=str(data.get("file_path", "")),
        groups=groups,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Session Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_session(session: PuzzleSession) -> dict[str, Any]:
    """
    Serialize a PuzzleSession, referencing fragments by id.

    Note:
        prefilled_indices is emitted as a sorted list.
    """
    return {
        "session_id": session.session_id,
        "group_index": session.group_index,
        "difficulty": session.difficulty.value,
        "slots": [fragment.id if fragment is not None else None for fragment in session.slots],
        "prefilled_indices": sorted(session.prefilled_indices),
        "pool_items": [fragment.id for fragment in session.pool_items],
    }


def deserialize_session(data: dict[str, Any], document: Document) -> PuzzleSession:
    """
    Rebuild a PuzzleSession against its document.

    Args:
        data: Dictionary from serialize_session()
        document: Document the session was generated from

    Returns:
        PuzzleSession with fragments resolved by id

    Raises:
        StateError: If the group index, slot count or any fragment id
            does not match the document, or a locked slot (prefilled or
            static) does not hold its own fragment
    """
    try:
        group_index = int(data["group_index"])
        difficulty = Difficulty(data["difficulty"])
        slot_ids: List[Optional[str]] = list(data["slots"])
        prefilled = {int(idx) for idx in data.get("prefilled_indices", [])}
        pool_ids: List[str] = list(data.get("pool_items", []))
    except (KeyError, TypeError, ValueError) as e:
        raise StateError(f"Invalid session data: {e}") from e

    if not 0 <= group_index < len(document.groups):
        raise StateError(f"Session group index {group_index} out of range")

    group = document.groups[group_index]
    if len(slot_ids) != len(group.fragments):
        raise StateError(
            f"Session has {len(slot_ids)} slots but group {group.title!r} "
            f"has {len(group.fragments)} fragments"
        )
    if any(not 0 <= idx < len(slot_ids) for idx in prefilled):
        raise StateError(f"Prefilled index out of range: {sorted(prefilled)}")

    index = document.fragment_index()

    def resolve(fragment_id: Any) -> Fragment:
        if not isinstance(fragment_id, str):
            raise StateError(f"Fragment id must be a string: {fragment_id!r}")
        fragment = index.get(fragment_id)
        if fragment is None:
            raise StateError(f"Unknown fragment id in session: {fragment_id!r}")
        return fragment

    slots = [resolve(fid) if fid is not None else None for fid in slot_ids]
    pool_items = [resolve(fid) for fid in pool_ids]

    # Locked slots must hold the group's own fragment or the session is unwinnable
    for idx in sorted(prefilled.union(group.static_indices)):
        if slots[idx] is not group.fragments[idx]:
            raise StateError(
                f"Locked slot {idx} of group {group.title!r} does not hold its own fragment"
            )

    session = PuzzleSession(
        group_index=group_index,
        difficulty=difficulty,
        slots=slots,
        prefilled_indices=prefilled,
        pool_items=pool_items,
    )
    if data.get("session_id"):
        session.session_id = str(data["session_id"])
    return session


# ─────────────────────────────────────────────────────────────────────────────
# Game State
# ─────────────────────────────────────────────────────────────────────────────

def serialize_game_state(state: GameState) -> dict[str, Any]:
    """Serialize lobby difficulty, restored groups and the active session."""
    return {
        "schema_version": STATE_SCHEMA_VERSION,
        "file_name": state.document.file_name,
        "file_path": state.document.file_path,
        "difficulty": state.difficulty.value,
        "restored_groups": state.document.restored_indices,
        "session": serialize_session(state.session) if state.session is not None else None,
    }


def deserialize_game_state(data: dict[str, Any], document: Document) -> GameState:
    """
    Apply a game-state snapshot to a freshly parsed document.

    Restored flags in the snapshot are written onto the document's groups.

    Raises:
        StateError: If the snapshot is malformed, has an unsupported schema
            version or was taken from a different note
    """
    version = data.get("schema_version")
    if version != STATE_SCHEMA_VERSION:
        raise StateError(f"Unsupported state schema version: {version!r}")

    file_path = data.get("file_path", "")
    if file_path != document.file_path:
        raise StateError(
            f"Snapshot belongs to {file_path!r}, not {document.file_path!r}"
        )

    try:
        difficulty = Difficulty(data.get("difficulty", DEFAULT_DIFFICULTY.value))
        restored = [int(idx) for idx in data.get("restored_groups", [])]
    except (TypeError, ValueError) as e:
        raise StateError(f"Invalid game state: {e}") from e

    for idx in restored:
        if not 0 <= idx < len(document.groups):
            raise StateError(f"Restored group index {idx} out of range")

    session_data: Optional[Dict[str, Any]] = data.get("session")
    session = deserialize_session(session_data, document) if session_data else None

    for idx, group in enumerate(document.groups):
        group.is_restored = idx in restored

    logger.debug(
        f"Loaded state for {document.file_path!r}: {len(restored)} restored, "
        f"session={'yes' if session else 'no'}"
    )
    return GameState(document=document, difficulty=difficulty, session=session)


def dump_game_state(state: GameState, *, indent: Optional[int] = None) -> str:
    """Serialize a GameState to a JSON string."""
    return json.dumps(serialize_game_state(state), indent=indent)


def load_game_state(text: str, document: Document) -> GameState:
    """
    Load a GameState from a JSON string.

    Raises:
        StateError: If the text is not valid JSON or the snapshot is invalid
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StateError(f"Invalid JSON in game state: {e}") from e
    if not isinstance(data, dict):
        raise StateError("Game state must be a JSON object")
    return deserialize_game_state(data, document)
