"""
Module: session.view_model

Purpose:
    Read-only projections of the document and session for a presentation
    collaborator: lobby cards and document rows. Nothing here mutates
    state.

Key Functions:
    - lobby_cards(): One card per group
    - document_rows(): Rows for the active group, restored blocks collapsed

Key Classes:
    - LobbyCard: Group title, playable fragment count, restored flag
    - DocumentRow: One slot, or one fully restored atomic block

Dependencies:
    - session.evaluator: Slot status and block restoration

Used By:
    - gui.controller
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from note_puzzle.core.models import Document, Fragment, Group, PuzzleSession

from .evaluator import SlotStatus, is_block_fully_restored, slot_status


class RowKind(str, Enum):
    SLOT = "slot"
    BLOCK = "block"   # Fully restored table/callout shown as one unit


@dataclass(frozen=True)
class LobbyCard:
    """
    Lobby entry for one group.

    Attributes:
        index: Group index in the document
        title: Group title
        fragment_count: Number of playable (non-static) fragments
        is_restored: Already won; not selectable
    """
    index: int
    title: str
    fragment_count: int
    is_restored: bool

    @property
    def is_selectable(self) -> bool:
        return not self.is_restored


@dataclass(frozen=True)
class DocumentRow:
    """
    One row of the document view.

    Attributes:
        kind: SLOT for a single position, BLOCK for a restored block
        index: Slot index (first member index for BLOCK rows)
        original: Group fragment originally at this index
        fragment: Fragment currently in the slot (None when empty)
        status: Slot status (CORRECT for BLOCK rows)
        indentation: Occupant's indentation, else the original's
        marker_hint: List marker of the original, shown on empty slots
        block_text: Member lines joined by newlines, BLOCK rows only
    """
    kind: RowKind
    index: int
    original: Fragment
    fragment: Optional[Fragment]
    status: SlotStatus
    indentation: int
    marker_hint: Optional[str] = None
    block_text: Optional[str] = None


def lobby_cards(document: Document) -> List[LobbyCard]:
    return [
        LobbyCard(
            index=idx,
            title=group.title,
            fragment_count=group.playable_count,
            is_restored=group.is_restored,
        )
        for idx, group in enumerate(document.groups)
    ]


def document_rows(session: PuzzleSession, group: Group) -> List[DocumentRow]:
    """
    Build the rows of the active group in slot order.

    A fully restored atomic block yields a single BLOCK row at its first
    member; its remaining members produce no rows.
    """
    rows: List[DocumentRow] = []
    emitted_blocks: set[str] = set()

    for idx, original in enumerate(group.fragments):
        occupant = session.slots[idx]

        block = original.block_id
        if block is not None:
            if block in emitted_blocks:
                continue
            if is_block_fully_restored(block, group, session.slots):
                members = [group.fragments[m] for m in group.block_members(block)]
                rows.append(DocumentRow(
                    kind=RowKind.BLOCK,
                    index=idx,
                    original=original,
                    fragment=occupant,
                    status=SlotStatus.CORRECT,
                    indentation=original.indentation,
                    block_text="\n".join(member.text for member in members),
                ))
                emitted_blocks.add(block)
                continue

        rows.append(DocumentRow(
            kind=RowKind.SLOT,
            index=idx,
            original=original,
            fragment=occupant,
            status=slot_status(session, group, idx),
            indentation=occupant.indentation if occupant is not None else original.indentation,
            marker_hint=original.list_marker if occupant is None else None,
        ))

    return rows
