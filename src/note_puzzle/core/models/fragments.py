"""
Module: fragments

Purpose:
    Provides the Fragment dataclass - one immutable parsed unit of a note
    (a line, list item, sub-heading or table/callout member). Fragments
    are created once by the parser and are the unit the player moves
    between the pool and the slots.

Key Functions:
    - Fragment.is_unordered: Bullet list entry ("-", "*", "+")
    - Fragment.is_playable: Takes part in the shuffle
    - Fragment.to_dict() / Fragment.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.groups.Group
    - core.models.session.PuzzleSession
    - parsing.parser
    - session.evaluator
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

UNORDERED_MARKERS = ("-", "*", "+")


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    Parsed note fragment (immutable).

    Attributes:
        id: Identifier, unique across the whole parsed document
        text: Raw source line, leading whitespace and marker included
        original_group: Title of the group the fragment was parsed from
        original_index: Dense 0-based position within that group
        indentation: Leading whitespace width (tabs count as 4 spaces)
        is_list_item: True when the line starts with a list marker
        list_marker: Literal marker ("-", "*", "+", "1.", ...) or None
        is_static: Always shown in place, never shuffled (table header and
            separator rows, callout headers)
        is_sub_heading: Level 3+ heading kept as an ordinary fragment
        block_id: Atomic block (table or callout) membership
        flex_group_id: Flexible group membership, assigned after parsing

    Invariants:
        - A fragment with a block_id is either the static head of the block
          or a playable body member, never both
        - flex_group_id is only set on unordered, non-static,
          non-sub-heading leaves

    Example:
        >>> f = Fragment("Intro-0-0-ab12c", "- milk", "Intro", 0, 0, True, "-")
        >>> f.is_unordered
        True
        >>> f.is_playable
        True
    """

    id: str
    text: str
    original_group: str
    original_index: int
    indentation: int = 0
    is_list_item: bool = False
    list_marker: Optional[str] = None
    is_static: bool = False
    is_sub_heading: bool = False
    block_id: Optional[str] = None
    flex_group_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.original_index < 0:
            raise ValueError(f"original_index cannot be negative: {self.original_index}")
        if self.indentation < 0:
            raise ValueError(f"indentation cannot be negative: {self.indentation}")
        if self.is_list_item and not self.list_marker:
            raise ValueError(f"List item {self.id} has no list marker")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_unordered(self) -> bool:
        """True for bullet entries; numbered entries must keep their order."""
        return self.list_marker in UNORDERED_MARKERS

    @property
    def is_playable(self) -> bool:
        """True when the fragment takes part in the shuffle."""
        return not self.is_static

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        result: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "original_group": self.original_group,
            "original_index": self.original_index,
            "indentation": self.indentation,
            "is_list_item": self.is_list_item,
            "is_static": self.is_static,
            "is_sub_heading": self.is_sub_heading,
        }
        # Optional fields only when present
        if self.list_marker is not None:
            result["list_marker"] = self.list_marker
        if self.block_id is not None:
            result["block_id"] = self.block_id
        if self.flex_group_id is not None:
            result["flex_group_id"] = self.flex_group_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Fragment:
        """Create a Fragment from a dictionary produced by to_dict()."""
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            original_group=str(data["original_group"]),
            original_index=int(data["original_index"]),
            indentation=int(data.get("indentation", 0)),
            is_list_item=bool(data.get("is_list_item", False)),
            list_marker=data.get("list_marker"),
            is_static=bool(data.get("is_static", False)),
            is_sub_heading=bool(data.get("is_sub_heading", False)),
            block_id=data.get("block_id"),
            flex_group_id=data.get("flex_group_id"),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Fragment({self.original_group!r}[{self.original_index}], {self.text.strip()!r})"
