"""
Module: groups

Purpose:
    Provides the Group (heading-scoped section) and Document (parsed note)
    dataclasses. A Group is the unit of puzzle selection; a Document is
    the ordered list of groups plus the note's name and path.

Key Functions:
    - Group.playable_indices: Positions that take part in the shuffle
    - Group.block_members(): Positions sharing an atomic block id
    - Document.fragment_index(): Resolve fragment ids across all groups
    - Document.other_groups(): Decoy sources for a target group

Dependencies:
    - dataclasses (std)
    - .fragments.Fragment

Used By:
    - parsing.parser
    - session.generator
    - session.evaluator
    - core.utils.serialization

Design Note:
    Unlike Fragment these are mutable: `is_restored` flips once a group
    is won, and the flexible-group pass swaps in updated fragments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from .fragments import Fragment

DEFAULT_GROUP_TITLE = "Introduction"


@dataclass
class Group:
    """
    Heading-scoped section of a note.

    Attributes:
        title: Heading text (or "Introduction" for leading content)
        fragments: Fragments in source order; fragments[i].original_index == i
        is_restored: True once the group has been won; a restored group
            cannot be played again until reset()
    """

    title: str
    fragments: List[Fragment] = field(default_factory=list)
    is_restored: bool = False

    def __len__(self) -> int:
        return len(self.fragments)

    @property
    def playable_indices(self) -> List[int]:
        """Indices of non-static fragments, in order."""
        return [idx for idx, fragment in enumerate(self.fragments) if fragment.is_playable]

    @property
    def static_indices(self) -> List[int]:
        return [idx for idx, fragment in enumerate(self.fragments) if fragment.is_static]

    @property
    def playable_count(self) -> int:
        return len(self.playable_indices)

    def block_members(self, block_id: str) -> List[int]:
        """Indices of every fragment belonging to an atomic block."""
        return [idx for idx, fragment in enumerate(self.fragments) if fragment.block_id == block_id]

    def reset(self) -> None:
        """Make a restored group playable again."""
        self.is_restored = False


@dataclass
class Document:
    """
    Parsed note: ordered groups plus the source identity.

    Attributes:
        file_name: Display name of the note (opaque)
        file_path: Path of the note, forwarded to the rendering collaborator
        groups: Groups in source order

    Example:
        >>> doc = parse_document("# A\\n- x\\n", "note", "note.md")
        >>> [g.title for g in doc.groups]
        ['A']
    """

    file_name: str = ""
    file_path: str = ""
    groups: List[Group] = field(default_factory=list)

    def iter_fragments(self) -> Iterator[Fragment]:
        """Iterate over every fragment of every group, in source order."""
        for group in self.groups:
            yield from group.fragments

    def fragment_index(self) -> Dict[str, Fragment]:
        """Map of fragment id to fragment across the document."""
        return {fragment.id: fragment for fragment in self.iter_fragments()}

    def other_groups(self, group_index: int) -> List[Group]:
        """Every group except the one at group_index."""
        return [group for idx, group in enumerate(self.groups) if idx != group_index]

    @property
    def restored_indices(self) -> List[int]:
        return [idx for idx, group in enumerate(self.groups) if group.is_restored]

    def reset_progress(self) -> None:
        """Clear the restored flag on every group."""
        for group in self.groups:
            group.reset()
