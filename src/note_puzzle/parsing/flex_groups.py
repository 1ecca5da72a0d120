"""
Module: parsing.flex_groups

Purpose:
    Second parser pass: tag maximal runs of sibling bullet leaves with a
    shared flex_group_id so they can be placed in any relative order.

Key Functions:
    - assign_flex_groups(): Assign flex ids within one group

Algorithm:
    Walk fragments in order keeping a stack of open parents (a fragment is
    a parent when the next fragment is indented deeper). For each fragment:
    1. Pop parents indented at or beyond the fragment; the top of the
       stack is its enclosing parent
    2. Numbered items, static or sub-heading fragments and fragments with
       children break the current run
    3. Otherwise join the current run, or start a new one when there is
       none, the enclosing parent changed or the indentation changed
    4. Push the fragment when it has children

Dependencies:
    - dataclasses (std)
    - parsing.identifiers

Used By:
    - parsing.parser
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import List, Optional, Tuple

from note_puzzle.core.models import Fragment, Group

from .identifiers import flex_group_id

logger = logging.getLogger(__name__)

# (indentation, fragment index); the sentinel encloses top-level fragments
_ROOT_PARENT: Tuple[int, int] = (-1, -1)


def has_children(fragments: List[Fragment], index: int) -> bool:
    """True when the following fragment is indented deeper."""
    if index + 1 >= len(fragments):
        return False
    return fragments[index + 1].indentation > fragments[index].indentation


def assign_flex_groups(
    group: Group,
    *,
    rng: random.Random,
    section: int = 0,
) -> int:
    """
    Assign flex_group_id to the sibling bullet leaves of a group.

    Fragments are frozen, so tagged fragments are replaced in
    group.fragments with updated copies.

    Args:
        group: Group to process (modified in place)
        rng: Source for id suffixes
        section: Section number used to keep ids unique per document

    Returns:
        Number of flexible groups created
    """
    fragments = group.fragments
    parent_stack: List[Tuple[int, int]] = [_ROOT_PARENT]
    current: Optional[str] = None
    last_parent = -2
    last_indent = -1
    created = 0
    updated: List[Fragment] = []

    for idx, fragment in enumerate(fragments):
        while len(parent_stack) > 1 and parent_stack[-1][0] >= fragment.indentation:
            parent_stack.pop()
        parent_idx = parent_stack[-1][1]

        is_parent = has_children(fragments, idx)
        structural = fragment.is_static or fragment.is_sub_heading

        if not fragment.is_unordered or structural or is_parent:
            current = None
            updated.append(fragment)
        else:
            if current is None or parent_idx != last_parent or fragment.indentation != last_indent:
                current = flex_group_id(group.title, section, idx, rng)
                created += 1
            updated.append(replace(fragment, flex_group_id=current))

        if is_parent:
            parent_stack.append((fragment.indentation, idx))
        last_parent = parent_idx
        last_indent = fragment.indentation

    group.fragments = updated
    logger.debug(f"Group {group.title!r}: {created} flexible group(s)")
    return created
