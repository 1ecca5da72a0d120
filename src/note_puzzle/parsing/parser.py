"""
Module: parsing.parser

Purpose:
    Convert Markdown note text into a Document of heading-scoped groups
    of typed fragments, tagging atomic blocks (tables, callouts) and
    flexible groups.

Key Functions:
    - parse_document(): Main entry point

Algorithm:
    Single forward pass over lines:
    1. Level 1-2 headings close the current group and open a new one;
       deeper headings become sub-heading fragments
    2. A pipe row followed by a separator row starts a table block:
       header and separator are static, following pipe rows are playable
    3. "> [!type]" starts a callout block: the header is static, following
       ">" lines are playable; a blank line ends the scan
    4. Any other line of non-zero length is an ordinary fragment
    Then each group gets a flexible-group pass.

Dependencies:
    - parsing.patterns: Line detection
    - parsing.flex_groups: Second pass
    - note_puzzle.core.models: Fragment, Group, Document

Used By:
    - gui.controller: GameController.from_text()
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from note_puzzle.core.models import Document, Fragment, Group, DEFAULT_GROUP_TITLE

from . import patterns
from .flex_groups import assign_flex_groups
from .identifiers import block_id, fragment_id

logger = logging.getLogger(__name__)


@dataclass
class GroupBuilder:
    """
    Mutable builder for one group during the line pass.

    Converted to a Group once the next group opens or input ends.
    """
    title: str
    section: int
    rng: random.Random
    fragments: List[Fragment] = field(default_factory=list)

    def push(
        self,
        text: str,
        *,
        is_static: bool = False,
        is_sub_heading: bool = False,
        block: Optional[str] = None,
    ) -> Fragment:
        """Append a fragment, deriving indentation and list marker from text."""
        index = len(self.fragments)
        marker = patterns.detect_list_marker(text)
        fragment = Fragment(
            id=fragment_id(self.title, self.section, index, self.rng),
            text=text,
            original_group=self.title,
            original_index=index,
            indentation=patterns.measure_indentation(text),
            is_list_item=marker is not None,
            list_marker=marker,
            is_static=is_static,
            is_sub_heading=is_sub_heading,
            block_id=block,
        )
        self.fragments.append(fragment)
        return fragment

    def build(self) -> Group:
        group = Group(title=self.title, fragments=list(self.fragments))
        assign_flex_groups(group, rng=self.rng, section=self.section)
        return group


def parse_document(
    text: str,
    file_name: str = "",
    file_path: str = "",
    *,
    rng: Optional[random.Random] = None,
) -> Document:
    """
    Parse note text into a Document.

    Never raises on content: malformed markup (a pipe row without a
    separator, a stray ">" line) is kept as an ordinary fragment.

    Args:
        text: Note text with LF or CRLF line endings
        file_name: Display name, passed through
        file_path: Note path, passed through for the rendering collaborator
        rng: Source for id suffixes (a fresh unseeded Random if omitted)

    Returns:
        Document whose groups are in source order. Content before the first
        heading lands in an "Introduction" group. Empty groups are dropped,
        except that the last group is always kept.

    Example:
        >>> doc = parse_document("# A\\n- x\\n- y\\n## B\\n- z\\n")
        >>> [(g.title, len(g)) for g in doc.groups]
        [('A', 2), ('B', 1)]
    """
    rng = rng if rng is not None else random.Random()
    lines = patterns.split_lines(text)
    groups: List[Group] = []
    section = 0
    current = GroupBuilder(DEFAULT_GROUP_TITLE, section, rng)

    i = 0
    while i < len(lines):
        line = lines[i]

        # Zero-length lines never produce a fragment; whitespace-only lines do
        if not line:
            i += 1
            continue

        heading = patterns.match_heading(line)
        if heading is not None:
            level, title = heading
            if level <= patterns.MAX_GROUP_HEADING_LEVEL:
                if current.fragments:
                    groups.append(current.build())
                section += 1
                current = GroupBuilder(title, section, rng)
            else:
                current.push(line, is_sub_heading=True)
            i += 1
            continue

        next_line = lines[i + 1] if i + 1 < len(lines) else None
        if patterns.is_table_start(line, next_line):
            table = block_id("table", i)
            current.push(line, is_static=True, block=table)
            current.push(next_line, is_static=True, block=table)
            i += 2
            while i < len(lines) and patterns.is_table_row(lines[i]):
                current.push(lines[i], block=table)
                i += 1
            continue

        if patterns.is_callout_header(line):
            callout = block_id("callout", i)
            current.push(line, is_static=True, block=callout)
            i += 1
            # The first non-quote line (blank included) is left for the outer loop
            while i < len(lines) and patterns.is_quote_line(lines[i]):
                current.push(lines[i], block=callout)
                i += 1
            continue

        current.push(line)
        i += 1

    groups.append(current.build())

    document = Document(file_name=file_name, file_path=file_path, groups=groups)
    logger.debug(
        f"Parsed {file_path or file_name or '<text>'}: {len(groups)} group(s), "
        f"{sum(len(g) for g in groups)} fragment(s)"
    )
    return document
