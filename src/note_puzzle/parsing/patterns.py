"""
Module: parsing.patterns

Purpose:
    Line-level Markdown detection used by the fragment parser: headings,
    list markers, table headers and callout headers, plus indentation
    measurement.

Key Functions:
    - match_heading(): Heading level and text, or None
    - detect_list_marker(): Literal list marker, or None
    - measure_indentation(): Leading whitespace width (tab = 4)
    - is_table_start(): Pipe row followed by a separator row
    - is_callout_header(): "> [!type]" line

Dependencies:
    - re (std)

Used By:
    - parsing.parser
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

# Group boundaries are levels 1-2; deeper headings stay in the group
MAX_GROUP_HEADING_LEVEL = 2

TAB_WIDTH = 4

LINE_BREAK = re.compile(r"\r?\n")
HEADING = re.compile(r"^(#+)\s+(.*)")
LIST_MARKER = re.compile(r"^\s*([-*+]|\d+\.)\s+")
TABLE_SEPARATOR = re.compile(r"^\|?\s*[:\- ]+\s*\|")
LEADING_WHITESPACE = re.compile(r"^(\s*)")

CALLOUT_PREFIX = "> [!"
TABLE_PREFIX = "|"
QUOTE_PREFIX = ">"


def split_lines(text: str) -> list[str]:
    """Split on LF or CRLF; a trailing newline yields a final empty line."""
    return LINE_BREAK.split(text)


def match_heading(line: str) -> Optional[Tuple[int, str]]:
    """
    Match a Markdown ATX heading.

    Args:
        line: Raw line (not stripped; indented "#" is not a heading)

    Returns:
        (level, title) or None

    Example:
        >>> match_heading("### Details")
        (3, 'Details')
        >>> match_heading("#tag") is None
        True
    """
    match = HEADING.match(line)
    if match is None:
        return None
    return len(match.group(1)), match.group(2)


def detect_list_marker(line: str) -> Optional[str]:
    """Return the literal list marker ("-", "*", "+", "12.") or None."""
    match = LIST_MARKER.match(line)
    return match.group(1) if match else None


def measure_indentation(line: str) -> int:
    """Width of the leading whitespace, counting each tab as four spaces."""
    leading = LEADING_WHITESPACE.match(line).group(1)
    return len(leading.replace("\t", " " * TAB_WIDTH))


def is_table_start(line: str, next_line: Optional[str]) -> bool:
    """
    Check for a table header: a pipe row whose next line is a separator row.

    A pipe row without a separator is not a table and is parsed as an
    ordinary fragment.
    """
    if not line.strip().startswith(TABLE_PREFIX):
        return False
    following = (next_line or "").strip()
    return TABLE_SEPARATOR.match(following) is not None


def is_table_row(line: str) -> bool:
    return line.strip().startswith(TABLE_PREFIX)


def is_callout_header(line: str) -> bool:
    return line.strip().startswith(CALLOUT_PREFIX)


def is_quote_line(line: str) -> bool:
    return line.strip().startswith(QUOTE_PREFIX)
