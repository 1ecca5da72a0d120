"""
Module: parsing.identifiers

Purpose:
    Synthesized identifiers for fragments, atomic blocks and flexible
    groups. Random suffixes come from the caller's random.Random so a
    seeded parse is reproducible.

Used By:
    - parsing.parser
    - parsing.flex_groups
"""

from __future__ import annotations

import random
import string

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase

FRAGMENT_SUFFIX_LENGTH = 5
FLEX_SUFFIX_LENGTH = 3


def random_suffix(rng: random.Random, length: int) -> str:
    """Base-36 suffix of the given length."""
    return "".join(rng.choice(_SUFFIX_ALPHABET) for _ in range(length))


def fragment_id(title: str, section: int, index: int, rng: random.Random) -> str:
    """
    Id for the index-th fragment of a section.

    The section number keeps ids unique when two headings share a title.
    """
    return f"{title}-{section}-{index}-{random_suffix(rng, FRAGMENT_SUFFIX_LENGTH)}"


def block_id(kind: str, line_number: int) -> str:
    """Atomic block id, e.g. "table-12" or "callout-3"."""
    return f"{kind}-{line_number}"


def flex_group_id(title: str, section: int, index: int, rng: random.Random) -> str:
    return f"flex-{title}-{section}-{index}-{random_suffix(rng, FLEX_SUFFIX_LENGTH)}"
