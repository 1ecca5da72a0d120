"""
Module: session.generator

Purpose:
    Build a fresh PuzzleSession for one group: choose the prefilled
    (locked) positions, draw decoys from other groups and shuffle the pool.

Key Functions:
    - generate_session(): Main entry point

Key Classes:
    - SessionGenerator: Owns the random source for one generation
    - SessionError: Group cannot be played

Algorithm:
    1. Playable positions = indices of non-static fragments
    2. Stability score per position: sub-headings get a fixed dominant
       score, others base / (indentation / step + 1) plus jitter in
       [0, stability_jitter); shallow fragments are prefilled first
    3. Prefill the top floor(playable * prefill_fraction) positions
    4. Statics and prefilled fragments occupy their own slots
    5. decoy_count draws: random other group, random fragment, skip statics
    6. Pool = unplaced playable fragments + decoys, shuffled

Dependencies:
    - random (std): All randomness goes through one random.Random
    - note_puzzle.core.models: Document, Group, PuzzleSession

Used By:
    - gui.controller: start_session()
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from note_puzzle.core.models import Document, Fragment, Group, PuzzleSession

from .config import SessionConfig

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Error starting a session (unknown or already restored group)."""
    pass


def generate_session(
    document: Document,
    group_index: int,
    config: Optional[SessionConfig] = None,
    *,
    rng: Optional[random.Random] = None,
) -> PuzzleSession:
    """
    Generate a new session for a group.

    Args:
        document: Parsed document
        group_index: Index of the target group
        config: Session configuration (defaults to medium, unseeded)
        rng: Injected random source; overrides config.seed

    Returns:
        PuzzleSession with slots, prefilled indices and a shuffled pool

    Raises:
        SessionError: If group_index is out of range or the group is restored

    Invariants:
        - len(session.slots) == len(group.fragments)
        - every static fragment occupies its own slot
        - len(prefilled_indices) == floor(playable * prefill_fraction)

    Example:
        >>> session = generate_session(doc, 0, SessionConfig(seed=42))
        >>> len(session.slots) == len(doc.groups[0])
        True
    """
    generator = SessionGenerator(document, config or SessionConfig(), rng=rng)
    return generator.generate(group_index)


@dataclass
class SessionGenerator:
    """
    Session generation with an explicit random source.

    Attributes:
        document: Parsed document
        config: Session configuration
        rng: Random source; seeded from config.seed when not injected
    """

    document: Document
    config: SessionConfig = field(default_factory=SessionConfig)
    rng: Optional[random.Random] = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)

    def generate(self, group_index: int) -> PuzzleSession:
        """Run all generation steps for one group."""
        if not 0 <= group_index < len(self.document.groups):
            raise SessionError(
                f"Group index {group_index} out of range "
                f"(document has {len(self.document.groups)} groups)"
            )
        group = self.document.groups[group_index]
        if group.is_restored:
            raise SessionError(f"Group {group.title!r} is already restored")

        prefilled = self.choose_prefilled(group)

        slots: List[Optional[Fragment]] = [None] * len(group.fragments)
        for idx, fragment in enumerate(group.fragments):
            if fragment.is_static or idx in prefilled:
                slots[idx] = fragment

        placed_ids = {fragment.id for fragment in slots if fragment is not None}
        decoys = self.draw_decoys(group_index)
        pool = [
            fragment for fragment in group.fragments
            if fragment.is_playable and fragment.id not in placed_ids
        ]
        pool.extend(decoys)
        self.rng.shuffle(pool)

        session = PuzzleSession(
            group_index=group_index,
            difficulty=self.config.difficulty,
            slots=slots,
            prefilled_indices=prefilled,
            pool_items=pool,
        )
        logger.info(
            f"Session for {group.title!r} ({self.config.difficulty.label}): "
            f"{len(prefilled)}/{group.playable_count} prefilled, "
            f"{len(decoys)} decoy(s), {len(pool)} in pool"
        )
        return session

    # ─────────────────────────────────────────────────────────────────────────
    # Generation Steps
    # ─────────────────────────────────────────────────────────────────────────

    def stability_score(self, fragment: Fragment) -> float:
        """
        Preference for prefilling a fragment; higher is prefilled first.

        Sub-headings always win. Other fragments score higher the shallower
        they are, with jitter so equal depths are not prefilled in order.
        """
        if fragment.is_sub_heading:
            return self.config.sub_heading_score
        depth = fragment.indentation / self.config.indent_step
        jitter = self.rng.random() * self.config.stability_jitter
        return self.config.base_score / (depth + 1) + jitter

    def choose_prefilled(self, group: Group) -> Set[int]:
        """Pick the prefilled positions among the playable ones."""
        playable = group.playable_indices
        scored = [(idx, self.stability_score(group.fragments[idx])) for idx in playable]
        scored.sort(key=lambda item: item[1], reverse=True)
        count = math.floor(len(playable) * self.config.settings.prefill_fraction)
        return {idx for idx, _ in scored[:count]}

    def draw_decoys(self, group_index: int) -> List[Fragment]:
        """
        Draw decoy fragments from other groups.

        Each draw picks a random other group, then a random fragment of it.
        Static picks and empty groups contribute nothing; the same fragment
        may be drawn twice. With no other group there are no decoys.
        """
        others = self.document.other_groups(group_index)
        if not others:
            return []

        decoys: List[Fragment] = []
        for _ in range(self.config.settings.decoy_count):
            source = self.rng.choice(others)
            if not source.fragments:
                continue
            pick = self.rng.choice(source.fragments)
            if pick.is_playable:
                decoys.append(pick)
        return decoys
