"""
Module: rendering.cache

Purpose:
    Render caching for fragment text. Fragments are re-rendered on every
    view refresh; caching the HTML keyed by mode and text avoids running
    the Markdown converter again for unchanged fragments.

Key Classes:
    - RenderCache: LRU cache for rendered fragment HTML

Dependencies:
    - logging (std)

Used By:
    - rendering.renderer: MarkdownFragmentRenderer
    - gui.controller: Owns one cache per view, cleared on teardown

Design Note:
    The cache belongs to one controller/view and is cleared when it is
    torn down. Cached values are immutable strings, so clearing never
    affects HTML already handed out.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]

BLOCK_MODE = "B"
FRAGMENT_MODE = "F"


def cache_key(text: str, full_block: bool) -> CacheKey:
    return (BLOCK_MODE if full_block else FRAGMENT_MODE, text)


class RenderCache:
    """
    LRU cache for rendered HTML.

    Attributes:
        max_entries: Maximum number of cached renders.

    Example:
        >>> cache = RenderCache(max_entries=2)
        >>> cache.get_or_render("**a**", False, lambda: "<strong>a</strong>")
        '<strong>a</strong>'
        >>> cache.size
        1
    """

    def __init__(self, max_entries: int = 256):
        """
        Initialize cache with maximum entry limit.

        Args:
            max_entries: Maximum renders to keep (must be positive).
        """
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive: {max_entries}")
        self._cache: Dict[CacheKey, str] = {}
        self._max_entries = max_entries
        self._access_order: list = []  # For LRU eviction
        self._hits = 0
        self._misses = 0

    def get(self, text: str, full_block: bool) -> Optional[str]:
        """Return cached HTML or None, marking the entry as recently used."""
        key = cache_key(text, full_block)
        if key not in self._cache:
            return None
        self._access_order.remove(key)
        self._access_order.append(key)
        return self._cache[key]

    def put(self, text: str, full_block: bool, html: str) -> None:
        """Store HTML, evicting the least recently used entry when full."""
        key = cache_key(text, full_block)
        if key in self._cache:
            self._access_order.remove(key)
        elif len(self._cache) >= self._max_entries:
            oldest = self._access_order.pop(0)
            del self._cache[oldest]
            logger.debug(f"Cache EVICT: {oldest[0]}-{oldest[1][:30]!r}")
        self._cache[key] = html
        self._access_order.append(key)

    def get_or_render(self, text: str, full_block: bool, render: Callable[[], str]) -> str:
        """
        Get cached HTML or create it with render().

        Args:
            text: Source text
            full_block: Block mode or fragment-snippet mode
            render: Zero-argument callable producing the HTML on a miss

        Returns:
            Rendered HTML
        """
        cached = self.get(text, full_block)
        if cached is not None:
            self._hits += 1
            return cached

        self._misses += 1
        html = render()
        self.put(text, full_block, html)
        return html

    def clear(self) -> None:
        """Clear the cache."""
        self._cache.clear()
        self._access_order.clear()
        logger.debug("Render cache cleared")

    @property
    def size(self) -> int:
        """Number of renders currently cached."""
        return len(self._cache)

    @property
    def hit_rate(self) -> str:
        """Return cache statistics as string."""
        return f"Cache: {self.size}/{self._max_entries} entries, {self._hits} hits, {self._misses} misses"
