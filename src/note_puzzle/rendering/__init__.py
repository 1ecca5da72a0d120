"""
Module: rendering

Purpose:
    Reference rendering collaborator: Markdown to HTML for fragment
    snippets and restored blocks, with a bounded per-view cache.

Key Classes:
    - FragmentRenderer: Renderer protocol
    - MarkdownFragmentRenderer: python-markdown implementation
    - RenderCache: LRU cache keyed by mode and text

Dependencies:
    - markdown: Conversion

Used By:
    - gui.controller
"""

from .cache import RenderCache
from .renderer import (
    FragmentRenderer,
    MarkdownFragmentRenderer,
    strip_list_marker,
    unwrap_paragraph,
)

__all__ = [
    "RenderCache",
    "FragmentRenderer",
    "MarkdownFragmentRenderer",
    "strip_list_marker",
    "unwrap_paragraph",
]
