"""
Module: rendering.renderer

Purpose:
    Rendering collaborator: converts fragment text (or a joined atomic
    block) to HTML for display.

Key Classes:
    - FragmentRenderer: Protocol any renderer must satisfy
    - MarkdownFragmentRenderer: python-markdown implementation, optionally cached

Key Functions:
    - strip_list_marker(): Remove one leading list marker
    - unwrap_paragraph(): Drop a single enclosing <p> wrapper

Rules:
    - Full-block mode renders the text as is (tables, callouts)
    - Snippet mode strips a single leading list marker first (the marker is
      shown separately as a structural hint) and, when the result is one
      paragraph, returns its inner HTML so it can sit inline

Dependencies:
    - markdown: Markdown to HTML conversion
    - rendering.cache.RenderCache
    - parsing.patterns.LIST_MARKER: Marker recognised by the parser

Used By:
    - gui.controller
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol, Sequence

import markdown

from note_puzzle.parsing.patterns import LIST_MARKER

from .cache import RenderCache

logger = logging.getLogger(__name__)

_SINGLE_PARAGRAPH = re.compile(r"^\s*<p>(.*)</p>\s*$", re.DOTALL)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("tables", "sane_lists")


class FragmentRenderer(Protocol):
    """Converts fragment text to a presentational form."""

    def render(self, text: str, *, full_block: bool, document_path: str = "") -> str:
        ...


def strip_list_marker(text: str) -> str:
    """Remove one leading list marker and the whitespace around it."""
    return LIST_MARKER.sub("", text, count=1)


def unwrap_paragraph(html: str) -> str:
    """
    Return the inner HTML of a single-paragraph result.

    Output with several paragraphs or other block elements is returned
    unchanged.

    Example:
        >>> unwrap_paragraph("<p>a <em>b</em></p>")
        'a <em>b</em>'
        >>> unwrap_paragraph("<p>a</p>\\n<p>b</p>")
        '<p>a</p>\\n<p>b</p>'
    """
    match = _SINGLE_PARAGRAPH.match(html)
    if match is None:
        return html
    inner = match.group(1)
    if "<p>" in inner or "</p>" in inner:
        return html
    return inner


class MarkdownFragmentRenderer:
    """
    Markdown renderer for fragments and restored blocks.

    Attributes:
        cache: Optional render cache; None renders every call afresh
        extensions: python-markdown extensions to enable

    Example:
        >>> renderer = MarkdownFragmentRenderer()
        >>> renderer.render("- **milk**", full_block=False)
        '<strong>milk</strong>'
    """

    def __init__(
        self,
        cache: Optional[RenderCache] = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ):
        self.cache = cache
        self.extensions = tuple(extensions)
        self._md = markdown.Markdown(extensions=list(self.extensions))

    def render(self, text: str, *, full_block: bool, document_path: str = "") -> str:
        """
        Render text to HTML, through the cache when one is set.

        Args:
            text: Fragment text, or member lines joined by newlines
            full_block: True for restored blocks, False for snippets
            document_path: Note path, passed through for context

        Returns:
            HTML string
        """
        if self.cache is None:
            return self._convert(text, full_block, document_path)
        return self.cache.get_or_render(
            text, full_block, lambda: self._convert(text, full_block, document_path)
        )

    def _convert(self, text: str, full_block: bool, document_path: str) -> str:
        source = text if full_block else strip_list_marker(text)
        self._md.reset()
        html = self._md.convert(source)
        if not full_block:
            html = unwrap_paragraph(html)
        logger.debug(
            f"Rendered {'block' if full_block else 'fragment'} "
            f"for {document_path or '<note>'}: {text[:40]!r}"
        )
        return html
