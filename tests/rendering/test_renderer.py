"""
Unit tests for the Markdown rendering collaborator.
"""

import pytest

from note_puzzle.rendering import (
    MarkdownFragmentRenderer,
    RenderCache,
    strip_list_marker,
    unwrap_paragraph,
)


@pytest.fixture
def renderer():
    return MarkdownFragmentRenderer()


class TestHelpers:
    """Tests for snippet helpers."""

    @pytest.mark.parametrize(
        "text,expected",
        [("- milk", "milk"), ("    * eggs", "eggs"), ("12. step", "step"), ("plain", "plain")],
    )
    def test_strip_list_marker_when_text_then_one_marker_removed(self, text, expected):
        assert strip_list_marker(text) == expected

    def test_unwrap_paragraph_when_single_paragraph_then_inner_html(self):
        assert unwrap_paragraph("<p>a <em>b</em></p>") == "a <em>b</em>"

    def test_unwrap_paragraph_when_two_paragraphs_then_unchanged(self):
        html = "<p>a</p>\n<p>b</p>"

        assert unwrap_paragraph(html) == html

    def test_unwrap_paragraph_when_not_paragraph_then_unchanged(self):
        assert unwrap_paragraph("<h3>Title</h3>") == "<h3>Title</h3>"


class TestMarkdownFragmentRenderer:
    """Tests for snippet and full-block rendering."""

    def test_render_when_bullet_snippet_then_marker_stripped_and_unwrapped(self, renderer):
        """The marker is shown separately; the snippet sits inline."""
        assert renderer.render("- **milk**", full_block=False) == "<strong>milk</strong>"

    def test_render_when_numbered_snippet_then_marker_stripped(self, renderer):
        assert renderer.render("2. *second*", full_block=False) == "<em>second</em>"

    def test_render_when_sub_heading_snippet_then_heading_kept(self, renderer):
        html = renderer.render("### Cells", full_block=False)

        assert html.startswith("<h3")
        assert "Cells" in html

    def test_render_when_table_block_then_table_html(self, renderer):
        # Act
        html = renderer.render("| H |\n|---|\n| r1 |\n| r2 |", full_block=True)

        # Assert
        assert "<table>" in html
        assert "<td>r2</td>" in html

    def test_render_when_callout_block_then_blockquote(self, renderer):
        html = renderer.render("> [!note] Tip\n> one", full_block=True)

        assert "<blockquote>" in html

    def test_render_when_full_block_bullet_then_marker_kept(self, renderer):
        """Full-block mode renders the text unchanged."""
        html = renderer.render("- milk", full_block=True)

        assert "<li>milk</li>" in html

    def test_render_when_repeated_then_output_stable(self, renderer):
        first = renderer.render("- *a*", full_block=False)

        assert renderer.render("- *a*", full_block=False) == first

    def test_render_when_cache_given_then_results_cached(self):
        # Arrange
        cache = RenderCache(max_entries=4)
        renderer = MarkdownFragmentRenderer(cache=cache)

        # Act
        renderer.render("- milk", full_block=False, document_path="lists/shopping.md")
        renderer.render("- milk", full_block=False)
        renderer.render("- milk", full_block=True)

        # Assert
        assert cache.size == 2
        assert cache.get("- milk", False) == "milk"

    def test_render_when_marker_inside_text_then_only_leading_marker_stripped(self, renderer):
        """Only the marker the parser recognised is removed."""
        assert renderer.render("    * eggs and - ham", full_block=False) == "eggs and - ham"
