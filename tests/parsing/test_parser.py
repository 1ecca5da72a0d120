"""
Unit tests for parse_document.
"""

import random

from note_puzzle.core.models import DEFAULT_GROUP_TITLE
from note_puzzle.parsing import parse_document


def shape(document):
    """Structure of a document without its random ids."""
    return [
        (
            group.title,
            [
                (
                    f.text,
                    f.original_index,
                    f.indentation,
                    f.list_marker,
                    f.is_static,
                    f.is_sub_heading,
                    f.block_id,
                    f.flex_group_id is not None,
                )
                for f in group.fragments
            ],
        )
        for group in document.groups
    ]


class TestGroups:
    """Tests for heading-scoped grouping."""

    def test_parse_when_two_headings_then_two_groups(self, shopping_doc):
        """Levels 1 and 2 open groups; the empty leading group is dropped."""
        # Assert
        assert [(g.title, len(g)) for g in shopping_doc.groups] == [("A", 2), ("B", 1)]
        assert [f.text for f in shopping_doc.groups[0].fragments] == ["- x", "- y"]

    def test_parse_when_text_before_heading_then_introduction_group(self, parse):
        # Act
        document = parse("intro line\n# A\n- x\n")

        # Assert
        assert [g.title for g in document.groups] == [DEFAULT_GROUP_TITLE, "A"]

    def test_parse_when_last_group_empty_then_still_kept(self, parse):
        """The final group is always emitted."""
        document = parse("# A\n- x\n# B\n")

        assert [(g.title, len(g)) for g in document.groups] == [("A", 1), ("B", 0)]

    def test_parse_when_empty_text_then_single_empty_introduction(self, parse):
        document = parse("")

        assert [(g.title, len(g)) for g in document.groups] == [(DEFAULT_GROUP_TITLE, 0)]

    def test_parse_when_deep_heading_then_sub_heading_fragment(self, parse):
        """Level 3+ headings stay inside the group."""
        # Act
        group = parse("# A\n### Details\n- x\n").groups[0]

        # Assert
        assert group.fragments[0].is_sub_heading is True
        assert group.fragments[0].is_static is False
        assert group.fragments[0].text == "### Details"

    def test_parse_when_metadata_passed_then_kept_on_document(self, parse):
        document = parse("# A\n- x\n", file_name="Shopping", file_path="lists/shopping.md")

        assert document.file_name == "Shopping"
        assert document.file_path == "lists/shopping.md"


class TestFragments:
    """Tests for per-line fragment fields."""

    def test_parse_when_crlf_then_matches_lf(self):
        """CRLF and LF input parse to the same structure."""
        lf = parse_document("# A\n- x\n    - y\n", rng=random.Random(1))
        crlf = parse_document("# A\r\n- x\r\n    - y\r\n", rng=random.Random(2))

        assert shape(crlf) == shape(lf)

    def test_parse_when_whitespace_only_line_then_kept_as_fragment(self, parse):
        """Only zero-length lines are skipped."""
        group = parse("# A\n- x\n   \n").groups[0]

        assert [f.text for f in group.fragments] == ["- x", "   "]

    def test_parse_when_list_items_then_marker_and_indentation(self, parse):
        # Act
        fragments = parse("# A\n- x\n\t* y\n3. z\n").groups[0].fragments

        # Assert
        assert [(f.list_marker, f.indentation, f.is_list_item) for f in fragments] == [
            ("-", 0, True),
            ("*", 4, True),
            ("3.", 0, True),
        ]

    def test_parse_when_indices_then_dense_from_zero(self, study_doc):
        for group in study_doc.groups:
            assert [f.original_index for f in group.fragments] == list(range(len(group)))
            assert all(f.original_group == group.title for f in group.fragments)

    def test_parse_when_titles_repeat_then_ids_stay_unique(self, parse):
        """Ids carry the section number."""
        # Act
        document = parse("# A\n- x\n# A\n- x\n")

        # Assert
        first, second = (g.fragments[0].id for g in document.groups)
        assert first.startswith("A-1-0-")
        assert second.startswith("A-2-0-")
        assert first != second

    def test_parse_when_same_text_twice_then_same_structure(self, study_doc):
        """Parsing is idempotent up to ids."""
        again = parse_document(
            "Loose intro line\n\n# Biology\n### Cells\n- nucleus\n- membrane\n"
            "    - lipid bilayer\n    - proteins\n1. observe\n2. record\n\n"
            "## Tables\n| Organ | Role |\n|---|---|\n| Heart | Pump |\n"
            "| Lung | Gas exchange |\n\n> [!note] Remember\n> cells are small\n"
            "> and numerous\n",
            rng=random.Random(99),
        )

        assert shape(again) == shape(study_doc)


class TestBlocks:
    """Tests for atomic tables and callouts."""

    def test_parse_when_table_then_static_head_and_playable_rows(self, table_doc):
        # Arrange
        fragments = table_doc.groups[0].fragments

        # Assert
        assert [f.text for f in fragments] == ["| H |", "|---|", "| r1 |", "| r2 |"]
        assert [f.is_static for f in fragments] == [True, True, False, False]
        assert {f.block_id for f in fragments} == {"table-0"}

    def test_parse_when_table_after_heading_then_block_id_uses_line_number(self, parse):
        fragments = parse("# T\n| H |\n|---|\n| r1 |\n").groups[0].fragments

        assert [f.block_id for f in fragments] == ["table-1"] * 3

    def test_parse_when_pipe_without_separator_then_ordinary_fragments(self, parse):
        """Malformed tables are recovered as plain lines."""
        fragments = parse("| just a pipe\nplain\n").groups[0].fragments

        assert [(f.text, f.block_id, f.is_static) for f in fragments] == [
            ("| just a pipe", None, False),
            ("plain", None, False),
        ]

    def test_parse_when_table_ends_at_plain_line_then_line_outside_block(self, parse):
        fragments = parse("| H |\n|---|\n| r1 |\nafter\n").groups[0].fragments

        assert fragments[-1].text == "after"
        assert fragments[-1].block_id is None

    def test_parse_when_callout_then_static_header_and_body(self, parse):
        # Act
        fragments = parse("> [!note] Tip\n> one\n> two\nafter\n").groups[0].fragments

        # Assert
        assert [(f.is_static, f.block_id) for f in fragments] == [
            (True, "callout-0"),
            (False, "callout-0"),
            (False, "callout-0"),
            (False, None),
        ]

    def test_parse_when_blank_line_inside_callout_then_block_ends(self, parse):
        """A blank line closes the callout; later quotes are ordinary."""
        fragments = parse("> [!note] Tip\n> one\n\n> two\n").groups[0].fragments

        assert [f.block_id for f in fragments] == ["callout-0", "callout-0", None]

    def test_parse_when_study_note_then_expected_groups(self, study_doc):
        # Assert
        assert [(g.title, len(g), g.playable_count) for g in study_doc.groups] == [
            (DEFAULT_GROUP_TITLE, 1, 1),
            ("Biology", 7, 7),
            ("Tables", 7, 4),
        ]
        tables = study_doc.groups[2]
        assert tables.block_members("table-12") == [0, 1, 2, 3]
        assert tables.block_members("callout-17") == [4, 5, 6]
