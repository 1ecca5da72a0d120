"""
Unit tests for lobby cards and document rows.
"""

from note_puzzle.core.models import Difficulty, PuzzleSession
from note_puzzle.session import RowKind, SlotStatus, document_rows, lobby_cards, place_fragment


class TestLobbyCards:
    """Tests for lobby_cards()."""

    def test_lobby_cards_when_study_note_then_counts_playable(self, study_doc):
        # Arrange
        study_doc.groups[1].is_restored = True

        # Act
        cards = lobby_cards(study_doc)

        # Assert
        assert [(c.index, c.title, c.fragment_count) for c in cards] == [
            (0, "Introduction", 1),
            (1, "Biology", 7),
            (2, "Tables", 4),
        ]
        assert [c.is_selectable for c in cards] == [True, False, True]


class TestDocumentRows:
    """Tests for document_rows()."""

    def test_document_rows_when_block_incomplete_then_one_row_per_slot(self, table_doc):
        # Arrange
        group = table_doc.groups[0]
        head, separator, r1, r2 = group.fragments
        session = PuzzleSession(0, Difficulty.MEDIUM, [head, separator, None, None], set(), [r1, r2])

        # Act
        rows = document_rows(session, group)

        # Assert
        assert [row.kind for row in rows] == [RowKind.SLOT] * 4
        assert [row.status for row in rows] == [
            SlotStatus.LOCKED, SlotStatus.LOCKED, SlotStatus.EMPTY, SlotStatus.EMPTY,
        ]

    def test_document_rows_when_block_restored_then_single_block_row(self, table_doc):
        """A restored table collapses into one full-block row."""
        # Arrange
        group = table_doc.groups[0]
        head, separator, r1, r2 = group.fragments
        session = PuzzleSession(0, Difficulty.MEDIUM, [head, separator, None, None], set(), [r1, r2])
        place_fragment(session, 2, r1)
        place_fragment(session, 3, r2)

        # Act
        rows = document_rows(session, group)

        # Assert
        assert len(rows) == 1
        assert rows[0].kind is RowKind.BLOCK
        assert rows[0].index == 0
        assert rows[0].block_text == "| H |\n|---|\n| r1 |\n| r2 |"

    def test_document_rows_when_empty_slot_then_marker_hint_and_original_indent(self, parse):
        # Arrange
        group = parse("# A\n- p\n    * c\n").groups[0]
        p, c = group.fragments
        session = PuzzleSession(0, Difficulty.HARD, [None, None], set(), [c, p])

        # Act
        rows = document_rows(session, group)

        # Assert
        assert [(row.marker_hint, row.indentation) for row in rows] == [("-", 0), ("*", 4)]

    def test_document_rows_when_occupied_then_occupant_indentation(self, parse):
        """Placed fragments keep their own indentation, not the slot's."""
        # Arrange
        group = parse("# A\n- p\n    - c\n").groups[0]
        p, c = group.fragments
        session = PuzzleSession(0, Difficulty.HARD, [None, None], set(), [c, p])

        # Act
        place_fragment(session, 0, c)
        rows = document_rows(session, group)

        # Assert
        assert rows[0].fragment is c
        assert rows[0].indentation == 4
        assert rows[0].marker_hint is None
        assert rows[0].status is SlotStatus.WRONG
