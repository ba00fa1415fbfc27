"""
Unit Tests for the in-memory title filter.
"""

import pytest

from notekeeper.services.note import NoteStore, filter_notes


class TestFilterIdentity:
    """Blank queries return the snapshot untouched."""

    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
    def test_blank_query_returns_input(self, note_factory, query):
        notes = [note_factory(id=3, title="c"), note_factory(id=1, title="a")]

        result = filter_notes(notes, query)

        assert result is notes
        assert [n.id for n in result] == [3, 1]

    def test_empty_snapshot(self):
        assert filter_notes([], "anything") == []


class TestFilterMatching:
    """Case-insensitive substring match on title only."""

    @pytest.mark.parametrize("query", ["groc", "GROC", "roceries", "Groceries", "eri"])
    def test_matches_title_substring_any_case(self, note_factory, query):
        notes = [note_factory(title="Groceries")]

        assert filter_notes(notes, query) == notes

    def test_non_substring_does_not_match(self, note_factory):
        notes = [note_factory(title="Groceries")]

        assert filter_notes(notes, "group") == []

    def test_null_title_never_matches(self, note_factory):
        notes = [note_factory(title=None, body="groceries")]

        assert filter_notes(notes, "groc") == []

    def test_body_is_not_searched(self, note_factory):
        notes = [note_factory(title="Shopping", body="Groceries for the week")]

        assert filter_notes(notes, "groceries") == []

    def test_keeps_snapshot_order(self, note_factory):
        notes = [
            note_factory(id=5, title="Plan trip"),
            note_factory(id=4, title="Groceries"),
            note_factory(id=2, title="Trip budget"),
        ]

        result = filter_notes(notes, "trip")

        assert [n.id for n in result] == [5, 2]

    def test_store_filter_delegates(self, note_factory):
        notes = [note_factory(id=1, title="Alpha"), note_factory(id=2, title="Beta")]

        assert [n.id for n in NoteStore.filter(notes, "BET")] == [2]
