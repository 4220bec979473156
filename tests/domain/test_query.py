"""Tests for resolving the Wwise selection into audio sources."""

import pytest

from wwise_linker.domain.exceptions import AssetDatabaseConnectionError, QueryError
from wwise_linker.domain.query import QueryResolver, deduplicate, filter_audio_sources
from wwise_linker.domain.models import SourceDescriptor


class TestFilterAudioSources:
    """Tests for filter_audio_sources."""

    def test_keeps_only_audio_file_sources(self, source_row):
        rows = [
            source_row("a", "C:\\Originals\\SFX\\a.wav"),
            source_row("sound", None, obj_type="Sound"),
            source_row("folder", None, obj_type="Folder"),
        ]
        result = filter_audio_sources(rows)
        assert [d.id for d in result] == ["a"]

    def test_drops_sources_without_original_file(self, source_row):
        rows = [source_row("a", ""), source_row("b", None), source_row("c", "/o/c.wav")]
        result = filter_audio_sources(rows)
        assert [d.id for d in result] == ["c"]

    def test_maps_fields(self, source_row):
        result = filter_audio_sources([source_row("a", "/o/a.wav", name="Footstep_01")])
        assert result[0] == SourceDescriptor(
            id="a",
            name="Footstep_01",
            middleware_path="\\Actor-Mixer Hierarchy\\Default Work Unit\\Footstep_01",
            original_file_path="/o/a.wav",
        )


class TestDeduplicate:
    """Tests for deduplicate."""

    def test_first_occurrence_wins(self):
        first = SourceDescriptor("x", "first", "\\a", "/o/x.wav")
        second = SourceDescriptor("x", "second", "\\b", "/o/other.wav")
        other = SourceDescriptor("y", "y", "\\c", "/o/y.wav")
        result = deduplicate([[first, other], [second]])
        assert result == [first, other]

    def test_empty_groups(self):
        assert deduplicate([[], []]) == []


class TestQueryResolver:
    """Tests for QueryResolver.resolve_selection."""

    def test_not_connected_raises(self, database):
        database.connected = False
        with pytest.raises(AssetDatabaseConnectionError):
            QueryResolver(database).resolve_selection()

    def test_empty_selection_returns_empty(self, database):
        assert QueryResolver(database).resolve_selection() == []
        assert database.descendant_calls == []

    def test_dedup_across_selected_objects(self, database, source_row):
        database.selection = [
            {"id": "p1", "name": "Parent 1", "path": "\\p1"},
            {"id": "p2", "name": "Parent 2", "path": "\\p2"},
        ]
        shared_first = source_row("shared", "/o/shared.wav", name="from p1")
        shared_second = source_row("shared", "/o/shared.wav", name="from p2")
        database.descendants = {
            "p1": [source_row("a", "/o/a.wav"), shared_first],
            "p2": [shared_second, source_row("b", "/o/b.wav")],
        }

        result = QueryResolver(database).resolve_selection()

        assert [d.id for d in result] == ["a", "shared", "b"]
        assert result[1].name == "from p1"

    def test_failed_descendant_query_does_not_abort_siblings(self, database, source_row):
        database.selection = [
            {"id": "p1", "name": "Broken", "path": "\\p1"},
            {"id": "p2", "name": "Fine", "path": "\\p2"},
        ]
        database.failing_objects = {"p1": "object not found"}
        database.descendants = {"p2": [source_row("b", "/o/b.wav")]}

        result = QueryResolver(database).resolve_selection()

        assert [d.id for d in result] == ["b"]
        assert database.descendant_calls == ["p1", "p2"]

    def test_selection_query_error_propagates(self, database):
        def failing_selection():
            raise QueryError("UI not available")

        database.query_selection = failing_selection
        with pytest.raises(QueryError, match="UI not available"):
            QueryResolver(database).resolve_selection()

    def test_scenario_source_without_original_is_dropped(self, database, source_row):
        """A, B and C where C has no original file resolves to [A, B]."""
        database.selection = [{"id": "p", "name": "Parent", "path": "\\p"}]
        database.descendants = {
            "p": [
                source_row("A", "/o/a.wav"),
                source_row("B", "/o/b.wav"),
                source_row("C", ""),
            ]
        }
        result = QueryResolver(database).resolve_selection()
        assert [d.id for d in result] == ["A", "B"]
