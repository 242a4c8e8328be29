"""Unit tests for RestoreOrchestrator.

Strategies run for real against dump files in a temporary directory; only the
HugeGraph client is mocked.
"""

import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from graphvault.exceptions import InvalidInputError, RemoteError, RestorationError
from graphvault.graph.models import RESTORE_ORDER, RestoreType
from graphvault.restoration.orchestrator import RestoreOrchestrator
from graphvault.restoration.results import RestoreSummary
from tests.conftest import (
    make_edges,
    make_property_key,
    make_vertex,
    make_vertices,
    primary_key_label,
)


@pytest.fixture
def full_dump(dump_dir: Path, write_dump) -> Path:
    """A complete dump: two property keys, one of each label, 3 vertices, 2 edges."""
    write_dump(
        dump_dir,
        "propertykey",
        "propertykey",
        [make_property_key("name")],
        [make_property_key("age", "INT")],
    )
    write_dump(
        dump_dir,
        "vertexlabel",
        "vertexlabel",
        [{"name": "person", "id_strategy": "PRIMARY_KEY", "primary_keys": ["name"]}],
    )
    write_dump(
        dump_dir,
        "edgelabel",
        "edgelabel",
        [{"name": "knows", "source_label": "person", "target_label": "person"}],
    )
    write_dump(
        dump_dir,
        "indexlabel",
        "indexlabel",
        [
            {
                "name": "personByAge",
                "base_type": "VERTEX_LABEL",
                "base_value": "person",
                "index_type": "RANGE",
                "fields": ["age"],
            }
        ],
    )
    write_dump(dump_dir, "vertex-0", "vertex", [make_vertex("1:marko", name="marko")])
    write_dump(dump_dir, "vertex-1", "vertex", make_vertices(2))
    write_dump(dump_dir, "edge-0", "edge", make_edges(2))
    return dump_dir


@pytest.fixture
def call_log(mock_client) -> list[str]:
    """Record the order of remote write calls by restore tag."""
    log: list[str] = []
    schema_api = mock_client.schema.return_value
    graph_api = mock_client.graph.return_value
    schema_api.add_property_key.side_effect = lambda r: log.append("propertykey")
    schema_api.add_vertex_label.side_effect = lambda r: log.append("vertexlabel")
    schema_api.add_edge_label.side_effect = lambda r: log.append("edgelabel")
    schema_api.add_index_label.side_effect = lambda r: log.append("indexlabel")
    graph_api.add_vertices.side_effect = lambda batch: log.append("vertex")
    graph_api.add_edges.side_effect = lambda batch, check_vertex=True: log.append("edge")
    return log


@pytest.fixture
def orchestrator(mock_client, restore_config, counters) -> RestoreOrchestrator:
    return RestoreOrchestrator(mock_client, restore_config, counters)


class TestFullRestore:
    def test_restores_every_type_and_returns_summary(self, orchestrator, mock_client, full_dump):
        mock_client.schema.return_value.get_vertex_labels.return_value = [
            primary_key_label("person", "name")
        ]

        summary = orchestrator.restore(list(RESTORE_ORDER), full_dump)

        assert isinstance(summary, RestoreSummary)
        assert summary.succeeded
        assert summary.counts == {
            RestoreType.PROPERTY_KEY: 2,
            RestoreType.VERTEX_LABEL: 1,
            RestoreType.EDGE_LABEL: 1,
            RestoreType.INDEX_LABEL: 1,
            RestoreType.VERTEX: 3,
            RestoreType.EDGE: 2,
        }
        assert summary.total == 10
        assert summary.duration_seconds >= 0.0

    def test_types_run_in_caller_order(self, orchestrator, call_log, full_dump):
        orchestrator.restore(list(RESTORE_ORDER), full_dump)

        # Collapse consecutive duplicates: each type finishes before the next starts
        collapsed = [tag for i, tag in enumerate(call_log) if i == 0 or call_log[i - 1] != tag]
        assert collapsed == [t.tag for t in RESTORE_ORDER]

    def test_caller_order_is_not_corrected(self, orchestrator, call_log, full_dump):
        """Edges before vertices is the caller's choice and is honored as given."""
        orchestrator.restore([RestoreType.EDGE, RestoreType.VERTEX], full_dump)

        assert call_log.index("edge") < call_log.index("vertex")

    def test_subset_of_types_only_counts_requested(self, orchestrator, mock_client, full_dump):
        summary = orchestrator.restore([RestoreType.VERTEX, RestoreType.EDGE], full_dump)

        assert summary.counts == {RestoreType.VERTEX: 3, RestoreType.EDGE: 2}
        mock_client.schema.return_value.add_property_key.assert_not_called()

    def test_empty_directory_restores_nothing_for_bulk_types(self, orchestrator, dump_dir):
        summary = orchestrator.restore([RestoreType.VERTEX, RestoreType.EDGE], dump_dir)

        assert summary.succeeded
        assert summary.total == 0

    def test_counters_reset_between_runs(self, orchestrator, full_dump):
        orchestrator.restore([RestoreType.EDGE], full_dump)
        summary = orchestrator.restore([RestoreType.EDGE], full_dump)

        assert summary.counts[RestoreType.EDGE] == 2


class TestProgrammingErrors:
    def test_unknown_type_raises_value_error(self, orchestrator, dump_dir):
        with pytest.raises(ValueError, match="Bad restore type"):
            orchestrator.restore(["bogus"], dump_dir)

    def test_plain_string_is_not_a_restore_type(self, orchestrator, dump_dir):
        with pytest.raises(ValueError):
            orchestrator.restore(["vertex"], dump_dir)

    def test_value_error_is_not_recorded_as_failure(self, orchestrator, mock_client, full_dump):
        """Types before the bad one still ran; the error escapes unwrapped."""
        with pytest.raises(ValueError):
            orchestrator.restore([RestoreType.EDGE, "nope", RestoreType.VERTEX], full_dump)

        mock_client.graph.return_value.add_edges.assert_called()
        mock_client.graph.return_value.add_vertices.assert_not_called()


class TestFailureHandling:
    def test_missing_schema_file_stops_run_by_default(self, orchestrator, mock_client, dump_dir):
        with pytest.raises(RestorationError) as exc_info:
            orchestrator.restore(list(RESTORE_ORDER), dump_dir)

        summary = exc_info.value.summary
        assert not summary.succeeded
        (failure,) = summary.failures
        assert failure.restore_type == RestoreType.PROPERTY_KEY
        assert isinstance(failure.error, InvalidInputError)
        assert summary.skipped_types == list(RESTORE_ORDER[1:])
        assert summary.counts[RestoreType.PROPERTY_KEY] == 0
        mock_client.schema.return_value.add_vertex_label.assert_not_called()

    def test_continue_on_error_runs_remaining_types(
        self, mock_client, restore_config, counters, full_dump
    ):
        config = restore_config.model_copy(update={"stop_on_error": False})
        orchestrator = RestoreOrchestrator(mock_client, config, counters)
        (full_dump / "edgelabel").unlink()

        with pytest.raises(RestorationError) as exc_info:
            orchestrator.restore(list(RESTORE_ORDER), full_dump)

        summary = exc_info.value.summary
        assert [f.restore_type for f in summary.failures] == [RestoreType.EDGE_LABEL]
        assert summary.skipped_types == []
        assert summary.counts[RestoreType.INDEX_LABEL] == 1
        assert summary.counts[RestoreType.VERTEX] == 3
        assert summary.counts[RestoreType.EDGE] == 2

    def test_bulk_unit_failures_are_flattened_into_summary(
        self, mock_client, restore_config, counters, dump_dir, write_dump
    ):
        config = restore_config.model_copy(update={"stop_on_error": False})
        orchestrator = RestoreOrchestrator(mock_client, config, counters)
        write_dump(dump_dir, "vertex-1", "vertex", make_vertices(1))
        (dump_dir / "vertex-2").write_text("garbage\n", encoding="utf-8")
        (dump_dir / "vertex-3").write_text("{}\n", encoding="utf-8")
        write_dump(dump_dir, "edge-1", "edge", make_edges(1))

        with pytest.raises(RestorationError) as exc_info:
            orchestrator.restore([RestoreType.VERTEX, RestoreType.EDGE], dump_dir)

        summary = exc_info.value.summary
        assert sorted(f.path.name for f in summary.failures) == ["vertex-2", "vertex-3"]
        assert summary.counts == {RestoreType.VERTEX: 1, RestoreType.EDGE: 1}

    def test_schema_remote_failure_stops_following_types(
        self, orchestrator, mock_client, full_dump
    ):
        mock_client.schema.return_value.add_vertex_label.side_effect = RemoteError(
            "label exists", 400
        )

        with pytest.raises(RestorationError) as exc_info:
            orchestrator.restore(list(RESTORE_ORDER), full_dump)

        summary = exc_info.value.summary
        assert summary.counts[RestoreType.PROPERTY_KEY] == 2
        assert summary.skipped_types == [
            RestoreType.EDGE_LABEL,
            RestoreType.INDEX_LABEL,
            RestoreType.VERTEX,
            RestoreType.EDGE,
        ]
        mock_client.graph.return_value.add_vertices.assert_not_called()

    def test_no_skipped_types_when_last_type_fails(self, orchestrator, mock_client, full_dump):
        mock_client.graph.return_value.add_edges.side_effect = RemoteError("bad", 400)

        with pytest.raises(RestorationError) as exc_info:
            orchestrator.restore([RestoreType.VERTEX, RestoreType.EDGE], full_dump)

        assert exc_info.value.summary.skipped_types == []
        assert exc_info.value.summary.counts[RestoreType.VERTEX] == 3

    def test_summary_serializes_failures(self, orchestrator, dump_dir):
        with pytest.raises(RestorationError) as exc_info:
            orchestrator.restore([RestoreType.INDEX_LABEL, RestoreType.EDGE], dump_dir)

        data = exc_info.value.summary.to_dict()
        assert data["succeeded"] is False
        assert data["failures"][0]["type"] == "indexlabel"
        assert data["failures"][0]["error_type"] == "InvalidInputError"
        assert data["skipped_types"] == ["edge"]


class TestInterruptedRun:
    def test_interrupt_cancels_queued_files(
        self, mock_client, restore_config, counters, dump_dir, write_dump
    ):
        for i in range(3):
            write_dump(dump_dir, f"vertex-{i}", "vertex", make_vertices(2, start=i * 2))
        graph_api = mock_client.graph.return_value
        graph_api.add_vertices.side_effect = lambda batch: threading.Event().wait(0.2)
        config = restore_config.model_copy(update={"workers": 1})
        orchestrator = RestoreOrchestrator(mock_client, config, counters)

        with (
            patch("graphvault.restoration.strategies.wait", side_effect=KeyboardInterrupt),
            pytest.raises(KeyboardInterrupt),
        ):
            orchestrator.restore([RestoreType.VERTEX], dump_dir)

        # Only the file already running on the single worker reaches the server
        assert graph_api.add_vertices.call_count <= 1
