"""Shared pytest fixtures and factory functions for GraphVault tests.

This module provides reusable dump-file builders and mock objects to reduce
boilerplate across tests and maintain consistency.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from graphvault.config.models import RestoreConfig
from graphvault.graph.models import IdStrategy, RestoreType, VertexLabel
from graphvault.restoration.counters import RestoreCounters

#
# Mock Fixtures
#


@pytest.fixture
def mock_client():
    """Mock HugeGraphClient.

    ``schema()`` and ``graph()`` always return the same child mocks, and the
    graph has no primary-key vertex labels unless a test configures some.

    Returns:
        MagicMock: Mock HugeGraph client instance.
    """
    client = MagicMock()
    client.schema.return_value.get_vertex_labels.return_value = []
    return client


@pytest.fixture
def restore_config() -> RestoreConfig:
    """RestoreConfig with several workers and no back-off delay.

    Returns:
        RestoreConfig: Configuration suitable for fast tests.
    """
    return RestoreConfig(workers=4, max_retries=3, retry_min_wait=0, retry_max_wait=0)


@pytest.fixture
def counters() -> RestoreCounters:
    """Fresh counters with the run timer started."""
    counters = RestoreCounters()
    counters.start_timer()
    return counters


#
# Dump File Fixtures
#


@pytest.fixture
def dump_dir(tmp_path: Path) -> Path:
    """Empty dump directory."""
    directory = tmp_path / "dump"
    directory.mkdir()
    return directory


@pytest.fixture
def write_dump() -> Callable[..., Path]:
    """Factory writing a dump file, one JSON line per record list.

    Returns:
        Callable: write_dump(directory, file_name, tag, *lines) -> Path
    """

    def _write(directory: Path, file_name: str, tag: str, *lines: list[dict[str, Any]]) -> Path:
        path = directory / file_name
        path.write_text(
            "".join(json.dumps({tag: records}) + "\n" for records in lines),
            encoding="utf-8",
        )
        return path

    return _write


#
# Record Factories
#


def make_vertex(vertex_id: str | int | None, label: str = "person", **properties) -> dict:
    """Create a dumped vertex dict."""
    vertex: dict[str, Any] = {"label": label, "type": "vertex", "properties": properties}
    if vertex_id is not None:
        vertex["id"] = vertex_id
    return vertex


def make_vertices(count: int, label: str = "software", start: int = 0) -> list[dict]:
    """Create ``count`` dumped vertices with sequential customized ids."""
    return [make_vertex(f"{label}-{i}", label=label) for i in range(start, start + count)]


def make_edge(index: int, label: str = "knows") -> dict:
    """Create a dumped edge dict between two person vertices."""
    return {
        "id": f"S1:a{index}>1>>S1:b{index}",
        "label": label,
        "type": "edge",
        "outV": f"1:a{index}",
        "outVLabel": "person",
        "inV": f"1:b{index}",
        "inVLabel": "person",
        "properties": {"weight": 0.5},
    }


def make_edges(count: int) -> list[dict]:
    """Create ``count`` dumped edges."""
    return [make_edge(i) for i in range(count)]


def make_property_key(name: str, data_type: str = "TEXT") -> dict:
    """Create a dumped property key dict."""
    return {"id": 1, "name": name, "data_type": data_type, "cardinality": "SINGLE"}


def primary_key_label(name: str, *keys: str) -> VertexLabel:
    """Create a vertex label using the primary-key id strategy."""
    return VertexLabel(
        name=name, id_strategy=IdStrategy.PRIMARY_KEY, primary_keys=list(keys or ("name",))
    )


SCHEMA_METHODS = {
    RestoreType.PROPERTY_KEY: "add_property_key",
    RestoreType.VERTEX_LABEL: "add_vertex_label",
    RestoreType.EDGE_LABEL: "add_edge_label",
    RestoreType.INDEX_LABEL: "add_index_label",
}
