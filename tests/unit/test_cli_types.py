"""Unit tests for restore type parsing."""

import pytest
import typer

from graphvault.cli.types import parse_restore_type, parse_restore_types
from graphvault.graph.models import RESTORE_ORDER, RestoreType


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("propertykey", RestoreType.PROPERTY_KEY),
        ("property_key", RestoreType.PROPERTY_KEY),
        ("PropertyKeys", RestoreType.PROPERTY_KEY),
        ("vertex-label", RestoreType.VERTEX_LABEL),
        ("edgelabels", RestoreType.EDGE_LABEL),
        ("INDEX_LABEL", RestoreType.INDEX_LABEL),
        ("vertex", RestoreType.VERTEX),
        ("vertices", RestoreType.VERTEX),
        (" edges ", RestoreType.EDGE),
    ],
)
def test_parse_restore_type(name: str, expected: RestoreType) -> None:
    assert parse_restore_type(name) == expected


def test_parse_restore_type_invalid() -> None:
    with pytest.raises(typer.BadParameter, match="Available types: propertykey"):
        parse_restore_type("dashboard")


@pytest.mark.parametrize("value", [None, "", "all", "ALL", "vertex,all"])
def test_all_types_in_dependency_order(value) -> None:
    assert parse_restore_types(value) == list(RESTORE_ORDER)


def test_selection_sorted_into_dependency_order() -> None:
    assert parse_restore_types("edges,vertices,propertykey") == [
        RestoreType.PROPERTY_KEY,
        RestoreType.VERTEX,
        RestoreType.EDGE,
    ]


def test_duplicates_collapsed() -> None:
    assert parse_restore_types("vertex,vertices, vertex") == [RestoreType.VERTEX]


def test_only_separators_rejected() -> None:
    with pytest.raises(typer.BadParameter, match="No restore types"):
        parse_restore_types(" , ,")


def test_invalid_entry_rejected() -> None:
    with pytest.raises(typer.BadParameter):
        parse_restore_types("vertex,look")
