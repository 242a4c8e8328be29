"""Restore type parsing utilities for CLI."""

import typer

from graphvault.graph.models import RESTORE_ORDER, RestoreType

ALL_TYPES = "all"

# Accepted spellings besides the dump tag itself (normalized: lowercase, no "_"/"-")
_ALIASES: dict[str, RestoreType] = {
    "propertykeys": RestoreType.PROPERTY_KEY,
    "vertexlabels": RestoreType.VERTEX_LABEL,
    "edgelabels": RestoreType.EDGE_LABEL,
    "indexlabels": RestoreType.INDEX_LABEL,
    "vertices": RestoreType.VERTEX,
    "vertexes": RestoreType.VERTEX,
    "edges": RestoreType.EDGE,
}


def parse_restore_type(type_str: str) -> RestoreType:
    """Parse a single restore type name.

    Args:
        type_str: Type name (e.g., "vertex", "vertices", "property_key", "PropertyKey")

    Returns:
        Matching RestoreType

    Raises:
        typer.BadParameter: If the name matches no restore type
    """
    normalized = type_str.strip().lower().replace("_", "").replace("-", "")

    for restore_type in RestoreType:
        if normalized == restore_type.tag:
            return restore_type
    if normalized in _ALIASES:
        return _ALIASES[normalized]

    available = ", ".join(t.tag for t in RESTORE_ORDER)
    raise typer.BadParameter(f"Invalid restore type: '{type_str}'. Available types: {available}")


def parse_restore_types(types_str: str | None) -> list[RestoreType]:
    """Parse comma-separated restore types into dependency order.

    The orchestrator replays types exactly in the order it is given, so the CLI
    sorts the selection into schema-before-graph, vertices-before-edges order.

    Args:
        types_str: Comma-separated type names or "all"; None means all types

    Returns:
        Selected restore types, deduplicated, in dependency order

    Raises:
        typer.BadParameter: If an invalid type is specified
    """
    if not types_str:
        return list(RESTORE_ORDER)

    selected: set[RestoreType] = set()
    for type_name in (t.strip() for t in types_str.split(",")):
        if not type_name:
            continue
        if type_name.lower() == ALL_TYPES:
            return list(RESTORE_ORDER)
        selected.add(parse_restore_type(type_name))

    if not selected:
        raise typer.BadParameter("No restore types specified")

    return [t for t in RESTORE_ORDER if t in selected]
