"""Data models for HugeGraph schema objects and graph elements.

Records are ``msgspec.Struct`` types so that a dump line decodes straight into
typed objects and encodes back to the same JSON shape for upload. All structs
use ``omit_defaults=True``: optional fields left at their default (notably a
cleared vertex ``id``) are not sent to the server.
"""

from enum import StrEnum
from typing import Any

import msgspec


class RestoreType(StrEnum):
    """Enumeration of restorable HugeGraph object kinds.

    The value of each member is its dump tag: the exact file name of a schema
    dump, the file-name prefix of sharded vertex/edge dumps, and the JSON key
    under which records are nested in every dump line.
    """

    PROPERTY_KEY = "propertykey"
    VERTEX_LABEL = "vertexlabel"
    EDGE_LABEL = "edgelabel"
    INDEX_LABEL = "indexlabel"
    VERTEX = "vertex"
    EDGE = "edge"

    @property
    def tag(self) -> str:
        """Dump tag used as file name/prefix and JSON key."""
        return self.value

    @property
    def is_schema(self) -> bool:
        """True for schema object kinds, False for graph elements."""
        return self in SCHEMA_TYPES


SCHEMA_TYPES = frozenset(
    {
        RestoreType.PROPERTY_KEY,
        RestoreType.VERTEX_LABEL,
        RestoreType.EDGE_LABEL,
        RestoreType.INDEX_LABEL,
    }
)

# Dependency order: schema before graph elements, vertices before edges
RESTORE_ORDER: tuple[RestoreType, ...] = (
    RestoreType.PROPERTY_KEY,
    RestoreType.VERTEX_LABEL,
    RestoreType.EDGE_LABEL,
    RestoreType.INDEX_LABEL,
    RestoreType.VERTEX,
    RestoreType.EDGE,
)


class IdStrategy(StrEnum):
    """Vertex label identifier strategies."""

    DEFAULT = "DEFAULT"
    AUTOMATIC = "AUTOMATIC"
    PRIMARY_KEY = "PRIMARY_KEY"
    CUSTOMIZE_STRING = "CUSTOMIZE_STRING"
    CUSTOMIZE_NUMBER = "CUSTOMIZE_NUMBER"
    CUSTOMIZE_UUID = "CUSTOMIZE_UUID"


class PropertyKey(msgspec.Struct, omit_defaults=True):
    """A property key schema object."""

    name: str
    id: int | None = None
    data_type: str = "TEXT"
    cardinality: str = "SINGLE"
    aggregate_type: str | None = None
    properties: list[str] = msgspec.field(default_factory=list)
    user_data: dict[str, Any] = msgspec.field(default_factory=dict)


class VertexLabel(msgspec.Struct, omit_defaults=True):
    """A vertex label schema object."""

    name: str
    id: int | None = None
    id_strategy: IdStrategy = IdStrategy.DEFAULT
    primary_keys: list[str] = msgspec.field(default_factory=list)
    nullable_keys: list[str] = msgspec.field(default_factory=list)
    index_labels: list[str] = msgspec.field(default_factory=list)
    properties: list[str] = msgspec.field(default_factory=list)
    enable_label_index: bool | None = None
    ttl: int | None = None
    ttl_start_time: str | None = None
    user_data: dict[str, Any] = msgspec.field(default_factory=dict)


class EdgeLabel(msgspec.Struct, omit_defaults=True):
    """An edge label schema object."""

    name: str
    source_label: str
    target_label: str
    id: int | None = None
    frequency: str = "SINGLE"
    sort_keys: list[str] = msgspec.field(default_factory=list)
    nullable_keys: list[str] = msgspec.field(default_factory=list)
    index_labels: list[str] = msgspec.field(default_factory=list)
    properties: list[str] = msgspec.field(default_factory=list)
    enable_label_index: bool | None = None
    ttl: int | None = None
    ttl_start_time: str | None = None
    user_data: dict[str, Any] = msgspec.field(default_factory=dict)


class IndexLabel(msgspec.Struct, omit_defaults=True):
    """An index label schema object."""

    name: str
    base_type: str
    base_value: str
    index_type: str
    fields: list[str]
    id: int | None = None
    user_data: dict[str, Any] = msgspec.field(default_factory=dict)


class Vertex(msgspec.Struct, omit_defaults=True):
    """A graph vertex.

    ``id`` may be a string or a number depending on the label's id strategy;
    it is ``None`` when the store is expected to derive or assign it.
    """

    label: str
    id: str | int | None = None
    type: str = "vertex"
    properties: dict[str, Any] = msgspec.field(default_factory=dict)


class Edge(msgspec.Struct, omit_defaults=True):
    """A graph edge between two existing vertices."""

    label: str
    out_v: str | int = msgspec.field(name="outV")
    in_v: str | int = msgspec.field(name="inV")
    id: str | None = None
    type: str = "edge"
    out_v_label: str | None = msgspec.field(default=None, name="outVLabel")
    in_v_label: str | None = msgspec.field(default=None, name="inVLabel")
    properties: dict[str, Any] = msgspec.field(default_factory=dict)


# Record type decoded from each restore type's dump lines
RECORD_TYPES: dict[RestoreType, type[msgspec.Struct]] = {
    RestoreType.PROPERTY_KEY: PropertyKey,
    RestoreType.VERTEX_LABEL: VertexLabel,
    RestoreType.EDGE_LABEL: EdgeLabel,
    RestoreType.INDEX_LABEL: IndexLabel,
    RestoreType.VERTEX: Vertex,
    RestoreType.EDGE: Edge,
}
