"""Relationship graph records."""

from pydantic import Field

from .base import EntityStatus, EntityType, FrozenRecordModel, RecordModel


class GraphNode(FrozenRecordModel):
    """One node per entity profile."""

    id: str
    name: str
    type: EntityType
    status: EntityStatus
    country_slug: str
    initials: str


class GraphEdge(FrozenRecordModel):
    """A relationship between two entity slugs."""

    source: str
    target: str
    relationship: str


class GraphData(RecordModel):
    """Nodes and deduplicated edges of the relationship graph."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
