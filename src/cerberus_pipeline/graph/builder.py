"""Relationship graph builder.

Turns resolved entity profiles into the node/edge graph the dashboard
renders. Every entity becomes a node. Resolved connections become edges,
with at most one edge per unordered pair of entities: the first
relationship encountered for a pair wins, in entity order. Connections
pointing at slugs outside the node set are skipped.
"""

from collections.abc import Iterable

from ..logging import get_context_logger, log_graph_built
from ..models.entities import EntityProfile
from ..models.graph import GraphData, GraphEdge, GraphNode

logger = get_context_logger(__name__)

# Not a slug character, so joined pair keys cannot collide
PAIR_KEY_SEPARATOR = "↔"


def pair_key(first: str, second: str) -> str:
    """Order-independent key for an entity pair."""
    return PAIR_KEY_SEPARATOR.join(sorted((first, second)))


def build_node(entity: EntityProfile) -> GraphNode:
    return GraphNode(
        id=entity.slug,
        name=entity.name,
        type=entity.type,
        status=entity.status,
        country_slug=entity.country_slug,
        initials=entity.initials,
    )


def build_graph(entities: Iterable[EntityProfile]) -> GraphData:
    """Build the relationship graph from resolved entities.

    Args:
        entities: Entity profiles after connection resolution

    Returns:
        One node per entity and deduplicated edges between existing nodes
    """
    entities = list(entities)
    nodes = [build_node(entity) for entity in entities]
    node_ids = {node.id for node in nodes}

    edges: list[GraphEdge] = []
    seen_pairs: set[str] = set()
    dangling = 0

    for entity in entities:
        for connection in entity.connections:
            if not connection.resolved:
                continue
            if connection.target_slug not in node_ids:
                dangling += 1
                continue

            key = pair_key(entity.slug, connection.target_slug)
            if key in seen_pairs:
                continue
            seen_pairs.add(key)

            edges.append(
                GraphEdge(
                    source=entity.slug,
                    target=connection.target_slug,
                    relationship=connection.relationship,
                )
            )

    log_graph_built(len(nodes), len(edges), dangling)
    return GraphData(nodes=nodes, edges=edges)
