"""Relationship graph construction."""

from .builder import PAIR_KEY_SEPARATOR, build_graph, build_node, pair_key

__all__ = [
    "PAIR_KEY_SEPARATOR",
    "build_graph",
    "build_node",
    "pair_key",
]
