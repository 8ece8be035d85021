"""
Entity graph layer.

Indexes one argument-map snapshot and exposes the reverse indices used by
outcome evaluation and conclusion extraction.
"""

from sophistree_argument.graph.entity_graph import EntityGraph, build_entity_graph
from sophistree_argument.graph.ordered_set import OrderedSet

__all__ = [
    "EntityGraph",
    "build_entity_graph",
    "OrderedSet",
]
