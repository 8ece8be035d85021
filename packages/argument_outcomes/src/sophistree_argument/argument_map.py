"""
Argument-map snapshot.

The document shape exchanged with the persistence layer: the entities of a map
plus the conclusions summary last persisted for it.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field

from sophistree_argument.conclusions import conclusions_from_graph
from sophistree_argument.graph.entity_graph import EntityGraph, build_entity_graph
from sophistree_argument.models.base import WireModel
from sophistree_argument.models.conclusion import ConclusionInfo
from sophistree_argument.models.entity import Entity
from sophistree_argument.outcomes import Outcomes, evaluate_graph
from sophistree_argument.reconcile import ListEdit, reconcile_conclusions


class ArgumentMap(WireModel):
    """One argument map: entities plus persisted conclusions."""

    id: Optional[str] = Field(None, description="Map identifier")
    name: str = Field("", description="Display name")
    entities: List[Entity] = Field(default_factory=list)
    conclusions: List[ConclusionInfo] = Field(
        default_factory=list, description="Persisted conclusions, sorted by key"
    )

    @classmethod
    def load(cls, path: Path | str) -> "ArgumentMap":
        """Read a JSON snapshot from disk."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    def build_graph(self) -> EntityGraph:
        return build_entity_graph(self.entities)

    def evaluate(self) -> Outcomes:
        """Outcomes of every entity in the map."""
        return evaluate_graph(self.build_graph())

    def compute_conclusions(self) -> list[ConclusionInfo]:
        """Fresh conclusion groups, ignoring the persisted list."""
        graph = self.build_graph()
        return conclusions_from_graph(graph, evaluate_graph(graph))

    def refresh_conclusions(self) -> list[ListEdit]:
        """
        Recompute conclusions and merge them into the persisted list in place.

        Returns:
            The edits applied to `conclusions`
        """
        return reconcile_conclusions(self.conclusions, self.compute_conclusions())
