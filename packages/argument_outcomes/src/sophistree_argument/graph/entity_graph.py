"""
In-memory entity graph over one argument-map snapshot.

Indexes entities by id and derives the reverse indices the evaluator and the
conclusion extractor traverse. Purely structural: no outcome logic lives here.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Iterator, TypeVar

from sophistree_argument.errors.types import (
    DuplicateEntityError,
    ErrorType,
    EvaluationIssue,
    InvalidReferenceError,
    MissingReferenceError,
)
from sophistree_argument.graph.ordered_set import OrderedSet
from sophistree_argument.models.entity import Entity
from sophistree_argument.models.justification import Justification
from sophistree_argument.models.media_excerpt import Appearance, MediaExcerpt
from sophistree_argument.models.proposition import PropositionCompound

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass
class EntityGraph:
    """Entities of one snapshot plus derived reverse indices."""

    entities: list[Entity]
    entities_by_id: dict[str, Entity] = field(default_factory=dict)
    justifications_by_target_id: dict[str, list[Justification]] = field(default_factory=dict)
    justifications_by_basis_id: dict[str, list[Justification]] = field(default_factory=dict)
    compound_ids_by_atom_id: dict[str, list[str]] = field(default_factory=dict)
    appearance_counts: Counter[str] = field(default_factory=Counter)
    appearance_source_names: dict[str, OrderedSet[str]] = field(default_factory=dict)
    appearance_domains: dict[str, OrderedSet[str]] = field(default_factory=dict)
    issues: list[EvaluationIssue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.entities_by_id

    def get(self, entity_id: str) -> Entity:
        """Look up an entity, raising MissingReferenceError if absent."""
        try:
            return self.entities_by_id[entity_id]
        except KeyError:
            raise MissingReferenceError(entity_id) from None

    def require(
        self,
        entity_id: str,
        *,
        referrer: Entity,
        field: str,
        expected: tuple[type, ...],
    ) -> Entity:
        """Resolve a reference held by `referrer`, checking the entity kind."""
        entity = self.entities_by_id.get(entity_id)
        if entity is None:
            raise MissingReferenceError(entity_id, referrer_id=referrer.id, field=field)
        if not isinstance(entity, expected):
            raise InvalidReferenceError(
                entity_id,
                referrer_id=referrer.id,
                field=field,
                actual_type=entity.type,
                expected=[t.__name__ for t in expected],
            )
        return entity

    def of_type(self, entity_type: type[E]) -> Iterator[E]:
        """Entities of one kind, in snapshot order."""
        return (e for e in self.entities if isinstance(e, entity_type))

    def justifications_targeting(self, entity_id: str) -> list[Justification]:
        """Justifications whose target is `entity_id` (counter-justifications for a Justification)."""
        return self.justifications_by_target_id.get(entity_id, [])

    def justifications_based_on(self, entity_id: str) -> list[Justification]:
        return self.justifications_by_basis_id.get(entity_id, [])

    def is_atom(self, proposition_id: str) -> bool:
        return proposition_id in self.compound_ids_by_atom_id

    def record_issue(self, issue: EvaluationIssue) -> None:
        """Log a recoverable problem and keep it for the caller."""
        logger.warning(issue.to_log_message())
        self.issues.append(issue)


def build_entity_graph(entities: Iterable[Entity]) -> EntityGraph:
    """
    Index a snapshot.

    One pass over all entities builds the id index and reverse indices; a
    second pass over Appearances gathers source metadata once every
    MediaExcerpt is indexed.

    Raises:
        DuplicateEntityError: two entities share an id
    """
    graph = EntityGraph(entities=list(entities))
    justifications_by_target_id: defaultdict[str, list[Justification]] = defaultdict(list)
    justifications_by_basis_id: defaultdict[str, list[Justification]] = defaultdict(list)
    compound_ids_by_atom_id: defaultdict[str, list[str]] = defaultdict(list)
    appearances: list[Appearance] = []

    for entity in graph.entities:
        if entity.id in graph.entities_by_id:
            raise DuplicateEntityError(entity.id)
        graph.entities_by_id[entity.id] = entity

        if isinstance(entity, Justification):
            justifications_by_target_id[entity.target_id].append(entity)
            justifications_by_basis_id[entity.basis_id].append(entity)
        elif isinstance(entity, PropositionCompound):
            if not entity.atom_ids:
                graph.record_issue(EvaluationIssue(
                    error_type=ErrorType.MALFORMED_COMPOUND,
                    entity_id=entity.id,
                    message="PropositionCompound has no atoms; it evaluates as Proven",
                ))
            for atom_id in entity.atom_ids:
                compound_ids = compound_ids_by_atom_id[atom_id]
                if entity.id not in compound_ids:
                    compound_ids.append(entity.id)
        elif isinstance(entity, Appearance):
            graph.appearance_counts[entity.apparition_id] += 1
            appearances.append(entity)

    graph.justifications_by_target_id = dict(justifications_by_target_id)
    graph.justifications_by_basis_id = dict(justifications_by_basis_id)
    graph.compound_ids_by_atom_id = dict(compound_ids_by_atom_id)

    for appearance in appearances:
        media_excerpt = graph.entities_by_id.get(appearance.media_excerpt_id)
        if not isinstance(media_excerpt, MediaExcerpt):
            graph.record_issue(EvaluationIssue(
                error_type=ErrorType.INCONSISTENT_APPEARANCE,
                entity_id=appearance.id,
                message=f"MediaExcerpt {appearance.media_excerpt_id} not found for Appearance",
                details={"media_excerpt_id": appearance.media_excerpt_id},
            ))
            continue
        graph.appearance_source_names.setdefault(
            appearance.apparition_id, OrderedSet()
        ).add(media_excerpt.source_name)
        graph.appearance_domains.setdefault(
            appearance.apparition_id, OrderedSet()
        ).add(media_excerpt.resolved_domain)

    return graph
