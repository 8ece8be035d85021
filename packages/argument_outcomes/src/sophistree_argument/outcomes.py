"""
Argumentative outcome evaluation.

Computes, for one snapshot, the outcome of every justification basis and every
justification with a single post-order traversal:

- A MediaExcerpt is always Presumed.
- A PropositionCompound is Disproven if any atom is Disproven or
  Contradictory. Otherwise it takes the weakest atom outcome under
  Proven > Presumed > Unproven. A compound without atoms is Proven.
- A Justification is Invalid if its basis is Disproven or Contradictory, or if
  any counter-justification is Valid. It is Unknown if its basis is Unproven,
  and Valid otherwise.
- A Proposition with no Valid justifications is Unproven when it has any
  justification or appearance and Presumed otherwise. With Valid
  justifications it is Proven (only positive), Disproven (only negative) or
  Contradictory (both).

Every dependency is evaluated before its dependents: counter-justifications
and the basis before a justification, atoms before a compound, justifications
before their target proposition. The traversal keeps its own stack, so deep
maps do not hit the recursion limit, and a dependency cycle raises
CyclicDependencyError instead of looping.
"""

from __future__ import annotations

import logging
from typing import Iterable, NamedTuple

from sophistree_argument.errors.types import CyclicDependencyError
from sophistree_argument.graph.entity_graph import EntityGraph, build_entity_graph
from sophistree_argument.models.entity import BASIS_TYPES, TARGET_TYPES, Entity
from sophistree_argument.models.justification import Justification, Polarity
from sophistree_argument.models.media_excerpt import Appearance, MediaExcerpt
from sophistree_argument.models.outcome import BasisOutcome, JustificationOutcome
from sophistree_argument.models.proposition import Proposition, PropositionCompound

logger = logging.getLogger(__name__)

# Ordering used when a compound degrades to its weakest atom
_ATOM_STRENGTH = {
    BasisOutcome.UNPROVEN: 0,
    BasisOutcome.PRESUMED: 1,
    BasisOutcome.PROVEN: 2,
}


class Outcomes(NamedTuple):
    """Outcomes keyed by entity id."""

    basis_outcomes: dict[str, BasisOutcome]
    justification_outcomes: dict[str, JustificationOutcome]


def determine_outcomes(entities: Iterable[Entity]) -> Outcomes:
    """
    Evaluate every entity of a snapshot.

    Args:
        entities: One complete snapshot, in any order

    Returns:
        Outcomes for every Proposition, PropositionCompound and MediaExcerpt
        (basis_outcomes) and every Justification (justification_outcomes).
        Appearances get no outcome.

    Raises:
        MissingReferenceError: a reference does not resolve
        InvalidReferenceError: a reference resolves to the wrong kind of entity
        CyclicDependencyError: the snapshot has a dependency cycle
        DuplicateEntityError: two entities share an id
    """
    return evaluate_graph(build_entity_graph(entities))


def evaluate_graph(graph: EntityGraph) -> Outcomes:
    """Evaluate an already indexed snapshot. See determine_outcomes."""
    outcomes = _OutcomeEvaluator(graph).run()
    logger.debug(
        "Evaluated %d entities: %d basis outcomes, %d justification outcomes",
        len(graph),
        len(outcomes.basis_outcomes),
        len(outcomes.justification_outcomes),
    )
    return outcomes


class _OutcomeEvaluator:
    """One evaluation run. Not reusable across snapshots."""

    def __init__(self, graph: EntityGraph):
        self.graph = graph
        self.basis_outcomes: dict[str, BasisOutcome] = {}
        self.justification_outcomes: dict[str, JustificationOutcome] = {}
        self._visited: set[str] = set()
        # Entities expanded but not yet evaluated, in traversal order
        self._path: dict[str, None] = {}

    def run(self) -> Outcomes:
        # Every entity is a potential root so disconnected components are reached
        for entity in self.graph.entities:
            if entity.id not in self._visited:
                self._traverse(entity.id)
        return Outcomes(self.basis_outcomes, self.justification_outcomes)

    def _traverse(self, root_id: str) -> None:
        stack: list[tuple[str, bool]] = [(root_id, False)]
        while stack:
            entity_id, expanded = stack.pop()
            if expanded:
                del self._path[entity_id]
                self._visited.add(entity_id)
                self._evaluate(self.graph.entities_by_id[entity_id])
                continue
            if entity_id in self._visited:
                continue
            if entity_id in self._path:
                path = list(self._path)
                raise CyclicDependencyError(entity_id, path[path.index(entity_id):] + [entity_id])

            entity = self.graph.get(entity_id)
            self._path[entity_id] = None
            stack.append((entity_id, True))
            # Reversed so dependencies pop in their natural visiting order
            stack.extend((dep_id, False) for dep_id in reversed(self._dependencies(entity)))

    def _dependencies(self, entity: Entity) -> list[str]:
        """Ids that must be evaluated before `entity`, resolving each reference."""
        graph = self.graph
        if isinstance(entity, MediaExcerpt):
            return []
        if isinstance(entity, PropositionCompound):
            return [
                graph.require(atom_id, referrer=entity, field="atomIds", expected=(Proposition,)).id
                for atom_id in entity.atom_ids
            ]
        if isinstance(entity, Justification):
            graph.require(entity.target_id, referrer=entity, field="targetId", expected=TARGET_TYPES)
            basis = graph.require(entity.basis_id, referrer=entity, field="basisId", expected=BASIS_TYPES)
            counters = [counter.id for counter in graph.justifications_targeting(entity.id)]
            return counters + [basis.id]
        if isinstance(entity, Proposition):
            return [j.id for j in graph.justifications_targeting(entity.id)]
        if isinstance(entity, Appearance):
            # Ordering only; the apparition's outcome does not depend on this
            return [
                graph.require(
                    entity.apparition_id, referrer=entity, field="apparitionId", expected=(Proposition,)
                ).id
            ]
        raise TypeError(f"Unsupported entity type: {type(entity).__name__}")

    def _evaluate(self, entity: Entity) -> None:
        if isinstance(entity, MediaExcerpt):
            self.basis_outcomes[entity.id] = BasisOutcome.PRESUMED
        elif isinstance(entity, PropositionCompound):
            self.basis_outcomes[entity.id] = self._compound_outcome(entity)
        elif isinstance(entity, Justification):
            self.justification_outcomes[entity.id] = self._justification_outcome(entity)
        elif isinstance(entity, Proposition):
            self.basis_outcomes[entity.id] = self._proposition_outcome(entity)
        elif isinstance(entity, Appearance):
            pass
        else:
            raise TypeError(f"Unsupported entity type: {type(entity).__name__}")

    def _compound_outcome(self, compound: PropositionCompound) -> BasisOutcome:
        outcome = BasisOutcome.PROVEN
        for atom_id in compound.atom_ids:
            atom_outcome = self.basis_outcomes[atom_id]
            if atom_outcome.is_refuted:
                return BasisOutcome.DISPROVEN
            if _ATOM_STRENGTH[atom_outcome] < _ATOM_STRENGTH[outcome]:
                outcome = atom_outcome
        return outcome

    def _justification_outcome(self, justification: Justification) -> JustificationOutcome:
        basis_outcome = self.basis_outcomes[justification.basis_id]
        has_valid_counter = any(
            self.justification_outcomes[counter.id] is JustificationOutcome.VALID
            for counter in self.graph.justifications_targeting(justification.id)
        )
        if has_valid_counter or basis_outcome.is_refuted:
            return JustificationOutcome.INVALID
        if basis_outcome is BasisOutcome.UNPROVEN:
            return JustificationOutcome.UNKNOWN
        return JustificationOutcome.VALID

    def _proposition_outcome(self, proposition: Proposition) -> BasisOutcome:
        justifications = self.graph.justifications_targeting(proposition.id)
        valid = [
            j for j in justifications
            if self.justification_outcomes[j.id] is JustificationOutcome.VALID
        ]
        if not valid:
            if justifications or self.graph.appearance_counts[proposition.id] > 0:
                return BasisOutcome.UNPROVEN
            return BasisOutcome.PRESUMED

        has_positive = any(j.polarity is Polarity.POSITIVE for j in valid)
        has_negative = any(j.polarity is Polarity.NEGATIVE for j in valid)
        if has_positive and has_negative:
            return BasisOutcome.CONTRADICTORY
        if has_positive:
            return BasisOutcome.PROVEN
        return BasisOutcome.DISPROVEN
