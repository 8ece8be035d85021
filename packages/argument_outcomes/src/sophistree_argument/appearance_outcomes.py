"""
Per-excerpt outcomes for highlighting.

An excerpt can quote several propositions. Its highlight reflects all of them
at once, folded with combine_appearance_outcomes starting from Unproven.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, Optional

from sophistree_argument.graph.entity_graph import EntityGraph, build_entity_graph
from sophistree_argument.models.entity import Entity
from sophistree_argument.models.media_excerpt import Appearance, MediaExcerpt
from sophistree_argument.models.outcome import BasisOutcome
from sophistree_argument.outcomes import Outcomes, evaluate_graph

logger = logging.getLogger(__name__)


def combine_appearance_outcomes(outcome1: BasisOutcome, outcome2: BasisOutcome) -> BasisOutcome:
    """
    Combine the outcomes of two propositions appearing in the same excerpt.

    - Contradictory with anything is Contradictory
    - Unproven does not change the other value
    - Disproven with Disproven is Disproven
    - Disproven with Proven or Presumed is Contradictory
    - Proven with Presumed is Proven
    """
    if BasisOutcome.CONTRADICTORY in (outcome1, outcome2):
        return BasisOutcome.CONTRADICTORY
    if outcome1 is BasisOutcome.UNPROVEN:
        return outcome2
    if outcome2 is BasisOutcome.UNPROVEN:
        return outcome1
    if outcome1 is BasisOutcome.DISPROVEN and outcome2 is BasisOutcome.DISPROVEN:
        return BasisOutcome.DISPROVEN
    if BasisOutcome.DISPROVEN in (outcome1, outcome2):
        return BasisOutcome.CONTRADICTORY
    if BasisOutcome.PROVEN in (outcome1, outcome2):
        return BasisOutcome.PROVEN
    return BasisOutcome.PRESUMED


def media_excerpt_outcomes(
    entities: Iterable[Entity],
    outcomes: Optional[Outcomes] = None,
) -> dict[str, BasisOutcome]:
    """
    Combined outcome of each excerpt's appearing propositions.

    Only excerpts with at least one Appearance are included.

    Args:
        entities: One complete snapshot
        outcomes: Previously computed outcomes for the same snapshot

    Returns:
        Map of mediaExcerptId to combined BasisOutcome
    """
    graph = build_entity_graph(entities)
    if outcomes is None:
        outcomes = evaluate_graph(graph)
    return _combine_by_excerpt(graph, outcomes)


def _combine_by_excerpt(graph: EntityGraph, outcomes: Outcomes) -> dict[str, BasisOutcome]:
    appearance_outcomes: dict[str, list[BasisOutcome]] = {}
    for appearance in graph.of_type(Appearance):
        if not isinstance(graph.entities_by_id.get(appearance.media_excerpt_id), MediaExcerpt):
            # Already reported as an inconsistent appearance when indexing
            continue
        proposition_outcome = outcomes.basis_outcomes.get(appearance.apparition_id)
        if proposition_outcome is None:
            logger.error(
                "No outcome for proposition %s of appearance %s",
                appearance.apparition_id,
                appearance.id,
            )
            continue
        appearance_outcomes.setdefault(appearance.media_excerpt_id, []).append(proposition_outcome)

    return {
        media_excerpt_id: reduce(combine_appearance_outcomes, found, BasisOutcome.UNPROVEN)
        for media_excerpt_id, found in appearance_outcomes.items()
    }
