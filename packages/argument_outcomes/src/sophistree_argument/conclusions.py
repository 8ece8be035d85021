"""
Conclusion extraction.

Conclusions are the roots of an argument map: propositions targeted by at
least one justification that are never a justification basis and never a
compound atom. Each conclusion is attributed two kinds of source metadata:

- appearance sources: excerpts quoting the conclusion itself
- justification sources: excerpts that support or attack the conclusion
  through a chain of justifications, hopping over compounds, where no edge on
  the chain is Invalid

Conclusions are grouped by their appearance sources and the groups are sorted
by that key. Members of a group are sorted by proposition id, so the result
depends only on the set of entities, not their order, and can be reconciled
into a persisted list.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sophistree_argument.graph.entity_graph import EntityGraph, build_entity_graph
from sophistree_argument.graph.ordered_set import OrderedSet
from sophistree_argument.models.conclusion import (
    ConclusionInfo,
    ConclusionKey,
    PropositionInfo,
    SourceInfo,
    conclusion_key,
)
from sophistree_argument.models.entity import Entity
from sophistree_argument.models.media_excerpt import MediaExcerpt
from sophistree_argument.models.outcome import JustificationOutcome
from sophistree_argument.models.proposition import Proposition
from sophistree_argument.outcomes import Outcomes, evaluate_graph


@dataclass
class SourceSets:
    """Source names and domains gathered per proposition."""

    source_names: dict[str, OrderedSet[str]] = field(default_factory=dict)
    domains: dict[str, OrderedSet[str]] = field(default_factory=dict)

    def add(self, proposition_id: str, media_excerpt: MediaExcerpt) -> None:
        self.source_names.setdefault(proposition_id, OrderedSet()).add(media_excerpt.source_name)
        self.domains.setdefault(proposition_id, OrderedSet()).add(media_excerpt.resolved_domain)


@dataclass
class _ConclusionGroup:
    appearance_source_names: list[str]
    appearance_domains: list[str]
    proposition_infos: list[PropositionInfo] = field(default_factory=list)
    justification_source_names: OrderedSet[str] = field(default_factory=OrderedSet)
    justification_domains: OrderedSet[str] = field(default_factory=OrderedSet)

    def build(self) -> ConclusionInfo:
        return ConclusionInfo(
            proposition_infos=sorted(self.proposition_infos, key=lambda info: info.proposition_id),
            appearance_info=SourceInfo(
                source_names=self.appearance_source_names,
                domains=self.appearance_domains,
            ),
            media_excerpt_justification_info=SourceInfo(
                source_names=self.justification_source_names.sorted(),
                domains=self.justification_domains.sorted(),
            ),
        )


def extract_conclusions(
    entities: Iterable[Entity],
    outcomes: Optional[Outcomes] = None,
) -> list[ConclusionInfo]:
    """
    Compute the conclusion groups of a snapshot.

    Args:
        entities: One complete snapshot
        outcomes: Previously computed outcomes for the same snapshot

    Returns:
        ConclusionInfo groups sorted by (appearance source names, appearance
        domains)
    """
    graph = build_entity_graph(entities)
    if outcomes is None:
        outcomes = evaluate_graph(graph)
    return conclusions_from_graph(graph, outcomes)


def conclusions_from_graph(graph: EntityGraph, outcomes: Outcomes) -> list[ConclusionInfo]:
    """Compute conclusion groups for an indexed snapshot. See extract_conclusions."""
    conclusion_ids = find_conclusion_ids(graph)
    justification_sources = trace_justification_sources(graph, outcomes, set(conclusion_ids))

    groups: dict[ConclusionKey, _ConclusionGroup] = {}
    for proposition_id in conclusion_ids:
        source_names = graph.appearance_source_names.get(proposition_id, OrderedSet()).sorted()
        domains = graph.appearance_domains.get(proposition_id, OrderedSet()).sorted()
        key = conclusion_key(source_names, domains)
        group = groups.get(key)
        if group is None:
            group = groups[key] = _ConclusionGroup(source_names, domains)

        group.proposition_infos.append(PropositionInfo(
            proposition_id=proposition_id,
            outcome=outcomes.basis_outcomes[proposition_id],
        ))
        group.justification_source_names.update(
            justification_sources.source_names.get(proposition_id, ())
        )
        group.justification_domains.update(justification_sources.domains.get(proposition_id, ()))

    return [groups[key].build() for key in sorted(groups)]


def find_conclusion_ids(graph: EntityGraph) -> list[str]:
    """Proposition ids qualifying as conclusions, in snapshot order."""
    return [
        proposition.id
        for proposition in graph.of_type(Proposition)
        if graph.justifications_targeting(proposition.id)
        and not graph.justifications_based_on(proposition.id)
        and not graph.is_atom(proposition.id)
    ]


def trace_justification_sources(
    graph: EntityGraph,
    outcomes: Outcomes,
    conclusion_ids: set[str],
) -> SourceSets:
    """
    Attribute each excerpt used as a basis to the conclusions it reaches.

    Walks forward from every MediaExcerpt along the justifications it is the
    basis of. An Invalid justification ends its branch. When a justification
    targets a compound atom, the walk continues with the justifications based
    on every compound containing that atom. Each justification is walked at
    most once per excerpt.
    """
    sources = SourceSets()
    for media_excerpt in graph.of_type(MediaExcerpt):
        queue = deque(graph.justifications_based_on(media_excerpt.id))
        visited: set[str] = set()
        while queue:
            justification = queue.popleft()
            if justification.id in visited:
                continue
            visited.add(justification.id)

            if outcomes.justification_outcomes.get(justification.id) is JustificationOutcome.INVALID:
                continue
            target_id = justification.target_id
            if target_id in conclusion_ids:
                sources.add(target_id, media_excerpt)
                continue
            for compound_id in graph.compound_ids_by_atom_id.get(target_id, ()):
                queue.extend(graph.justifications_based_on(compound_id))
    return sources
