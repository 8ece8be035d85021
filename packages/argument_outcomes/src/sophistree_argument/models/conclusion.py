"""
Conclusion summaries.

Conclusions are the roots of justification trees: propositions that are the
target of at least one justification and are never a basis or a compound
atom. A ConclusionInfo groups every conclusion sharing the same appearance
source names and domains, so a map's main points display in as few groups as
possible.
"""

from typing import List

from pydantic import Field

from sophistree_argument.models.base import WireModel
from sophistree_argument.models.outcome import BasisOutcome

ConclusionKey = tuple[tuple[str, ...], tuple[str, ...]]


class SourceInfo(WireModel):
    """Distinct source names and domains, each sorted."""

    source_names: List[str] = Field(default_factory=list)
    domains: List[str] = Field(default_factory=list)


class PropositionInfo(WireModel):
    """One conclusion and its current outcome."""

    proposition_id: str
    outcome: BasisOutcome


class ConclusionInfo(WireModel):
    """A group of conclusions sharing appearance sources."""

    proposition_infos: List[PropositionInfo] = Field(
        ..., min_length=1, description="Conclusions in this group"
    )
    appearance_info: SourceInfo = Field(
        default_factory=SourceInfo,
        description="Sources whose excerpts quote the conclusions",
    )
    media_excerpt_justification_info: SourceInfo = Field(
        default_factory=SourceInfo,
        description="Sources of excerpts that justify the conclusions through valid edges",
    )

    @property
    def key(self) -> ConclusionKey:
        """Grouping and ordering key."""
        return conclusion_key(self.appearance_info.source_names, self.appearance_info.domains)


def conclusion_key(source_names: List[str], domains: List[str]) -> ConclusionKey:
    return (tuple(source_names), tuple(domains))
