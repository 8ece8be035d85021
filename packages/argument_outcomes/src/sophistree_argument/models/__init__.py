"""Argument-map data models."""

from sophistree_argument.models.base import BaseEntity, WireModel
from sophistree_argument.models.conclusion import (
    ConclusionInfo,
    ConclusionKey,
    PropositionInfo,
    SourceInfo,
    conclusion_key,
)
from sophistree_argument.models.entity import (
    BASIS_TYPES,
    TARGET_TYPES,
    Entity,
    dump_entities,
    parse_entities,
)
from sophistree_argument.models.justification import Justification, Polarity
from sophistree_argument.models.media_excerpt import Appearance, MediaExcerpt, UrlInfo
from sophistree_argument.models.outcome import BasisOutcome, JustificationOutcome
from sophistree_argument.models.proposition import Proposition, PropositionCompound

__all__ = [
    "WireModel",
    "BaseEntity",
    "Entity",
    "BASIS_TYPES",
    "TARGET_TYPES",
    "parse_entities",
    "dump_entities",
    "Proposition",
    "PropositionCompound",
    "Justification",
    "Polarity",
    "MediaExcerpt",
    "UrlInfo",
    "Appearance",
    "BasisOutcome",
    "JustificationOutcome",
    "ConclusionInfo",
    "ConclusionKey",
    "PropositionInfo",
    "SourceInfo",
    "conclusion_key",
]
