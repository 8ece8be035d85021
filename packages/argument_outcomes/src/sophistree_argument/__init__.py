"""
Sophistree Argument Outcomes Package

Evaluates argument maps of propositions, evidence excerpts and support/attack
justifications, extracts their conclusions, and reconciles conclusion
summaries into persisted lists.
"""

__version__ = "0.1.0"

from sophistree_argument.models import (
    Appearance,
    BasisOutcome,
    ConclusionInfo,
    Entity,
    Justification,
    JustificationOutcome,
    MediaExcerpt,
    Polarity,
    Proposition,
    PropositionCompound,
    PropositionInfo,
    SourceInfo,
    UrlInfo,
    dump_entities,
    parse_entities,
)
from sophistree_argument.errors.types import (
    CyclicDependencyError,
    DuplicateEntityError,
    ErrorType,
    EvaluationIssue,
    InvalidReferenceError,
    MissingReferenceError,
    OutcomeError,
)
from sophistree_argument.graph import EntityGraph, OrderedSet, build_entity_graph

# Evaluation
from sophistree_argument.outcomes import Outcomes, determine_outcomes, evaluate_graph
from sophistree_argument.appearance_outcomes import (
    combine_appearance_outcomes,
    media_excerpt_outcomes,
)

# Conclusions
from sophistree_argument.conclusions import (
    conclusions_from_graph,
    extract_conclusions,
    find_conclusion_ids,
)
from sophistree_argument.reconcile import (
    EditKind,
    ListEdit,
    apply_edits,
    diff_conclusions,
    reconcile_conclusions,
)

# Snapshots
from sophistree_argument.argument_map import ArgumentMap
from sophistree_argument.validation import ValidationResult, ValidationWarning, validate_snapshot
from sophistree_argument.urls import extract_hostname, is_matching_url_info, preferred_url

__all__ = [
    # Models
    "Entity",
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
    "PropositionInfo",
    "SourceInfo",
    "parse_entities",
    "dump_entities",
    # Errors
    "ErrorType",
    "EvaluationIssue",
    "OutcomeError",
    "MissingReferenceError",
    "InvalidReferenceError",
    "CyclicDependencyError",
    "DuplicateEntityError",
    # Graph
    "EntityGraph",
    "OrderedSet",
    "build_entity_graph",
    # Evaluation
    "Outcomes",
    "determine_outcomes",
    "evaluate_graph",
    "combine_appearance_outcomes",
    "media_excerpt_outcomes",
    # Conclusions
    "extract_conclusions",
    "conclusions_from_graph",
    "find_conclusion_ids",
    "EditKind",
    "ListEdit",
    "diff_conclusions",
    "apply_edits",
    "reconcile_conclusions",
    # Snapshots
    "ArgumentMap",
    "ValidationResult",
    "ValidationWarning",
    "validate_snapshot",
    # URLs
    "preferred_url",
    "extract_hostname",
    "is_matching_url_info",
]
