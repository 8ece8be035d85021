"""Error types and issue records."""

from sophistree_argument.errors.types import (
    CyclicDependencyError,
    DuplicateEntityError,
    ErrorType,
    EvaluationIssue,
    InvalidReferenceError,
    MissingReferenceError,
    OutcomeError,
)

__all__ = [
    "ErrorType",
    "EvaluationIssue",
    "OutcomeError",
    "MissingReferenceError",
    "InvalidReferenceError",
    "CyclicDependencyError",
    "DuplicateEntityError",
]
