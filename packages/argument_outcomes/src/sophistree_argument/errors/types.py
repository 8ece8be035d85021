"""
Error taxonomy for outcome evaluation.

Fatal conditions are raised as OutcomeError subclasses and abort the whole
evaluation. Recoverable conditions are logged and recorded as structured
EvaluationIssue objects so callers can surface them without failing.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorType(str, Enum):
    """Machine-interpretable error types for snapshot problems."""

    MISSING_REFERENCE = "MISSING_REFERENCE"
    """A basisId, targetId, atomId, apparitionId or mediaExcerptId is absent from the snapshot."""

    INVALID_REFERENCE = "INVALID_REFERENCE"
    """A reference resolves to an entity of the wrong kind."""

    CYCLIC_DEPENDENCY = "CYCLIC_DEPENDENCY"
    """The dependency relation between entities contains a cycle."""

    DUPLICATE_ENTITY = "DUPLICATE_ENTITY"
    """Two entities in one snapshot share an id."""

    INCONSISTENT_APPEARANCE = "INCONSISTENT_APPEARANCE"
    """An Appearance whose MediaExcerpt is missing. Skipped for provenance."""

    MALFORMED_COMPOUND = "MALFORMED_COMPOUND"
    """A PropositionCompound with no atoms. Evaluates as vacuously Proven."""


class EvaluationIssue(BaseModel):
    """Structured record of a recoverable snapshot problem."""

    error_type: ErrorType
    entity_id: str = Field(..., description="Entity the issue was found on")
    message: str = Field(..., description="Human-readable message")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional context")

    def to_log_message(self) -> str:
        """Format issue for logging."""
        return f"[{self.error_type.value}] entity:{self.entity_id}: {self.message}"


class OutcomeError(Exception):
    """Base class for fatal snapshot errors."""

    error_type: ErrorType

    def __init__(self, message: str, entity_id: Optional[str] = None):
        super().__init__(message)
        self.entity_id = entity_id


class MissingReferenceError(OutcomeError):
    """A referenced entity id does not resolve within the snapshot."""

    error_type = ErrorType.MISSING_REFERENCE

    def __init__(self, referenced_id: str, referrer_id: Optional[str] = None, field: Optional[str] = None):
        if referrer_id is None:
            message = f"Entity {referenced_id} not found"
        else:
            message = f"Entity {referrer_id} references missing entity {referenced_id} via {field}"
        super().__init__(message, entity_id=referrer_id)
        self.referenced_id = referenced_id
        self.field = field


class InvalidReferenceError(OutcomeError):
    """A reference resolves to an entity of an unexpected type."""

    error_type = ErrorType.INVALID_REFERENCE

    def __init__(self, referenced_id: str, referrer_id: str, field: str, actual_type: str, expected: list[str]):
        super().__init__(
            f"Entity {referrer_id} {field} {referenced_id} is a {actual_type}; "
            f"expected one of {', '.join(expected)}",
            entity_id=referrer_id,
        )
        self.referenced_id = referenced_id
        self.field = field
        self.actual_type = actual_type
        self.expected = expected


class CyclicDependencyError(OutcomeError):
    """Traversal re-entered an entity that is still being evaluated."""

    error_type = ErrorType.CYCLIC_DEPENDENCY

    def __init__(self, entity_id: str, path: list[str]):
        super().__init__(
            f"Circular dependency through entity {entity_id}: {' -> '.join(path)}",
            entity_id=entity_id,
        )
        self.path = path


class DuplicateEntityError(OutcomeError):
    """Two entities in the same snapshot share an id."""

    error_type = ErrorType.DUPLICATE_ENTITY

    def __init__(self, entity_id: str):
        super().__init__(f"Duplicate entity id {entity_id}", entity_id=entity_id)
