"""Argumentative outcome labels."""

from enum import Enum


class BasisOutcome(str, Enum):
    """Status of anything that can serve as a justification basis."""

    PRESUMED = "Presumed"          # Leaf added by the user, taken as true
    UNPROVEN = "Unproven"          # No conclusive justifications
    PROVEN = "Proven"              # Only valid positive justifications
    DISPROVEN = "Disproven"        # Only valid negative justifications
    CONTRADICTORY = "Contradictory"  # Valid positive and valid negative justifications

    @property
    def is_established(self) -> bool:
        """Whether a justification resting on this outcome can be valid."""
        return self in (BasisOutcome.PRESUMED, BasisOutcome.PROVEN)

    @property
    def is_refuted(self) -> bool:
        """Whether a justification resting on this outcome is invalid."""
        return self in (BasisOutcome.DISPROVEN, BasisOutcome.CONTRADICTORY)


class JustificationOutcome(str, Enum):
    """Status of one justification edge."""

    VALID = "Valid"
    INVALID = "Invalid"
    UNKNOWN = "Unknown"
