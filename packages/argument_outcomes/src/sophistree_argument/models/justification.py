"""
Justification - a directed support or attack edge.

The basis is a Proposition, PropositionCompound or MediaExcerpt. The target is
a Proposition or another Justification; targeting a Justification is how an
attack is itself attacked (a counter-justification).
"""

from enum import Enum
from typing import Literal

from pydantic import Field

from sophistree_argument.models.base import BaseEntity


class Polarity(str, Enum):
    """Direction of a justification."""

    POSITIVE = "Positive"  # Support
    NEGATIVE = "Negative"  # Attack


class Justification(BaseEntity):
    """Support/attack relation from a basis to a target."""

    type: Literal["Justification"] = "Justification"
    basis_id: str = Field(..., description="Proposition, PropositionCompound or MediaExcerpt id")
    target_id: str = Field(..., description="Proposition or Justification id")
    polarity: Polarity = Field(..., description="Positive supports, Negative attacks")
