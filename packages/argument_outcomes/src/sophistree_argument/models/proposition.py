"""
Propositions - atomic claims and their AND-groups.

A PropositionCompound exists only to be the basis of a justification: the
compound holds when all of its atoms hold.
"""

from typing import List, Literal

from pydantic import Field

from sophistree_argument.models.base import BaseEntity


class Proposition(BaseEntity):
    """An atomic claim."""

    type: Literal["Proposition"] = "Proposition"
    text: str = Field("", description="Statement of the claim")


class PropositionCompound(BaseEntity):
    """
    An AND-group of propositions usable only as a justification basis.

    Atoms are flat Proposition ids; compounds never nest.
    """

    type: Literal["PropositionCompound"] = "PropositionCompound"
    atom_ids: List[str] = Field(
        default_factory=list, description="Ordered Proposition ids joined by AND"
    )
