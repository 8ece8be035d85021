"""
Shared model configuration.

Entities are immutable snapshots. Field names are snake_case in Python and
camelCase on the wire, matching the persisted argument-map documents.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class WireModel(BaseModel):
    """Base for every persisted model."""

    model_config = WIRE_CONFIG

    def to_wire(self) -> dict:
        """Dump with camelCase keys and JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class BaseEntity(WireModel):
    """Common identity for every node of an argument map."""

    id: str = Field(..., min_length=1, description="Stable opaque id, unique within a snapshot")
