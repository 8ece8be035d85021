"""The closed union of argument-map entities."""

from typing import Annotated, Any, Iterable, List, Union

from pydantic import Field, TypeAdapter

from sophistree_argument.models.justification import Justification
from sophistree_argument.models.media_excerpt import Appearance, MediaExcerpt
from sophistree_argument.models.proposition import Proposition, PropositionCompound

Entity = Annotated[
    Union[Proposition, PropositionCompound, Justification, MediaExcerpt, Appearance],
    Field(discriminator="type"),
]

# Entity kinds allowed at each end of a reference
BASIS_TYPES = (Proposition, PropositionCompound, MediaExcerpt)
TARGET_TYPES = (Proposition, Justification)

_entity_list_adapter: TypeAdapter[List[Entity]] = TypeAdapter(List[Entity])


def parse_entities(data: Iterable[Any]) -> list[Entity]:
    """Validate raw (camelCase or snake_case) dicts into entity models."""
    return _entity_list_adapter.validate_python(list(data))


def dump_entities(entities: Iterable[Entity]) -> list[dict]:
    """Serialize entities to their persisted camelCase shape."""
    return [entity.to_wire() for entity in entities]
