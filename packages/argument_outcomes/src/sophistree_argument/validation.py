"""Validation of argument-map snapshots.

Outcome evaluation stops at the first fatal problem. Validation reports every
problem of a snapshot at once, so an editor can show them before evaluating.

Hard constraints (evaluation would raise):
- Entity ids are unique
- All references resolve, to the right kind of entity
- The dependency relation is acyclic

Soft constraints (evaluation tolerates):
- Appearances reference an existing MediaExcerpt
- Compounds have atoms, without repeats
- Compounds are the basis of some justification
- Justifications do not target their own basis
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from sophistree_argument.errors.types import ErrorType
from sophistree_argument.models.entity import BASIS_TYPES, TARGET_TYPES, Entity
from sophistree_argument.models.justification import Justification
from sophistree_argument.models.media_excerpt import Appearance, MediaExcerpt
from sophistree_argument.models.proposition import Proposition, PropositionCompound


@dataclass
class ValidationWarning:
    """A constraint violation."""
    check_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Result of validation checks."""
    is_valid: bool
    hard_errors: list[ValidationWarning] = field(default_factory=list)
    soft_warnings: list[ValidationWarning] = field(default_factory=list)

    def add_hard_error(self, check: str, message: str, **details: Any) -> None:
        self.hard_errors.append(ValidationWarning(check, message, details))
        self.is_valid = False

    def add_soft_warning(self, check: str, message: str, **details: Any) -> None:
        self.soft_warnings.append(ValidationWarning(check, message, details))

    @property
    def has_hard_errors(self) -> bool:
        return len(self.hard_errors) > 0

    @property
    def has_soft_warnings(self) -> bool:
        return len(self.soft_warnings) > 0


def validate_snapshot(entities: Iterable[Entity]) -> ValidationResult:
    """
    Validate a snapshot against all constraints.

    Args:
        entities: One complete snapshot

    Returns:
        ValidationResult with all errors and warnings
    """
    entities = list(entities)
    result = ValidationResult(is_valid=True)
    entities_by_id = check_unique_ids(entities, result)

    # Hard constraints
    check_references(entities, entities_by_id, result)
    check_cycles(entities, entities_by_id, result)

    # Soft constraints
    check_appearances(entities, entities_by_id, result)
    check_justifications(entities, result)
    check_compounds(entities, result)

    return result


def check_unique_ids(entities: list[Entity], result: ValidationResult) -> dict[str, Entity]:
    """Check that ids are unique; returns the id index (first entity wins)."""
    entities_by_id: dict[str, Entity] = {}
    for entity in entities:
        if entity.id in entities_by_id:
            result.add_hard_error(
                ErrorType.DUPLICATE_ENTITY.value,
                f"Duplicate entity id {entity.id}",
                entity_id=entity.id,
            )
            continue
        entities_by_id[entity.id] = entity
    return entities_by_id


def _references(entity: Entity) -> list[tuple[str, str, tuple[type, ...]]]:
    """(field, referenced id, allowed types) for every hard reference."""
    if isinstance(entity, Justification):
        return [
            ("basisId", entity.basis_id, BASIS_TYPES),
            ("targetId", entity.target_id, TARGET_TYPES),
        ]
    if isinstance(entity, PropositionCompound):
        return [("atomIds", atom_id, (Proposition,)) for atom_id in entity.atom_ids]
    if isinstance(entity, Appearance):
        return [("apparitionId", entity.apparition_id, (Proposition,))]
    return []


def check_references(
    entities: list[Entity],
    entities_by_id: dict[str, Entity],
    result: ValidationResult,
) -> None:
    """Check that every reference resolves to an allowed kind of entity."""
    for entity in entities:
        for field_name, referenced_id, allowed in _references(entity):
            referenced = entities_by_id.get(referenced_id)
            if referenced is None:
                result.add_hard_error(
                    ErrorType.MISSING_REFERENCE.value,
                    f"{entity.type} {entity.id} references missing entity {referenced_id} via {field_name}",
                    entity_id=entity.id,
                    field=field_name,
                    referenced_id=referenced_id,
                )
            elif not isinstance(referenced, allowed):
                result.add_hard_error(
                    ErrorType.INVALID_REFERENCE.value,
                    f"{entity.type} {entity.id} {field_name} {referenced_id} is a {referenced.type}",
                    entity_id=entity.id,
                    field=field_name,
                    referenced_id=referenced_id,
                    expected=[t.__name__ for t in allowed],
                )


def _dependencies(entity: Entity, counters_by_target: dict[str, list[str]]) -> list[str]:
    if isinstance(entity, Justification):
        return counters_by_target.get(entity.id, []) + [entity.basis_id]
    if isinstance(entity, PropositionCompound):
        return list(entity.atom_ids)
    if isinstance(entity, Proposition):
        return counters_by_target.get(entity.id, [])
    return []


def check_cycles(
    entities: list[Entity],
    entities_by_id: dict[str, Entity],
    result: ValidationResult,
) -> None:
    """
    Check that the dependency relation is acyclic.

    Reports each cycle once, by the entity at which it closes.
    """
    justifications_by_target: dict[str, list[str]] = {}
    for entity in entities:
        if isinstance(entity, Justification):
            justifications_by_target.setdefault(entity.target_id, []).append(entity.id)

    done: set[str] = set()
    for root in entities:
        if root.id in done:
            continue
        path: dict[str, None] = {}
        stack: list[tuple[str, bool]] = [(root.id, False)]
        while stack:
            entity_id, expanded = stack.pop()
            if expanded:
                path.pop(entity_id, None)
                done.add(entity_id)
                continue
            if entity_id in done or entity_id not in entities_by_id:
                continue
            if entity_id in path:
                ids = list(path)
                cycle = ids[ids.index(entity_id):] + [entity_id]
                result.add_hard_error(
                    ErrorType.CYCLIC_DEPENDENCY.value,
                    f"Circular dependency: {' -> '.join(cycle)}",
                    entity_id=entity_id,
                    cycle=cycle,
                )
                continue
            path[entity_id] = None
            stack.append((entity_id, True))
            for dep_id in reversed(_dependencies(entities_by_id[entity_id], justifications_by_target)):
                stack.append((dep_id, False))


def check_appearances(
    entities: list[Entity],
    entities_by_id: dict[str, Entity],
    result: ValidationResult,
) -> None:
    """Appearances without a MediaExcerpt are skipped for provenance."""
    for entity in entities:
        if not isinstance(entity, Appearance):
            continue
        if not isinstance(entities_by_id.get(entity.media_excerpt_id), MediaExcerpt):
            result.add_soft_warning(
                ErrorType.INCONSISTENT_APPEARANCE.value,
                f"Appearance {entity.id} has no MediaExcerpt {entity.media_excerpt_id}",
                entity_id=entity.id,
                media_excerpt_id=entity.media_excerpt_id,
            )


def check_justifications(entities: list[Entity], result: ValidationResult) -> None:
    """A justification of a proposition by itself carries no argument."""
    for entity in entities:
        if isinstance(entity, Justification) and entity.basis_id == entity.target_id:
            result.add_soft_warning(
                "self_justification",
                f"Justification {entity.id} targets its own basis {entity.basis_id}",
                entity_id=entity.id,
            )


def check_compounds(entities: list[Entity], result: ValidationResult) -> None:
    """Compounds need atoms and only make sense as a justification basis."""
    basis_ids = {e.basis_id for e in entities if isinstance(e, Justification)}
    for entity in entities:
        if not isinstance(entity, PropositionCompound):
            continue
        if not entity.atom_ids:
            result.add_soft_warning(
                ErrorType.MALFORMED_COMPOUND.value,
                f"PropositionCompound {entity.id} has no atoms",
                entity_id=entity.id,
            )
        elif len(set(entity.atom_ids)) != len(entity.atom_ids):
            result.add_soft_warning(
                "repeated_atoms",
                f"PropositionCompound {entity.id} repeats an atom",
                entity_id=entity.id,
            )
        if entity.id not in basis_ids:
            result.add_soft_warning(
                "unused_compound",
                f"PropositionCompound {entity.id} is not the basis of any justification",
                entity_id=entity.id,
            )
