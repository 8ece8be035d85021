"""
Tests for the entity graph.

These tests verify:
1. Id and reverse indices
2. Appearance source metadata
3. Recorded issues for tolerated problems
"""

import logging

import pytest

from sophistree_argument import (
    DuplicateEntityError,
    ErrorType,
    InvalidReferenceError,
    MissingReferenceError,
    OrderedSet,
    Proposition,
    build_entity_graph,
)
from tests.factories import (
    appearance,
    compound,
    justification,
    media_excerpt,
    proposition,
)


# =============================================================================
# INDICES
# =============================================================================

class TestIndices:
    """Reverse indices derived from one pass."""

    def test_justification_indices(self):
        entities = [
            proposition("p1"),
            proposition("p2"),
            justification("j1", "p2", "p1"),
            justification("j2", "p2", "j1", "Negative"),
        ]
        graph = build_entity_graph(entities)

        assert len(graph) == 4
        assert "j2" in graph
        assert [j.id for j in graph.justifications_targeting("p1")] == ["j1"]
        assert [j.id for j in graph.justifications_targeting("j1")] == ["j2"]
        assert [j.id for j in graph.justifications_based_on("p2")] == ["j1", "j2"]
        assert graph.justifications_targeting("p2") == []

    def test_compound_atoms_indexed_once_per_compound(self):
        entities = [
            proposition("p1"),
            proposition("p2"),
            compound("pc1", "p1", "p2", "p1"),
            compound("pc2", "p1"),
        ]
        graph = build_entity_graph(entities)

        assert graph.compound_ids_by_atom_id == {"p1": ["pc1", "pc2"], "p2": ["pc1"]}
        assert graph.is_atom("p1")
        assert not graph.is_atom("pc1")

    def test_of_type_keeps_snapshot_order(self):
        graph = build_entity_graph([proposition("b"), media_excerpt("m"), proposition("a")])
        assert [p.id for p in graph.of_type(Proposition)] == ["b", "a"]

    def test_duplicate_id_raises(self):
        with pytest.raises(DuplicateEntityError) as exc_info:
            build_entity_graph([proposition("x"), media_excerpt("x")])
        assert exc_info.value.error_type is ErrorType.DUPLICATE_ENTITY
        assert exc_info.value.entity_id == "x"


# =============================================================================
# LOOKUPS
# =============================================================================

class TestLookups:
    """Reference resolution."""

    def test_get_missing_raises(self):
        graph = build_entity_graph([proposition("p1")])
        with pytest.raises(MissingReferenceError):
            graph.get("ghost")

    def test_require_checks_kind(self):
        j = justification("j1", "m1", "p1")
        graph = build_entity_graph([proposition("p1"), media_excerpt("m1"), j])

        assert graph.require("p1", referrer=j, field="targetId", expected=(Proposition,)).id == "p1"
        with pytest.raises(InvalidReferenceError) as exc_info:
            graph.require("m1", referrer=j, field="targetId", expected=(Proposition,))
        assert exc_info.value.expected == ["Proposition"]
        assert exc_info.value.actual_type == "MediaExcerpt"


# =============================================================================
# APPEARANCES AND ISSUES
# =============================================================================

class TestAppearances:
    """Source metadata gathered from appearances."""

    def test_counts_and_sources(self):
        entities = [
            proposition("p1"),
            media_excerpt("m1", source_name="Beta"),
            media_excerpt("m2", source_name="Alpha", domain="alpha.example"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p1", "m2"),
            appearance("a3", "p1", "m1"),
        ]
        graph = build_entity_graph(entities)

        assert graph.appearance_counts["p1"] == 3
        assert list(graph.appearance_source_names["p1"]) == ["Beta", "Alpha"]
        assert graph.appearance_domains["p1"].sorted() == ["alpha.example", "example.com"]
        assert graph.issues == []

    def test_appearance_before_its_excerpt(self):
        entities = [proposition("p1"), appearance("a1", "p1", "m1"), media_excerpt("m1")]
        graph = build_entity_graph(entities)
        assert list(graph.appearance_source_names["p1"]) == ["Source m1"]

    def test_missing_excerpt_is_recorded(self, caplog):
        entities = [proposition("p1"), appearance("a1", "p1", "ghost")]
        with caplog.at_level(logging.WARNING):
            graph = build_entity_graph(entities)

        assert graph.appearance_counts["p1"] == 1
        assert "p1" not in graph.appearance_source_names
        (issue,) = graph.issues
        assert issue.error_type is ErrorType.INCONSISTENT_APPEARANCE
        assert issue.entity_id == "a1"
        assert issue.details == {"media_excerpt_id": "ghost"}
        assert "INCONSISTENT_APPEARANCE" in caplog.text

    def test_empty_compound_is_recorded(self):
        graph = build_entity_graph([compound("pc1")])
        assert [issue.error_type for issue in graph.issues] == [ErrorType.MALFORMED_COMPOUND]


class TestOrderedSet:
    def test_insertion_order_and_dedup(self):
        items = OrderedSet(["b", "a", "b"])
        items.add("c")
        items.add("a")
        items.discard("missing")

        assert list(items) == ["b", "a", "c"]
        assert len(items) == 3
        assert items.sorted() == ["a", "b", "c"]
        assert "a" in items
