"""
Tests for conclusion extraction.

These tests verify:
1. Which propositions qualify as conclusions
2. Grouping and ordering by appearance sources
3. Justification source attribution through compounds and valid edges
4. Deterministic, idempotent output
"""

from sophistree_argument import (
    BasisOutcome,
    MediaExcerpt,
    UrlInfo,
    build_entity_graph,
    determine_outcomes,
    extract_conclusions,
    find_conclusion_ids,
    reconcile_conclusions,
)
from sophistree_argument.errors.types import ErrorType
from tests.factories import (
    appearance,
    compound,
    justification,
    media_excerpt,
    proposition,
)


def conclusion_ids(groups):
    return [info.proposition_id for group in groups for info in group.proposition_infos]


# =============================================================================
# CONCLUSION SELECTION
# =============================================================================

class TestConclusionSelection:
    """Roots: targeted, never a basis, never an atom."""

    def test_empty_snapshot_has_no_conclusions(self):
        assert extract_conclusions([]) == []

    def test_untargeted_proposition_is_not_a_conclusion(self):
        assert extract_conclusions([proposition("p1")]) == []

    def test_target_is_a_conclusion_and_basis_is_not(self):
        entities = [proposition("p1"), proposition("p2"), justification("j1", "p2", "p1")]
        groups = extract_conclusions(entities)

        assert len(groups) == 1
        assert conclusion_ids(groups) == ["p1"]
        assert groups[0].proposition_infos[0].outcome is BasisOutcome.PROVEN

    def test_intermediate_proposition_is_not_a_conclusion(self):
        entities = [
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            justification("j1", "p2", "p1"),
            justification("j2", "p3", "p2"),
        ]
        assert conclusion_ids(extract_conclusions(entities)) == ["p1"]

    def test_compound_atom_is_not_a_conclusion(self):
        entities = [
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            proposition("p4"),
            justification("j1", "p3", "p1"),
            compound("pc1", "p1", "p2"),
            justification("j2", "pc1", "p4"),
        ]
        assert conclusion_ids(extract_conclusions(entities)) == ["p4"]

    def test_counter_justification_basis_is_not_a_conclusion(self):
        entities = [
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            justification("j1", "p2", "p1"),
            justification("j2", "p3", "j1", "Negative"),
        ]
        groups = extract_conclusions(entities)
        assert conclusion_ids(groups) == ["p1"]
        assert groups[0].proposition_infos[0].outcome is BasisOutcome.UNPROVEN

    def test_find_conclusion_ids_keeps_snapshot_order(self):
        entities = [
            proposition("p2"),
            proposition("p1"),
            proposition("p3"),
            justification("j1", "p3", "p1"),
            justification("j2", "p3", "p2"),
        ]
        # p3 is a basis
        assert find_conclusion_ids(build_entity_graph(entities)) == ["p2", "p1"]


# =============================================================================
# GROUPING
# =============================================================================

class TestGrouping:
    """Conclusions sharing appearance sources share a group."""

    def test_members_are_sorted_by_id(self):
        entities = [
            proposition("p2"),
            proposition("p10"),
            proposition("p1"),
            proposition("basis"),
            justification("j1", "basis", "p2"),
            justification("j2", "basis", "p10"),
            justification("j3", "basis", "p1"),
        ]
        groups = extract_conclusions(entities)

        assert conclusion_ids(groups) == ["p1", "p10", "p2"]
        assert extract_conclusions(list(reversed(entities))) == groups

    def test_reordered_snapshot_needs_no_edits(self):
        entities = [
            media_excerpt("m1", source_name="Alpha"),
            proposition("p2"),
            proposition("p1"),
            proposition("basis"),
            appearance("a1", "p2", "m1"),
            appearance("a2", "p1", "m1"),
            justification("j1", "basis", "p2"),
            justification("j2", "basis", "p1"),
        ]
        persisted = extract_conclusions(entities)
        assert reconcile_conclusions(persisted, extract_conclusions(list(reversed(entities)))) == []

    def test_same_sources_share_a_group(self):
        entities = [
            media_excerpt("m1", source_name="Alpha"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p2", "m1"),
            justification("j1", "p3", "p1"),
            justification("j2", "p3", "p2", "Negative"),
        ]
        groups = extract_conclusions(entities)

        assert len(groups) == 1
        assert conclusion_ids(groups) == ["p1", "p2"]
        assert groups[0].appearance_info.source_names == ["Alpha"]
        assert groups[0].appearance_info.domains == ["example.com"]

    def test_groups_are_sorted_by_key(self):
        entities = [
            media_excerpt("m1", source_name="Zeta"),
            media_excerpt("m2", source_name="Alpha"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            proposition("basis"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p2", "m2"),
            justification("j1", "basis", "p1"),
            justification("j2", "basis", "p2"),
            justification("j3", "basis", "p3"),
        ]
        groups = extract_conclusions(entities)

        assert [group.appearance_info.source_names for group in groups] == [[], ["Alpha"], ["Zeta"]]
        assert conclusion_ids(groups) == ["p3", "p2", "p1"]
        assert [group.key for group in groups] == sorted(group.key for group in groups)

    def test_domains_split_groups_with_equal_names(self):
        entities = [
            media_excerpt("m1", source_name="Daily", domain="daily.example"),
            media_excerpt("m2", source_name="Daily", domain="daily.test"),
            proposition("p1"),
            proposition("p2"),
            proposition("basis"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p2", "m2"),
            justification("j1", "basis", "p1"),
            justification("j2", "basis", "p2"),
        ]
        groups = extract_conclusions(entities)

        assert [group.appearance_info.domains for group in groups] == [
            ["daily.example"],
            ["daily.test"],
        ]

    def test_appearance_sources_are_distinct_and_sorted(self):
        entities = [
            media_excerpt("m1", source_name="Beta"),
            media_excerpt("m2", source_name="Alpha"),
            media_excerpt("m3", source_name="Beta"),
            proposition("p1"),
            proposition("basis"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p1", "m2"),
            appearance("a3", "p1", "m3"),
            justification("j1", "basis", "p1"),
        ]
        (group,) = extract_conclusions(entities)
        assert group.appearance_info.source_names == ["Alpha", "Beta"]
        assert group.appearance_info.domains == ["example.com"]

    def test_appearance_with_missing_excerpt_is_skipped(self):
        entities = [
            proposition("p1"),
            proposition("basis"),
            appearance("a1", "p1", "ghost"),
            justification("j1", "basis", "p1"),
        ]
        groups = extract_conclusions(entities)

        assert conclusion_ids(groups) == ["p1"]
        assert groups[0].appearance_info.source_names == []

        graph = build_entity_graph(entities)
        assert [issue.error_type for issue in graph.issues] == [ErrorType.INCONSISTENT_APPEARANCE]


# =============================================================================
# JUSTIFICATION SOURCES
# =============================================================================

class TestJustificationSources:
    """Excerpts reaching a conclusion through valid edges."""

    def test_direct_excerpt_basis(self):
        entities = [
            media_excerpt("m1", source_name="Gazette", domain="gazette.example"),
            proposition("p1"),
            justification("j1", "m1", "p1"),
        ]
        (group,) = extract_conclusions(entities)
        assert group.media_excerpt_justification_info.source_names == ["Gazette"]
        assert group.media_excerpt_justification_info.domains == ["gazette.example"]

    def test_malformed_excerpt_url_has_empty_domain(self):
        excerpt = MediaExcerpt(
            id="m1",
            source_name="Broken",
            url_info=UrlInfo(url="http://[::1"),
        )
        entities = [excerpt, proposition("p1"), justification("j1", "m1", "p1")]
        (group,) = extract_conclusions(entities)
        assert group.media_excerpt_justification_info.source_names == ["Broken"]
        assert group.media_excerpt_justification_info.domains == [""]

    def test_negative_edges_carry_sources(self):
        entities = [media_excerpt("m1"), proposition("p1"), justification("j1", "m1", "p1", "Negative")]
        (group,) = extract_conclusions(entities)
        assert group.proposition_infos[0].outcome is BasisOutcome.DISPROVEN
        assert group.media_excerpt_justification_info.source_names == ["Source m1"]

    def test_sources_hop_through_compounds(self):
        entities = [
            media_excerpt("m1"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            justification("j1", "m1", "p1"),
            compound("pc1", "p1", "p2"),
            justification("j2", "pc1", "p3"),
        ]
        (group,) = extract_conclusions(entities)
        assert group.proposition_infos[0].proposition_id == "p3"
        assert group.media_excerpt_justification_info.source_names == ["Source m1"]
        assert group.media_excerpt_justification_info.domains == ["example.com"]

    def test_invalid_edge_blocks_sources(self):
        entities = [
            media_excerpt("m1"),
            proposition("p1"),
            proposition("p2"),
            justification("j1", "m1", "p1"),
            justification("j2", "p2", "j1", "Negative"),
        ]
        (group,) = extract_conclusions(entities)
        assert group.media_excerpt_justification_info.source_names == []

    def test_unknown_edge_does_not_block_sources(self):
        entities = [
            media_excerpt("m1"),
            media_excerpt("m2"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            appearance("a1", "p2", "m2"),
            justification("j1", "m1", "p1"),
            compound("pc1", "p1", "p2"),
            justification("j2", "pc1", "p3"),
        ]
        basis_outcomes, justification_outcomes = determine_outcomes(entities)
        assert basis_outcomes["pc1"] is BasisOutcome.UNPROVEN

        (group,) = extract_conclusions(entities)
        assert group.media_excerpt_justification_info.source_names == ["Source m1"]

    def test_diamond_attributes_source_once(self):
        entities = [
            media_excerpt("m1"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            justification("j1", "m1", "p1"),
            justification("j2", "m1", "p2"),
            compound("pc1", "p1", "p2"),
            justification("j3", "pc1", "p3"),
        ]
        (group,) = extract_conclusions(entities)
        assert group.media_excerpt_justification_info.source_names == ["Source m1"]

    def test_group_sources_are_union_of_members(self):
        entities = [
            media_excerpt("quote", source_name="Alpha"),
            media_excerpt("m2", source_name="Gamma"),
            media_excerpt("m3", source_name="Beta"),
            proposition("p1"),
            proposition("p2"),
            appearance("a1", "p1", "quote"),
            appearance("a2", "p2", "quote"),
            justification("j1", "m2", "p1"),
            justification("j2", "m3", "p2"),
            justification("j3", "m3", "p1"),
        ]
        (group,) = extract_conclusions(entities)
        assert conclusion_ids([group]) == ["p1", "p2"]
        assert group.media_excerpt_justification_info.source_names == ["Beta", "Gamma"]

    def test_sources_stop_at_the_first_conclusion(self):
        """A conclusion is never a basis, so the walk cannot pass through one."""
        entities = [
            media_excerpt("m1"),
            proposition("p1"),
            proposition("p2"),
            justification("j1", "m1", "p1"),
            justification("j2", "m1", "p2"),
        ]
        groups = extract_conclusions(entities)
        assert conclusion_ids(groups) == ["p1", "p2"]
        assert groups[0].media_excerpt_justification_info.source_names == ["Source m1"]


# =============================================================================
# DETERMINISM
# =============================================================================

class TestDeterminism:
    """Repeated extraction is identical."""

    ENTITIES = [
        media_excerpt("m1", source_name="Beta"),
        media_excerpt("m2", source_name="Alpha"),
        proposition("p1"),
        proposition("p2"),
        proposition("p3"),
        appearance("a1", "p1", "m1"),
        appearance("a2", "p2", "m2"),
        justification("j1", "m1", "p2"),
        justification("j2", "m2", "p1", "Negative"),
        justification("j3", "p3", "j2"),
    ]

    def test_extraction_is_idempotent(self):
        assert extract_conclusions(self.ENTITIES) == extract_conclusions(self.ENTITIES)

    def test_precomputed_outcomes_give_same_result(self):
        outcomes = determine_outcomes(self.ENTITIES)
        assert extract_conclusions(self.ENTITIES, outcomes) == extract_conclusions(self.ENTITIES)

    def test_wire_shape(self):
        groups = extract_conclusions(self.ENTITIES)
        wire = groups[0].to_wire()

        assert set(wire) == {"propositionInfos", "appearanceInfo", "mediaExcerptJustificationInfo"}
        assert wire["appearanceInfo"] == {"sourceNames": ["Alpha"], "domains": ["example.com"]}
        assert wire["propositionInfos"] == [{"propositionId": "p2", "outcome": "Proven"}]
        assert wire["mediaExcerptJustificationInfo"] == {
            "sourceNames": ["Beta"],
            "domains": ["example.com"],
        }

    def test_counter_justified_conclusion_is_unproven(self):
        groups = extract_conclusions(self.ENTITIES)
        assert groups[1].proposition_infos[0].proposition_id == "p1"
        assert groups[1].proposition_infos[0].outcome is BasisOutcome.UNPROVEN
        assert groups[1].media_excerpt_justification_info.source_names == []
