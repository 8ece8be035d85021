"""
Tests for per-excerpt highlight outcomes.
"""

import pytest

from sophistree_argument import (
    BasisOutcome,
    combine_appearance_outcomes,
    determine_outcomes,
    media_excerpt_outcomes,
)
from tests.factories import appearance, justification, media_excerpt, proposition

PRESUMED = BasisOutcome.PRESUMED
UNPROVEN = BasisOutcome.UNPROVEN
PROVEN = BasisOutcome.PROVEN
DISPROVEN = BasisOutcome.DISPROVEN
CONTRADICTORY = BasisOutcome.CONTRADICTORY


class TestCombineAppearanceOutcomes:
    """Pairwise combination table."""

    @pytest.mark.parametrize(
        "outcome1,outcome2,expected",
        [
            (CONTRADICTORY, PROVEN, CONTRADICTORY),
            (UNPROVEN, CONTRADICTORY, CONTRADICTORY),
            (UNPROVEN, DISPROVEN, DISPROVEN),
            (PRESUMED, UNPROVEN, PRESUMED),
            (UNPROVEN, UNPROVEN, UNPROVEN),
            (DISPROVEN, DISPROVEN, DISPROVEN),
            (DISPROVEN, PROVEN, CONTRADICTORY),
            (PRESUMED, DISPROVEN, CONTRADICTORY),
            (PROVEN, PRESUMED, PROVEN),
            (PRESUMED, PRESUMED, PRESUMED),
            (PROVEN, PROVEN, PROVEN),
        ],
    )
    def test_combination(self, outcome1, outcome2, expected):
        assert combine_appearance_outcomes(outcome1, outcome2) is expected

    def test_combination_is_symmetric(self):
        for outcome1 in BasisOutcome:
            for outcome2 in BasisOutcome:
                assert combine_appearance_outcomes(outcome1, outcome2) is combine_appearance_outcomes(
                    outcome2, outcome1
                )


class TestMediaExcerptOutcomes:
    """Folding the outcomes of every proposition an excerpt quotes."""

    def test_single_quoted_proposition(self):
        entities = [proposition("p1"), media_excerpt("m1"), appearance("a1", "p1", "m1")]
        assert media_excerpt_outcomes(entities) == {"m1": UNPROVEN}

    def test_proven_and_unproven_is_proven(self):
        entities = [
            media_excerpt("m1"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p2", "m1"),
            justification("j1", "p3", "p1"),
        ]
        assert media_excerpt_outcomes(entities) == {"m1": PROVEN}

    def test_proven_and_disproven_is_contradictory(self):
        entities = [
            media_excerpt("m1"),
            proposition("p1"),
            proposition("p2"),
            proposition("p3"),
            appearance("a1", "p1", "m1"),
            appearance("a2", "p2", "m1"),
            justification("j1", "p3", "p1"),
            justification("j2", "p3", "p2", "Negative"),
        ]
        assert media_excerpt_outcomes(entities) == {"m1": CONTRADICTORY}

    def test_excerpts_without_appearances_are_omitted(self):
        entities = [
            media_excerpt("m1"),
            media_excerpt("m2"),
            proposition("p1"),
            appearance("a1", "p1", "m2"),
            justification("j1", "m1", "p1"),
        ]
        assert media_excerpt_outcomes(entities) == {"m2": PROVEN}

    def test_appearance_with_missing_excerpt_is_skipped(self):
        entities = [proposition("p1"), appearance("a1", "p1", "ghost")]
        assert media_excerpt_outcomes(entities) == {}

    def test_precomputed_outcomes(self):
        entities = [proposition("p1"), media_excerpt("m1"), appearance("a1", "p1", "m1")]
        outcomes = determine_outcomes(entities)
        assert media_excerpt_outcomes(entities, outcomes) == {"m1": UNPROVEN}
