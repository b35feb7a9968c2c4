"""
Unit Tests for Profile Merging
==============================

Tests branch-confidence gating, priority ordering, and unordered-pair
deduplication of Merger.
"""

import pytest
from hypothesis import given, strategies as st

from conceptgraph.edges import Edge
from conceptgraph.merge import Merger, dedupe_edges
from conceptgraph.profiles import Profile
from conceptgraph.results import ExpansionResult
from conceptgraph.risk import edge_confidence


def result(name, priority, edges, merge_threshold=None):
    profile = Profile(name=name, priority=priority, merge_threshold=merge_threshold)
    return ExpansionResult(profile=profile, concepts=[], edges=list(edges))


def by_strength(edge):
    return edge.strength


def engine_scorer(edge):
    return edge_confidence(edge, 0.7, 0.1)


# =============================================================================
# DEDUPLICATION
# =============================================================================


class TestDedupeEdges:

    def test_keeps_strongest(self):
        assert dedupe_edges([Edge("x", "y", 0.4), Edge("y", "x", 0.7)]) == [Edge("y", "x", 0.7)]

    def test_first_wins_ties(self):
        assert dedupe_edges([Edge("x", "y", 0.5), Edge("y", "x", 0.5)]) == [Edge("x", "y", 0.5)]

    def test_distinct_pairs_kept(self):
        edges = [Edge("a", "b", 0.5), Edge("a", "c", 0.5)]
        assert dedupe_edges(edges) == edges


# =============================================================================
# MERGE
# =============================================================================


class TestMerge:
    """Tests for Merger.merge."""

    def test_higher_priority_edge_kept(self):
        """priority-1 (x,y,0.95) beats priority-2 (x,y,0.5)."""
        merger = Merger(by_strength, default_threshold=0.0)
        merged = merger.merge([
            result("first", 1, [Edge("x", "y", 0.95)]),
            result("second", 2, [Edge("x", "y", 0.5)]),
        ])
        assert merged.edges == [Edge("x", "y", 0.95)]
        assert merged.active_profiles == ["first", "second"]

    def test_stronger_lower_priority_edge_wins(self):
        merger = Merger(by_strength, default_threshold=0.0)
        merged = merger.merge([
            result("first", 1, [Edge("x", "y", 0.4)]),
            result("second", 2, [Edge("y", "x", 0.8)]),
        ])
        assert merged.edges == [Edge("y", "x", 0.8)]

    def test_equal_strength_keeps_priority_order(self):
        merger = Merger(by_strength, default_threshold=0.0)
        merged = merger.merge([
            result("second", 2, [Edge("y", "x", 0.5)]),
            result("first", 1, [Edge("x", "y", 0.5)]),
        ])
        assert merged.edges[0].source == "x"
        assert merged.active_profiles == ["first", "second"]

    def test_low_confidence_branch_dropped(self):
        merger = Merger(engine_scorer, default_threshold=0.6)
        merged = merger.merge([
            result("first", 1, [Edge("x", "y", 0.95)]),
            result("second", 2, [Edge("x", "y", 0.5), Edge("p", "q", 0.5)]),
        ])
        assert merged.active_profiles == ["first"]
        assert merged.edges == [Edge("x", "y", 0.95)]

    def test_empty_branch_has_zero_confidence(self):
        merger = Merger(by_strength, default_threshold=0.1)
        assert merger.branch_confidence(result("p", 1, [])) == 0.0
        assert merger.merge([result("p", 1, [])]).active_profiles == []

    def test_branch_confidence_is_mean(self):
        merger = Merger(by_strength)
        branch = result("p", 1, [Edge("a", "b", 0.2), Edge("c", "d", 0.6)])
        assert merger.branch_confidence(branch) == pytest.approx(0.4)

    def test_profile_threshold_overrides_default(self):
        merger = Merger(by_strength, default_threshold=0.9)
        merged = merger.merge([
            result("lenient", 1, [Edge("a", "b", 0.5)], merge_threshold=0.1),
            result("default", 2, [Edge("c", "d", 0.5)]),
        ])
        assert merged.active_profiles == ["lenient"]

    def test_sorted_by_strength_descending(self):
        merger = Merger(by_strength, default_threshold=0.0)
        merged = merger.merge([
            result("p", 1, [Edge("a", "b", 0.3), Edge("c", "d", 0.9), Edge("e", "f", 0.6)]),
        ])
        assert [e.strength for e in merged.edges] == [0.9, 0.6, 0.3]

    def test_no_results(self):
        merged = Merger(by_strength).merge([])
        assert merged.edges == []
        assert merged.active_profiles == []
        assert merged.is_empty


class TestMergeProperties:
    """Property-based tests using hypothesis."""

    edge_lists = st.lists(
        st.builds(
            Edge,
            source=st.sampled_from("abcd"),
            target=st.sampled_from("abcd"),
            strength=st.floats(min_value=0.0, max_value=1.0),
        ),
        max_size=15
    )

    @given(st.lists(edge_lists, min_size=1, max_size=4))
    def test_unique_pairs(self, branches):
        results = [result(f"p{i}", i, edges) for i, edges in enumerate(branches)]
        merged = Merger(by_strength, default_threshold=0.0).merge(results)
        pairs = [edge.pair for edge in merged.edges]
        assert len(pairs) == len(set(pairs))

    @given(st.lists(edge_lists, min_size=1, max_size=4))
    def test_keeps_maximum_strength_per_pair(self, branches):
        results = [result(f"p{i}", i, edges) for i, edges in enumerate(branches)]
        merged = Merger(by_strength, default_threshold=0.0).merge(results)
        best = {}
        for edges in branches:
            for edge in edges:
                best[edge.pair] = max(best.get(edge.pair, 0.0), edge.strength)
        assert {e.pair: e.strength for e in merged.edges} == best
