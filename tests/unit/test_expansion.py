"""
Unit Tests for Graph Expansion
==============================

Tests hop depth per level, distance decay, the hop cap, and visited-set
bookkeeping of ExpansionEngine.
"""

import pytest

from conceptgraph.expansion import ExpansionEngine, hop_strength, hops_for_level
from conceptgraph.store import AssociationStore


def as_tuples(edges):
    return [(e.source, e.target, round(e.strength, 6), e.hop_distance) for e in edges]


# =============================================================================
# HELPERS
# =============================================================================


class TestHopsForLevel:

    @pytest.mark.parametrize("level,hops", [
        (0.5, 1), (1.99, 1), (2.0, 2), (2.5, 2), (2.89, 2), (2.9, 3), (2.99, 3),
    ])
    def test_boundaries(self, level, hops):
        assert hops_for_level(level) == hops


class TestHopStrength:

    def test_first_hop_unchanged(self):
        assert hop_strength(0.9, 1, 2) == 0.9

    def test_decay_per_hop(self):
        assert hop_strength(0.9, 2, 3) == pytest.approx(0.72)
        assert hop_strength(0.9, 3, 3) == pytest.approx(0.576)

    def test_beyond_cap_scaled(self):
        assert hop_strength(1.0, 3, 2) == pytest.approx(0.64 * 2 / 3)


# =============================================================================
# EXPANSION
# =============================================================================


class TestExpand:
    """Tests for ExpansionEngine.expand."""

    def test_two_hop_chain(self):
        """alpha-beta at full strength, beta-gamma decayed once."""
        store = AssociationStore()
        store.add_edge("alpha", "beta", 0.9)
        store.add_edge("beta", "gamma", 0.9)

        edges = ExpansionEngine(store).expand(["alpha"], level=2.5, max_hop_distance=2)

        assert as_tuples(edges) == [
            ("alpha", "beta", 0.9, 1),
            ("beta", "gamma", 0.72, 2),
        ]

    def test_low_level_stays_at_first_hop(self, chain_store):
        edges = ExpansionEngine(chain_store).expand(["alpha"], level=1.5, max_hop_distance=3)
        assert as_tuples(edges) == [("alpha", "beta", 0.9, 1)]

    def test_high_level_reaches_third_hop(self, chain_store):
        edges = ExpansionEngine(chain_store).expand(["alpha"], level=2.95, max_hop_distance=3)
        assert as_tuples(edges) == [
            ("alpha", "beta", 0.9, 1),
            ("beta", "gamma", 0.72, 2),
            ("gamma", "delta", 0.576, 3),
        ]

    def test_first_hop_beyond_cap_is_penalized(self, chain_store):
        edges = ExpansionEngine(chain_store).expand(["alpha"], level=2.95, max_hop_distance=1)
        assert as_tuples(edges) == [
            ("alpha", "beta", 0.9, 1),
            ("beta", "gamma", 0.36, 2),
        ]

    def test_stored_edges_returned_as_is_at_first_hop(self, chain_store):
        edges = ExpansionEngine(chain_store).expand(["alpha"], level=1.0, max_hop_distance=1)
        assert edges[0] is chain_store.edges_of("alpha")[0]

    def test_cycle_visits_each_edge_once(self):
        store = AssociationStore()
        store.add_edge("a", "b", 0.8)
        store.add_edge("b", "c", 0.8)
        store.add_edge("c", "a", 0.8)

        edges = ExpansionEngine(store).expand(["a"], level=2.95, max_hop_distance=3)

        assert sorted((e.source, e.target) for e in edges) == [("a", "b"), ("b", "c"), ("c", "a")]
        assert [e.hop_distance for e in edges] == [1, 1, 2]

    def test_repeated_seed_expanded_once(self, chain_store):
        edges = ExpansionEngine(chain_store).expand(["alpha", "alpha"], level=1.0, max_hop_distance=1)
        assert len(edges) == 1

    def test_stored_duplicates_all_returned(self):
        store = AssociationStore()
        store.add_edge("a", "b", 0.5)
        store.add_edge("b", "a", 0.7)
        edges = ExpansionEngine(store).expand(["a"], level=1.0, max_hop_distance=1)
        assert [e.strength for e in edges] == [0.5, 0.7]

    def test_multiple_seeds_in_order(self, chain_store):
        edges = ExpansionEngine(chain_store).expand(["delta", "alpha"], level=1.0, max_hop_distance=1)
        assert [(e.source, e.target) for e in edges] == [("gamma", "delta"), ("alpha", "beta")]

    def test_unknown_seed(self, chain_store):
        assert ExpansionEngine(chain_store).expand(["omega"], level=2.95, max_hop_distance=3) == []

    def test_no_seeds(self, chain_store):
        assert ExpansionEngine(chain_store).expand([], level=2.95, max_hop_distance=3) == []

    def test_store_not_modified(self, chain_store):
        ExpansionEngine(chain_store).expand(["alpha"], level=2.95, max_hop_distance=3)
        assert len(chain_store) == 3
        assert all(e.hop_distance == 1 for e in chain_store.edges())

    def test_invalid_cap(self, chain_store):
        with pytest.raises(ValueError):
            ExpansionEngine(chain_store).expand(["alpha"], level=2.5, max_hop_distance=0)
