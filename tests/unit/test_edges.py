"""
Unit Tests for the Edge dataclass.
"""

import dataclasses

import pytest

from conceptgraph.edges import Edge


class TestEdge:
    """Tests for Edge."""

    def test_defaults_to_first_hop(self):
        assert Edge("a", "b", 0.5).hop_distance == 1

    def test_pair_is_unordered(self):
        assert Edge("a", "b", 0.5).pair == Edge("b", "a", 0.9).pair

    def test_self_loop_pair(self):
        assert Edge("a", "a", 0.5).pair == frozenset({"a"})

    def test_touches_and_other(self):
        edge = Edge("a", "b", 0.5)
        assert edge.touches("a") and edge.touches("b")
        assert not edge.touches("c")
        assert edge.other("a") == "b"
        assert edge.other("b") == "a"

    def test_at_hop_returns_copy(self):
        edge = Edge("a", "b", 0.5)
        far = edge.at_hop(2, 0.4)
        assert far == Edge("a", "b", 0.4, 2)
        assert edge.hop_distance == 1

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Edge("a", "b", 0.5).strength = 1.0

    def test_dict_round_trip(self):
        edge = Edge("neural", "network", 0.72, 2)
        assert edge.to_dict() == {
            'source': 'neural', 'target': 'network', 'strength': 0.72, 'hop_distance': 2
        }
        assert Edge.from_dict(edge.to_dict()) == edge

    def test_from_dict_default_hop(self):
        assert Edge.from_dict({'source': 'a', 'target': 'b', 'strength': 0.1}).hop_distance == 1
