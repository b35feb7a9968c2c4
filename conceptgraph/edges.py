"""
Edge Module
===========

The weighted association between two concepts.

Edges keep the orientation they were created with, but two edges over
the same endpoints are the same association for deduplication purposes:
``(a, b)`` and ``(b, a)`` share one unordered ``pair``.
"""

from dataclasses import dataclass, asdict, replace
from typing import Dict, FrozenSet


@dataclass(frozen=True)
class Edge:
    """
    Weighted association between two concepts.

    Attributes:
        source: Concept the edge was created from
        target: Concept the edge points to
        strength: Association strength (0.0 to 1.0)
        hop_distance: Edge traversals from the seed concept that reached
            this edge (1 for stored edges)

    Example:
        edge = Edge("neural", "network", 0.8)
        edge.pair == Edge("network", "neural", 0.3).pair  # True
    """
    source: str
    target: str
    strength: float
    hop_distance: int = 1

    @property
    def pair(self) -> FrozenSet[str]:
        """Unordered endpoint pair used as the deduplication key."""
        return frozenset((self.source, self.target))

    def touches(self, concept: str) -> bool:
        """Return True if ``concept`` is either endpoint."""
        return self.source == concept or self.target == concept

    def other(self, concept: str) -> str:
        """
        Return the endpoint opposite ``concept``.

        For a self-loop both endpoints are ``concept``.
        """
        return self.target if self.source == concept else self.source

    def at_hop(self, hop_distance: int, strength: float) -> 'Edge':
        """Copy of this edge as seen at a given hop with an adjusted strength."""
        return replace(self, hop_distance=hop_distance, strength=strength)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Edge':
        """Create an Edge from dictionary representation."""
        return cls(
            source=data['source'],
            target=data['target'],
            strength=data['strength'],
            hop_distance=data.get('hop_distance', 1)
        )
