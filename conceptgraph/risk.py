"""
Risk Filter
===========

Confidence-based pruning of expanded edges.

Confidence discounts an edge by its hop distance and scales it by the
personality factor and buffer constant::

    confidence = strength * decay(hop) * personality * buffer * 10

clamped to [0, 1], with ``decay(d) = 0.8 ** (d - 1)``. Note that expanded
edges already carry one round of hop decay in their strength, so the
distance discount compounds.

An edge survives when ``confidence > 1 - capacity`` where
``capacity = level ** 2 * 0.1``. Higher levels therefore tolerate weaker,
longer-distance associations.
"""

from typing import Iterable, List

from .constants import CAPACITY_RATE, CONFIDENCE_NORMALIZER, HOP_DECAY_BASE
from .edges import Edge


def decay(hop_distance: int) -> float:
    """Distance discount: ``0.8 ** (d - 1)`` beyond the first hop, else 1."""
    if hop_distance > 1:
        return HOP_DECAY_BASE ** (hop_distance - 1)
    return 1.0


def capacity(level: float) -> float:
    """Filtering capacity for a level (``level ** 2 * 0.1``)."""
    return level ** 2 * CAPACITY_RATE


def edge_confidence(edge: Edge, personality_factor: float, buffer_constant: float) -> float:
    """
    Confidence score of an edge in [0, 1].

    Args:
        edge: Edge to score
        personality_factor: Engine personality factor
        buffer_constant: Engine buffer constant

    Returns:
        Clamped confidence.
    """
    score = (edge.strength * decay(edge.hop_distance) * personality_factor
             * buffer_constant * CONFIDENCE_NORMALIZER)
    return min(1.0, max(0.0, score))


class RiskFilter:
    """Stateless pruning of low-confidence edges."""

    def confidence(self, edge: Edge, personality_factor: float, buffer_constant: float) -> float:
        """See :func:`edge_confidence`."""
        return edge_confidence(edge, personality_factor, buffer_constant)

    def threshold(self, level: float) -> float:
        """Confidence an edge must exceed at ``level``."""
        return 1.0 - capacity(level)

    def filter(
        self,
        edges: Iterable[Edge],
        level: float,
        personality_factor: float,
        buffer_constant: float
    ) -> List[Edge]:
        """
        Keep edges whose confidence exceeds ``1 - capacity(level)``.

        Args:
            edges: Candidate edges
            level: Profile level
            personality_factor: Engine personality factor
            buffer_constant: Engine buffer constant

        Returns:
            Surviving edges in input order.
        """
        cutoff = self.threshold(level)
        return [
            edge for edge in edges
            if edge_confidence(edge, personality_factor, buffer_constant) > cutoff
        ]
