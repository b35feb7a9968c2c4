"""
Expansion Module
================

Distance-bounded graph expansion from seed concepts.

Expansion walks the association store outward from the seeds, one hop
at a time, the way a cue primes its direct associations and, at higher
levels, associations of associations:

- hop 1: every edge touching a seed, strength unchanged
- hop 2 (level >= 2.0): edges of hop-1 neighbours, strength x 0.8
- hop 3 (level >= 2.9): edges of hop-2 neighbours, strength x 0.64

A concept is expanded from at most once. Hops past a profile's
``max_hop_distance`` are not walked further; the first hop beyond the
cap is still reported, scaled by ``max_hop_distance / hop_distance``.
"""

import logging
from typing import Iterable, List, Set

from .constants import (
    HOP_DECAY_BASE,
    MAX_EXPANSION_HOPS,
    SECONDARY_HOP_LEVEL,
    TERTIARY_HOP_LEVEL,
)
from .edges import Edge
from .store import AssociationStore

logger = logging.getLogger(__name__)


def hops_for_level(level: float) -> int:
    """
    Number of hops a level may reach.

    Returns:
        1, 2 or 3
    """
    if level >= TERTIARY_HOP_LEVEL:
        return MAX_EXPANSION_HOPS
    if level >= SECONDARY_HOP_LEVEL:
        return 2
    return 1


def hop_strength(strength: float, hop_distance: int, max_hop_distance: int) -> float:
    """
    Strength of a stored edge when reached at ``hop_distance``.

    Args:
        strength: Stored strength
        hop_distance: Hop at which the edge was reached (>= 1)
        max_hop_distance: Profile cap; hops beyond it are scaled down

    Returns:
        Decayed strength.
    """
    decayed = strength * HOP_DECAY_BASE ** (hop_distance - 1)
    if hop_distance > max_hop_distance:
        decayed *= max_hop_distance / hop_distance
    return decayed


class ExpansionEngine:
    """
    Breadth-first expansion over an AssociationStore.

    The engine only reads from the store; all bookkeeping (visited
    concepts, emitted edges, frontier) is local to one ``expand`` call,
    so one engine can serve several profiles concurrently.
    """

    def __init__(self, store: AssociationStore):
        self.store = store

    def expand(
        self,
        seed_concepts: Iterable[str],
        level: float,
        max_hop_distance: int
    ) -> List[Edge]:
        """
        Expand seed concepts into associated edges.

        Args:
            seed_concepts: Concepts to start from, in order
            level: Profile level; decides how many hops are walked
            max_hop_distance: Profile hop cap (>= 1)

        Returns:
            All edges reached, in discovery order, with ``hop_distance``
            and decayed ``strength`` set. Not deduplicated by pair and not
            filtered.

        Raises:
            ValueError: If max_hop_distance < 1
        """
        if max_hop_distance < 1:
            raise ValueError(f"max_hop_distance must be at least 1, got {max_hop_distance}")

        max_hops = hops_for_level(level)
        expanded: List[Edge] = []
        visited: Set[str] = set()
        # Stored edges are shared instances; identity marks "already reported"
        emitted: Set[int] = set()

        frontier: List[str] = list(seed_concepts)
        for hop in range(1, max_hops + 1):
            if hop - 1 > max_hop_distance:
                break
            next_frontier: List[str] = []
            for concept in frontier:
                if concept in visited:
                    continue
                visited.add(concept)
                for edge in self.store.edges_of(concept):
                    if id(edge) in emitted:
                        continue
                    emitted.add(id(edge))
                    if hop == 1:
                        expanded.append(edge)
                    else:
                        expanded.append(edge.at_hop(
                            hop, hop_strength(edge.strength, hop, max_hop_distance)
                        ))
                    next_frontier.append(edge.other(concept))
            frontier = next_frontier

        logger.debug(
            "Expanded to %d edges (level=%.2f, hops=%d, cap=%d)",
            len(expanded), level, max_hops, max_hop_distance
        )
        return expanded
