"""
Association Store
=================

Append-only collection of weighted edges between concepts.

Nothing in the processing path deletes or mutates a stored edge, so
readers only need a consistent snapshot of the per-concept index. Writers
are serialized with a single lock so concurrent ``add_edge`` calls never
interleave partial index updates.

Example:
    store = AssociationStore()
    store.add_edge("alpha", "beta", 0.9)
    store.add_edge("beta", "gamma", 0.9)
    [e.target for e in store.edges_of("beta")]  # ['beta', 'gamma']
"""

import threading
from typing import Dict, Iterator, List, Sequence

from .edges import Edge


class AssociationStore:
    """
    Append-only edge store with an endpoint index.

    Duplicate edges are kept and all are visible to lookups;
    deduplication happens when profile results are merged.
    """

    def __init__(self):
        self._edges: List[Edge] = []
        # concept -> positions in _edges, ascending
        self._index: Dict[str, List[int]] = {}
        self._lock = threading.Lock()

    def add_edge(self, source: str, target: str, strength: float) -> Edge:
        """
        Append an edge between two concepts.

        Args:
            source: Concept the edge starts at
            target: Concept the edge ends at
            strength: Association strength in [0, 1]

        Returns:
            The stored Edge (hop distance 1).

        Raises:
            ValueError: If an endpoint is not a non-empty string or the
                strength is outside [0, 1].
        """
        for name, concept in (('source', source), ('target', target)):
            if not isinstance(concept, str) or not concept:
                raise ValueError(f"{name} must be a non-empty string, got {concept!r}")
        if isinstance(strength, bool) or not isinstance(strength, (int, float)):
            raise ValueError(f"strength must be numeric, got {type(strength).__name__}")
        if not (0.0 <= strength <= 1.0):
            raise ValueError(f"strength must be between 0 and 1, got {strength}")

        edge = Edge(source, target, float(strength))
        with self._lock:
            position = len(self._edges)
            self._edges.append(edge)
            self._index.setdefault(source, []).append(position)
            if target != source:
                self._index.setdefault(target, []).append(position)
        return edge

    def link_sequence(self, concepts: Sequence[str], strength: float) -> List[Edge]:
        """
        Append an edge between each pair of adjacent concepts.

        Adjacent repeats of the same concept are skipped.

        Args:
            concepts: Concepts in text order
            strength: Strength given to every new edge

        Returns:
            The edges that were added, in order.
        """
        added = []
        for previous, current in zip(concepts, concepts[1:]):
            if previous == current:
                continue
            added.append(self.add_edge(previous, current, strength))
        return added

    def edges_of(self, concept: str) -> List[Edge]:
        """
        Get every stored edge that has ``concept`` as an endpoint.

        Returns:
            Edges in insertion order.
        """
        with self._lock:
            positions = list(self._index.get(concept, ()))
            return [self._edges[i] for i in positions]

    def edges(self) -> List[Edge]:
        """Snapshot of all stored edges in insertion order."""
        with self._lock:
            return list(self._edges)

    def concepts(self) -> List[str]:
        """Concepts that appear in at least one edge, in first-seen order."""
        with self._lock:
            return list(self._index)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.edges())

    def __contains__(self, concept: str) -> bool:
        return concept in self._index
