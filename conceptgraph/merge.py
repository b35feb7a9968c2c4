"""
Merge Module
============

Collapses per-profile expansion results into a single edge list.

Merging happens in four steps:

1. Profiles whose branch confidence (mean edge confidence, 0 for no
   edges) falls below their merge threshold are dropped.
2. Survivors are ordered by priority and their edges concatenated.
3. Edges are deduplicated by unordered concept pair, keeping the
   strongest; on equal strength the earlier (higher priority) edge wins.
4. The result is sorted strongest first.
"""

import logging
from typing import Callable, Dict, FrozenSet, Iterable, List

from .constants import DEFAULT_MERGE_THRESHOLD
from .edges import Edge
from .results import ExpansionResult, MergedResult

logger = logging.getLogger(__name__)

EdgeScorer = Callable[[Edge], float]


def dedupe_edges(edges: Iterable[Edge]) -> List[Edge]:
    """
    Keep the strongest edge per unordered concept pair.

    Args:
        edges: Edges in precedence order

    Returns:
        Deduplicated edges, in order of each pair's first appearance.
    """
    best: Dict[FrozenSet[str], Edge] = {}
    for edge in edges:
        current = best.get(edge.pair)
        if current is None or edge.strength > current.strength:
            best[edge.pair] = edge
    # dict keeps first-insertion order of each pair even when the value is replaced
    return list(best.values())


class Merger:
    """
    Priority-ordered merge of profile results.

    Attributes:
        scorer: Callable returning an edge's confidence in [0, 1]
        default_threshold: Merge threshold for profiles that do not set one
    """

    def __init__(self, scorer: EdgeScorer, default_threshold: float = DEFAULT_MERGE_THRESHOLD):
        self.scorer = scorer
        self.default_threshold = default_threshold

    def branch_confidence(self, result: ExpansionResult) -> float:
        """Mean confidence of a result's edges, or 0.0 when it has none."""
        if not result.edges:
            return 0.0
        return sum(self.scorer(edge) for edge in result.edges) / len(result.edges)

    def threshold_for(self, result: ExpansionResult) -> float:
        threshold = result.profile.merge_threshold
        return self.default_threshold if threshold is None else threshold

    def merge(self, results: Iterable[ExpansionResult]) -> MergedResult:
        """
        Merge profile results.

        Args:
            results: One ExpansionResult per profile, in any order

        Returns:
            MergedResult with unique pairs, strongest first.
        """
        survivors = []
        for result in results:
            confidence = self.branch_confidence(result)
            threshold = self.threshold_for(result)
            if confidence < threshold:
                logger.debug(
                    "Profile '%s' dropped: branch confidence %.3f < %.3f",
                    result.profile.name, confidence, threshold
                )
                continue
            survivors.append(result)

        survivors.sort(key=lambda r: r.profile.priority)

        merged = dedupe_edges(edge for result in survivors for edge in result.edges)
        merged.sort(key=lambda edge: edge.strength, reverse=True)

        return MergedResult(
            edges=merged,
            active_profiles=[result.profile.name for result in survivors]
        )
