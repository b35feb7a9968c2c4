"""
Result Dataclasses
==================

Typed containers passed between pipeline stages and returned to callers.

Per-call structures (``Transition``, ``ExpansionResult``, ``MergedResult``,
``AssembledResponse``) are created fresh for each ``process`` call and
discarded once the response is assembled. ``ProcessingResult`` is what
callers receive.

Example:
    result = processor.process("neural networks learn patterns")
    print(result.summary)
    print(result.details)
    log_record = result.snapshot()  # {timestamp, configuration, edge_count}
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .config import EngineConfig
from .edges import Edge
from .profiles import Profile


@dataclass(frozen=True)
class Transition:
    """
    A detected change of subject between two adjacent concepts.

    Attributes:
        source: Earlier concept
        target: Following concept (the new subject)
        marker: Text announcing the change
    """
    source: str
    target: str
    marker: str

    def to_dict(self) -> Dict[str, str]:
        return {'source': self.source, 'target': self.target, 'marker': self.marker}


@dataclass(frozen=True)
class ExpansionResult:
    """
    Output of one profile's expansion, filtering and transition pass.

    Attributes:
        profile: Profile that produced this result
        concepts: Seed concepts the pass started from
        edges: Edges that survived confidence filtering
        transitions: Subject changes detected under this profile
    """
    profile: Profile
    concepts: List[str]
    edges: List[Edge]
    transitions: List[Transition] = field(default_factory=list)

    def __repr__(self) -> str:
        return (f"ExpansionResult(profile='{self.profile.name}', "
                f"edges={len(self.edges)}, transitions={len(self.transitions)})")


@dataclass(frozen=True)
class MergedResult:
    """
    Profile results collapsed into one edge list.

    Attributes:
        edges: At most one edge per unordered concept pair, strongest first
        active_profiles: Names of profiles that survived merging, in
            priority order
    """
    edges: List[Edge]
    active_profiles: List[str]

    @property
    def is_empty(self) -> bool:
        return not self.edges


@dataclass(frozen=True)
class AssembledResponse:
    """Summary text and supporting details built from a merged result."""
    summary: str
    details: str
    top_concepts: List[str]
    edge_count: int


@dataclass(frozen=True)
class ProcessingResult:
    """
    Result of one ``process`` call.

    Attributes:
        summary: Short answer naming the top concepts, with any subject
            change markers spliced in
        details: Supporting detail sentence
        top_concepts: Most frequent concepts among the merged edges
        edge_count: Number of merged edges
        configuration: Validated configuration the call ran with
        active_profiles: Profiles whose results survived merging
        timestamp: Unix time the result was produced
    """
    summary: str
    details: str
    top_concepts: List[str]
    edge_count: int
    configuration: EngineConfig
    active_profiles: List[str] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)

    def snapshot(self) -> Dict[str, Any]:
        """
        Read-only view for persistence layers.

        Returns:
            Dictionary with timestamp, configuration and edge_count
        """
        return {
            'timestamp': self.timestamp,
            'configuration': self.configuration.to_dict(),
            'edge_count': self.edge_count,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary for display layers."""
        return {
            'summary': self.summary,
            'details': self.details,
            'top_concepts': list(self.top_concepts),
            'edge_count': self.edge_count,
            'configuration': self.configuration.to_dict(),
            'active_profiles': list(self.active_profiles),
            'timestamp': self.timestamp,
        }
