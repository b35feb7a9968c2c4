"""
Profiles Module
===============

Named configuration bundles that each drive one independent pass of
expansion, filtering and transition detection.

A profile carries its priority (lower runs first and wins merge ties),
its level, its hop cap, an optional merge threshold, and a typed set of
response protocols. The registry holding them is an ordinary object
passed to the processor, never a module-level singleton.

Example:
    registry = ProfileRegistry(default_profiles())
    [p.name for p in registry.active_profiles()]
    # ['family_friends', 'professional']
"""

import threading
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .constants import DEFAULT_MARKER_TEMPLATE, LEVEL_CEILING, TOPIC_PLACEHOLDER
from .errors import ConfigurationError, RegistryMisconfigurationError
from .validation import (
    validate_non_empty_string,
    validate_positive_int,
    validate_range,
)


class ProfileKind(Enum):
    """Audience a profile is tuned for."""
    SOCIAL = 'social'
    PROFESSIONAL = 'professional'
    GENERAL = 'general'


@dataclass(frozen=True)
class ResponseProtocols:
    """
    How responses produced under a profile are shaped.

    Attributes:
        prioritize: What the response leads with (e.g. "direct_answer")
        eliminate: What the response leaves out (e.g. "verbose_context")
        structure: Ordering of the response parts
        format: Preferred output format
        feedback: How follow-up is invited
        subject_identification: Whether subject changes are announced
        marker_template: Marker text for a subject change; ``{topic}`` is
            replaced with the title-cased new subject
    """
    prioritize: str = 'direct_answer'
    eliminate: str = 'verbose_context'
    structure: str = 'answer_then_details'
    format: str = 'plain'
    feedback: str = 'none'
    subject_identification: bool = False
    marker_template: str = DEFAULT_MARKER_TEMPLATE

    def __post_init__(self):
        validate_non_empty_string(self.marker_template, 'marker_template')
        if TOPIC_PLACEHOLDER not in self.marker_template:
            raise ConfigurationError(
                f"marker_template must contain {TOPIC_PLACEHOLDER}, got {self.marker_template!r}",
                param='marker_template'
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Profile:
    """
    A named, prioritized configuration bundle.

    Attributes:
        name: Unique profile name
        priority: Merge precedence; lower values take precedence
        quantum_level: Level in (0, 3); decides expansion depth and how
            permissive confidence filtering is
        max_hop_distance: Hop cap for expansion (>= 1)
        merge_threshold: Minimum branch confidence for this profile's
            result to survive merging. None uses the engine default.
        kind: Audience the profile is tuned for
        protocols: Response shaping rules
    """
    name: str
    priority: int
    quantum_level: float = 2.89
    max_hop_distance: int = 2
    merge_threshold: Optional[float] = None
    kind: ProfileKind = ProfileKind.GENERAL
    protocols: ResponseProtocols = field(default_factory=ResponseProtocols)

    def __post_init__(self):
        validate_non_empty_string(self.name, 'name')
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ConfigurationError(
                f"priority must be an integer, got {type(self.priority).__name__}",
                param='priority', profile=self.name
            )
        validate_range(self.quantum_level, 'quantum_level', min_val=0.0, max_val=3.0,
                       inclusive=False)
        validate_positive_int(self.max_hop_distance, 'max_hop_distance')
        if self.merge_threshold is not None:
            validate_range(self.merge_threshold, 'merge_threshold', min_val=0.0, max_val=1.0)
        if not isinstance(self.kind, ProfileKind):
            raise ConfigurationError(f"kind must be a ProfileKind, got {self.kind!r}",
                                     param='kind', profile=self.name)

    @property
    def learn_strength(self) -> float:
        """Strength given to connections learned under this profile."""
        return min(1.0, self.quantum_level / LEVEL_CEILING)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'name': self.name,
            'priority': self.priority,
            'quantum_level': self.quantum_level,
            'max_hop_distance': self.max_hop_distance,
            'merge_threshold': self.merge_threshold,
            'kind': self.kind.value,
            'protocols': self.protocols.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Profile':
        """
        Create a Profile from a dictionary.

        ``kind`` may be given by value (``"social"``) or by member name
        (``"SOCIAL"``); ``protocols`` is a nested dictionary.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        data = dict(data)
        kind = data.pop('kind', ProfileKind.GENERAL)
        protocols = data.pop('protocols', None) or {}
        if not isinstance(kind, ProfileKind):
            try:
                kind = ProfileKind(str(kind).lower())
            except ValueError as e:
                raise ConfigurationError(f"Unknown profile kind: {kind!r}",
                                         param='kind', profile=data.get('name')) from e
        try:
            return cls(kind=kind, protocols=ResponseProtocols(**protocols), **data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid profile definition: {e}",
                                     profile=data.get('name')) from e


class ProfileRegistry:
    """
    Thread-safe collection of profiles, ordered by priority.

    Registration is administrative; processing only reads a snapshot
    taken once per call via :meth:`active_profiles`.
    """

    def __init__(self, profiles: Optional[Iterable[Profile]] = None):
        self._profiles: Dict[str, Profile] = {}
        self._lock = threading.Lock()
        for profile in profiles or ():
            self.register(profile)

    def register(self, profile: Profile) -> None:
        """
        Add a profile.

        Raises:
            RegistryMisconfigurationError: If the name is already registered.
        """
        with self._lock:
            if profile.name in self._profiles:
                raise RegistryMisconfigurationError(
                    f"Profile '{profile.name}' is already registered",
                    profile=profile.name
                )
            self._profiles[profile.name] = profile

    def unregister(self, name: str) -> bool:
        """Remove a profile. Returns True if it was registered."""
        with self._lock:
            return self._profiles.pop(name, None) is not None

    def active_profiles(self) -> Tuple[Profile, ...]:
        """Profiles sorted ascending by priority; ties keep registration order."""
        with self._lock:
            return tuple(sorted(self._profiles.values(), key=lambda p: p.priority))

    def profile_for(self, name: str) -> Optional[Profile]:
        """Look up a profile by name."""
        with self._lock:
            return self._profiles.get(name)

    def names(self) -> List[str]:
        """Profile names in priority order."""
        return [p.name for p in self.active_profiles()]

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, name: str) -> bool:
        return name in self._profiles


def default_profiles() -> List[Profile]:
    """
    The standard social and professional profiles.

    Returns:
        ``family_friends`` (priority 1, announces subject changes) and
        ``professional`` (priority 2).
    """
    return [
        Profile(
            name='family_friends',
            priority=1,
            quantum_level=2.89,
            max_hop_distance=2,
            kind=ProfileKind.SOCIAL,
            protocols=ResponseProtocols(
                prioritize='direct_answer',
                eliminate='verbose_context',
                structure='answer_then_details',
                format='conversational',
                feedback='invite_questions',
                subject_identification=True,
                marker_template='NEW_SUBJECT: {topic}',
            ),
        ),
        Profile(
            name='professional',
            priority=2,
            quantum_level=2.89,
            max_hop_distance=2,
            kind=ProfileKind.PROFESSIONAL,
            protocols=ResponseProtocols(
                prioritize='direct_answer',
                eliminate='speculation',
                structure='answer_then_details',
                format='structured',
                feedback='none',
                subject_identification=False,
            ),
        ),
    ]
