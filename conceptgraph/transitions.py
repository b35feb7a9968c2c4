"""
Transition Detection
====================

Flags adjacent concepts that share little vocabulary, so responses can
announce a change of subject.

Only profiles whose protocols request subject identification produce
transitions.
"""

from typing import List, Optional, Sequence

from .constants import TOPIC_PLACEHOLDER, TRANSITION_SIMILARITY_THRESHOLD
from .profiles import Profile
from .results import Transition


def concept_similarity(first: str, second: str) -> float:
    """
    Share of whitespace-delimited, lower-cased sub-words two concepts have in common.

    Returns:
        ``shared / max(word counts)``, or 0.0 if either concept is empty.
    """
    if not first or not second:
        return 0.0
    words1 = first.lower().split()
    words2 = second.lower().split()
    if not words1 or not words2:
        return 0.0
    shared = [word for word in words1 if word in words2]
    return len(shared) / max(len(words1), len(words2))


def topic_name(concept: str) -> str:
    """Title-case each word of a concept: ``"deep LEARNING"`` -> ``"Deep Learning"``."""
    if not concept:
        return "Unknown Topic"
    return ' '.join(word[:1].upper() + word[1:].lower() for word in concept.split())


class TransitionDetector:
    """Pure, stateless detection of subject changes between concepts."""

    def detect_transition(self, prev: str, curr: str, profile: Profile) -> Optional[str]:
        """
        Marker for a subject change from ``prev`` to ``curr``, if any.

        Args:
            prev: Earlier concept
            curr: Following concept
            profile: Profile whose protocols decide whether detection is on
                and which marker template is used

        Returns:
            Marker string, or None when detection is off or the concepts
            are similar enough.
        """
        if not profile.protocols.subject_identification:
            return None
        if concept_similarity(prev, curr) >= TRANSITION_SIMILARITY_THRESHOLD:
            return None
        return profile.protocols.marker_template.replace(TOPIC_PLACEHOLDER, topic_name(curr))

    def detect_all(self, concepts: Sequence[str], profile: Profile) -> List[Transition]:
        """Transitions for every adjacent pair of ``concepts``, in order."""
        if not profile.protocols.subject_identification:
            return []
        transitions = []
        for prev, curr in zip(concepts, concepts[1:]):
            marker = self.detect_transition(prev, curr, profile)
            if marker is not None:
                transitions.append(Transition(prev, curr, marker))
        return transitions
