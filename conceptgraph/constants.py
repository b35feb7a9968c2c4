"""
Centralized constants for the concept association engine.

Single source of truth for the numeric constants shared by the
expansion, filtering, transition and response modules.
"""

from typing import FrozenSet

# =============================================================================
# CONCEPT EXTRACTION
# =============================================================================

# Compared case-insensitively; extracted tokens keep their original casing.
STOP_WORDS: FrozenSet[str] = frozenset({
    'the', 'and', 'or', 'a', 'an', 'in', 'on', 'at', 'to', 'for',
})


# =============================================================================
# INVARIANT ENFORCEMENT
# =============================================================================

ALIGNMENT_EPSILON: float = 1e-3
STRICT_ALIGNMENT_EPSILON: float = 1e-5


# =============================================================================
# EXPANSION AND CONFIDENCE
# =============================================================================

LEVEL_CEILING: float = 2.99

# Minimum level required to reach each hop beyond the first
SECONDARY_HOP_LEVEL: float = 2.0
TERTIARY_HOP_LEVEL: float = 2.9
MAX_EXPANSION_HOPS: int = 3

HOP_DECAY_BASE: float = 0.8

CONFIDENCE_NORMALIZER: float = 10.0
CAPACITY_RATE: float = 0.1

# Default minimum mean branch confidence. A branch of edges learned at the
# default strength, reaching two hops, scores about 0.55.
DEFAULT_MERGE_THRESHOLD: float = 0.4


# =============================================================================
# TRANSITIONS AND RESPONSES
# =============================================================================

TRANSITION_SIMILARITY_THRESHOLD: float = 0.3
TOPIC_PLACEHOLDER: str = '{topic}'
DEFAULT_MARKER_TEMPLATE: str = 'Subject change: {topic}'

NO_ASSOCIATIONS_SUMMARY: str = 'No associations found.'

# Answer tone by personality factor: below RESERVED the answer is stripped
# of pleasantries, from EXPRESSIVE on it is prefixed.
RESERVED_PERSONALITY: float = 0.3
EXPRESSIVE_PERSONALITY: float = 0.6
EXPRESSIVE_PREFIX: str = 'Based on concept association analysis: '
PLEASANTRIES: FrozenSet[str] = frozenset({'please', 'sorry', 'thank you'})
