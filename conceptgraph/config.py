"""
Configuration Module
====================

Centralized configuration for the concept association engine.

The configuration couples two derived numbers through a fixed additive
relationship, ``derived_value = base_value + buffer_constant``, and bounds
a ``rate`` parameter. Construction only checks that the values are
structurally usable; repairing the additive relationship and clamping the
rate is the job of :mod:`conceptgraph.invariants`.

Example:
    from conceptgraph import ConceptProcessor, EngineConfig

    config = EngineConfig(base_value=2.5, derived_value=2.6)
    processor = ConceptProcessor(config=config)

    # Configs are immutable; derive new ones instead of mutating
    stricter = config.copy(strict=True)
"""

from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Optional

from .constants import DEFAULT_MERGE_THRESHOLD
from .errors import ConfigurationError
from .validation import validate_finite, validate_positive_int, validate_range


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration settings for the concept association engine.

    Attributes:
        base_value: Independent side of the additive invariant.
        derived_value: Dependent side; kept equal to
            ``base_value + buffer_constant`` when enforcement is on.
        buffer_constant: The additive buffer between the two values.
            Also scales edge confidence.
        enforce_invariant: Repair ``derived_value`` when the relationship
            drifts. When False, the values are left as given.
        strict: Tighten the repair tolerance from 1e-3 to 1e-5.

        rate: Rate parameter, clamped into ``[rate_min, rate_max]``.
        rate_min: Lower rate bound.
        rate_max: Upper rate bound.

        personality_factor: Multiplier applied to edge confidence (0-1].
        merge_threshold: Default minimum branch confidence a profile
            result needs to survive merging. Profiles may override it.
        top_concepts: Maximum number of concepts reported per result.
        learn_strength: Strength used when learning connections from
            text. None derives it from the top profile's level.
    """

    # Additive invariant
    base_value: float = 2.89
    derived_value: float = 2.99
    buffer_constant: float = 0.1
    enforce_invariant: bool = True
    strict: bool = False

    # Rate bounds
    rate: float = 0.1
    rate_min: float = 0.01
    rate_max: float = 0.1

    # Confidence and merging
    personality_factor: float = 0.7
    merge_threshold: float = DEFAULT_MERGE_THRESHOLD

    # Response assembly
    top_concepts: int = 5

    # Connection learning
    learn_strength: Optional[float] = None

    def __post_init__(self):
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate configuration values are structurally usable.

        Out-of-bounds ``rate`` and a drifted ``derived_value`` are NOT
        errors here; they are repaired by the invariant enforcer.

        Raises:
            ConfigurationError: If any configuration value is unusable.
        """
        validate_finite(self.base_value, 'base_value')
        validate_finite(self.derived_value, 'derived_value')
        validate_range(self.buffer_constant, 'buffer_constant', min_val=0.0)
        validate_finite(self.rate, 'rate')
        validate_finite(self.rate_min, 'rate_min')
        validate_finite(self.rate_max, 'rate_max')
        if self.rate_min > self.rate_max:
            raise ConfigurationError(
                f"rate_min ({self.rate_min}) must not exceed rate_max ({self.rate_max})",
                rate_min=self.rate_min, rate_max=self.rate_max
            )
        validate_range(self.personality_factor, 'personality_factor', min_val=0.0, max_val=1.0,
                       inclusive=True)
        if self.personality_factor == 0.0:
            raise ConfigurationError("personality_factor must be > 0.0, got 0.0",
                                     param='personality_factor')
        validate_range(self.merge_threshold, 'merge_threshold', min_val=0.0, max_val=1.0)
        validate_positive_int(self.top_concepts, 'top_concepts')
        if self.learn_strength is not None:
            validate_range(self.learn_strength, 'learn_strength', min_val=0.0, max_val=1.0)

    def copy(self, **overrides) -> 'EngineConfig':
        """
        Create a copy of this configuration, optionally overriding fields.

        Returns:
            A new EngineConfig instance.

        Raises:
            ConfigurationError: If an override names an unknown field or
                produces an unusable configuration.
        """
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration fields: {', '.join(sorted(unknown))}",
                fields=sorted(unknown)
            )
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """
        Create configuration from a dictionary.

        Args:
            data: Dictionary with configuration values.

        Returns:
            EngineConfig instance.

        Raises:
            ConfigurationError: On unknown keys or unusable values.
        """
        return cls().copy(**data)


def get_default_config() -> EngineConfig:
    """
    Get a new instance of the default configuration.

    Returns:
        EngineConfig with default values.
    """
    return EngineConfig()
