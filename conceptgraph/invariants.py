"""
Invariant Enforcement
=====================

Keeps ``derived_value == base_value + buffer_constant`` and keeps
``rate`` inside its bounds.

Drift is not an error: callers often adjust only one side of the
relationship, so the enforcer repairs ``derived_value`` and logs a
warning. Everything here is a pure function over an immutable
:class:`~conceptgraph.config.EngineConfig`; the input is never modified.

Example:
    enforcer = InvariantEnforcer()
    config = enforcer.validate(EngineConfig(base_value=1.0, derived_value=5.0))
    config.derived_value  # 1.1

    config = enforcer.adjust_parameter(config, base_value=3.0)
    config.derived_value  # 3.1
"""

import logging
from typing import Optional

from .config import EngineConfig
from .constants import ALIGNMENT_EPSILON, STRICT_ALIGNMENT_EPSILON

logger = logging.getLogger(__name__)


def alignment_epsilon(config: EngineConfig) -> float:
    """Tolerance used to decide whether the additive relationship has drifted."""
    return STRICT_ALIGNMENT_EPSILON if config.strict else ALIGNMENT_EPSILON


def deviation(config: EngineConfig) -> float:
    """Absolute drift of ``derived_value`` from ``base_value + buffer_constant``."""
    return abs(config.base_value + config.buffer_constant - config.derived_value)


class InvariantEnforcer:
    """
    Repairs configuration records so they satisfy the additive invariant.
    """

    def validate(self, config: EngineConfig) -> EngineConfig:
        """
        Return a corrected copy of ``config``.

        Repairs ``derived_value`` when enforcement is on and the drift
        exceeds the tolerance, then clamps ``rate`` into its bounds.

        Args:
            config: Configuration to check

        Returns:
            The same instance if nothing needed fixing, otherwise a new one.
        """
        changes = {}

        drift = deviation(config)
        if config.enforce_invariant and drift > alignment_epsilon(config):
            repaired = config.base_value + config.buffer_constant
            logger.warning(
                "Invariant drift %.6f: derived_value %s repaired to %s (base %s + buffer %s)",
                drift, config.derived_value, repaired, config.base_value, config.buffer_constant
            )
            changes['derived_value'] = repaired

        clamped = min(max(config.rate, config.rate_min), config.rate_max)
        if clamped != config.rate:
            logger.warning(
                "rate %s outside [%s, %s]; clamped to %s",
                config.rate, config.rate_min, config.rate_max, clamped
            )
            changes['rate'] = clamped

        if not changes:
            return config
        return config.copy(**changes)

    def adjust_parameter(
        self,
        config: EngineConfig,
        base_value: Optional[float] = None,
        derived_value: Optional[float] = None,
        buffer_constant: Optional[float] = None
    ) -> EngineConfig:
        """
        Change one side of the invariant and recompute the other.

        When several fields are given, ``base_value`` takes precedence over
        ``derived_value``, which takes precedence over ``buffer_constant``
        when deciding which field is recomputed:

        - base_value changed: ``derived = base + buffer``
        - derived_value changed: ``base = derived - buffer``
        - buffer_constant changed: ``derived = base + buffer``

        With enforcement off, the given fields are applied as-is.

        Args:
            config: Current configuration
            base_value: New base value
            derived_value: New derived value
            buffer_constant: New buffer constant

        Returns:
            Validated configuration.

        Raises:
            ConfigurationError: If the resulting values are unusable. The
                input configuration is unaffected.
        """
        buffer = config.buffer_constant if buffer_constant is None else buffer_constant
        changes = {}
        if buffer_constant is not None:
            changes['buffer_constant'] = buffer_constant

        if not config.enforce_invariant:
            if base_value is not None:
                changes['base_value'] = base_value
            if derived_value is not None:
                changes['derived_value'] = derived_value
        elif base_value is not None:
            changes['base_value'] = base_value
            changes['derived_value'] = base_value + buffer
        elif derived_value is not None:
            changes['derived_value'] = derived_value
            changes['base_value'] = derived_value - buffer
        elif buffer_constant is not None:
            changes['derived_value'] = config.base_value + buffer

        if not changes:
            return self.validate(config)
        return self.validate(config.copy(**changes))
