"""
Configuration updates: whole-config overrides and invariant-aware adjustments.

Every update is validated in full before it replaces the current
configuration, so a rejected update leaves the processor exactly as it was.
"""

import logging
from typing import Optional

from ..config import EngineConfig
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigMixin:
    """
    Configuration mixin for ConceptProcessor.

    Requires CoreMixin to be present (provides ``config``, ``enforcer``
    and ``_config_lock``).
    """

    def get_config(self) -> EngineConfig:
        """Current, validated configuration."""
        return self.config

    def set_config(self, config: EngineConfig) -> EngineConfig:
        """
        Replace the configuration.

        Args:
            config: New configuration; repaired by the invariant enforcer

        Returns:
            The configuration now in effect.
        """
        if not isinstance(config, EngineConfig):
            raise ConfigurationError(
                f"config must be an EngineConfig, got {type(config).__name__}"
            )
        validated = self.enforcer.validate(config)
        with self._config_lock:
            self.config = validated
        return validated

    def update_config(self, **overrides) -> EngineConfig:
        """
        Apply configuration overrides all at once.

        Args:
            **overrides: EngineConfig field values

        Returns:
            The configuration now in effect.

        Raises:
            ConfigurationError: On unknown fields or unusable values. The
                previous configuration stays in effect.

        Example:
            >>> processor.update_config(rate=0.5)  # clamped to rate_max
            >>> processor.config.rate
            0.1
        """
        with self._config_lock:
            previous = self.config
            try:
                updated = self.enforcer.validate(previous.copy(**overrides))
            except ConfigurationError:
                logger.warning("Configuration update rejected: %s", sorted(overrides))
                raise
            self.config = updated
        logger.info("Configuration updated: %s", sorted(overrides))
        return updated

    def adjust_parameter(
        self,
        base_value: Optional[float] = None,
        derived_value: Optional[float] = None,
        buffer_constant: Optional[float] = None
    ) -> EngineConfig:
        """
        Change one side of the additive invariant and recompute the other.

        See :meth:`InvariantEnforcer.adjust_parameter` for precedence rules.

        Returns:
            The configuration now in effect.

        Raises:
            ConfigurationError: If the adjusted values are unusable. The
                previous configuration stays in effect.
        """
        with self._config_lock:
            updated = self.enforcer.adjust_parameter(
                self.config,
                base_value=base_value,
                derived_value=derived_value,
                buffer_constant=buffer_constant
            )
            self.config = updated
        return updated
