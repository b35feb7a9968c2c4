"""
Status reporting: configuration health and engine state.
"""

from typing import Any, Dict

from ..invariants import alignment_epsilon, deviation


class StatusMixin:
    """
    Status mixin for ConceptProcessor.

    Requires CoreMixin to be present.
    """

    def get_status(self) -> Dict[str, Any]:
        """
        Report the engine's current state.

        Returns:
            Dict with:
            - configuration: current configuration as a dict
            - deviation: drift of ``derived_value`` from ``base_value + buffer_constant``
            - epsilon: tolerance in effect
            - invariant_satisfied: deviation within tolerance
            - rate_within_bounds: rate inside ``[rate_min, rate_max]``
            - edge_count: edges in the store
            - concept_count: distinct concepts in the store
            - profiles: registered profile names in priority order
            - metrics_enabled: whether metrics are being collected
        """
        config = self.config
        drift = deviation(config)
        epsilon = alignment_epsilon(config)
        return {
            'configuration': config.to_dict(),
            'deviation': drift,
            'epsilon': epsilon,
            'invariant_satisfied': drift <= epsilon,
            'rate_within_bounds': config.rate_min <= config.rate <= config.rate_max,
            'edge_count': len(self.store),
            'concept_count': len(self.store.concepts()),
            'profiles': self.registry.names(),
            'metrics_enabled': self._metrics.enabled,
        }
