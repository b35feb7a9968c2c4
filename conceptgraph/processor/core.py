"""
Core processor functionality: initialization, shared components, and metrics.

This module contains the base mixin that all other processor mixins
depend on. The store and profile registry are injected; when omitted, a
fresh store and a registry holding the default profiles are created for
this processor alone.
"""

import logging
import threading
from typing import Any, Dict, Optional

from ..config import EngineConfig
from ..expansion import ExpansionEngine
from ..invariants import InvariantEnforcer
from ..observability import MetricsCollector
from ..profiles import ProfileRegistry, default_profiles
from ..risk import RiskFilter
from ..store import AssociationStore
from ..tokenizer import ConceptExtractor
from ..transitions import TransitionDetector

logger = logging.getLogger(__name__)


class CoreMixin:
    """
    Core mixin providing initialization and metrics access.
    """

    def __init__(
        self,
        store: Optional[AssociationStore] = None,
        registry: Optional[ProfileRegistry] = None,
        config: Optional[EngineConfig] = None,
        extractor: Optional[ConceptExtractor] = None,
        enable_metrics: bool = False
    ):
        """
        Initialize the concept processor.

        Args:
            store: Shared association store. Defaults to a new empty store.
            registry: Profile registry. Defaults to the standard profiles.
            config: Engine configuration. Validated (and repaired) before use.
            extractor: Custom concept extractor.
            enable_metrics: Enable timing and metrics collection for observability.
        """
        self.store = store if store is not None else AssociationStore()
        self.registry = registry if registry is not None else ProfileRegistry(default_profiles())
        self.extractor = extractor or ConceptExtractor()
        self.enforcer = InvariantEnforcer()
        self.config = self.enforcer.validate(config or EngineConfig())
        # Serializes read-modify-write of self.config
        self._config_lock = threading.Lock()

        self.expansion = ExpansionEngine(self.store)
        self.risk_filter = RiskFilter()
        self.transition_detector = TransitionDetector()

        # Observability: metrics collection
        self._metrics = MetricsCollector(enabled=enable_metrics)

    def get_metrics(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all collected metrics.

        Returns:
            Dict mapping operation names to their statistics
            (count, total_ms, avg_ms, min_ms, max_ms)

        Example:
            >>> processor = ConceptProcessor(enable_metrics=True)
            >>> processor.process("neural networks")
            >>> metrics = processor.get_metrics()
            >>> print(f"process: {metrics['process']['avg_ms']:.2f}ms")
        """
        return self._metrics.get_all_stats()

    def get_metrics_summary(self) -> str:
        """Get a human-readable summary of all metrics."""
        return self._metrics.get_summary()

    def reset_metrics(self) -> None:
        """Clear all collected metrics."""
        self._metrics.reset()

    def enable_metrics(self) -> None:
        """Enable metrics collection."""
        self._metrics.enable()

    def disable_metrics(self) -> None:
        """Disable metrics collection."""
        self._metrics.disable()

    def record_metric(self, metric_name: str, count: int = 1) -> None:
        """
        Record a custom count metric.

        Args:
            metric_name: Name of the metric
            count: Count to add (default 1)
        """
        self._metrics.record_count(metric_name, count)
