"""
Processing pipeline: the ``process`` entry point and connection learning.

One call runs the stages in order:

    validate config -> extract concepts -> per profile:
    expand -> filter -> detect transitions -> merge -> assemble

The per-profile stage only reads the store and call-local state, so
:class:`~conceptgraph.async_api.AsyncProcessor` can run it for several
profiles at once and hand the results to :meth:`finalize`.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..config import EngineConfig
from ..edges import Edge
from ..errors import RegistryMisconfigurationError
from ..merge import Merger
from ..observability import timed
from ..profiles import Profile
from ..response import ResponseAssembler
from ..results import ExpansionResult, ProcessingResult, Transition
from ..risk import edge_confidence

logger = logging.getLogger(__name__)


class PipelineMixin:
    """
    Processing mixin for ConceptProcessor.

    Requires CoreMixin to be present.
    """

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def validated_config(self) -> EngineConfig:
        """
        Re-validate the current configuration before a call.

        Repairs are kept, so later calls see the repaired configuration.
        """
        with self._config_lock:
            validated = self.enforcer.validate(self.config)
            if validated is not self.config:
                self.config = validated
        return validated

    def select_profiles(self, profile_override: Optional[str] = None) -> Tuple[Profile, ...]:
        """
        Snapshot the profiles a call runs under.

        Args:
            profile_override: Run under this profile only

        Returns:
            Profiles in priority order.

        Raises:
            RegistryMisconfigurationError: If no profiles are registered or
                the override names an unknown profile.
        """
        if profile_override is not None:
            profile = self.registry.profile_for(profile_override)
            if profile is None:
                raise RegistryMisconfigurationError(
                    f"Unknown profile override: '{profile_override}'",
                    profile=profile_override,
                    available=self.registry.names()
                )
            return (profile,)

        profiles = self.registry.active_profiles()
        if not profiles:
            raise RegistryMisconfigurationError("No profiles registered")
        return profiles

    def run_profile(
        self,
        profile: Profile,
        concepts: Sequence[str],
        config: EngineConfig
    ) -> ExpansionResult:
        """
        Expand, filter and detect transitions under one profile.

        Args:
            profile: Profile driving the pass
            concepts: Seed concepts in text order
            config: Validated configuration for this call

        Returns:
            ExpansionResult for the profile.
        """
        expanded = self.expansion.expand(concepts, profile.quantum_level, profile.max_hop_distance)
        kept = self.risk_filter.filter(
            expanded, profile.quantum_level, config.personality_factor, config.buffer_constant
        )
        transitions = self.transition_detector.detect_all(concepts, profile)
        logger.debug(
            "Profile '%s': %d expanded, %d kept, %d transitions",
            profile.name, len(expanded), len(kept), len(transitions)
        )
        return ExpansionResult(
            profile=profile,
            concepts=list(concepts),
            edges=kept,
            transitions=transitions
        )

    def finalize(self, results: Sequence[ExpansionResult], config: EngineConfig) -> ProcessingResult:
        """
        Merge profile results and assemble the response.

        Args:
            results: One ExpansionResult per profile
            config: Configuration the results were produced under

        Returns:
            ProcessingResult for the call.
        """
        merger = Merger(
            lambda edge: edge_confidence(edge, config.personality_factor, config.buffer_constant),
            default_threshold=config.merge_threshold
        )
        merged = merger.merge(results)

        assembled = ResponseAssembler(
            top_n=config.top_concepts, personality_factor=config.personality_factor
        ).assemble(
            merged, self._lead_transitions(results, merged.active_profiles)
        )
        return ProcessingResult(
            summary=assembled.summary,
            details=assembled.details,
            top_concepts=assembled.top_concepts,
            edge_count=assembled.edge_count,
            configuration=config,
            active_profiles=list(merged.active_profiles)
        )

    @staticmethod
    def _lead_transitions(
        results: Sequence[ExpansionResult],
        active_profiles: Sequence[str]
    ) -> List[Transition]:
        """Transitions of the highest-priority profile that survived merging."""
        if not active_profiles:
            return []
        for result in results:
            if result.profile.name == active_profiles[0]:
                return list(result.transitions)
        return []

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    @timed("process", include_args=True)
    def process(self, raw_input: Any, profile_override: Optional[str] = None) -> ProcessingResult:
        """
        Turn text into a summary of its strongest associations.

        Args:
            raw_input: Text to process. Non-string input is treated as text
                without concepts.
            profile_override: Run under this profile only

        Returns:
            ProcessingResult with summary, details, top concepts, edge count
            and the configuration used.

        Raises:
            RegistryMisconfigurationError: If no profiles are registered or
                the override names an unknown profile.

        Example:
            >>> processor = ConceptProcessor()
            >>> processor.learn("neural networks learn patterns")
            >>> result = processor.process("neural networks")
            >>> result.top_concepts
        """
        config = self.validated_config()
        profiles = self.select_profiles(profile_override)
        concepts = self.extractor.extract(raw_input)

        results = [self.run_profile(profile, concepts, config) for profile in profiles]
        return self.finalize(results, config)

    @timed("learn")
    def learn(self, text: Any, strength: Optional[float] = None) -> List[Edge]:
        """
        Store a connection between each pair of adjacent concepts in text.

        Args:
            text: Text to learn from; non-string input learns nothing
            strength: Strength of the new edges. Defaults to the configured
                ``learn_strength``, else the top-priority profile's level
                relative to the level ceiling.

        Returns:
            The edges added to the store.

        Raises:
            ValueError: If strength is outside [0, 1]
            RegistryMisconfigurationError: If a default strength is needed
                and no profiles are registered.
        """
        concepts = self.extractor.extract(text)
        if len(concepts) < 2:
            return []

        if strength is None:
            strength = self.config.learn_strength
        if strength is None:
            strength = self.select_profiles()[0].learn_strength

        added = self.store.link_sequence(concepts, strength)
        self._metrics.record_count("edges_learned", len(added))
        logger.debug("Learned %d edges from %d concepts", len(added), len(concepts))
        return added
