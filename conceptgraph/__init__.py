"""
Concept Graph Package
=====================

A small concept-association engine: turns text into a weighted graph of
token relationships, prunes it by confidence, and merges the results of
several prioritized profiles into a short answer.

Example:
    from conceptgraph import ConceptProcessor

    processor = ConceptProcessor()
    processor.learn("neural networks learn patterns from data")
    result = processor.process("neural networks")
    print(result.summary)
"""

from .config import EngineConfig, get_default_config
from .edges import Edge
from .errors import ConfigurationError, EngineError, RegistryMisconfigurationError
from .tokenizer import ConceptExtractor
from .store import AssociationStore
from .invariants import InvariantEnforcer
from .expansion import ExpansionEngine
from .risk import RiskFilter
from .profiles import (
    Profile,
    ProfileKind,
    ProfileRegistry,
    ResponseProtocols,
    default_profiles,
)
from .results import (
    AssembledResponse,
    ExpansionResult,
    MergedResult,
    ProcessingResult,
    Transition,
)
from .transitions import TransitionDetector
from .merge import Merger
from .response import ResponseAssembler
from .processor import ConceptProcessor
from .async_api import AsyncProcessor
from .loader import (
    config_from_dict,
    config_from_env,
    load_config,
    load_profiles,
    profiles_from_dict,
)
from .observability import MetricsCollector

__version__ = "0.1.0"
__all__ = [
    "ConceptProcessor",
    "AsyncProcessor",
    "EngineConfig",
    "get_default_config",
    "Edge",
    "EngineError",
    "ConfigurationError",
    "RegistryMisconfigurationError",
    "ConceptExtractor",
    "AssociationStore",
    "InvariantEnforcer",
    "ExpansionEngine",
    "RiskFilter",
    "Profile",
    "ProfileKind",
    "ProfileRegistry",
    "ResponseProtocols",
    "default_profiles",
    "Transition",
    "ExpansionResult",
    "MergedResult",
    "AssembledResponse",
    "ProcessingResult",
    "TransitionDetector",
    "Merger",
    "ResponseAssembler",
    "config_from_dict",
    "config_from_env",
    "load_config",
    "load_profiles",
    "profiles_from_dict",
    "MetricsCollector",
]
