"""
Concept Processor - Main processor package.

The processor is split into focused modules:
- core.py: Initialization, shared components, metrics access
- config_api.py: Configuration updates and invariant-aware adjustments
- pipeline.py: The ``process`` entry point, its stages, and learning
- status.py: Engine status reporting

The ConceptProcessor class is composed from mixins in each module.
"""

from .core import CoreMixin
from .config_api import ConfigMixin
from .pipeline import PipelineMixin
from .status import StatusMixin


class ConceptProcessor(
    CoreMixin,
    ConfigMixin,
    PipelineMixin,
    StatusMixin
):
    """
    Concept association engine.

    This class provides a complete API for:
    - Turning text into a summary of its strongest concept associations
    - Learning associations from text into a shared store
    - Validated, all-or-nothing configuration updates
    - Status and metrics reporting

    Example:
        >>> from conceptgraph import ConceptProcessor
        >>> processor = ConceptProcessor()
        >>> processor.learn("neural networks learn patterns")
        >>> result = processor.process("neural networks")
        >>> print(result.summary)

    The processor is composed from focused mixins:
    - CoreMixin: Initialization, metrics
    - ConfigMixin: Configuration updates
    - PipelineMixin: Processing and learning
    - StatusMixin: Status reporting
    """
    pass


__all__ = ['ConceptProcessor']
