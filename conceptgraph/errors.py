"""
Exception classes for the concept association engine.

All exceptions carry a human-readable message plus optional context so
they can be rendered as JSON error payloads by display layers.
"""

from typing import Any, Dict


class EngineError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, **context):
        """
        Initialize engine error with message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context for debugging (must be JSON-serializable)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to JSON-serializable dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context
        }


class ConfigurationError(EngineError, ValueError):
    """Configuration cannot be constructed or repaired (non-finite values, inverted bounds)."""
    pass


class RegistryMisconfigurationError(EngineError):
    """No profiles registered, duplicate profile name, or unknown profile override."""
    pass
