"""
Exception hierarchy for solid_agent.

All exceptions inherit from SolidAgentError which provides:
- error_code: Machine-readable error code (from ErrorCode enum)
- message: Human-readable error message
- details: Optional dictionary with additional context

Usage:
    from solid_agent.domain.exceptions import ContextNotLoaded

    # Raise with default message
    raise ContextNotLoaded()

    # Raise with custom message and context
    raise ContextNotLoaded(
        "No conversation loaded. Call load_conversation or create_conversation first.",
        details={"context_name": "conversation"},
    )

Only the generation persistence hook recovers locally from errors; everything
raised here is meant to reach the caller.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONTEXT_NOT_CONFIGURED = "CONTEXT_NOT_CONFIGURED"
    MODEL_NOT_RESOLVED = "MODEL_NOT_RESOLVED"
    GENERATOR_NOT_CONFIGURED = "GENERATOR_NOT_CONFIGURED"

    # Runtime state
    CONTEXT_NOT_LOADED = "CONTEXT_NOT_LOADED"

    # Store
    NOT_FOUND = "NOT_FOUND"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class SolidAgentError(Exception):
    """
    Base exception for all solid_agent errors.

    Attributes:
        error_code: Machine-readable error code (from ErrorCode enum)
        message: Human-readable error message
        details: Optional dictionary with additional error context
    """

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code.value}, "
            f"message={self.message!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary with error information
        """
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        return result


# ========================================
# Configuration Errors
# ========================================


class ConfigurationError(SolidAgentError):
    """Base class for class-level configuration errors."""

    error_code = ErrorCode.CONFIGURATION_ERROR
    default_message = "Agent configuration is invalid"


class ContextConfigurationError(ConfigurationError):
    """A context declaration cannot be applied to the agent class."""

    default_message = "Context declaration is invalid"


class ContextNotConfigured(ConfigurationError):
    """A context operation was used for a name that was never declared."""

    error_code = ErrorCode.CONTEXT_NOT_CONFIGURED
    default_message = "No context configured. Declare one with declare_context first."


class ModelResolutionError(ConfigurationError, LookupError):
    """A configured model class name could not be resolved to a class."""

    error_code = ErrorCode.MODEL_NOT_RESOLVED
    default_message = "Model class could not be resolved"


class GeneratorNotConfigured(ConfigurationError):
    """generate_now was called on an agent without a generator."""

    error_code = ErrorCode.GENERATOR_NOT_CONFIGURED
    default_message = "No generator configured for this agent"


# ========================================
# Runtime Errors
# ========================================


class ContextNotLoaded(SolidAgentError):
    """A message was appended before any context was loaded or created."""

    error_code = ErrorCode.CONTEXT_NOT_LOADED
    default_message = "No context loaded. Call load_context or create_context first."


class RecordNotFound(SolidAgentError, LookupError):
    """The store has no record with the requested identifier."""

    error_code = ErrorCode.NOT_FOUND
    default_message = "Record not found"
