"""Domain errors shared by every concern."""

from solid_agent.domain.exceptions import (
    ErrorCode,
    SolidAgentError,
    ConfigurationError,
    ContextConfigurationError,
    ContextNotConfigured,
    ModelResolutionError,
    GeneratorNotConfigured,
    ContextNotLoaded,
    RecordNotFound,
)

__all__ = [
    "ErrorCode",
    "SolidAgentError",
    "ConfigurationError",
    "ContextConfigurationError",
    "ContextNotConfigured",
    "ModelResolutionError",
    "GeneratorNotConfigured",
    "ContextNotLoaded",
    "RecordNotFound",
]
