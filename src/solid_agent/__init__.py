"""
solid_agent: persisted contexts, tool schemas and live tool status for agents.

Example:
    >>> from solid_agent import Agent, HasContext, HasTools, StreamsToolUpdates, has_context
    >>>
    >>> @has_context(contextable="document")
    ... class WritingAssistantAgent(HasContext, HasTools, StreamsToolUpdates, Agent):
    ...     def improve(self):
    ...         self.prompt(messages=[{"role": "user", "content": self.params["text"]}])
"""

from solid_agent.concerns import (
    ContextConfig,
    HasContext,
    HasTools,
    ModelNames,
    NamedContext,
    StreamsToolUpdates,
    has_context,
    has_tools,
    tool_description,
)
from solid_agent.agent import Agent
from solid_agent.domain.exceptions import (
    ContextConfigurationError,
    ContextNotConfigured,
    ContextNotLoaded,
    GeneratorNotConfigured,
    ModelResolutionError,
    RecordNotFound,
    SolidAgentError,
)
from solid_agent.tools import ToolBuilder

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "ContextConfig",
    "HasContext",
    "HasTools",
    "ModelNames",
    "NamedContext",
    "StreamsToolUpdates",
    "has_context",
    "has_tools",
    "tool_description",
    "ToolBuilder",
    "SolidAgentError",
    "ContextConfigurationError",
    "ContextNotConfigured",
    "ContextNotLoaded",
    "GeneratorNotConfigured",
    "ModelResolutionError",
    "RecordNotFound",
]
