"""
Database models for agent contexts.

Importing this package registers the three tables on SQLModel metadata and
fills ``default_model_registry`` with them.
"""

from solid_agent.infrastructure.database.registry import ModelRegistry

from .mixins import (
    ContextableRef,
    ContextRecordMixin,
    GenerationRecordMixin,
    MessageRecordMixin,
    MessageRole,
)
from .message import AgentMessage
from .generation import AgentGeneration
from .context import AgentContext

default_model_registry = ModelRegistry()
default_model_registry.register(AgentContext)
default_model_registry.register(AgentMessage)
default_model_registry.register(AgentGeneration)

__all__ = [
    "AgentContext",
    "ContextableRef",
    "AgentMessage",
    "MessageRole",
    "AgentGeneration",
    "ContextRecordMixin",
    "MessageRecordMixin",
    "GenerationRecordMixin",
    "default_model_registry",
]
