"""Database connection, base model and context tables."""
from .connection import DatabaseManager, db
from .base_model import ActiveRecordMixin, BaseModel
from .registry import ModelRegistry
from .models import (
    AgentContext,
    AgentGeneration,
    AgentMessage,
    ContextableRef,
    ContextRecordMixin,
    GenerationRecordMixin,
    MessageRecordMixin,
    MessageRole,
    default_model_registry,
)

__all__ = [
    "DatabaseManager",
    "db",
    "ActiveRecordMixin",
    "BaseModel",
    "ModelRegistry",
    "AgentContext",
    "AgentGeneration",
    "AgentMessage",
    "ContextableRef",
    "ContextRecordMixin",
    "GenerationRecordMixin",
    "MessageRecordMixin",
    "MessageRole",
    "default_model_registry",
]
