# src/solid_agent/interfaces/__init__.py
from .store import ContextModel, ContextRecord, MessageRecord
from .broadcast import IBroadcaster
from .tool import ToolSchema
from .generation import (
    GenerationMessage,
    GenerationUsage,
    GenerationResponse,
    read_field,
    response_content,
)

__all__ = [
    "ContextModel",
    "ContextRecord",
    "MessageRecord",
    "IBroadcaster",
    "ToolSchema",
    "GenerationMessage",
    "GenerationUsage",
    "GenerationResponse",
    "read_field",
    "response_content",
]
