"""
Capabilities an agent class opts into by inheritance.

- HasContext: persisted, named conversation contexts
- HasTools: function-calling tool schemas
- StreamsToolUpdates: live status lines for tool calls
"""

from solid_agent.concerns.has_context import (
    ContextConfig,
    ContextHandles,
    ContextSlot,
    EnsureContextExists,
    HasContext,
    NamedContext,
    has_context,
)
from solid_agent.concerns.has_tools import HasTools, has_tools
from solid_agent.concerns.naming import ModelNames
from solid_agent.concerns.streams_tool_updates import StreamsToolUpdates, tool_description

__all__ = [
    "ContextConfig",
    "ContextHandles",
    "ContextSlot",
    "EnsureContextExists",
    "HasContext",
    "NamedContext",
    "has_context",
    "HasTools",
    "has_tools",
    "ModelNames",
    "StreamsToolUpdates",
    "tool_description",
]
