"""Tool status lines and the events that carry them."""

from solid_agent.streaming.descriptions import (
    DEFAULT_DESCRIPTIONS,
    default_tool_description,
    truncate_url,
)
from solid_agent.streaming.events import ToolStatus, ToolStatusEvent

__all__ = [
    "DEFAULT_DESCRIPTIONS",
    "default_tool_description",
    "truncate_url",
    "ToolStatus",
    "ToolStatusEvent",
]
