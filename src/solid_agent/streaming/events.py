"""
Tool status event published while a tool runs.
"""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ToolStatus(BaseModel):
    """Status of one tool call."""
    name: str = Field(..., description="Tool name")
    description: str = Field(..., description="Human-readable status line")
    timestamp: datetime = Field(default_factory=_now, description="When the tool was called")


class ToolStatusEvent(BaseModel):
    """Payload published to a stream: ``{"tool_status": {...}}``."""
    tool_status: ToolStatus

    @classmethod
    def for_tool(cls, name: str, description: str) -> "ToolStatusEvent":
        return cls(tool_status=ToolStatus(name=name, description=description))

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready mapping with an ISO-8601 timestamp."""
        return self.model_dump(mode="json")
