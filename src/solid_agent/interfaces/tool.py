# src/solid_agent/interfaces/tool.py
from __future__ import annotations
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field


def _empty_parameters() -> dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


class ToolSchema(BaseModel):
    """JSON Schema for a function-calling tool. Unknown keys (``strict``...) are kept."""
    model_config = ConfigDict(extra="allow")

    type: Literal["function"] = "function"
    name: str
    description: str = ""
    parameters: dict[str, Any] = Field(default_factory=_empty_parameters)  # JSON Schema format
