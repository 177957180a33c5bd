# src/solid_agent/interfaces/generation.py
from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping key or an attribute."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def response_content(response: Any) -> str | None:
    """Return ``response.message.content`` (attribute or mapping access), or None."""
    return read_field(read_field(response, "message"), "content")


@dataclass
class GenerationMessage:
    """Message returned by a model invocation."""
    content: str | None
    role: str = "assistant"


@dataclass
class GenerationUsage:
    """Token usage reported for one invocation."""
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class GenerationResponse:
    """
    Raw response of one model invocation.

    Generators may return any object exposing ``message.content``; this
    dataclass is the shape the bundled models know how to record.
    """
    message: GenerationMessage | None = None
    model: str | None = None
    usage: GenerationUsage | None = None
    finish_reason: str | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)
