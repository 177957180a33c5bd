# tests/factories/fixtures.py
"""
Fixtures for building agents on top of the in-memory store.

Loaded via pytest_plugins in conftest.py.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import pytest

from solid_agent.infrastructure.broadcast import InMemoryBroadcaster
from solid_agent.infrastructure.database.registry import ModelRegistry
from solid_agent.interfaces.generation import GenerationMessage, GenerationResponse, GenerationUsage
from tests.factories.fakes import FakeGeneration, FakeMessage, make_context_model


@dataclass(frozen=True)
class Owner:
    """Domain entity owning contexts (a user, a document...)."""
    id: int
    name: str = "owner"


@pytest.fixture
def context_model() -> type:
    """Fresh in-memory context model registered as AgentContext."""
    return make_context_model("AgentContext")


@pytest.fixture
def model_registry(context_model: type) -> ModelRegistry:
    """
    Registry resolving the default model names to in-memory fakes.

    Usage:
        class ChatAgent(HasContext, Agent):
            pass
        ChatAgent.model_registry = model_registry
    """
    return ModelRegistry({
        "AgentContext": context_model,
        "AgentMessage": FakeMessage,
        "AgentGeneration": FakeGeneration,
    })


@pytest.fixture
def broadcaster() -> InMemoryBroadcaster:
    return InMemoryBroadcaster()


@pytest.fixture
def owner() -> Owner:
    return Owner(id=42, name="Ada")


@pytest.fixture
def make_response() -> Callable[..., GenerationResponse]:
    """
    Build generation responses.

    Usage:
        response = make_response("Hello!", input_tokens=10, output_tokens=5)
    """

    def _make(content: Any = "Hello!", input_tokens: int = 10, output_tokens: int = 5) -> GenerationResponse:
        return GenerationResponse(
            message=GenerationMessage(content=content),
            model="test-model",
            usage=GenerationUsage(input_tokens=input_tokens, output_tokens=output_tokens),
            finish_reason="stop",
            raw_response={"id": "resp-1"},
        )

    return _make


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    path = tmp_path / "templates"
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def write_tool_json(templates_dir: Path) -> Callable[..., Path]:
    """
    Write a tool schema template.

    Usage:
        write_tool_json("research_agent", "navigate", {"name": "navigate", ...})
        write_tool_json("research_agent", "broken", raw="not json")
    """

    def _write(agent_dir: str, tool: str, schema: dict | None = None, raw: str | None = None) -> Path:
        path = templates_dir / agent_dir / "tools" / f"{tool}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        if raw is None:
            raw = json.dumps(schema if schema is not None else {
                "type": "function",
                "name": tool,
                "description": f"{tool} tool",
                "parameters": {"type": "object", "properties": {}, "required": []},
            })
        path.write_text(raw, encoding="utf-8")
        return path

    return _write
