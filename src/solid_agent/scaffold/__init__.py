"""Agent and context scaffolding used by the generate_* scripts."""

from solid_agent.scaffold.agent import agent_class_name, render_agent_module, write_agent
from solid_agent.scaffold.context import (
    ContextNames,
    find_head_revision,
    render_context_migration,
    render_context_models,
    render_context_usage,
    write_context_migration,
    write_context_models,
)

__all__ = [
    "agent_class_name",
    "render_agent_module",
    "write_agent",
    "ContextNames",
    "find_head_revision",
    "render_context_migration",
    "render_context_models",
    "render_context_usage",
    "write_context_migration",
    "write_context_models",
]
