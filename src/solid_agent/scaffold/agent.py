"""
Agent scaffolding.

Writes an agent module whose class mixes in the selected concerns, and
creates the agent's tool template directory when tools are enabled.

Example:
    >>> write_agent(Path("app/agents"), Path("templates"), "research", tools=True)
    [PosixPath('app/agents/research_agent.py'), PosixPath('templates/research_agent/tools')]
"""

from __future__ import annotations
from pathlib import Path
from typing import Sequence

from solid_agent.concerns.naming import camelize, underscore
from solid_agent.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PARENT = "Agent"


def agent_class_name(name: str) -> str:
    """
    research, Research, research_agent and ResearchAgent all give ResearchAgent.
    """
    base = camelize(underscore(str(name)))
    if base.endswith("Agent") and base != "Agent":
        base = base[: -len("Agent")]
    return f"{base}Agent"


def _parent_import(parent: str) -> tuple[str | None, str]:
    """Split ``package.module.Class`` or ``package.module:Class`` into module and class."""
    if ":" in parent:
        module, _, name = parent.partition(":")
        return module, name
    if "." in parent:
        module, _, name = parent.rpartition(".")
        return module, name
    return None, parent


def render_agent_module(
    name: str,
    context: bool = True,
    tools: bool = False,
    streaming: bool = False,
    actions: Sequence[str] = ("perform",),
    parent: str = DEFAULT_PARENT,
) -> str:
    """Python source of the agent module."""
    class_name = agent_class_name(name)
    parent_module, parent_name = _parent_import(parent)

    concerns = []
    if context:
        concerns.append("HasContext")
    if tools:
        concerns.append("HasTools")
    if streaming:
        concerns.append("StreamsToolUpdates")

    decorators = []
    if tools:
        decorators.append("has_tools")
    if context:
        decorators.append("has_context")

    solid_agent_names = concerns + decorators
    if parent_module is None:
        solid_agent_names.append(parent_name)

    lines = [f'"""{class_name}."""', ""]
    if parent_module is not None:
        lines.append(f"from {parent_module} import {parent_name}")
    lines.append(f"from solid_agent import {', '.join(sorted(solid_agent_names))}")
    lines.append("from solid_agent.infrastructure.observability.logging import get_logger")
    lines += ["", "logger = get_logger(__name__)", "", ""]

    lines += [f"@{decorator}()" for decorator in decorators]
    lines.append(f"class {class_name}({', '.join(concerns + [parent_name])}):")
    if streaming:
        lines.append('    # Describe tool calls with @tool_description("<tool>", "Working...") once the tool methods exist')

    prompt_args = ['messages=[{"role": "user", "content": self.params.get("content", "")}]']
    if tools:
        prompt_args.append("tools=self.tools()")

    for action in actions:
        lines += [
            "",
            f"    def {action}(self):",
            f'        logger.info("action_called", agent="{class_name}", action="{action}")',
            "        self.prompt(",
        ]
        lines += [f"            {arg}," for arg in prompt_args]
        lines.append("        )")

    return "\n".join(lines) + "\n"


def agent_module_path(agents_path: Path, name: str) -> Path:
    return Path(agents_path) / f"{underscore(agent_class_name(name))}.py"


def write_agent(
    agents_path: Path,
    templates_path: Path,
    name: str,
    context: bool = True,
    tools: bool = False,
    streaming: bool = False,
    actions: Sequence[str] = ("perform",),
    parent: str = DEFAULT_PARENT,
    overwrite: bool = False,
) -> list[Path]:
    """
    Write the agent module and, with ``tools``, its tool template directory.

    Raises:
        FileExistsError: If the module exists and ``overwrite`` is False
        ValueError: If ``actions`` is empty
    """
    if not actions:
        raise ValueError("An agent needs at least one action")

    path = agent_module_path(agents_path, name)
    if path.exists() and not overwrite:
        raise FileExistsError(f"Agent module already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        render_agent_module(name, context, tools, streaming, actions, parent),
        encoding="utf-8",
    )
    written = [path]

    if tools:
        tools_dir = Path(templates_path) / underscore(agent_class_name(name)) / "tools"
        tools_dir.mkdir(parents=True, exist_ok=True)
        written.append(tools_dir)

    logger.info("agent_written", agent=agent_class_name(name), path=str(path))
    return written
