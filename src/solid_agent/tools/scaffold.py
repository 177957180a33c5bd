"""
Tool scaffolding.

Turns ``name:type:required:description`` parameter specs into a JSON schema
template on disk, an inline ``tool()`` definition, or a method stub.

Example:
    >>> params = parse_parameters(["url:string:required", "timeout:integer"])
    >>> write_tool_template(Path("templates"), "ResearchAgent", "navigate", parameters=params)
    PosixPath('templates/research_agent/tools/navigate.json')
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

from solid_agent.concerns.naming import humanize, underscore
from solid_agent.infrastructure.observability.logging import get_logger
from solid_agent.tools.builder import ToolBuilder

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """One parameter parsed from a command-line spec."""
    name: str
    type: str = "string"
    required: bool = False
    description: str = ""


def parse_parameter(spec: str) -> ToolParameter:
    """
    Parse ``name[:type[:required[:description]]]``.

    Example:
        >>> parse_parameter("url:string:required:URL to visit")
        ToolParameter(name='url', type='string', required=True, description='URL to visit')
        >>> parse_parameter("max_results")
        ToolParameter(name='max_results', type='string', required=False, description='The max results')
    """
    parts = spec.split(":", 3)
    name = parts[0].strip()
    if not name:
        raise ValueError(f"Parameter spec {spec!r} has no name")

    type_ = parts[1].strip() if len(parts) > 1 and parts[1].strip() else "string"
    required = len(parts) > 2 and parts[2].strip() == "required"
    description = parts[3].strip() if len(parts) > 3 and parts[3].strip() else f"The {humanize(name).lower()}"
    return ToolParameter(name=name, type=type_, required=required, description=description)


def parse_parameters(specs: Iterable[str]) -> list[ToolParameter]:
    return [parse_parameter(spec) for spec in specs]


def default_description(tool_name: str) -> str:
    return f"{humanize(tool_name)} tool"


def build_tool_schema(
    tool_name: str,
    description: str = "",
    parameters: Sequence[ToolParameter] = (),
) -> dict[str, Any]:
    builder = ToolBuilder(tool_name).description(description or default_description(tool_name))
    for param in parameters:
        builder.parameter(
            param.name,
            type=param.type,
            required=param.required,
            description=param.description or None,
        )
    return builder.to_schema()


def tool_template_path(templates_path: Path, agent_name: str, tool_name: str) -> Path:
    """``<templates_path>/<agent_underscore>/tools/<tool_name>.json``"""
    return Path(templates_path) / underscore(agent_name) / "tools" / f"{tool_name}.json"


def write_tool_template(
    templates_path: Path,
    agent_name: str,
    tool_name: str,
    description: str = "",
    parameters: Sequence[ToolParameter] = (),
    overwrite: bool = False,
) -> Path:
    """
    Write a tool's JSON schema template.

    Raises:
        FileExistsError: If the template exists and ``overwrite`` is False
    """
    path = tool_template_path(templates_path, agent_name, tool_name)
    if path.exists() and not overwrite:
        raise FileExistsError(f"Tool template already exists: {path}")

    schema = build_tool_schema(tool_name, description, parameters)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")

    logger.info("tool_template_written", agent=agent_name, tool=tool_name, path=str(path))
    return path


def render_inline_definition(
    agent_name: str,
    tool_name: str,
    description: str = "",
    parameters: Sequence[ToolParameter] = (),
) -> str:
    """Python snippet defining the tool inline with ``Agent.tool``."""
    lines = [
        f'with {agent_name}.tool("{tool_name}") as t:',
        f"    t.description({json.dumps(description or default_description(tool_name))})",
    ]
    for param in parameters:
        args = [json.dumps(param.name), f"type={json.dumps(param.type)}"]
        if param.required:
            args.append("required=True")
        if param.description:
            args.append(f"description={json.dumps(param.description)}")
        lines.append(f"    t.parameter({', '.join(args)})")
    return "\n".join(lines) + "\n"


def render_method_stub(agent_name: str, tool_name: str, parameters: Sequence[ToolParameter] = ()) -> str:
    """Python method stub for the tool, to paste into the agent class."""
    signature = ["self"]
    if parameters:
        signature.append("*")
        signature.extend(p.name if p.required else f"{p.name}=None" for p in parameters)
    log_fields = "".join(f", {p.name}={p.name}" for p in parameters)

    return (
        f"    def {tool_name}({', '.join(signature)}):\n"
        f'        """{humanize(tool_name)}."""\n'
        f'        logger.info("tool_called", agent="{agent_name}", tool="{tool_name}"{log_fields})\n'
        f'        raise NotImplementedError("{agent_name}.{tool_name}")\n'
    )


def render_registration(tool_name: str) -> str:
    return f'@has_tools("{tool_name}")\n'
