"""Tool schema building and scaffolding."""

from solid_agent.tools.builder import ToolBuilder, json_schema_type
from solid_agent.tools.scaffold import (
    ToolParameter,
    build_tool_schema,
    parse_parameter,
    parse_parameters,
    render_inline_definition,
    render_method_stub,
    render_registration,
    tool_template_path,
    write_tool_template,
)

__all__ = [
    "ToolBuilder",
    "json_schema_type",
    "ToolParameter",
    "build_tool_schema",
    "parse_parameter",
    "parse_parameters",
    "render_inline_definition",
    "render_method_stub",
    "render_registration",
    "tool_template_path",
    "write_tool_template",
]
