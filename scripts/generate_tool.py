#!/usr/bin/env python3
"""
Tool scaffolding script

Writes a tool's JSON schema template for an agent, or prints an inline
definition, and prints a method stub to paste into the agent class.

Usage:
    python scripts/generate_tool.py ResearchAgent navigate \
        --parameters url:string:required:"URL to visit" wait_for:string \
        --description "Navigate to a URL"

    python scripts/generate_tool.py ResearchAgent search --inline --parameters query:string:required
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from solid_agent.config.settings import get_settings
from solid_agent.tools.scaffold import (
    parse_parameters,
    render_inline_definition,
    render_method_stub,
    render_registration,
    write_tool_template,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a tool schema template and method stub for an agent",
    )
    parser.add_argument("agent_name", help="Agent class name (e.g. ResearchAgent)")
    parser.add_argument("tool_name", help="Tool name (e.g. navigate)")
    parser.add_argument(
        "--parameters",
        nargs="*",
        default=[],
        help="Parameters as name:type:required:description (e.g. url:string:required query:string)",
    )
    parser.add_argument("--description", default="", help="Tool description")
    parser.add_argument(
        "--inline",
        action="store_true",
        help="Print an inline tool() definition instead of writing a JSON template",
    )
    parser.add_argument(
        "--templates-path",
        type=Path,
        default=None,
        help="Templates root (defaults to SOLID_AGENT_TEMPLATES_PATH)",
    )
    parser.add_argument("--force", action="store_true", help="Overwrite an existing template")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    parameters = parse_parameters(args.parameters)

    if args.inline:
        print(f"Inline tool definition for {args.agent_name}:\n")
        print(render_inline_definition(args.agent_name, args.tool_name, args.description, parameters))
    else:
        templates_path = args.templates_path or get_settings().templates_path
        try:
            path = write_tool_template(
                templates_path,
                args.agent_name,
                args.tool_name,
                description=args.description,
                parameters=parameters,
                overwrite=args.force,
            )
        except FileExistsError as e:
            print(f"ERROR: {e} (use --force to overwrite)", file=sys.stderr)
            return 1
        print(f"Created tool template: {path}\n")
        print("Register the tool on your agent:\n")
        print(render_registration(args.tool_name))

    print(f"Add this method to {args.agent_name}:\n")
    print(render_method_stub(args.agent_name, args.tool_name, parameters))
    return 0


if __name__ == "__main__":
    sys.exit(main())
