#!/usr/bin/env python3
"""
Agent scaffolding script

Writes an agent module with the selected concerns and, with --tools, the
agent's tool template directory.

Usage:
    python scripts/generate_agent.py Research --tools --streaming --actions search summarize

    python scripts/generate_agent.py Support --no-context --parent myapp.agents.ApplicationAgent
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from solid_agent.config.settings import get_settings
from solid_agent.scaffold.agent import agent_class_name, write_agent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an agent class with solid_agent concerns",
    )
    parser.add_argument("name", help="Agent name (e.g. Research or ResearchAgent)")
    parser.add_argument(
        "--context",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include HasContext (default: on)",
    )
    parser.add_argument("--tools", action="store_true", help="Include HasTools")
    parser.add_argument("--streaming", action="store_true", help="Include StreamsToolUpdates")
    parser.add_argument("--actions", nargs="+", default=["perform"], help="Agent actions to generate")
    parser.add_argument("--parent", default="Agent", help="Parent class, as a dotted path for your own base")
    parser.add_argument(
        "--agents-path",
        type=Path,
        default=Path("agents"),
        help="Directory for the agent module (default: ./agents)",
    )
    parser.add_argument(
        "--templates-path",
        type=Path,
        default=None,
        help="Templates root (defaults to SOLID_AGENT_TEMPLATES_PATH)",
    )
    parser.add_argument("--force", action="store_true", help="Overwrite an existing agent module")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    templates_path = args.templates_path or get_settings().templates_path
    class_name = agent_class_name(args.name)

    try:
        written = write_agent(
            args.agents_path,
            templates_path,
            args.name,
            context=args.context,
            tools=args.tools,
            streaming=args.streaming,
            actions=args.actions,
            parent=args.parent,
            overwrite=args.force,
        )
    except FileExistsError as e:
        print(f"ERROR: {e} (use --force to overwrite)", file=sys.stderr)
        return 1

    print(f"Created {class_name}:\n")
    for path in written:
        print(f"  {path}")
    print()

    if args.tools:
        print("To add tools, run:\n")
        print(
            f"  python scripts/generate_tool.py {class_name} search "
            f'--parameters query:string:required --description "Search for content"\n'
        )

    print("Example usage:\n")
    print(f'  agent = {class_name}(params={{"content": "Hello"}}, generator=client.generate)')
    print(f'  agent.process("{args.actions[0]}")')
    print("  response = agent.generate_now()")
    return 0


if __name__ == "__main__":
    sys.exit(main())
