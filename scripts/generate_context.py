#!/usr/bin/env python3
"""
Context scaffolding script

Writes SQLModel tables for a named context (<Name>, <Name>Message and
<Name>Generation) and an alembic revision creating them.

Usage:
    python scripts/generate_context.py conversation --agent ChatAgent

    python scripts/generate_context.py research_session --models-path app/models --skip-migration
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from solid_agent.scaffold.context import (
    ContextNames,
    render_context_usage,
    write_context_migration,
    write_context_models,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate context, message and generation tables for a named context",
    )
    parser.add_argument("name", help="Context name (e.g. conversation)")
    parser.add_argument("--agent", default="MyAgent", help="Agent class shown in the usage example")
    parser.add_argument(
        "--models-path",
        type=Path,
        default=Path("models"),
        help="Directory for the models module (default: ./models)",
    )
    parser.add_argument(
        "--versions-path",
        type=Path,
        default=project_root / "alembic" / "versions",
        help="Alembic versions directory",
    )
    parser.add_argument("--down-revision", default=None, help="Parent revision (defaults to the current head)")
    parser.add_argument("--skip-migration", action="store_true", help="Only write the models module")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing models module")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        names = ContextNames.from_name(args.name)
        models = write_context_models(args.models_path, names, overwrite=args.force)
        migration = None
        if not args.skip_migration:
            migration = write_context_migration(args.versions_path, names, down_revision=args.down_revision)
    except (FileExistsError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Created {names.class_name}, {names.message_class} and {names.generation_class}:\n")
    print(f"  {models}")
    if migration is not None:
        print(f"  {migration}")
    print()
    print("Next steps:\n")
    print(f"  1. Import {models.stem} in alembic/env.py, then run: alembic upgrade head")
    print("  2. Import the module before the agent runs, so the tables are registered")
    print("  3. Add the context to your agent:\n")
    print(render_context_usage(names, args.agent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
