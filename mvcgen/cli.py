"""Command line entry point.

Usage::

    mvcgen blog.yaml -o ./projects
    mvcgen blog.json --views --auth
    mvcgen blog.yaml --dry-run
    mvcgen                      # interactive prompts
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.markup import escape

from .config import Config
from .prompts import ask_project_spec, load_project_spec
from .scaffolder.generator import GenerationError, ProjectGenerator, manifest
from .scaffolder.models import ProjectSpec
from .scaffolder.routes_gen import build_route_table
from .utils import (
    console,
    print_error,
    print_header,
    print_manifest,
    print_route_table,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mvcgen",
        description="Generate a layered PHP MVC application from an entity description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  mvcgen blog.yaml\n"
            "  mvcgen blog.json -o ./projects --views --auth\n"
            "  mvcgen blog.yaml --dry-run\n"
        ),
    )
    parser.add_argument(
        "spec",
        nargs="?",
        default=None,
        help="JSON or YAML project description (prompts interactively if omitted)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: config output_dir, i.e. .)",
    )
    parser.add_argument(
        "--views",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate Bootstrap views (overrides the spec file)",
    )
    parser.add_argument(
        "--auth",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate the authentication bundle (overrides the spec file)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render everything and list files and routes without writing",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: read MVCGEN_* environment variables)",
    )
    return parser


def _apply_overrides(project: ProjectSpec, args: argparse.Namespace) -> ProjectSpec:
    update: dict[str, bool] = {}
    if args.views is not None:
        update["with_presentation_views"] = args.views
    if args.auth is not None:
        update["with_authentication"] = args.auth
    return project.model_copy(update=update) if update else project


def _describe(exc: Exception) -> str:
    """Single-line description of *exc* for the error line."""
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "spec"
        return f"Invalid project spec: {location}: {first['msg']}"
    return " ".join(str(exc).split())


def run(args: argparse.Namespace) -> list[str]:
    """Execute one CLI invocation and return the manifest."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.output:
        config = config.model_copy(update={"output_dir": Path(args.output)})

    if args.spec:
        project = load_project_spec(args.spec)
    else:
        project = ask_project_spec(console)
    project = _apply_overrides(project, args)
    if project.with_authentication and any(e.name == "User" for e in project.entities):
        print_warning("Entity 'User' is replaced by the authentication User class")

    generator = ProjectGenerator(project, config)

    if args.dry_run:
        paths = manifest(generator.build_artifacts())
        print_header(f"Dry run: {project.project_name}")
        print_manifest(paths)
        print_route_table(build_route_table(project))
        return paths

    print_header(f"Generating {project.project_name}")
    paths = generator.generate()
    root = generator.project_root()

    print_summary_table(
        {
            "Project": project.project_name,
            "Location": str(root),
            "Entities": ", ".join(e.name for e in project.entities) or "-",
            "Views": "yes" if project.with_presentation_views else "no",
            "Authentication": "yes" if project.with_authentication else "no",
            "Files": str(len(paths)),
        },
        title="Generated project",
    )
    print_success(f"Project created in {root}")
    console.print(
        f"Next: [bold]cd {root} && composer install && php -S localhost:8000 -t public[/bold]"
    )
    return paths


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``mvcgen`` and ``python -m mvcgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run(args)
    except (
        GenerationError,
        ValidationError,
        OSError,
        ValueError,
        yaml.YAMLError,
    ) as exc:
        print_error(f"Error: {escape(_describe(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
