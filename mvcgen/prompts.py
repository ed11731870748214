"""Front ends that produce a ``ProjectSpec``.

Two ways in:

- :func:`load_project_spec` reads a JSON or YAML file.
- :func:`ask_project_spec` asks for everything interactively.

Example YAML file::

    project_name: blog
    with_presentation_views: true
    with_authentication: true
    entities:
      - name: Post
        fields:
          - {name: title, type: string}
          - {name: body, type: text}
          - {name: publishedAt, type: datetime}
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from .scaffolder.models import IDENTIFIER_PATTERN, EntitySpec, FieldSpec, ProjectSpec


# Alternative key spellings accepted in spec files.
_KEY_ALIASES: dict[str, str] = {
    "projectName": "project_name",
    "name": "project_name",
    "withPresentationViews": "with_presentation_views",
    "views": "with_presentation_views",
    "withAuthentication": "with_authentication",
    "auth": "with_authentication",
}

FIELD_TYPE_CHOICES = "string/text/int/float/bool/datetime"


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def load_project_spec(path: str | Path) -> ProjectSpec:
    """Load a ``ProjectSpec`` from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: The file does not hold a mapping (``json.JSONDecodeError``
            is a ``ValueError`` too).
        yaml.YAMLError: The YAML is malformed.
        pydantic.ValidationError: The mapping is not a valid project.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")

    if file_path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(raw)
    else:
        data = json.loads(raw)

    if not isinstance(data, dict):
        raise ValueError(f"{file_path} must contain a mapping at the top level")

    return ProjectSpec.model_validate(_normalise_keys(data))


def _normalise_keys(data: dict[str, Any]) -> dict[str, Any]:
    normalised: dict[str, Any] = {}
    for key, value in data.items():
        target = _KEY_ALIASES.get(key, key)
        # An explicit snake_case key wins over its alias.
        if target in normalised and key != target:
            continue
        normalised[target] = value
    return normalised


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def ask_project_spec(console: Console) -> ProjectSpec:
    """Collect a project description interactively.

    Asks for the project name, the number of entities (at least one), each
    entity's name and fields (until an empty field name), then whether to
    generate views and authentication.  Prints a summary before returning.
    """
    console.print("[bold cyan]New MVC project[/bold cyan]\n")

    project_name = _ask_non_empty(console, "Project name", default="my-project")

    while True:
        count = IntPrompt.ask("Number of entities", default=1, console=console)
        if count >= 1:
            break
        console.print("[bold red]The number of entities must be at least 1[/bold red]")

    entities: list[EntitySpec] = []
    for index in range(1, count + 1):
        console.print(f"\n[bold]Entity #{index}[/bold]")
        name = _ask_identifier(console, f"Name of entity #{index}")
        entities.append(EntitySpec(name=name, fields=_ask_fields(console)))

    console.print()
    with_views = Confirm.ask("Generate Bootstrap views?", default=False, console=console)
    with_auth = Confirm.ask("Generate authentication?", default=False, console=console)

    project = ProjectSpec(
        project_name=project_name,
        entities=entities,
        with_presentation_views=with_views,
        with_authentication=with_auth,
    )
    print_project_summary(console, project)
    return project


def _ask_fields(console: Console) -> list[FieldSpec]:
    console.print("  [dim]Add fields; leave the name empty to finish.[/dim]")
    fields: list[FieldSpec] = []
    while True:
        field_name = Prompt.ask("  Field name", default="", console=console).strip()
        if not field_name:
            return fields
        if not re.match(IDENTIFIER_PATTERN, field_name):
            _print_bad_identifier(console, field_name)
            continue
        declared = Prompt.ask(
            f"  Type ({FIELD_TYPE_CHOICES})", default="string", console=console
        )
        fields.append(FieldSpec(name=field_name, type=declared))


def _ask_identifier(console: Console, label: str) -> str:
    while True:
        answer = _ask_non_empty(console, label)
        if re.match(IDENTIFIER_PATTERN, answer):
            return answer
        _print_bad_identifier(console, answer)


def _print_bad_identifier(console: Console, name: str) -> None:
    console.print(
        f"[bold red]'{escape(name)}' is not a valid name: use letters, digits and _,"
        " not starting with a digit[/bold red]"
    )


def _ask_non_empty(console: Console, label: str, default: str | None = None) -> str:
    while True:
        if default is None:
            answer = Prompt.ask(label, console=console)
        else:
            answer = Prompt.ask(label, default=default, console=console)
        answer = (answer or "").strip()
        if answer:
            return answer
        console.print(f"[bold red]{label} cannot be empty[/bold red]")


def print_project_summary(console: Console, project: ProjectSpec) -> None:
    """Print the collected entities and options."""
    table = Table(title=f"Project: {project.project_name}", header_style="bold cyan")
    table.add_column("Entity", no_wrap=True)
    table.add_column("Fields")

    for entity in project.entities:
        described = ", ".join(
            f"{field.name}: {field.declared_type or field.type.value}" for field in entity.fields
        )
        table.add_row(entity.name, described or "[dim]none[/dim]")

    console.print()
    console.print(table)
    console.print(f"Views: {'yes' if project.with_presentation_views else 'no'}")
    console.print(f"Authentication: {'yes' if project.with_authentication else 'no'}")
    console.print()

