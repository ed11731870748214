"""Controller generation.

The handler variant is decided once per project, at generation time:

- ``API``: every read returns JSON.
- ``HYBRID``: reads render the listing page on plain navigation and return
  JSON to the page script (``X-Requested-With: XMLHttpRequest``).

Each variant of each operation is its own template under
``templates/controller/<variant>/``; operations that do not differ live in
``templates/controller/shared/``.  The generated code therefore never checks
the request type unless the project actually has views.
"""

from __future__ import annotations

from enum import Enum

from .models import EntitySpec, GeneratedArtifact, ProjectSpec
from .naming import derive
from .rules import field_context
from .templates import TemplateRenderer


CONTROLLER_TEMPLATE = "controller/Controller.php.j2"

# Order of the public methods in the generated class.
OPERATIONS: tuple[str, ...] = (
    "index",
    "show",
    "create",
    "store",
    "edit",
    "update",
    "delete",
)

# Operations whose body depends on the variant.
_VARIANT_OPERATIONS = frozenset({"index", "show"})

# Operations that change data and sit behind the access gate.
GATED_OPERATIONS: tuple[str, ...] = ("store", "update", "delete")


class HandlerVariant(str, Enum):
    API = "api"
    HYBRID = "hybrid"

    @classmethod
    def for_project(cls, project: ProjectSpec) -> HandlerVariant:
        return cls.HYBRID if project.with_presentation_views else cls.API


def requires_auth_gate(project: ProjectSpec) -> bool:
    """Write operations are gated only when there is both a UI and a login."""
    return project.with_presentation_views and project.with_authentication


def operation_templates(variant: HandlerVariant) -> dict[str, str]:
    """Map each operation to the template that renders its body."""
    return {
        operation: (
            f"controller/{variant.value}/{operation}.php.j2"
            if operation in _VARIANT_OPERATIONS
            else f"controller/shared/{operation}.php.j2"
        )
        for operation in OPERATIONS
    }


class ControllerGenerator:
    """Generates ``src/Controller/{Class}Controller.php`` for an entity."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(self, entity: EntitySpec, project: ProjectSpec) -> GeneratedArtifact:
        names = derive(entity.name)
        variant = HandlerVariant.for_project(project)
        context = {
            "names": names,
            "fields": [field_context(field) for field in entity.fields],
            "variant": variant.value,
            "operations": OPERATIONS,
            "operation_templates": operation_templates(variant),
            "auth_gate": requires_auth_gate(project),
        }
        return self.renderer.artifact(
            CONTROLLER_TEMPLATE,
            f"src/Controller/{names.controller_name}.php",
            context,
        )
