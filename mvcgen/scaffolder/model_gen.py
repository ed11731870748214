"""Entity class generation.

Each entity becomes ``src/Entity/{Class}.php`` with nullable typed
properties, an explicit hydration table, ``fromRow`` / ``toArray`` and one
getter and fluent setter per field.
"""

from __future__ import annotations

from typing import Any

from .models import EntitySpec, GeneratedArtifact
from .naming import derive
from .rules import field_context
from .templates import TemplateRenderer


ENTITY_TEMPLATE = "entity/Entity.php.j2"


class ModelGenerator:
    """Generates one entity class per ``EntitySpec``."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(
        self,
        entity: EntitySpec,
        template: str = ENTITY_TEMPLATE,
        extra_context: dict[str, Any] | None = None,
    ) -> GeneratedArtifact:
        """Render the entity class.

        Args:
            entity: The entity to render.
            template: Template to render; the auth bundle passes a template
                extending the default one to add password helpers.
            extra_context: Additional variables for that template.
        """
        names = derive(entity.name)
        context: dict[str, Any] = {
            "names": names,
            "fields": [field_context(field) for field in entity.fields],
        }
        context.update(extra_context or {})
        return self.renderer.artifact(
            template, f"src/Entity/{names.class_name}.php", context
        )
