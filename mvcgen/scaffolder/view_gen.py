"""Listing page generation (``src/View/{lower}_index.php``).

Only used when the project has presentation views.  The page is a Bootstrap
table filled by script from the JSON list endpoint, plus create, edit,
detail and delete dialogs.
"""

from __future__ import annotations

from .models import EntitySpec, GeneratedArtifact
from .naming import derive
from .rules import field_context
from .templates import TemplateRenderer


VIEW_TEMPLATE = "view/index.php.j2"


class ViewGenerator:
    """Generates the listing page for an entity."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(self, entity: EntitySpec) -> GeneratedArtifact:
        names = derive(entity.name)
        return self.renderer.artifact(
            VIEW_TEMPLATE,
            f"src/View/{names.view_name}.php",
            {
                "names": names,
                "fields": [field_context(field) for field in entity.fields],
            },
        )
