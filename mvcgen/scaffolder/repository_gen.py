"""Repository class generation (``src/Repository/{Class}Repository.php``)."""

from __future__ import annotations

from .models import EntitySpec, GeneratedArtifact
from .naming import derive
from .templates import TemplateRenderer


REPOSITORY_TEMPLATE = "repository/Repository.php.j2"


class RepositoryGenerator:
    """Generates the data-access class for an entity.

    The repository takes the ``Database`` in its constructor; the column
    list is taken from the entity's ``toArray()`` at runtime, so it always
    follows the entity's field order.
    """

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(
        self, entity: EntitySpec, template: str = REPOSITORY_TEMPLATE
    ) -> GeneratedArtifact:
        names = derive(entity.name)
        return self.renderer.artifact(
            template,
            f"src/Repository/{names.repository_name}.php",
            {"names": names},
        )
