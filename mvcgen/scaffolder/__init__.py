"""mvcgen scaffolder -- generates complete PHP MVC project structures.

This package takes a ``ProjectSpec`` (entities with typed fields plus the
views / authentication flags) and renders a layered PHP application:
entities, repositories, controllers, optional views, an optional
authentication bundle, the route table and the SQL schema.

Quick usage::

    from mvcgen.scaffolder import ProjectGenerator, ProjectSpec

    project = ProjectSpec(
        project_name="blog",
        entities=[{"name": "Post", "fields": [{"name": "title", "type": "string"}]}],
        with_presentation_views=True,
    )
    manifest = ProjectGenerator(project).generate("/tmp/output")
"""

from mvcgen.scaffolder.generator import (
    ArtifactWriteError,
    GenerationError,
    ProjectGenerator,
    TargetExistsError,
)
from mvcgen.scaffolder.models import (
    EntitySpec,
    FieldSpec,
    FieldType,
    GeneratedArtifact,
    ProjectSpec,
)
from mvcgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "ArtifactWriteError",
    "EntitySpec",
    "FieldSpec",
    "FieldType",
    "GeneratedArtifact",
    "GenerationError",
    "ProjectGenerator",
    "ProjectSpec",
    "TargetExistsError",
    "TemplateRenderer",
]
