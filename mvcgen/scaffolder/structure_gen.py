"""Project-level files: packaging, entry point, core runtime, theme, schema.

Everything here is rendered once per project, independent of any single
entity (the schema file lists every table, but is still one file).
"""

from __future__ import annotations

import json

from ..config import Config
from .models import EntitySpec, FieldSpec, GeneratedArtifact, ProjectSpec
from .naming import composer_package_name, derive
from .routing import (
    ID_PATTERN,
    METHOD_OVERRIDE_FIELD,
    OVERRIDABLE_METHODS,
    PLACEHOLDER_PATTERN,
    SEGMENT_PATTERN,
)
from .rules import field_context
from .templates import TemplateRenderer


FIXED_DIRECTORIES: tuple[str, ...] = (
    "public",
    "src/Entity",
    "src/Controller",
    "src/Repository",
    "src/View",
    "src/Core",
    "config",
)

# Template -> output path for the runtime every project ships.
_CORE_FILES: dict[str, str] = {
    "core/Database.php.j2": "src/Core/Database.php",
    "core/Router.php.j2": "src/Core/Router.php",
    "core/Request.php.j2": "src/Core/Request.php",
    "core/Response.php.j2": "src/Core/Response.php",
}

_THEME_FILES: dict[str, str] = {
    "view/layout.php.j2": "src/View/layout.php",
    "view/app.css.j2": "public/css/app.css",
    "view/app.js.j2": "public/js/app.js",
}


class StructureGenerator:
    """Generates the files shared by the whole project."""

    def __init__(self, renderer: TemplateRenderer, config: Config) -> None:
        self.renderer = renderer
        self.config = config

    # -- Static files ------------------------------------------------------

    def static_files(self, project: ProjectSpec) -> list[GeneratedArtifact]:
        """composer.json, .gitignore, README, database settings, front controller."""
        context = self._context(project)
        return [
            GeneratedArtifact("composer.json", self.composer_json(project)),
            self.renderer.artifact("project/gitignore.j2", ".gitignore", context),
            self.renderer.artifact("project/README.md.j2", "README.md", context),
            self.renderer.artifact("project/database.php.j2", "config/database.php", context),
            self.renderer.artifact("project/index.php.j2", "public/index.php", context),
        ]

    def composer_json(self, project: ProjectSpec) -> str:
        manifest = {
            "name": composer_package_name(project.project_name),
            "description": f"{project.project_name} - MVC project generated with mvcgen",
            "type": "project",
            "autoload": {"psr-4": {"App\\": "src/"}},
            "require": {"php": self.config.php_version},
        }
        return json.dumps(manifest, indent=4) + "\n"

    # -- Core runtime ------------------------------------------------------

    def core_runtime(self) -> list[GeneratedArtifact]:
        """Database, Router, Request and Response classes."""
        context = {
            "id_pattern": ID_PATTERN,
            "placeholder_pattern": PLACEHOLDER_PATTERN,
            "segment_pattern": SEGMENT_PATTERN,
            "method_override_field": METHOD_OVERRIDE_FIELD,
            "overridable_methods": [m.value for m in OVERRIDABLE_METHODS],
        }
        return [
            self.renderer.artifact(template, output, context)
            for template, output in _CORE_FILES.items()
        ]

    # -- Presentation shell --------------------------------------------------

    def presentation_shell(self, project: ProjectSpec) -> list[GeneratedArtifact]:
        """Layout, stylesheet and script helpers used by every view."""
        context = self._context(project)
        return [
            self.renderer.artifact(template, output, context)
            for template, output in _THEME_FILES.items()
        ]

    # -- Schema --------------------------------------------------------------

    def schema(
        self,
        project: ProjectSpec,
        user_fields: list[FieldSpec] | None = None,
    ) -> GeneratedArtifact:
        """One ``CREATE TABLE IF NOT EXISTS`` per entity, plus ``users`` when given."""
        tables = [self._table(entity) for entity in project.entities]
        if user_fields is not None:
            tables.append(
                self._table(EntitySpec(name="User", fields=user_fields), unique={"email"})
            )
        return self.renderer.artifact(
            "project/schema.sql.j2",
            "config/schema.sql",
            {
                "project_name": project.project_name,
                "tables": tables,
                "charset": self.config.database.charset,
            },
        )

    # -- Internal helpers ------------------------------------------------------

    @staticmethod
    def _table(entity: EntitySpec, unique: set[str] | None = None) -> dict[str, object]:
        unique = unique or set()
        return {
            "name": derive(entity.name).table_name,
            "columns": [
                {
                    "name": field.name,
                    "sql_type": field_context(field)["sql_type"],
                    "not_null": True,
                    "unique": field.name in unique,
                }
                for field in entity.fields
            ],
        }

    def _context(self, project: ProjectSpec) -> dict[str, object]:
        entities = [
            {"names": derive(entity.name), "fields": entity.fields}
            for entity in project.entities
        ]
        menu = [
            {"label": item["names"].class_name, "url": f"/{item['names'].route_segment}"}
            for item in entities
        ]
        return {
            "project_name": project.project_name,
            "entities": entities,
            "menu": menu,
            "with_authentication": project.with_authentication,
            "with_presentation_views": project.with_presentation_views,
            "database": self.config.database,
            "bootstrap_version": self.config.bootstrap_version,
        }
