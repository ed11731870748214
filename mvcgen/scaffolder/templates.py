"""Jinja2 template rendering for the generated PHP project.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``mvcgen/scaffolder/templates/`` directory and renders them into
``GeneratedArtifact`` records.  Rendering is pure: nothing here touches the
output directory, the orchestrator writes the artifacts afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from .models import GeneratedArtifact
from .naming import ucfirst


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the generated application.

    Templates are plain PHP/HTML/SQL files with a ``.j2`` suffix.  Autoescape
    is off because the output is source code, not HTML served by Python; the
    ``php_str`` filter is used wherever a value lands inside a PHP string
    literal.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["ucfirst"] = ucfirst
        self.env.filters["php_str"] = _php_str_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"entity/Entity.php.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def artifact(
        self,
        template_path: str,
        relative_path: str,
        context: dict[str, Any],
    ) -> GeneratedArtifact:
        """Render *template_path* into an artifact destined for *relative_path*."""
        return GeneratedArtifact(
            relative_path=relative_path,
            content=self.render(template_path, context),
        )

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _php_str_filter(value: Any) -> str:
    """Render *value* as a single-quoted PHP string literal."""
    text = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{text}'"
