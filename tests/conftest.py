"""Shared pytest fixtures for the mvcgen test suite.

Provides reusable fixtures for:
- Sample project descriptions (API-only, with views, with views and auth)
- A template renderer over the packaged templates
- Spec files on disk (JSON and YAML)
- A captured console so tests stay quiet and can inspect output
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from mvcgen.scaffolder.models import EntitySpec, FieldSpec, ProjectSpec
from mvcgen.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@pytest.fixture
def post_entity() -> EntitySpec:
    """An entity touching every field type, ``text`` and an email field."""
    return EntitySpec(
        name="Post",
        fields=[
            FieldSpec(name="title", type="string"),
            FieldSpec(name="body", type="text"),
            FieldSpec(name="views", type="int"),
            FieldSpec(name="rating", type="float"),
            FieldSpec(name="published", type="bool"),
            FieldSpec(name="publishedAt", type="datetime"),
            FieldSpec(name="author_email", type="string"),
        ],
    )


@pytest.fixture
def comment_entity() -> EntitySpec:
    return EntitySpec(
        name="Comment",
        fields=[
            FieldSpec(name="content", type="text"),
            FieldSpec(name="postId", type="int"),
        ],
    )


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def api_project(post_entity: EntitySpec, comment_entity: EntitySpec) -> ProjectSpec:
    """Two entities, no views, no authentication."""
    return ProjectSpec(project_name="blog-api", entities=[post_entity, comment_entity])


@pytest.fixture
def views_project(post_entity: EntitySpec, comment_entity: EntitySpec) -> ProjectSpec:
    """Two entities with presentation views, no authentication."""
    return ProjectSpec(
        project_name="blog",
        entities=[post_entity, comment_entity],
        with_presentation_views=True,
    )


@pytest.fixture
def full_project(post_entity: EntitySpec, comment_entity: EntitySpec) -> ProjectSpec:
    """Two entities with views and authentication."""
    return ProjectSpec(
        project_name="blog",
        entities=[post_entity, comment_entity],
        with_presentation_views=True,
        with_authentication=True,
    )


@pytest.fixture
def auth_api_project(post_entity: EntitySpec) -> ProjectSpec:
    """Authentication without views: JSON-only auth, no access gate."""
    return ProjectSpec(
        project_name="secure-api",
        entities=[post_entity],
        with_authentication=True,
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """TemplateRenderer over the packaged templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Spec files
# ---------------------------------------------------------------------------

BLOG_SPEC: dict = {
    "project_name": "blog",
    "with_presentation_views": True,
    "with_authentication": False,
    "entities": [
        {
            "name": "Post",
            "fields": [
                {"name": "title", "type": "string"},
                {"name": "body", "type": "text"},
                {"name": "views", "type": "int"},
            ],
        },
    ],
}


@pytest.fixture
def blog_spec_data() -> dict:
    return json.loads(json.dumps(BLOG_SPEC))


@pytest.fixture
def json_spec_file(tmp_path: Path, blog_spec_data: dict) -> Path:
    path = tmp_path / "blog.json"
    path.write_text(json.dumps(blog_spec_data), encoding="utf-8")
    return path


@pytest.fixture
def yaml_spec_file(tmp_path: Path) -> Path:
    path = tmp_path / "blog.yaml"
    path.write_text(
        "project_name: blog\n"
        "with_presentation_views: true\n"
        "entities:\n"
        "  - name: Post\n"
        "    fields:\n"
        "      - {name: title, type: string}\n"
        "      - {name: body, type: text}\n"
        "      - {name: views, type: int}\n",
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Console capture
# ---------------------------------------------------------------------------

@pytest.fixture
def captured_console():
    """Redirect the shared rich console into a buffer.

    Yields the buffer; ``buffer.getvalue()`` returns everything printed.
    """
    buffer = io.StringIO()
    quiet = Console(file=buffer, width=200, force_terminal=False, color_system=None)
    with patch("mvcgen.utils.console", quiet), patch("mvcgen.cli.console", quiet):
        yield buffer
