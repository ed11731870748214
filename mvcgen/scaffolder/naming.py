"""Deterministic name derivation shared by every generator.

The same entity name must spell the same class, table, and route segment in
every generated file, so all generators go through :func:`derive` instead of
building names themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class DerivedNames:
    """All names derived from one entity name."""

    class_name: str
    lower_name: str
    plural_lower: str
    table_name: str
    route_segment: str
    controller_name: str
    repository_name: str
    view_name: str


def derive(entity_name: str) -> DerivedNames:
    """Derive every name used for *entity_name* across the generated project.

    Examples::

        derive("Post").plural_lower   -> "posts"
        derive("Post").route_segment  -> "posts"
        derive("BlogPost").table_name -> "blogposts"
    """
    lower = entity_name.lower()
    plural = lower + "s"
    return DerivedNames(
        class_name=entity_name,
        lower_name=lower,
        plural_lower=plural,
        table_name=plural,
        route_segment=plural,
        controller_name=f"{entity_name}Controller",
        repository_name=f"{entity_name}Repository",
        view_name=f"{lower}_index",
    )


def ucfirst(value: str) -> str:
    """Upper-case the first character only (``createdAt`` -> ``CreatedAt``)."""
    return value[:1].upper() + value[1:]


def accessor_names(field_name: str) -> tuple[str, str]:
    """Return the ``(getter, setter)`` method names for a field."""
    suffix = ucfirst(field_name)
    return f"get{suffix}", f"set{suffix}"


def composer_package_name(project_name: str) -> str:
    """Composer package name for the generated project (``vendor/app``)."""
    vendor = re.sub(r"[^a-z0-9_.-]+", "-", project_name.lower().strip()).strip("-")
    return f"{vendor or 'app'}/app"
