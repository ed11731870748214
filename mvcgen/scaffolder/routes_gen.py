"""Route file generation (``config/routes.php``).

Routes are collected into a :class:`RouteTable` first, then rendered.  The
same table is what the CLI prints in ``--dry-run`` mode, and what the tests
match requests against.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import GeneratedArtifact, ProjectSpec
from .naming import derive
from .routing import Route, RouteTable
from .templates import TemplateRenderer


AUTH_CONTROLLER = "AuthController"


@dataclass
class RouteGroup:
    """Routes rendered together under one comment."""

    title: str
    routes: list[Route] = field(default_factory=list)


def auth_routes(table: RouteTable) -> list[Route]:
    """Register the six authentication routes on *table*."""
    return [
        table.get("/login", AUTH_CONTROLLER, "login"),
        table.post("/login", AUTH_CONTROLLER, "login"),
        table.get("/register", AUTH_CONTROLLER, "register"),
        table.post("/register", AUTH_CONTROLLER, "register"),
        table.get("/logout", AUTH_CONTROLLER, "logout"),
        table.get("/auth/check", AUTH_CONTROLLER, "check"),
    ]


def build_route_groups(project: ProjectSpec) -> tuple[RouteTable, list[RouteGroup]]:
    """Build the ordered route table and its grouping for rendering.

    Order: ``GET /`` to the first entity's list, the auth routes when
    authentication is on, then the seven resource routes of each entity.
    """
    table = RouteTable()
    groups: list[RouteGroup] = []

    if project.entities:
        first = derive(project.entities[0].name)
        groups.append(
            RouteGroup("Home route", [table.get("/", first.controller_name, "index")])
        )

    if project.with_authentication:
        groups.append(RouteGroup("Authentication routes", auth_routes(table)))

    for entity in project.entities:
        names = derive(entity.name)
        groups.append(RouteGroup(f"{names.class_name} routes", table.resource(names)))

    return table, groups


def build_route_table(project: ProjectSpec) -> RouteTable:
    table, _ = build_route_groups(project)
    return table


class RoutesGenerator:
    """Generates ``config/routes.php``."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(self, project: ProjectSpec) -> GeneratedArtifact:
        _, groups = build_route_groups(project)
        return self.renderer.artifact(
            "project/routes.php.j2", "config/routes.php", {"groups": groups}
        )
