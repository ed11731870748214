"""Route model shared by the routes generator and the generated router.

The placeholder regexes defined here are injected into the generated
``src/Core/Router.php``, and :meth:`RouteTable.match` applies the same
matching rules in Python, so both sides agree on what a route template
matches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from .naming import DerivedNames


# ---------------------------------------------------------------------------
# Matching rules
# ---------------------------------------------------------------------------

# Template syntax for a placeholder segment, e.g. ``{id}``.
PLACEHOLDER_PATTERN = r"\{(\w+)\}"
# ``{id}`` only matches ASCII digits, as PCRE ``\d`` does without ``/u``.
ID_PATTERN = r"([0-9]+)"
# Any other placeholder matches one non-empty path segment.
SEGMENT_PATTERN = r"([^/]+)"

# Form field that lets an HTML form tunnel PUT/DELETE through POST.
METHOD_OVERRIDE_FIELD = "_method"

NOT_FOUND_BODY = {"error": "Route not found"}


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


OVERRIDABLE_METHODS = (HttpMethod.PUT, HttpMethod.DELETE)


def template_to_regex(template: str) -> str:
    """Compile a route template like ``/posts/{id}/edit`` to an anchored regex."""
    pattern = ""
    pos = 0
    for placeholder in re.finditer(PLACEHOLDER_PATTERN, template):
        pattern += re.escape(template[pos:placeholder.start()])
        pattern += ID_PATTERN if placeholder.group(1) == "id" else SEGMENT_PATTERN
        pos = placeholder.end()
    pattern += re.escape(template[pos:])
    return f"^{pattern}$"


def effective_method(method: str, form: dict[str, str] | None = None) -> str:
    """Resolve the method a request is matched as.

    A POST whose form carries ``_method`` equal to PUT or DELETE
    (case-insensitive) is treated as that method. Anything else is ignored.
    """
    method = method.upper()
    if method != HttpMethod.POST.value or not form:
        return method
    override = str(form.get(METHOD_OVERRIDE_FIELD, "")).upper()
    if override in {m.value for m in OVERRIDABLE_METHODS}:
        return override
    return method


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Route:
    """One registered route: method, path template, and handler."""

    method: str
    path: str
    controller: str
    action: str

    @property
    def handler(self) -> str:
        return f"{self.controller}@{self.action}"

    @property
    def regex(self) -> str:
        return template_to_regex(self.path)


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    params: list[str]


@dataclass
class RouteTable:
    """Ordered route registrations. First match wins."""

    routes: list[Route] = field(default_factory=list)

    def add(self, method: str | HttpMethod, path: str, controller: str, action: str) -> Route:
        verb = method.value if isinstance(method, HttpMethod) else method.upper()
        route = Route(verb, path, controller, action)
        self.routes.append(route)
        return route

    def get(self, path: str, controller: str, action: str) -> Route:
        return self.add(HttpMethod.GET, path, controller, action)

    def post(self, path: str, controller: str, action: str) -> Route:
        return self.add(HttpMethod.POST, path, controller, action)

    def put(self, path: str, controller: str, action: str) -> Route:
        return self.add(HttpMethod.PUT, path, controller, action)

    def delete(self, path: str, controller: str, action: str) -> Route:
        return self.add(HttpMethod.DELETE, path, controller, action)

    def resource(self, names: DerivedNames) -> list[Route]:
        """Register the seven resource routes for one entity.

        Order: index, show, create, store, edit, update, delete. ``show`` is
        registered before ``create`` but cannot shadow it because ``{id}``
        only matches digits.
        """
        base = f"/{names.route_segment}"
        controller = names.controller_name
        return [
            self.get(base, controller, "index"),
            self.get(f"{base}/{{id}}", controller, "show"),
            self.get(f"{base}/create", controller, "create"),
            self.post(base, controller, "store"),
            self.get(f"{base}/{{id}}/edit", controller, "edit"),
            self.put(f"{base}/{{id}}", controller, "update"),
            self.delete(f"{base}/{{id}}", controller, "delete"),
        ]

    def match(
        self, method: str, path: str, form: dict[str, str] | None = None
    ) -> RouteMatch | None:
        """Find the first route matching *method* and *path*.

        Returns ``None`` when nothing matches; the generated router answers
        that case with a 404 and :data:`NOT_FOUND_BODY`.
        """
        verb = effective_method(method, form)
        for route in self.routes:
            if route.method != verb:
                continue
            found = re.match(route.regex, path)
            if found:
                return RouteMatch(route=route, params=list(found.groups()))
        return None

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self):
        return iter(self.routes)
