"""Tests for the route model and matcher (mvcgen.scaffolder.routing)."""

from __future__ import annotations

import re

import pytest

from mvcgen.scaffolder.naming import derive
from mvcgen.scaffolder.routing import (
    HttpMethod,
    Route,
    RouteTable,
    effective_method,
    template_to_regex,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def post_routes() -> RouteTable:
    table = RouteTable()
    table.resource(derive("Post"))
    return table


# ---------------------------------------------------------------------------
# Template compilation
# ---------------------------------------------------------------------------


class TestTemplateToRegex:
    def test_literal_path(self):
        assert re.match(template_to_regex("/posts"), "/posts")
        assert not re.match(template_to_regex("/posts"), "/posts/1")

    def test_id_only_matches_digits(self):
        regex = template_to_regex("/posts/{id}")
        assert re.match(regex, "/posts/42").groups() == ("42",)
        assert not re.match(regex, "/posts/abc")
        assert not re.match(regex, "/posts/")

    def test_id_rejects_non_ascii_digits(self):
        regex = template_to_regex("/posts/{id}")
        assert not re.match(regex, "/posts/\u0664\u0662")
        assert not re.match(regex, "/posts/\uff11\uff12")

    def test_other_placeholders_match_one_segment(self):
        regex = template_to_regex("/tags/{slug}")
        assert re.match(regex, "/tags/php-8").groups() == ("php-8",)
        assert not re.match(regex, "/tags/a/b")

    def test_literal_parts_escaped(self):
        regex = template_to_regex("/files.json")
        assert re.match(regex, "/files.json")
        assert not re.match(regex, "/filesXjson")

    def test_anchored(self):
        regex = template_to_regex("/posts/{id}/edit")
        assert regex.startswith("^") and regex.endswith("$")
        assert not re.match(regex, "/x/posts/1/edit")


# ---------------------------------------------------------------------------
# Method override
# ---------------------------------------------------------------------------


class TestEffectiveMethod:
    def test_post_with_put_override(self):
        assert effective_method("POST", {"_method": "PUT"}) == "PUT"

    def test_override_is_case_insensitive(self):
        assert effective_method("post", {"_method": "delete"}) == "DELETE"

    def test_unsupported_override_ignored(self):
        assert effective_method("POST", {"_method": "PATCH"}) == "POST"
        assert effective_method("POST", {"_method": "GET"}) == "POST"

    def test_only_post_is_overridden(self):
        assert effective_method("GET", {"_method": "DELETE"}) == "GET"

    def test_no_form(self):
        assert effective_method("POST") == "POST"


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------


class TestRouteTable:
    def test_resource_registers_seven_in_order(self, post_routes):
        assert [(r.method, r.path, r.action) for r in post_routes] == [
            ("GET", "/posts", "index"),
            ("GET", "/posts/{id}", "show"),
            ("GET", "/posts/create", "create"),
            ("POST", "/posts", "store"),
            ("GET", "/posts/{id}/edit", "edit"),
            ("PUT", "/posts/{id}", "update"),
            ("DELETE", "/posts/{id}", "delete"),
        ]
        assert len(post_routes) == 7

    def test_add_accepts_enum_and_string(self):
        table = RouteTable()
        assert table.add(HttpMethod.GET, "/a", "A", "x").method == "GET"
        assert table.add("patch", "/a", "A", "y").method == "PATCH"

    def test_handler(self):
        assert Route("GET", "/", "PostController", "index").handler == "PostController@index"


class TestRouteMatching:
    def test_show_does_not_shadow_create(self, post_routes):
        match = post_routes.match("GET", "/posts/create")
        assert match.route.action == "create"
        assert match.params == []

    def test_show_captures_id(self, post_routes):
        match = post_routes.match("GET", "/posts/17")
        assert match.route.action == "show"
        assert match.params == ["17"]

    def test_edit(self, post_routes):
        assert post_routes.match("GET", "/posts/5/edit").route.action == "edit"

    def test_store(self, post_routes):
        assert post_routes.match("POST", "/posts").route.action == "store"

    def test_form_override_reaches_update_and_delete(self, post_routes):
        assert post_routes.match("POST", "/posts/3", {"_method": "PUT"}).route.action == "update"
        assert (
            post_routes.match("POST", "/posts/3", {"_method": "DELETE"}).route.action
            == "delete"
        )

    def test_native_put(self, post_routes):
        assert post_routes.match("PUT", "/posts/3").params == ["3"]

    def test_non_ascii_id_is_not_found(self, post_routes):
        assert post_routes.match("GET", "/posts/\u0664\u0662") is None
        assert post_routes.match("GET", "/posts/\u0664\u0662/edit") is None

    def test_no_match_returns_none(self, post_routes):
        assert post_routes.match("GET", "/unknown") is None
        assert post_routes.match("POST", "/posts/3") is None
        assert post_routes.match("GET", "/posts/abc") is None

    def test_first_registration_wins(self):
        table = RouteTable()
        table.get("/items/{slug}", "First", "handle")
        table.get("/items/{name}", "Second", "handle")
        assert table.match("GET", "/items/x").route.controller == "First"
