"""Tests for the listing page generator (mvcgen.scaffolder.view_gen)."""

from __future__ import annotations

import pytest

from mvcgen.scaffolder.view_gen import ViewGenerator


pytestmark = pytest.mark.unit


@pytest.fixture
def page(renderer, post_entity) -> str:
    return ViewGenerator(renderer).generate(post_entity).content


class TestListingPage:
    def test_path(self, renderer, post_entity):
        assert ViewGenerator(renderer).generate(post_entity).relative_path == "src/View/post_index.php"

    def test_table_header_per_field(self, page):
        assert "<th>Title</th>" in page
        assert "<th>PublishedAt</th>" in page
        assert "<th>AuthorEmail</th>" in page

    def test_dialogs(self, page):
        for dialog in ("createModal", "editModal", "viewModal", "deleteModal"):
            assert f'id="{dialog}"' in page

    def test_inputs_follow_field_type(self, page):
        assert '<textarea class="form-control" id="create_body" name="body"' in page
        assert '<input type="number" class="form-control" id="create_views" name="views"' in page
        assert 'id="create_rating" name="rating" step="any" required>' in page
        assert '<input type="checkbox" class="form-check-input" id="create_published"' in page
        assert '<input type="date" class="form-control" id="create_publishedAt"' in page
        assert '<input type="text" class="form-control" id="create_title"' in page

    def test_edit_dialog_prefills(self, page):
        assert "document.getElementById('edit_published').checked = Boolean(data.published);" in page
        assert "String(data.publishedAt).substring(0, 10)" in page
        assert "document.getElementById('edit_title').value = data.title ?? '';" in page


class TestPageScript:
    def test_requests_are_marked_as_script_requests(self, page):
        assert page.count("'X-Requested-With': 'XMLHttpRequest'") == 5

    def test_update_and_delete_use_method_override(self, page):
        assert "formData.append('_method', 'PUT');" in page
        assert "formData.append('_method', 'DELETE');" in page

    def test_endpoint(self, page):
        assert "const postEndpoint = '/posts';" in page

    def test_focus_id_opens_detail(self, page):
        assert "const focusId = <?= json_encode($focusId) ?>;" in page
        assert "viewPost(focusId);" in page

    def test_unauthorised_mutation_goes_to_login(self, page):
        assert "response.status === 401" in page
        assert "window.location.href = '/login';" in page

    def test_cells_are_escaped(self, page):
        assert "${escapeHtml(item.title)}" in page
