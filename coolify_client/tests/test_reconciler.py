"""
Unit tests for pagination reconciliation.
"""

import json

import pytest

from coolify_client.app.pagination import (
    ListResult,
    Page,
    Pagination,
    backfill_per_page,
    decode_page,
    derive_page,
)
from coolify_client.app.resources import Application, Deployment
from shared.errors import DecodeFailure


def _apps(n):
    return [{"id": i, "uuid": f"app-{i}", "name": f"app {i}", "status": "running"} for i in range(1, n + 1)]


class TestDerivePage:
    """Test cases for derive_page."""

    def test_full_page_without_metadata_assumes_more(self):
        """Test a full page with no metadata suggests a next page."""
        assert derive_page(Pagination(), fetched_count=5, per_page=5, requested_page=2) == (2, 3)

    def test_short_page_without_metadata_is_last(self):
        """Test a short page with no metadata is treated as the last page."""
        assert derive_page(Pagination(), fetched_count=3, per_page=5, requested_page=2) == (2, 2)

    def test_server_pages_win(self):
        """Test server-reported current and last page are used as-is."""
        info = Pagination(current_page=3, last_page=7, per_page=5, total=33)

        assert derive_page(info, fetched_count=5, per_page=5, requested_page=1) == (3, 7)

    def test_total_count_rounds_up(self):
        """Test total pages from total item count when last_page is missing."""
        info = Pagination(total=11)

        assert derive_page(info, fetched_count=5, per_page=5, requested_page=1) == (1, 3)

    def test_total_count_ignored_without_per_page(self):
        """Test total count needs a positive per_page to be used."""
        info = Pagination(total=11)

        assert derive_page(info, fetched_count=4, per_page=0, requested_page=1) == (1, 1)

    def test_zero_per_page_never_guesses_more(self):
        """Test the full-page heuristic needs a positive per_page."""
        assert derive_page(Pagination(), fetched_count=0, per_page=0, requested_page=4) == (4, 4)

    def test_invalid_server_current_page_uses_request(self):
        """Test a server current_page below 1 is replaced by the request."""
        info = Pagination(current_page=0, last_page=4)

        assert derive_page(info, fetched_count=5, per_page=5, requested_page=2) == (2, 4)


class TestDecodePage:
    """Test cases for decode_page."""

    def test_structured_envelope(self):
        """Test {"data": [...], "pagination": {...}} decodes via the envelope."""
        body = json.dumps({
            "data": _apps(2),
            "pagination": {"current_page": 1, "last_page": 4, "per_page": 2, "total": 8},
        })

        page = decode_page(body.encode(), Application)

        assert [app.uuid for app in page.results()] == ["app-1", "app-2"]
        assert page.page_info() == Pagination(current_page=1, last_page=4, per_page=2, total=8)
        assert page.data == page.results()

    def test_bare_array(self):
        """Test a bare array decodes via the fallback with empty pagination."""
        page = decode_page(json.dumps(_apps(3)).encode(), Application)

        assert len(page.results()) == 3
        assert page.page_info().is_empty()

    @pytest.mark.parametrize("field", ["data", "items", "applications"])
    def test_item_field_names(self, field):
        """Test every known item-list field name is accepted."""
        page = decode_page(json.dumps({field: _apps(2)}), Application)

        assert [app.id for app in page.results()] == [1, 2]

    def test_first_non_empty_list_wins(self):
        """Test data is preferred over items and applications."""
        body = {"data": _apps(1), "items": _apps(3), "applications": _apps(2)}

        page = decode_page(json.dumps(body), Application)

        assert len(page.results()) == 1

    def test_empty_data_falls_through_to_items(self):
        """Test an empty data list does not hide items."""
        page = decode_page(json.dumps({"data": [], "items": _apps(2)}), Application)

        assert len(page.results()) == 2

    def test_meta_pagination_preferred(self):
        """Test meta.pagination wins over top-level pagination."""
        body = {
            "items": _apps(1),
            "pagination": {"current_page": 9},
            "meta": {"pagination": {"current_page": 2, "last_page": 3}},
        }

        info = decode_page(json.dumps(body), Application).page_info()

        assert (info.current_page, info.last_page) == (2, 3)

    def test_pagination_only_envelope(self):
        """Test an envelope with pagination but no items is kept."""
        body = {"data": [], "pagination": {"current_page": 5, "last_page": 4}}

        page = decode_page(json.dumps(body), Application)

        assert page.results() == []
        assert page.page_info().current_page == 5

    def test_empty_envelope_is_returned(self):
        """Test an object with no items or pagination is an empty page."""
        page = decode_page(b'{"data": null, "message": "ok"}', Application)

        assert page.results() == []
        assert page.page_info().is_empty()

    def test_null_fields_tolerated(self):
        """Test null item fields fall back to model defaults."""
        body = {"data": [{"uuid": "d1", "commit": None, "application_id": None}]}

        deployment = decode_page(json.dumps(body), Deployment).results()[0]

        assert deployment.uuid == "d1"
        assert deployment.commit == ""
        assert deployment.application_id == 0

    def test_unknown_fields_ignored(self):
        """Test extra upstream fields do not break decoding."""
        body = [{"uuid": "a", "name": "web", "brand_new_field": {"x": 1}}]

        app = decode_page(json.dumps(body), Application).results()[0]

        assert app.name == "web"

    @pytest.mark.parametrize("body", [b"not json", b'"a string"', b"[1, 2, 3]", b'{"data": [1, 2]}'])
    def test_undecodable_body(self, body):
        """Test a body matching neither shape raises DecodeFailure."""
        with pytest.raises(DecodeFailure) as exc_info:
            decode_page(body, Application)

        assert exc_info.value.code == "DECODE_FAILURE"
        assert exc_info.value.details["item_type"] == "Application"


class TestBackfillPerPage:
    """Test cases for backfill_per_page."""

    def test_backfills_missing_per_page(self):
        """Test the requested size is recorded when the server omitted it."""
        page = Page[Application](data=[], pagination=Pagination(current_page=1, last_page=2))

        backfill_per_page(page, 5)

        assert page.page_info().per_page == 5
        assert page.page_info().last_page == 2

    def test_keeps_server_per_page(self):
        """Test a server-reported per_page is left untouched."""
        page = Page[Application](pagination=Pagination(per_page=10))

        backfill_per_page(page, 5)

        assert page.page_info().per_page == 10

    def test_backfills_meta_pagination(self):
        """Test the backfill lands where page_info reads from."""
        page = decode_page(json.dumps({"items": _apps(1), "meta": {"pagination": {"last_page": 3}}}), Application)

        backfill_per_page(page, 5)

        assert page.page_info().per_page == 5
        assert page.page_info().last_page == 3

    def test_ignores_non_positive_request(self):
        """Test nothing is recorded when no size was requested."""
        page = Page[Application]()

        backfill_per_page(page, 0)

        assert page.page_info().is_empty()


class TestListResult:
    """Test cases for ListResult."""

    def test_from_bare_array(self):
        """Test page numbers derived for a legacy bare-array response."""
        page = decode_page(json.dumps(_apps(5)), Application)

        result = ListResult.from_page(page, per_page=5, requested_page=2)

        assert len(result.items) == 5
        assert (result.current_page, result.total_pages) == (2, 3)
