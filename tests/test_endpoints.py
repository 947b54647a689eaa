"""Tests for the endpoint catalog and parameter serialization."""

from statcounter import endpoints
from statcounter.endpoints import ENDPOINTS, RANGE, serialize_params
from statcounter.errors import AuthenticationError, RemoteServiceError

JANUARY = [("sm", "01"), ("sd", "01"), ("sy", "2020"), ("em", "01"), ("ed", "31"), ("ey", "2020")]


def _query(params) -> str:
    return "".join(f"&{k}={v}" for k, v in params)


class TestCatalog:
    def test_all_record_shapes_present(self):
        assert len(ENDPOINTS) == 15

    def test_account_endpoints_are_credential_failures(self):
        for endpoint in (endpoints.USER_PROJECTS, endpoints.USER_DETAILS, endpoints.ADD_PROJECT):
            assert endpoint.error is AuthenticationError

    def test_stats_endpoints_are_service_failures(self):
        stats = [e for e in ENDPOINTS.values() if e.path == "stats"]
        assert len(stats) == 12
        assert all(e.error is RemoteServiceError for e in stats)

    def test_pageload_has_seventeen_fields(self):
        assert len(endpoints.PAGELOAD.fields) == 17

    def test_visitor_height_field_name(self):
        assert "resolution_height" in endpoints.VISITOR.field_names
        assert "resolution_" not in endpoints.VISITOR.field_names

    def test_summary_not_paged(self):
        assert not endpoints.SUMMARY.paged
        assert endpoints.VISITOR.paged


class TestSerializeParams:
    def test_popular_order(self):
        params = serialize_params(
            endpoints.POPULAR,
            {"pi": "123", "ct": "page_view", RANGE: JANUARY, "n": 20, "o": 0},
        )
        assert _query(params) == (
            "&s=popular&pi=123&ct=page_view"
            "&sm=01&sd=01&sy=2020&em=01&ed=31&ey=2020&n=20&o=0"
        )

    def test_download_link_puts_count_before_range(self):
        params = serialize_params(
            endpoints.DOWNLOAD_LINK_ACTIVITY,
            {"de": "all", "pi": "123", RANGE: JANUARY, "n": 20, "o": 0},
        )
        assert _query(params) == (
            "&s=download-link-activity&de=all&pi=123&n=20"
            "&sm=01&sd=01&sy=2020&em=01&ed=31&ey=2020&o=0"
        )

    def test_summary_fills_granularity(self):
        params = serialize_params(endpoints.SUMMARY, {"pi": "123", RANGE: JANUARY})
        assert _query(params) == (
            "&s=summary&g=daily&sm=01&sd=01&sy=2020&em=01&ed=31&ey=2020&pi=123"
        )

    def test_visitor_order(self):
        params = serialize_params(
            endpoints.VISITOR, {"pi": "123", "n": 5, RANGE: JANUARY, "o": 10}
        )
        assert _query(params) == (
            "&s=visitor&g=daily&pi=123&n=5"
            "&sm=01&sd=01&sy=2020&em=01&ed=31&ey=2020&o=10"
        )

    def test_empty_slots_are_skipped(self):
        params = serialize_params(endpoints.BROWSERS, {"de": "mobile", "pi": "123", "n": None})
        assert _query(params) == "&s=browsers&de=mobile&pi=123"

    def test_unknown_values_are_ignored(self):
        params = serialize_params(endpoints.ENTRY, {"pi": "123", "n": 20, "zz": "nope"})
        assert _query(params) == "&s=entry&pi=123&n=20"

    def test_account_endpoint_without_params(self):
        assert serialize_params(endpoints.USER_PROJECTS, {}) == []
