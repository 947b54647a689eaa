"""Tests for signed URL construction."""

from statcounter.config import Credentials
from statcounter.signing import RequestBuilder, sign

FIXED_TIME = 1577836800  # 2020-01-01T00:00:00Z


def _builder(password: str = "s3cret", clock=lambda: FIXED_TIME) -> RequestBuilder:  # allow-secret
    return RequestBuilder(Credentials("jane", password), clock=clock)


class TestSign:
    def test_known_digest(self):
        query = "?vn=3&t=1577836800&u=jane&f=xml"
        assert sign(query, "s3cret") == "25af4a7ae1e73e4499c17551478d5a3bf24c7368"  # allow-secret

    def test_deterministic(self):
        assert sign("?vn=3&u=a", "pw") == sign("?vn=3&u=a", "pw")

    def test_password_changes_signature(self):
        assert sign("?vn=3&u=a", "pw1") != sign("?vn=3&u=a", "pw2")


class TestRequestBuilder:
    def test_query_string_slot_order(self):
        query = _builder().query_string([("s", "popular"), ("pi", "123")])
        assert query == "?vn=3&t=1577836800&u=jane&s=popular&pi=123&f=xml"

    def test_query_string_without_params(self):
        assert _builder().query_string() == "?vn=3&t=1577836800&u=jane&f=xml"

    def test_build_url(self):
        url = _builder().build_url("stats", [("s", "popular"), ("pi", "123")])
        assert url == (
            "https://api.statcounter.com/stats/"
            "?vn=3&t=1577836800&u=jane&s=popular&pi=123&f=xml"
            "&sha1=50b08c6cafb5a44bc902a72f275701ed50253db7"
        )

    def test_password_never_in_url(self):
        url = _builder(password="hunter2-secret").build_url("user_details")  # allow-secret
        assert "hunter2-secret" not in url

    def test_identical_across_calls_with_fixed_clock(self):
        builder = _builder()
        params = [("s", "entry"), ("pi", "123"), ("n", "20")]
        assert builder.build_url("stats", params) == builder.build_url("stats", params)

    def test_timestamp_comes_from_clock(self):
        ticks = iter([100.9, 200.2])
        builder = _builder(clock=lambda: next(ticks))
        first = builder.build("user_projects")
        second = builder.build("user_projects")
        assert "&t=100&" in first.query_string
        assert "&t=200&" in second.query_string
        assert first.signature != second.signature

    def test_signed_url_parts(self):
        signed = _builder().build("user_projects")
        assert signed.base_url == "https://api.statcounter.com"
        assert signed.endpoint_path == "user_projects"
        assert signed.signature == sign(signed.query_string, "s3cret")  # allow-secret
        assert str(signed).endswith(f"&sha1={signed.signature}")

    def test_trailing_slash_on_base_url(self):
        builder = RequestBuilder(
            Credentials("jane", "s3cret"),  # allow-secret
            base_url="http://localhost:8080/",
            clock=lambda: FIXED_TIME,
        )
        assert builder.build_url("user_projects").startswith("http://localhost:8080/user_projects/?vn=3")

    def test_builder_keeps_no_query_state(self):
        builder = _builder()
        builder.build("stats", [("s", "popular")])
        assert builder.query_string() == "?vn=3&t=1577836800&u=jane&f=xml"
