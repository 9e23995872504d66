"""Tests for the core error hierarchy."""

from perf_mcp.core.errors import (
    ConfigError,
    MalformedResponseError,
    PerfAPIError,
    PerfAuthError,
    PerfConnectionError,
    PerfError,
    PerfRateLimitError,
)


class TestHierarchy:
    """All errors inherit from PerfError."""

    def test_api_subclasses_are_api_errors(self):
        for err in (PerfAuthError("nope"), PerfRateLimitError("slow down")):
            assert isinstance(err, PerfAPIError)
            assert isinstance(err, PerfError)

    def test_other_errors_are_perf_errors(self):
        assert isinstance(PerfConnectionError("http://x", "refused"), PerfError)
        assert isinstance(MalformedResponseError("/v1/chat", "bad"), PerfError)
        assert isinstance(ConfigError("bad config"), PerfError)

    def test_connection_error_is_not_api_error(self):
        assert not isinstance(PerfConnectionError("http://x", "refused"), PerfAPIError)


class TestMessages:
    def test_api_error_message(self):
        err = PerfAPIError(500, "boom")
        assert str(err) == "Perf API error (500): boom"
        assert err.status_code == 500
        assert err.detail == "boom"

    def test_auth_message_ignores_detail(self):
        err = PerfAuthError("token expired at 12:00")
        assert str(err) == "Invalid API key. Check your PERF_API_KEY."
        assert err.status_code == 401
        assert err.detail == "token expired at 12:00"

    def test_rate_limit_message(self):
        err = PerfRateLimitError("Try again in 30s")
        assert str(err) == "Rate limited. Try again in 30s"
        assert err.status_code == 429

    def test_connection_error_names_url(self):
        err = PerfConnectionError("https://api.withperf.pro/v1/chat", "refused")
        assert err.url == "https://api.withperf.pro/v1/chat"
        assert "refused" in str(err)

    def test_malformed_names_endpoint(self):
        err = MalformedResponseError("/v1/verify", "claims must be a list")
        assert err.endpoint == "/v1/verify"
        assert str(err) == "Malformed response from /v1/verify: claims must be a list"
