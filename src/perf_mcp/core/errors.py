"""Exception hierarchy for perf-mcp.

Every module imports from here. The hierarchy is:

    PerfError
    ├── PerfAPIError(status_code, detail)
    │   ├── PerfAuthError
    │   └── PerfRateLimitError
    ├── PerfConnectionError(url)
    ├── MalformedResponseError(endpoint)
    └── ConfigError
"""

from __future__ import annotations


class PerfError(Exception):
    """Base exception for all perf-mcp errors."""


# ─── Remote API Errors ────────────────────────────────────────


class PerfAPIError(PerfError):
    """Non-2xx response from the Perf API."""

    def __init__(
        self, status_code: int, detail: str, message: str | None = None
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message or f"Perf API error ({status_code}): {detail}")


class PerfAuthError(PerfAPIError):
    """Invalid or missing API key (401).

    The message is fixed; the server's detail is kept on ``detail`` only.
    """

    def __init__(self, detail: str = "") -> None:
        super().__init__(401, detail, "Invalid API key. Check your PERF_API_KEY.")


class PerfRateLimitError(PerfAPIError):
    """Rate limit exceeded (429)."""

    def __init__(self, detail: str) -> None:
        super().__init__(429, detail, f"Rate limited. {detail}")


class PerfConnectionError(PerfError):
    """The request failed before any HTTP status was received."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Could not reach Perf API at {url}: {reason}")


class MalformedResponseError(PerfError):
    """A response body did not have the shape its endpoint promises."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"Malformed response from {endpoint}: {reason}")


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(PerfError):
    """Invalid configuration."""
