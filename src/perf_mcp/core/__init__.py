"""Core errors shared by every layer."""

from perf_mcp.core.errors import (
    ConfigError,
    MalformedResponseError,
    PerfAPIError,
    PerfAuthError,
    PerfConnectionError,
    PerfError,
    PerfRateLimitError,
)

__all__ = [
    "ConfigError",
    "MalformedResponseError",
    "PerfAPIError",
    "PerfAuthError",
    "PerfConnectionError",
    "PerfError",
    "PerfRateLimitError",
]
