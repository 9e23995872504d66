"""Shared test fixtures for perf-mcp."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from perf_mcp.client import PerfClient
from tests.fixtures.transport import RecordingTransport

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

TEST_BASE_URL = "http://perf.test"
TEST_API_KEY = "pk_test_123"


@pytest.fixture
async def make_client() -> AsyncIterator[Any]:
    """Factory fixture: ``make_client(handler) -> (PerfClient, transport)``."""
    clients: list[PerfClient] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        base_url: str = TEST_BASE_URL,
    ) -> tuple[PerfClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = PerfClient(TEST_API_KEY, base_url, transport=transport)
        clients.append(client)
        return client, transport

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real config files and PERF_* env vars out of every test."""
    for name in (
        "PERF_API_KEY",
        "PERF_BASE_URL",
        "PERF_TIMEOUT",
        "PERF_LOG_LEVEL",
        "PERF_MCP_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
