"""PerfClient -- async client for the Perf API.

One authenticated JSON exchange per call. HTTP failures are translated into
the ``perf_mcp.core.errors`` hierarchy; nothing is retried or cached.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from perf_mcp.core.errors import (
    MalformedResponseError,
    PerfAPIError,
    PerfAuthError,
    PerfConnectionError,
    PerfRateLimitError,
)
from perf_mcp.models import CorrectionResponse
from perf_mcp.normalize import (
    normalize_chat,
    normalize_correct,
    normalize_validate,
    normalize_verify,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.withperf.pro"


def _compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop unset (None) fields from a request body."""
    return {k: v for k, v in body.items() if v is not None}


def _error_detail(response: httpx.Response) -> str:
    """Pull ``error`` or ``message`` out of a JSON error body, else raw text."""
    text = response.text
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    if isinstance(parsed, dict):
        detail = parsed.get("error") or parsed.get("message")
        if detail:
            return detail if isinstance(detail, str) else json.dumps(detail)
    return text


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    detail = _error_detail(response)
    status = response.status_code
    if status == 429:
        raise PerfRateLimitError(detail)
    if status == 401:
        raise PerfAuthError(detail)
    raise PerfAPIError(status, detail)


class PerfClient:
    """Client for the Perf accuracy API.

    Usage::

        async with PerfClient(api_key="pk_live_xxx") as client:
            report = await client.verify("The Eiffel Tower is in Berlin.")
            print(report.action_taken)

    The client holds no per-call state and may serve concurrent calls.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> PerfClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, path: str, body: Any) -> Any:
        """Send *body* as JSON to ``base_url + path`` and return the parsed reply.

        Raises:
            PerfAuthError: On 401.
            PerfRateLimitError: On 429.
            PerfAPIError: On any other non-2xx status.
            PerfConnectionError: When no HTTP status was received.
            MalformedResponseError: When a 2xx body is not JSON.
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(
                method, url, content=json.dumps(body)
            )
        except httpx.HTTPError as e:
            raise PerfConnectionError(url, str(e) or type(e).__name__) from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        _raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(path, "response body is not JSON") from e

    # -- Endpoints -------------------------------------------------------------

    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        response_format: dict[str, str] | None = None,
    ) -> str:
        raw = await self.request(
            "POST",
            "/v1/chat",
            _compact(
                {
                    "messages": messages,
                    "model": model,
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                    "response_format": response_format,
                }
            ),
        )
        return normalize_chat(raw)

    async def verify(
        self,
        text: str,
        *,
        mode: str | None = None,
        source_context: str | None = None,
    ) -> CorrectionResponse:
        raw = await self.request(
            "POST",
            "/v1/verify",
            _compact({"text": text, "mode": mode, "source_context": source_context}),
        )
        return normalize_verify(raw, text)

    async def validate(
        self,
        content: str,
        target_schema: dict[str, Any],
        *,
        repair_mode: str | None = None,
    ) -> CorrectionResponse:
        raw = await self.request(
            "POST",
            "/v1/validate",
            _compact(
                {
                    "content": content,
                    "target_schema": target_schema,
                    "repair_mode": repair_mode,
                }
            ),
        )
        return normalize_validate(raw)

    async def correct(
        self,
        content: str,
        *,
        original_prompt: str | None = None,
        target_schema: dict[str, Any] | None = None,
        correction_budget: str | None = None,
    ) -> CorrectionResponse:
        raw = await self.request(
            "POST",
            "/v1/correct",
            _compact(
                {
                    "content": content,
                    "original_prompt": original_prompt,
                    "target_schema": target_schema,
                    "correction_budget": correction_budget,
                }
            ),
        )
        return normalize_correct(raw)
