"""Response normalizers: raw Perf API payloads -> text or CorrectionResponse.

Each endpoint's payload is decoded once into an explicit pydantic model.
Unknown fields are ignored; a payload whose known fields have the wrong
shape raises ``MalformedResponseError``. Normalizers are pure functions of
their inputs.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from perf_mcp.core.errors import MalformedResponseError
from perf_mcp.models import ActionTaken, CorrectionChange, CorrectionResponse

logger = logging.getLogger(__name__)

RETRACTED_MARKER = "[RETRACTED — unsupported claim]"
DEFAULT_CLAIM_ERROR_TYPE = "factual_error"
RETRACTED_ERROR_TYPE = "fabrication"
NO_OFFSET_SPAN = (0, 0)

_Payload = TypeVar("_Payload", bound=BaseModel)


# ── Payload models ───────────────────────────────────────────────


class _ChatContent(BaseModel):
    content: str | None = None


class _ChatChoice(BaseModel):
    message: _ChatContent | None = None
    delta: _ChatContent | None = None


class _ChatUsage(BaseModel):
    prompt_tokens: int | float | None = None
    completion_tokens: int | float | None = None
    total_tokens: int | float | None = None


class ChatPayload(BaseModel):
    """``POST /v1/chat`` response (OpenAI chat-completion shape)."""

    choices: list[_ChatChoice] | None = None
    model: str | None = None
    usage: _ChatUsage | None = None


class _Claim(BaseModel):
    status: str | None = None
    claim_text: str | None = None
    corrected_text: str | None = None
    claim_type: str | None = None
    confidence: float | None = None


class _EpistemicSummary(BaseModel):
    composite_confidence: float | None = None


class _Epistemic(BaseModel):
    status: str | None = None
    claims: list[_Claim] | None = None
    summary: _EpistemicSummary | None = None


class _PerfEnvelope(BaseModel):
    epistemic: _Epistemic | None = None


class VerifyPayload(BaseModel):
    """``POST /v1/verify`` response; the analysis lives under ``perf.epistemic``."""

    perf: _PerfEnvelope | None = None


class _ChangePayload(BaseModel):
    span: tuple[int, int] = NO_OFFSET_SPAN
    original: str
    replacement: str
    error_type: str
    confidence: float


class _CorrectionPayload(BaseModel):
    corrected_text: str
    changes: list[_ChangePayload] | None = None
    overall_confidence: float
    action_taken: ActionTaken


class ValidatePayload(_CorrectionPayload):
    """``POST /v1/validate`` response."""

    validation_errors: list[str] | None = None


class CorrectPayload(_CorrectionPayload):
    """``POST /v1/correct`` response."""

    error_types_detected: list[str] | None = None


def _decode(model: type[_Payload], raw: Any, endpoint: str) -> _Payload:
    """Validate *raw* against *model*, mapping failures to MalformedResponseError."""
    if not isinstance(raw, dict):
        msg = f"expected a JSON object, got {type(raw).__name__}"
        raise MalformedResponseError(endpoint, msg)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedResponseError(endpoint, str(e)) from e


# ── Chat ─────────────────────────────────────────────────────────


def _token_count(value: int | float | None) -> str:
    """Render a usage counter as received; whole floats print without ".0"."""
    if value is None:
        return "unknown"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_chat(raw: Any) -> str:
    """Render a chat completion as text.

    The first choice's content is returned, followed by a model/token
    footer when usage counters are present. When there is no choice at
    all the whole payload is returned as indented JSON so the caller
    still sees what came back.
    """
    if not isinstance(raw, dict):
        return json.dumps(raw, indent=2, ensure_ascii=False)

    payload = _decode(ChatPayload, raw, "/v1/chat")
    if not payload.choices:
        return json.dumps(raw, indent=2, ensure_ascii=False)
    choice = payload.choices[0]

    content = (
        (choice.message.content if choice.message else None)
        or (choice.delta.content if choice.delta else None)
        or ""
    )
    if payload.usage is None:
        return content

    usage = payload.usage
    model = payload.model or "unknown"
    return (
        f"{content}\n\n---\nModel: {model} | Tokens: "
        f"{_token_count(usage.prompt_tokens)}+{_token_count(usage.completion_tokens)}"
        f"={_token_count(usage.total_tokens)}"
    )


# ── Verify ───────────────────────────────────────────────────────


def _claim_change(
    claim: _Claim, index: int, replacement: str, error_type: str
) -> CorrectionChange:
    """Build a change from a claim; only change-emitting claims need text and confidence."""
    if claim.claim_text is None or claim.confidence is None:
        msg = f"claim {index} ({claim.status}) lacks claim_text or confidence"
        raise MalformedResponseError("/v1/verify", msg)
    return CorrectionChange(
        span=NO_OFFSET_SPAN,
        original=claim.claim_text,
        replacement=replacement,
        error_type=error_type,
        confidence=claim.confidence,
    )


def normalize_verify(raw: Any, text: str) -> CorrectionResponse:
    """Turn an epistemic analysis into a CorrectionResponse.

    The verify endpoint does not return a rewritten document, so
    ``corrected_text`` is always the submitted *text*. Claims carry no
    character offsets; every change uses the ``(0, 0)`` span.
    """
    payload = _decode(VerifyPayload, raw, "/v1/verify")
    epistemic = payload.perf.epistemic if payload.perf else None
    if epistemic is None:
        return CorrectionResponse(
            corrected_text=text,
            changes=(),
            overall_confidence=1.0,
            action_taken="passed",
        )

    changes: list[CorrectionChange] = []
    for index, claim in enumerate(epistemic.claims or []):
        if claim.status == "CORRECTED" and claim.corrected_text:
            changes.append(
                _claim_change(
                    claim,
                    index,
                    claim.corrected_text,
                    claim.claim_type or DEFAULT_CLAIM_ERROR_TYPE,
                )
            )
        elif claim.status == "RETRACTED":
            changes.append(
                _claim_change(claim, index, RETRACTED_MARKER, RETRACTED_ERROR_TYPE)
            )

    # An "uncertain" analysis with nothing to fix still passes.
    action: ActionTaken = "corrected" if changes else "passed"
    if not changes and epistemic.status == "uncertain":
        logger.debug("Verify analysis uncertain with no corrections; passing")

    summary = epistemic.summary
    confidence = 1.0
    if summary is not None and summary.composite_confidence is not None:
        confidence = summary.composite_confidence

    return CorrectionResponse(
        corrected_text=text,
        changes=tuple(changes),
        overall_confidence=confidence,
        action_taken=action,
    )


# ── Validate / Correct ───────────────────────────────────────────


def _project_changes(
    payload: _CorrectionPayload, endpoint: str
) -> tuple[CorrectionChange, ...]:
    changes = tuple(
        CorrectionChange(
            span=c.span,
            original=c.original,
            replacement=c.replacement,
            error_type=c.error_type,
            confidence=c.confidence,
        )
        for c in payload.changes or []
    )
    if payload.action_taken == "corrected" and not changes:
        logger.debug("%s reported 'corrected' without any changes", endpoint)
    return changes


def normalize_validate(raw: Any) -> CorrectionResponse:
    """Project a validate payload; the remote verdict is trusted as-is."""
    payload = _decode(ValidatePayload, raw, "/v1/validate")
    errors = payload.validation_errors
    return CorrectionResponse(
        corrected_text=payload.corrected_text,
        changes=_project_changes(payload, "/v1/validate"),
        overall_confidence=payload.overall_confidence,
        action_taken=payload.action_taken,
        validation_errors=tuple(errors) if errors is not None else None,
    )


def normalize_correct(raw: Any) -> CorrectionResponse:
    """Project a correct payload; the remote verdict is trusted as-is."""
    payload = _decode(CorrectPayload, raw, "/v1/correct")
    detected = payload.error_types_detected
    return CorrectionResponse(
        corrected_text=payload.corrected_text,
        changes=_project_changes(payload, "/v1/correct"),
        overall_confidence=payload.overall_confidence,
        action_taken=payload.action_taken,
        error_types_detected=tuple(detected) if detected is not None else None,
    )
