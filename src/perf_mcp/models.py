"""Result types shared by the client, normalizers and tool formatters.

Data classes are immutable (frozen dataclasses with slots). A
``CorrectionResponse`` is built fresh for every call and discarded once the
tool report has been rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ActionTaken = Literal["corrected", "rejected", "passed"]


@dataclass(frozen=True, slots=True)
class CorrectionChange:
    """One edit suggested or applied to the content."""

    span: tuple[int, int]  # Half-open offsets; (0, 0) when unknown
    original: str
    replacement: str
    error_type: str  # Open set: "fabrication", "factual_error", ...
    confidence: float


@dataclass(frozen=True, slots=True)
class CorrectionResponse:
    """Uniform result of verify, validate and correct calls."""

    corrected_text: str
    changes: tuple[CorrectionChange, ...]
    overall_confidence: float
    action_taken: ActionTaken
    validation_errors: tuple[str, ...] | None = None  # validate only
    error_types_detected: tuple[str, ...] | None = None  # correct only
