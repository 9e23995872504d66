"""Plain-text reports for CorrectionResponse results.

The layout of these reports is part of the tool interface; agents parse
them, so line prefixes and ordering must stay stable.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perf_mcp.models import CorrectionChange, CorrectionResponse

REGENERATE_ADVICE = (
    "Output could not be corrected with confidence. Consider regenerating."
)


def percent(fraction: float, places: int) -> str:
    """Format *fraction* as a percentage with *places* decimals, rounding half up."""
    scaled = fraction * 100
    if not math.isfinite(scaled):
        return str(scaled)
    with localcontext() as ctx:
        # Enough digits for any finite double at the requested precision.
        ctx.prec = 400 + places
        exponent = Decimal(1).scaleb(-places)
        value = Decimal(scaled).quantize(exponent, rounding=ROUND_HALF_UP)
    return f"{value:f}"


def _header(result: CorrectionResponse) -> list[str]:
    return [
        f"Action: {result.action_taken}",
        f"Confidence: {percent(result.overall_confidence, 1)}%",
    ]


def _quoted_change(change: CorrectionChange) -> str:
    return (
        f'  - [{change.error_type}] "{change.original}" → "{change.replacement}" '
        f"({percent(change.confidence, 0)}% confident)"
    )


def format_verify_report(result: CorrectionResponse, *, show_changes: bool = True) -> str:
    lines = _header(result)

    if show_changes and result.changes:
        lines.append(f"\nChanges ({len(result.changes)}):")
        lines.extend(_quoted_change(c) for c in result.changes)

    if result.action_taken == "corrected":
        lines.append(f"\nCorrected text:\n{result.corrected_text}")

    return "\n".join(lines)


def format_validate_report(result: CorrectionResponse) -> str:
    lines = _header(result)

    if result.changes:
        lines.append(f"\nRepairs ({len(result.changes)}):")
        lines.extend(
            f"  - [{c.error_type}] {c.original} → {c.replacement}"
            for c in result.changes
        )

    if result.validation_errors:
        lines.append("\nRemaining errors:")
        lines.extend(f"  - {err}" for err in result.validation_errors)

    if result.action_taken != "passed":
        lines.append(f"\nOutput:\n{result.corrected_text}")

    return "\n".join(lines)


def format_correct_report(result: CorrectionResponse) -> str:
    lines = _header(result)

    if result.error_types_detected:
        lines.append(f"Error types: {', '.join(result.error_types_detected)}")

    if result.changes:
        lines.append(f"\nCorrections ({len(result.changes)}):")
        lines.extend(_quoted_change(c) for c in result.changes)

    if result.action_taken == "corrected":
        lines.append(f"\nCorrected output:\n{result.corrected_text}")
    elif result.action_taken == "rejected":
        lines.append(f"\n{REGENERATE_ADVICE}")

    return "\n".join(lines)
