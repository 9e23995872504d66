"""Tool handlers: validated arguments -> Perf API call -> text report."""

from __future__ import annotations

from typing import TYPE_CHECKING

from perf_mcp.tools.formatting import (
    format_correct_report,
    format_validate_report,
    format_verify_report,
)

if TYPE_CHECKING:
    from perf_mcp.client import PerfClient
    from perf_mcp.tools.schemas import ChatArgs, CorrectArgs, ValidateArgs, VerifyArgs


def verify_mode(sensitivity: str | None) -> str:
    """Map tool sensitivity onto the remote verification mode."""
    return "thorough" if sensitivity == "strict" else "standard"


async def handle_chat(client: PerfClient, args: ChatArgs) -> str:
    return await client.chat(
        [m.model_dump() for m in args.messages],
        model=args.model,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        response_format=(
            args.response_format.model_dump() if args.response_format else None
        ),
    )


async def handle_verify(client: PerfClient, args: VerifyArgs) -> str:
    result = await client.verify(
        args.content,
        mode=verify_mode(args.sensitivity),
        source_context=args.source_context,
    )
    return format_verify_report(result, show_changes=args.return_diff is not False)


async def handle_validate(client: PerfClient, args: ValidateArgs) -> str:
    result = await client.validate(
        args.content,
        args.target_schema,
        repair_mode=args.repair_mode,
    )
    return format_validate_report(result)


async def handle_correct(client: PerfClient, args: CorrectArgs) -> str:
    result = await client.correct(
        args.content,
        original_prompt=args.original_prompt,
        target_schema=args.target_schema,
        correction_budget=args.correction_budget,
    )
    return format_correct_report(result)
