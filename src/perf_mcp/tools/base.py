"""Tool data types.

A ``ToolDefinition`` ties an MCP tool name to its argument model, its
behaviour hints and the handler that serves it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pydantic import BaseModel

    from perf_mcp.client import PerfClient


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Everything needed to advertise and serve one tool."""

    name: str
    title: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[[PerfClient, Any], Awaitable[str]]
    read_only: bool
    idempotent: bool
    open_world: bool

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments."""
        return self.args_model.model_json_schema()


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Rendered outcome of one tool call."""

    content: str
    is_error: bool = False
