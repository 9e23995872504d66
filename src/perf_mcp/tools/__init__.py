"""MCP tool definitions, handlers and report formatting."""

from perf_mcp.tools.base import ToolDefinition, ToolResult
from perf_mcp.tools.registry import PERF_TOOLS, ToolRegistry

__all__ = ["PERF_TOOLS", "ToolDefinition", "ToolRegistry", "ToolResult"]
