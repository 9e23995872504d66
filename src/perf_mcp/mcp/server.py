"""MCP server exposing the Perf tools over stdio.

Logging goes to stderr only; stdout carries the JSON-RPC stream.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool, ToolAnnotations

from perf_mcp import __version__
from perf_mcp.client import PerfClient
from perf_mcp.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from perf_mcp.config.schema import PerfConfig

logger = logging.getLogger(__name__)

SERVER_NAME = "perf-mcp"


def _get_tools(registry: ToolRegistry) -> list[Tool]:
    """Describe the registry's tools as MCP Tool objects."""
    return [
        Tool(
            name=t.name,
            description=t.description,
            inputSchema=t.input_schema,
            annotations=ToolAnnotations(
                title=t.title,
                readOnlyHint=t.read_only,
                idempotentHint=t.idempotent,
                openWorldHint=t.open_world,
            ),
        )
        for t in registry.list_definitions()
    ]


async def call_tool(
    client: PerfClient,
    registry: ToolRegistry,
    name: str,
    arguments: dict[str, Any] | None,
) -> CallToolResult:
    """Run one tool and wrap its report as a single text block."""
    result = await registry.execute(client, name, arguments or {})
    return CallToolResult(
        content=[TextContent(type="text", text=result.content)],
        isError=result.is_error,
    )


def create_server(client: PerfClient, registry: ToolRegistry | None = None) -> Server:
    """Build an MCP server whose tools call through *client*."""
    registry = registry or ToolRegistry()
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        return _get_tools(registry)

    @server.call_tool()  # type: ignore[untyped-decorator]
    async def handle_call(name: str, arguments: dict) -> CallToolResult:  # type: ignore[type-arg]
        return await call_tool(client, registry, name, arguments)

    return server


async def run_server(config: PerfConfig) -> None:
    """Start the MCP server on stdio.

    ``config.api_key`` must be set; the CLI checks this before calling.
    """
    if not config.api_key:
        msg = "run_server requires config.api_key"
        raise ValueError(msg)

    async with PerfClient(
        config.api_key, config.base_url, timeout=config.timeout
    ) as client:
        server = create_server(client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server started on stdio transport (%s)", client.base_url)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
