"""Click CLI application for perf-mcp.

Entry point: ``perf-mcp = "perf_mcp.cli.app:cli"``.

Everything is written to stderr: when the server runs, stdout belongs to
the MCP JSON-RPC stream.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

import click

from perf_mcp import __version__
from perf_mcp.config.loader import load_config
from perf_mcp.core.errors import ConfigError

if TYPE_CHECKING:
    from perf_mcp.config.schema import LoggingConfig, PerfConfig

_MISSING_KEY_HELP = (
    "PERF_API_KEY environment variable is required.\n"
    "Get your API key at https://dashboard.withperf.pro\n"
    "Set it in your MCP config:\n"
    '  "env": { "PERF_API_KEY": "pk_live_xxx" }'
)


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"[perf-mcp] Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> PerfConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _setup_logging(config: LoggingConfig) -> None:
    """Send log records to stderr (and the configured file, if any)."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    logging.basicConfig(
        level=config.level,
        format="[perf-mcp] %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="perf-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """perf-mcp - AI accuracy tools for MCP agents.

    Model routing, hallucination detection, schema validation and output
    correction. With no command, starts the stdio server.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdio."""
    config = _load_config(ctx.obj["config_path"])
    if not config.api_key:
        _error(_MISSING_KEY_HELP)

    _setup_logging(config.logging)

    from perf_mcp.mcp.server import run_server

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        pass


# ── tools ────────────────────────────────────────────────────────


@cli.command("tools")
def list_tools() -> None:
    """List the tools this server exposes."""
    from perf_mcp.tools.registry import PERF_TOOLS

    for tool in PERF_TOOLS:
        hints = [
            "read-only" if tool.read_only else "writes",
            "idempotent" if tool.idempotent else "non-idempotent",
            "open-world" if tool.open_world else "closed-world",
        ]
        click.echo(f"{tool.name:<14} {tool.title} ({', '.join(hints)})")
