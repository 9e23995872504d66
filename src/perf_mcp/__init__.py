"""perf-mcp: MCP server for the Perf AI accuracy API."""

__version__ = "1.0.0"
