"""Configuration schema and loader."""

from perf_mcp.config.loader import load_config
from perf_mcp.config.schema import LoggingConfig, PerfConfig

__all__ = ["LoggingConfig", "PerfConfig", "load_config"]
