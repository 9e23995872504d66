"""Pydantic models for perf-mcp configuration."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from perf_mcp.client import DEFAULT_BASE_URL


class LoggingConfig(BaseModel):
    """Logging configuration. Output always goes to stderr (and ``file``)."""

    level: str = "INFO"
    file: str = ""

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level


class PerfConfig(BaseModel):
    """Root configuration model."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None  # Seconds; None waits indefinitely
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
