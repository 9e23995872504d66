"""Pydantic argument models for the Perf tools.

The JSON schemas advertised over MCP are generated from these models, and
every call's arguments are validated against them before any request is
sent.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ResponseFormat(BaseModel):
    type: str


class ChatArgs(BaseModel):
    messages: list[ChatMessage] = Field(description="Chat messages in OpenAI format.")
    model: str | None = Field(
        default=None,
        description=(
            "Force a specific model (e.g., 'gpt-4o', 'claude-sonnet'). "
            "Omit for automatic selection."
        ),
    )
    max_tokens: int | None = Field(
        default=None, description="Maximum tokens in the response."
    )
    temperature: float | None = Field(
        default=None, ge=0, le=2, description="Sampling temperature (0-2)."
    )
    response_format: ResponseFormat | None = Field(
        default=None, description='Set to {"type": "json_object"} for JSON mode.'
    )


class VerifyArgs(BaseModel):
    content: str = Field(description="The LLM-generated text to verify and correct.")
    source_context: str | None = Field(
        default=None,
        description=(
            "Source material the content was generated from. "
            "Enables cross-reference verification."
        ),
    )
    sensitivity: Literal["standard", "strict"] | None = Field(
        default=None,
        description="'strict' for medical, legal, financial content. Default: 'standard'.",
    )
    return_diff: bool | None = Field(
        default=None,
        description="Return structured diff of original vs corrected spans. Default: true.",
    )


class ValidateArgs(BaseModel):
    content: str = Field(
        description="The LLM-generated structured output (JSON string)."
    )
    target_schema: dict[str, Any] = Field(
        description="JSON Schema the output must conform to."
    )
    repair_mode: Literal["strict", "best_effort"] | None = Field(
        default=None,
        description=(
            "'strict' rejects low-confidence repairs. 'best_effort' infers to "
            "fill gaps. Default: 'best_effort'."
        ),
    )


class CorrectArgs(BaseModel):
    content: str = Field(description="The LLM-generated output to correct.")
    original_prompt: str | None = Field(
        default=None,
        description="The prompt that generated this output. Helps detect instruction drift.",
    )
    target_schema: dict[str, Any] | None = Field(
        default=None,
        description="If output should conform to a schema, provide for combined correction.",
    )
    correction_budget: Literal["fast", "thorough"] | None = Field(
        default=None,
        description=(
            "'fast': single-pass ~50ms. 'thorough': multi-pass with adversarial "
            "verification ~500ms. Default: 'fast'."
        ),
    )
