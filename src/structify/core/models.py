"""Core Pydantic data models for Structify."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from structify.core.enums import ErrorCode

# Output-token ceiling sent with every extraction request.
DEFAULT_MAX_TOKENS: int = 4000


class ExtractOptions(BaseModel):
    """Per-call overrides for :func:`structify.extract`.

    Attributes:
        model: Model identifier; falls back to ``default_model`` from config.
        timeout_s: Per-request timeout in seconds.
        max_retries: Total attempts made against the oracle.
        debug: Log the full prompt and raw model response.
    """

    model: str | None = None
    timeout_s: float | None = Field(default=None, gt=0)
    max_retries: int | None = Field(default=None, ge=1)
    debug: bool = False


class LLMRequestOptions(BaseModel):
    """Options for a single oracle request.

    Attributes:
        model: Provider model string (e.g., 'openai/gpt-4o-mini').
        temperature: Always 0.0 for deterministic extraction.
        max_tokens: Output-token ceiling.
        timeout_s: HTTP timeout for this request.
    """

    model: str
    temperature: float = 0.0
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout_s: float = 30.0


class ErrorInfo(BaseModel):
    """Serializable form of a :class:`~structify.core.exceptions.StructifyError`."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ExtractionOutcome(BaseModel):
    """Result value returned by :func:`structify.safe_extract`.

    Exactly one of ``data`` / ``error`` is meaningful, selected by ``ok``.
    """

    ok: bool
    data: dict[str, Any] | None = None
    error: ErrorInfo | None = None
