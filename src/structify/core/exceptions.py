"""Custom exception hierarchy for Structify.

Every failure is a :class:`StructifyError` tagged with an
:class:`~structify.core.enums.ErrorCode` and a structured ``details``
payload. Subclasses fix the code so callers can catch by kind.

Never use bare except clauses. Always catch specific exceptions.
"""
from __future__ import annotations

from typing import Any

from structify.core.enums import ErrorCode


class StructifyError(Exception):
    """Base exception for all Structify errors.

    Args:
        code: Error kind.
        message: Human-readable description.
        details: Structured payload; keys vary per kind.
    """

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, Any]:
        """Serializable view of the error."""
        return {
            "name": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidSchemaError(StructifyError):
    """Schema is structurally illegal."""

    code = ErrorCode.INVALID_SCHEMA


class InvalidInputError(StructifyError):
    """Input text is empty, not a string, or too large."""

    code = ErrorCode.INVALID_INPUT


# LLM-related exceptions
class LLMError(StructifyError):
    """Extraction oracle call failed (transport, provider, or empty body)."""

    code = ErrorCode.AI_ERROR

    @property
    def status(self) -> int | None:
        """HTTP status of the failure, when one was received."""
        status = self.details.get("status")
        return status if isinstance(status, int) else None

    @property
    def is_auth_error(self) -> bool:
        """Authentication failures are never transient."""
        return self.status == 401


class LLMParseError(StructifyError):
    """Model output could not be parsed as JSON, even after repair."""

    code = ErrorCode.PARSE_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        raw_response: str | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.raw_response = raw_response


class NormalizationError(StructifyError):
    """Reserved kind; the normalizer itself degrades to null instead."""

    code = ErrorCode.NORMALIZATION_ERROR


class ConfigError(StructifyError):
    """Configuration missing or invalid (e.g. no API key)."""

    code = ErrorCode.CONFIG_ERROR
