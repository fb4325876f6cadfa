"""Abstract base class for extraction oracle backends.

Backends implement a single attempt in ``_call_api``; the retry policy
(exponential backoff, no retry on authentication failure) lives here so
every adapter shares it.
"""
from __future__ import annotations

import asyncio
import hashlib
from abc import ABC, abstractmethod

import structlog

from structify.core.exceptions import LLMError
from structify.core.models import LLMRequestOptions

logger = structlog.get_logger(__name__)

# Temperature is always 0.0 for deterministic extraction
INFERENCE_TEMPERATURE: float = 0.0

RETRY_BASE_DELAY_S = 1.0
RETRY_MAX_DELAY_S = 10.0


def hash_prompt(prompt: str) -> str:
    """Compute SHA256 hash of a prompt for audit logging.

    Args:
        prompt: The prompt string to hash.

    Returns:
        64-character hex string (SHA256).
    """
    return hashlib.sha256(prompt.encode("utf-8")).hexdigest()


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after failed attempt ``attempt`` (0-based)."""
    return min(RETRY_BASE_DELAY_S * (2**attempt), RETRY_MAX_DELAY_S)


class LLMBackend(ABC):
    """Abstract base class for all oracle adapters.

    Subclasses must implement ``_call_api()``. All calls use
    temperature=0.0.

    Args:
        provider: Human-readable provider name used in error messages.
    """

    def __init__(self, provider: str) -> None:
        self._provider = provider
        self._log = structlog.get_logger(self.__class__.__name__)

    @property
    def provider(self) -> str:
        """Provider name (e.g., 'OpenRouter')."""
        return self._provider

    @abstractmethod
    async def _call_api(self, prompt: str, options: LLMRequestOptions) -> str:
        """Make one request and return the raw text response.

        Args:
            prompt: The complete prompt to send as the only user message.
            options: Model, token ceiling and timeout for this request.

        Returns:
            Raw text content from the model.

        Raises:
            LLMError: On any transport or provider failure, or empty content.
        """
        ...

    async def complete(self, prompt: str, options: LLMRequestOptions) -> str:
        """Send a prompt once and return the raw text response."""
        if options.temperature != INFERENCE_TEMPERATURE:
            options = options.model_copy(update={"temperature": INFERENCE_TEMPERATURE})
        return await self._call_api(prompt, options)

    async def complete_with_retry(
        self,
        prompt: str,
        options: LLMRequestOptions,
        max_retries: int,
    ) -> str:
        """Send a prompt, retrying transient failures with backoff.

        Attempt ``n`` failing sleeps ``min(1 * 2**n, 10)`` seconds before
        the next one. Authentication failures are re-raised at once. The
        request timeout applies per attempt, not to the whole sequence.

        Args:
            prompt: The complete prompt string.
            options: Per-request options.
            max_retries: Total number of attempts.

        Returns:
            Raw text content from the first successful attempt.

        Raises:
            LLMError: The authentication failure, or an aggregated error
                carrying the last failure's message once attempts run out.
        """
        last_exc: LLMError | None = None

        for attempt in range(max_retries):
            try:
                return await self.complete(prompt, options)
            except LLMError as e:
                last_exc = e
                if e.is_auth_error:
                    self._log.error(
                        "llm_auth_failed", model=options.model, error=e.message
                    )
                    raise

                if attempt < max_retries - 1:
                    delay = backoff_delay(attempt)
                    self._log.warning(
                        "llm_call_retry",
                        model=options.model,
                        attempt=attempt + 1,
                        delay_s=delay,
                        status=e.status,
                        error=e.message,
                    )
                    await asyncio.sleep(delay)

        raise LLMError(
            f"{self.provider} request failed after {max_retries} attempts",
            details={
                "lastError": last_exc.message if last_exc else None,
                "lastStatus": last_exc.status if last_exc else None,
                "attempts": max_retries,
            },
        ) from last_exc

    async def close(self) -> None:  # noqa: B027
        """Release network resources; no-op by default."""
