"""OpenRouter LLM adapter for Structify.

OpenRouter exposes an OpenAI-compatible chat-completion endpoint in
front of many model providers.
"""
from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from structify.core.exceptions import LLMError
from structify.core.models import LLMRequestOptions
from structify.llm.base import LLMBackend

logger = structlog.get_logger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TIMEOUT_S = 30.0


def _error_message(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        return response.text
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text


def _status_error(status: int, message: str) -> LLMError:
    details = {"status": status, "message": message}
    if status == 401:
        return LLMError("Invalid OpenRouter API key", details=details)
    if status == 429:
        return LLMError("OpenRouter rate limit exceeded", details=details)
    if status >= 500:
        return LLMError("OpenRouter server error", details=details)
    return LLMError(f"OpenRouter request failed: {message}", details=details)


class OpenRouterAdapter(LLMBackend):
    """Extraction oracle backed by the OpenRouter API.

    Args:
        api_key: OpenRouter API key.
        timeout_s: Default HTTP timeout in seconds.
        base_url: API root; override for OpenAI-compatible proxies.
    """

    def __init__(
        self,
        api_key: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        base_url: str = OPENROUTER_BASE_URL,
    ) -> None:
        super().__init__(provider="OpenRouter")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "HTTP-Referer": "https://github.com/structify",
                "X-Title": "Structify",
            },
            timeout=timeout_s,
        )

    async def _call_api(self, prompt: str, options: LLMRequestOptions) -> str:
        """Make one chat-completion request.

        Args:
            prompt: The complete prompt string.
            options: Model, token ceiling and timeout.

        Returns:
            Raw text content from the model response.

        Raises:
            LLMError: On transport errors, non-2xx status, or empty content.
        """
        payload = {
            "model": options.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "response_format": {"type": "json_object"},
        }

        t0 = time.perf_counter()
        try:
            response = await self._client.post(
                "/chat/completions", json=payload, timeout=options.timeout_s
            )
        except httpx.RequestError as e:
            raise LLMError(
                f"OpenRouter request failed: {e}",
                details={"status": None, "message": str(e)},
            ) from e
        latency_ms = (time.perf_counter() - t0) * 1000

        if response.status_code >= 400:
            raise _status_error(response.status_code, _error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise LLMError(
                "OpenRouter returned a non-JSON body",
                details={"status": response.status_code, "message": str(e)},
            ) from e

        content = self._extract_content(data)
        if not content:
            has_error = isinstance(data, dict) and "error" in data
            message = _error_message(response) if has_error else "empty content"
            raise LLMError(
                "OpenRouter returned empty response",
                details={"status": response.status_code, "message": message},
            )

        logger.info(
            "openrouter_call_success",
            model=options.model,
            latency_ms=round(latency_ms),
            response_len=len(content),
        )
        return content

    @staticmethod
    def _extract_content(data: Any) -> str | None:  # noqa: ANN401
        if not isinstance(data, dict):
            return None
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return None
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return None
        content = message.get("content")
        return content if isinstance(content, str) else None

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
