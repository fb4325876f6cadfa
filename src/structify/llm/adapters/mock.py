"""Mock LLM adapter for offline testing."""
from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from structify.core.models import LLMRequestOptions
from structify.llm.base import LLMBackend


class MockLLMAdapter(LLMBackend):
    """Mock adapter that replays scripted responses.

    Used exclusively for offline testing. Never call this in production.

    Args:
        response_json: Dict serialized as the response once the script
            is exhausted.
        responses: Script consumed one item per call. A ``str`` is
            returned verbatim, a ``dict`` is JSON-encoded, an exception
            is raised.
    """

    def __init__(
        self,
        response_json: dict[str, Any] | None = None,
        responses: Iterable[str | dict[str, Any] | Exception] | None = None,
    ) -> None:
        super().__init__(provider="Mock")
        self._response = response_json or {}
        self._script = list(responses or [])
        self.calls: list[tuple[str, LLMRequestOptions]] = []

    async def _call_api(self, prompt: str, options: LLMRequestOptions) -> str:
        self.calls.append((prompt, options))
        item: str | dict[str, Any] | Exception = (
            self._script.pop(0) if self._script else self._response
        )
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            return json.dumps(item)
        return item
