"""LLM backend factory: creates the oracle adapter from config."""
from __future__ import annotations

import structlog

from structify.config import StructifyConfig
from structify.llm.base import LLMBackend

logger = structlog.get_logger(__name__)


def create_backend(cfg: StructifyConfig) -> LLMBackend:
    """Create the OpenRouter backend for a configuration.

    Args:
        cfg: Configuration carrying the API key and default timeout.

    Returns:
        Ready-to-use backend; the caller owns it and must ``close()`` it.
    """
    from structify.llm.adapters.openrouter import OpenRouterAdapter  # noqa: PLC0415

    backend = OpenRouterAdapter(api_key=cfg.openrouter_api_key, timeout_s=cfg.timeout_s)
    logger.debug("backend_created", provider=backend.provider)
    return backend
