"""Extraction pipeline: validate, prompt, call the oracle, repair, normalize.

Each call runs sequentially; the oracle request is the only await point.
Pipelines share nothing mutable, so concurrent calls are safe.
"""
from __future__ import annotations

from types import TracebackType
from typing import Any

import structlog

from structify.config import StructifyConfig, get_config
from structify.core.exceptions import StructifyError
from structify.core.models import (
    DEFAULT_MAX_TOKENS,
    ErrorInfo,
    ExtractionOutcome,
    ExtractOptions,
    LLMRequestOptions,
)
from structify.llm.base import INFERENCE_TEMPERATURE, LLMBackend, hash_prompt
from structify.llm.factory import create_backend
from structify.normalize.normalizer import normalize_value
from structify.prompts.extraction_v1 import build_extraction_prompt
from structify.schema.nodes import ObjectNode, parse_schema
from structify.utils.json_repair import parse_with_repair
from structify.utils.limits import check_input_size, require_text

logger = structlog.get_logger(__name__)

Schema = dict[str, Any] | ObjectNode


def _coerce_options(options: ExtractOptions | dict[str, Any] | None) -> ExtractOptions:
    if options is None:
        return ExtractOptions()
    if isinstance(options, ExtractOptions):
        return options
    return ExtractOptions.model_validate(options)


class ExtractionPipeline:
    """Orchestrator for schema-driven extraction from messy text.

    Steps:
    1. Validate input text and schema (no network)
    2. Render the prompt
    3. Call the oracle with retry/backoff
    4. Parse the response, repairing it once if needed
    5. Normalize every value against the schema

    Args:
        config: Immutable configuration for this pipeline.
        backend: Oracle backend; an OpenRouter adapter is created from
            ``config`` when omitted and closed by :meth:`close`.
    """

    def __init__(
        self,
        config: StructifyConfig,
        backend: LLMBackend | None = None,
    ) -> None:
        self._config = config
        self._owns_backend = backend is None
        self._backend = backend if backend is not None else create_backend(config)

    @property
    def config(self) -> StructifyConfig:
        return self._config

    async def extract(
        self,
        text: str,
        schema: Schema,
        options: ExtractOptions | dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Extract schema-shaped data from text.

        Args:
            text: Source text (OCR output, logs, legacy exports...).
            schema: Raw schema mapping or a pre-built root node.
            options: Per-call overrides.

        Returns:
            Mapping with exactly the schema's keys, values normalized.

        Raises:
            InvalidInputError: Empty, non-string or oversized text.
            InvalidSchemaError: Structurally illegal schema.
            LLMError: Oracle failure after retries, or authentication failure.
            LLMParseError: Response is not JSON even after repair.
        """
        opts = _coerce_options(options)
        cfg = self._config

        require_text(text)
        check_input_size(text, cfg.max_input_size)
        root = parse_schema(
            schema,
            max_depth=cfg.max_schema_depth,
            max_fields=cfg.max_field_count,
        )

        model = opts.model or cfg.default_model
        max_retries = opts.max_retries if opts.max_retries is not None else cfg.max_retries
        timeout_s = opts.timeout_s if opts.timeout_s is not None else cfg.timeout_s

        prompt = build_extraction_prompt(text, root)
        prompt_hash = hash_prompt(prompt)

        logger.info(
            "extraction_start",
            model=model,
            n_fields=len(root.fields),
            text_len=len(text),
            prompt_hash=prompt_hash[:8],
        )
        if opts.debug:
            logger.info("extraction_debug_prompt", prompt_hash=prompt_hash[:8], prompt=prompt)

        raw_response = await self._backend.complete_with_retry(
            prompt,
            LLMRequestOptions(
                model=model,
                temperature=INFERENCE_TEMPERATURE,
                max_tokens=DEFAULT_MAX_TOKENS,
                timeout_s=timeout_s,
            ),
            max_retries=max_retries,
        )

        if opts.debug:
            logger.info(
                "extraction_debug_response",
                prompt_hash=prompt_hash[:8],
                response=raw_response,
            )

        parsed = parse_with_repair(raw_response)
        if not isinstance(parsed, dict):
            logger.warning(
                "extraction_non_object_response",
                prompt_hash=prompt_hash[:8],
                response_type=type(parsed).__name__,
            )
            parsed = {}

        result: dict[str, Any] = normalize_value(parsed, root)

        logger.info(
            "extraction_complete",
            prompt_hash=prompt_hash[:8],
            n_null=sum(1 for v in result.values() if v is None),
        )
        return result

    async def close(self) -> None:
        """Close the backend if this pipeline created it."""
        if self._owns_backend:
            await self._backend.close()

    async def __aenter__(self) -> ExtractionPipeline:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


async def extract(
    text: str,
    schema: Schema,
    options: ExtractOptions | dict[str, Any] | None = None,
    backend: LLMBackend | None = None,
) -> dict[str, Any]:
    """Extract structured data from messy text using the global config.

    Args:
        text: Source text.
        schema: Raw schema mapping or a pre-built root node.
        options: Per-call overrides (``model``, ``timeout_s``,
            ``max_retries``, ``debug``).
        backend: Optional oracle backend; defaults to OpenRouter.

    Returns:
        Mapping with exactly the schema's keys, values normalized.

    Raises:
        StructifyError: Tagged with the failing stage's error code.
    """
    require_text(text)
    async with ExtractionPipeline(get_config(), backend=backend) as pipeline:
        return await pipeline.extract(text, schema, options)


async def safe_extract(
    text: str,
    schema: Schema,
    options: ExtractOptions | dict[str, Any] | None = None,
    backend: LLMBackend | None = None,
) -> ExtractionOutcome:
    """Like :func:`extract`, but report failures as a value.

    Returns:
        ``ExtractionOutcome(ok=True, data=...)`` on success, otherwise
        ``ok=False`` with the error code, message and details.
    """
    try:
        data = await extract(text, schema, options, backend=backend)
    except StructifyError as e:
        logger.warning("extraction_failed", code=e.code.value, error=e.message)
        return ExtractionOutcome(
            ok=False,
            error=ErrorInfo(code=e.code, message=e.message, details=e.details),
        )
    return ExtractionOutcome(ok=True, data=data)
