"""Best-effort salvage of model output into parseable JSON.

The repair pass is heuristic. Turning single quotes into double quotes
also rewrites apostrophes inside legitimate string values, which can
corrupt an otherwise valid payload.
"""
from __future__ import annotations

import json
import re
from typing import Any

import structlog

from structify.core.exceptions import LLMParseError

logger = structlog.get_logger(__name__)

# Raw response excerpt carried by parse errors.
MAX_EXCERPT_CHARS = 500

_FENCE_JSON_RE = re.compile(r"```json\s*")
_FENCE_RE = re.compile(r"```\s*")
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)

_OPENERS = "{["
_CLOSERS = "}]"
_QUOTES = "\"'"


def _balanced_span(text: str, start: int) -> str | None:
    """Return the bracketed span opening at ``start``, skipping string literals."""
    depth = 0
    quote: str | None = None
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def _first_balanced(text: str, opener: str) -> str | None:
    start = text.find(opener)
    if start < 0:
        return None
    return _balanced_span(text, start)


def _is_complete(text: str) -> bool:
    return bool(text) and text[0] in _OPENERS and _balanced_span(text, 0) == text


def repair_json(text: str) -> str:
    """Apply the ordered repair pipeline to a raw model response.

    Args:
        text: Raw response text.

    Returns:
        Repaired text; not guaranteed to be valid JSON.
    """
    cleaned = _FENCE_JSON_RE.sub("", text)
    cleaned = _FENCE_RE.sub("", cleaned)
    cleaned = cleaned.strip()

    # Pull the first balanced object (else array) out of surrounding prose
    if not _is_complete(cleaned):
        span = _first_balanced(cleaned, "{") or _first_balanced(cleaned, "[")
        if span is not None:
            cleaned = span

    cleaned = _TRAILING_COMMA_RE.sub(r"\1", cleaned)
    cleaned = cleaned.replace("'", '"')
    return _LINE_COMMENT_RE.sub("", cleaned)


def parse_with_repair(text: str) -> Any:  # noqa: ANN401
    """Parse a model response as JSON, repairing it once on failure.

    Args:
        text: Raw response text.

    Returns:
        The parsed JSON value.

    Raises:
        LLMParseError: If the repaired text is still not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    repaired = repair_json(text)
    try:
        parsed = json.loads(repaired)
    except json.JSONDecodeError as e:
        logger.warning("json_repair_failed", error=str(e), raw_len=len(text))
        raise LLMParseError(
            f"Failed to parse AI response as JSON: {e}",
            details={"aiResponse": text[:MAX_EXCERPT_CHARS], "error": str(e)},
            raw_response=text,
        ) from e

    logger.debug("json_repaired", raw_len=len(text), repaired_len=len(repaired))
    return parsed
