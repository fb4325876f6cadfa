"""Input limits checked before any network call."""
from __future__ import annotations

from typing import Any

from structify.core.exceptions import InvalidInputError

DEFAULT_MAX_INPUT_SIZE = 50_000


def require_text(text: Any) -> str:  # noqa: ANN401
    """Reject input that is not a non-empty string.

    Raises:
        InvalidInputError: If ``text`` is empty or not a string.
    """
    if not isinstance(text, str) or not text:
        raise InvalidInputError(
            "Input text must be a non-empty string",
            details={"receivedType": type(text).__name__},
        )
    return text


def check_input_size(text: str, max_size: int = DEFAULT_MAX_INPUT_SIZE) -> None:
    """Reject input longer than ``max_size`` characters.

    Raises:
        InvalidInputError: If the text is too long.
    """
    if len(text) > max_size:
        raise InvalidInputError(
            f"Input text exceeds maximum size of {max_size} characters "
            f"(received: {len(text)})",
            details={"maxSize": max_size, "receivedSize": len(text)},
        )
