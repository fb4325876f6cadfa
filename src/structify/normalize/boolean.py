"""Boolean normalization against fixed true/false vocabularies."""
from __future__ import annotations

from typing import Any

TRUE_WORDS = frozenset({"true", "yes", "y", "1", "on", "enabled"})
FALSE_WORDS = frozenset({"false", "no", "n", "0", "off", "disabled"})


def normalize_boolean(value: Any) -> bool | None:  # noqa: ANN401
    """Coerce a value to a boolean; ambiguous values become None."""
    if value is None or value == "":
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lower = value.lower().strip()
        if lower in TRUE_WORDS:
            return True
        if lower in FALSE_WORDS:
            return False
        return None

    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False

    return None
