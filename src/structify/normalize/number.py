"""Number normalization with thousands/decimal separator disambiguation."""
from __future__ import annotations

import math
import re
from typing import Any

_NON_NUMERIC_RE = re.compile(r"[^\d.,-]")
# Longest leading float literal, the way JavaScript's parseFloat reads it.
_FLOAT_PREFIX_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)")


def _parse_float_prefix(text: str) -> float | None:
    match = _FLOAT_PREFIX_RE.match(text)
    if not match:
        return None
    return float(match.group(0))


def _clean_separators(text: str) -> str:
    cleaned = _NON_NUMERIC_RE.sub("", text).strip()

    if "." in cleaned and "," in cleaned:
        # 1.250.000,50 -> dots group thousands, comma is the decimal point
        return cleaned.replace(".", "").replace(",", ".", 1)

    if "," in cleaned:
        parts = cleaned.split(",")
        if len(parts) == 2 and len(parts[1]) <= 2:
            # 1250,50 -> decimal comma
            return cleaned.replace(",", ".")
        # 1,250,000 -> thousands commas
        return cleaned.replace(",", "")

    return cleaned


def normalize_number(value: Any) -> int | float | None:  # noqa: ANN401
    """Coerce a value to a number.

    Strings keep only digits, ``.``, ``,`` and ``-``. When both ``.`` and
    ``,`` occur the dots are thousands separators. A lone comma followed
    by at most two digits is a decimal comma; any other commas are
    thousands separators. The heuristic is ambiguous for inputs such as
    ``1,234`` and picks one reading without signalling it.

    Args:
        value: Raw value from the model.

    Returns:
        The number, or None if nothing numeric can be read.
    """
    if value is None or value == "":
        return None

    if isinstance(value, bool):
        return int(value)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return value

    if isinstance(value, str):
        return _parse_float_prefix(_clean_separators(value))

    try:
        coerced = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(coerced) else coerced
