"""Date normalization to ISO-8601 calendar dates (YYYY-MM-DD).

Slash or dash separated dates are read day-first, so ``01/02/03`` is
1 February 2003. This reading is a fixed policy, not a guess per input.
"""
from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Any

from dateutil import parser as date_parser

_ISO_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_DMY_RE = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})")

# Fills components missing from free-form dates ("March 2024" -> 2024-03-01).
_PARSE_DEFAULT = datetime(2000, 1, 1)  # noqa: DTZ001


def _pivot_year(year: int) -> int:
    if year < 100:
        return year + (2000 if year < 50 else 1900)
    return year


def _from_iso(value: str) -> date | None:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC)
    return parsed.date()


def _from_day_month_year(value: str) -> date | None:
    match = _DMY_RE.search(value)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(_pivot_year(year), month, day)
    except ValueError:
        return None


def _from_timestamp(value: float) -> date | None:
    # Millisecond epoch, matching what JSON producers usually emit
    try:
        return datetime.fromtimestamp(value / 1000, tz=UTC).date()
    except (OverflowError, OSError, ValueError):
        return None


def _from_free_text(value: Any) -> date | None:  # noqa: ANN401
    try:
        return date_parser.parse(str(value), dayfirst=True, default=_PARSE_DEFAULT).date()
    except (date_parser.ParserError, OverflowError, ValueError):
        return None


def normalize_date(value: Any) -> str | None:  # noqa: ANN401
    """Coerce a value to an ISO-8601 date string.

    Tried in order: ISO-prefixed string, day/month/year pattern with a
    two-digit-year pivot (<50 -> 2000s, else 1900s), millisecond epoch
    timestamp, free-form parsing.

    Args:
        value: Raw value from the model.

    Returns:
        ``YYYY-MM-DD``, or None if no reading yields a valid date.
    """
    if value is None or value == "":
        return None

    parsed: date | None = None

    if isinstance(value, str):
        if _ISO_PREFIX_RE.match(value):
            parsed = _from_iso(value)
        if parsed is None:
            parsed = _from_day_month_year(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = _from_timestamp(value)

    if parsed is None and not isinstance(value, bool):
        parsed = _from_free_text(value)

    return parsed.isoformat() if parsed is not None else None
