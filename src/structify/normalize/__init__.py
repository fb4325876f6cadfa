"""Deterministic, non-raising coercion of model output to schema types."""
from structify.normalize.boolean import normalize_boolean
from structify.normalize.date import normalize_date
from structify.normalize.normalizer import normalize_string, normalize_value
from structify.normalize.number import normalize_number

__all__ = [
    "normalize_boolean",
    "normalize_date",
    "normalize_number",
    "normalize_string",
    "normalize_value",
]
