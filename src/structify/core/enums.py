"""Core enumerations for Structify."""
from enum import StrEnum


class FieldType(StrEnum):
    """Primitive tags accepted in a schema declaration."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"


SUPPORTED_TYPES: list[str] = [t.value for t in FieldType]


class ErrorCode(StrEnum):
    """Tag carried by every :class:`~structify.core.exceptions.StructifyError`."""

    INVALID_SCHEMA = "INVALID_SCHEMA"
    INVALID_INPUT = "INVALID_INPUT"
    AI_ERROR = "AI_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    NORMALIZATION_ERROR = "NORMALIZATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
