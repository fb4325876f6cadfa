"""Structural validation of caller-declared schemas.

A raw schema is a mapping whose values are primitive tag strings, nested
mappings, or single-element lists describing array items. Validation is
synchronous and runs before any network call.
"""
from __future__ import annotations

from typing import Any

from structify.core.enums import SUPPORTED_TYPES
from structify.core.exceptions import InvalidSchemaError

DEFAULT_MAX_SCHEMA_DEPTH = 5
DEFAULT_MAX_FIELD_COUNT = 100


def check_depth(current_depth: int, max_depth: int) -> None:
    """Raise if a level sits deeper than ``max_depth`` (root is level 0)."""
    if current_depth > max_depth:
        raise InvalidSchemaError(
            f"Schema depth exceeds maximum of {max_depth} levels",
            details={"maxDepth": max_depth, "currentDepth": current_depth},
        )


def check_field_count(field_count: int, max_fields: int) -> None:
    """Raise if one level declares more than ``max_fields`` keys."""
    if field_count > max_fields:
        raise InvalidSchemaError(
            f"Schema has too many fields (max: {max_fields}, found: {field_count})",
            details={"maxFields": max_fields, "fieldCount": field_count},
        )


def check_tag(key: str, tag: Any, *, array_item: bool = False) -> None:  # noqa: ANN401
    """Raise unless ``tag`` is one of the supported primitive tags."""
    if isinstance(tag, str) and tag in SUPPORTED_TYPES:
        return
    label = "array item type" if array_item else "field type"
    raise InvalidSchemaError(
        f'Unsupported {label}: "{tag}" for field "{key}". '
        f"Supported types: {', '.join(SUPPORTED_TYPES)}",
        details={"key": key, "type": str(tag), "supportedTypes": list(SUPPORTED_TYPES)},
    )


def malformed_field(key: str, value: Any) -> InvalidSchemaError:  # noqa: ANN401
    """Error for a field definition of the wrong shape."""
    return InvalidSchemaError(
        f'Invalid schema definition for field "{key}". '
        "Expected a type string, nested object, or array.",
        details={"key": key, "receivedValue": value},
    )


def not_a_mapping(value: Any) -> InvalidSchemaError:  # noqa: ANN401
    """Error for a schema level that is not a mapping of fields."""
    return InvalidSchemaError(
        "Schema must be a mapping of field names to type definitions.",
        details={"receivedValue": value},
    )


def validate_schema(
    schema: Any,  # noqa: ANN401
    max_depth: int = DEFAULT_MAX_SCHEMA_DEPTH,
    max_fields: int = DEFAULT_MAX_FIELD_COUNT,
    current_depth: int = 0,
) -> None:
    """Validate that a raw schema is structurally legal.

    Args:
        schema: Raw schema mapping.
        max_depth: Deepest allowed nesting level (root is level 0).
        max_fields: Maximum number of keys at any single level.
        current_depth: Depth of ``schema`` within the root schema.

    Raises:
        InvalidSchemaError: On the first structural violation found.
    """
    check_depth(current_depth, max_depth)
    if not isinstance(schema, dict):
        raise not_a_mapping(schema)
    check_field_count(len(schema), max_fields)

    for key, value in schema.items():
        if isinstance(value, list):
            if len(value) != 1:
                raise InvalidSchemaError(
                    f'Array field "{key}" must have exactly one element '
                    "defining the item type",
                    details={"key": key, "arrayLength": len(value)},
                )
            item = value[0]
            if isinstance(item, dict):
                validate_schema(item, max_depth, max_fields, current_depth + 1)
            elif isinstance(item, str):
                check_tag(key, item, array_item=True)
            else:
                raise malformed_field(key, item)
            continue

        if isinstance(value, dict):
            validate_schema(value, max_depth, max_fields, current_depth + 1)
            continue

        if isinstance(value, str):
            check_tag(key, value)
            continue

        raise malformed_field(key, value)


def count_schema_fields(schema: dict[str, Any]) -> int:
    """Count every field in a raw schema, nested ones included."""
    count = 0
    for value in schema.values():
        count += 1
        if isinstance(value, list) and value and isinstance(value[0], dict):
            count += count_schema_fields(value[0])
        elif isinstance(value, dict):
            count += count_schema_fields(value)
    return count
