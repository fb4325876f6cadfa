"""Recursive normalization of a parsed model response against a schema.

The walk is total: a value that cannot be coerced becomes None at its
own position, so the result always has the schema's shape.
"""
from __future__ import annotations

import json
import math
from collections.abc import Callable
from typing import Any

from structify.core.enums import FieldType
from structify.normalize.boolean import normalize_boolean
from structify.normalize.date import normalize_date
from structify.normalize.number import normalize_number
from structify.schema.nodes import ArrayNode, ObjectNode, PrimitiveNode, SchemaNode


def normalize_string(value: Any) -> str | None:  # noqa: ANN401
    """Coerce a value to text, spelling non-strings the way JSON does."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (bool, dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _passthrough(expected: type) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:  # noqa: ANN401
        return value if isinstance(value, expected) else None

    return check


_PRIMITIVES: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.STRING: normalize_string,
    FieldType.NUMBER: normalize_number,
    FieldType.BOOLEAN: normalize_boolean,
    FieldType.DATE: normalize_date,
    FieldType.ARRAY: _passthrough(list),
    FieldType.OBJECT: _passthrough(dict),
}


def normalize_value(value: Any, schema: SchemaNode) -> Any:  # noqa: ANN401
    """Force a parsed value into the shape and types of a schema node.

    Args:
        value: Parsed JSON value (any shape, possibly None).
        schema: Node describing the expected shape.

    Returns:
        A value mirroring ``schema``: objects carry every declared key,
        arrays keep the input's order and length, leaves are coerced
        primitives or None.
    """
    if isinstance(schema, PrimitiveNode):
        coerce = _PRIMITIVES.get(schema.tag)
        if value is None or coerce is None:
            return None
        return coerce(value)

    if isinstance(schema, ArrayNode):
        if not isinstance(value, list):
            return None
        return [normalize_value(item, schema.item) for item in value]

    if not isinstance(value, dict):
        return None
    return {
        key: normalize_value(value.get(key), field)
        for key, field in schema.fields.items()
    }
