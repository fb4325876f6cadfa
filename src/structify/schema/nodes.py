"""Typed schema tree: a closed union of primitive, object and array nodes.

Raw schemas and caller-built trees pass the same structural checks in
:func:`parse_schema`, so code that walks the tree never has to re-check
its shape.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from structify.core.enums import FieldType
from structify.schema.validator import (
    DEFAULT_MAX_FIELD_COUNT,
    DEFAULT_MAX_SCHEMA_DEPTH,
    check_depth,
    check_field_count,
    check_tag,
    malformed_field,
    not_a_mapping,
    validate_schema,
)


@dataclass(frozen=True)
class PrimitiveNode:
    """A leaf carrying one primitive tag."""

    tag: FieldType


@dataclass(frozen=True)
class ObjectNode:
    """An ordered mapping of field name to child node."""

    fields: dict[str, SchemaNode]


@dataclass(frozen=True)
class ArrayNode:
    """A list whose every element has the shape of ``item``."""

    item: SchemaNode


SchemaNode = PrimitiveNode | ObjectNode | ArrayNode


def _build(raw: Any) -> SchemaNode:  # noqa: ANN401
    if isinstance(raw, dict):
        return ObjectNode(fields={key: _build(value) for key, value in raw.items()})
    if isinstance(raw, list):
        return ArrayNode(item=_build(raw[0]))
    return PrimitiveNode(tag=FieldType(raw))


def _primitive_tag(node: PrimitiveNode) -> Any:  # noqa: ANN401
    tag = node.tag
    return tag.value if isinstance(tag, FieldType) else tag


def validate_schema_node(
    node: Any,  # noqa: ANN401
    max_depth: int = DEFAULT_MAX_SCHEMA_DEPTH,
    max_fields: int = DEFAULT_MAX_FIELD_COUNT,
    current_depth: int = 0,
) -> None:
    """Apply the raw-schema rules to an already-built node tree.

    Depth, per-level field count and primitive tags are checked in the
    same order and with the same error details as
    :func:`~structify.schema.validator.validate_schema`.

    Raises:
        InvalidSchemaError: On the first violation found.
    """
    check_depth(current_depth, max_depth)
    if not isinstance(node, ObjectNode) or not isinstance(node.fields, dict):
        raise not_a_mapping(node)
    check_field_count(len(node.fields), max_fields)

    for key, field in node.fields.items():
        if isinstance(field, ArrayNode):
            item = field.item
            if isinstance(item, ObjectNode):
                validate_schema_node(item, max_depth, max_fields, current_depth + 1)
            elif isinstance(item, PrimitiveNode):
                check_tag(key, _primitive_tag(item), array_item=True)
            else:
                raise malformed_field(key, item)
        elif isinstance(field, ObjectNode):
            validate_schema_node(field, max_depth, max_fields, current_depth + 1)
        elif isinstance(field, PrimitiveNode):
            check_tag(key, _primitive_tag(field))
        else:
            raise malformed_field(key, field)


def parse_schema(
    schema: dict[str, Any] | ObjectNode,
    max_depth: int = DEFAULT_MAX_SCHEMA_DEPTH,
    max_fields: int = DEFAULT_MAX_FIELD_COUNT,
) -> ObjectNode:
    """Validate a schema and return it as a typed node tree.

    Args:
        schema: Raw schema mapping, or an already-built root node.
        max_depth: Deepest allowed nesting level.
        max_fields: Maximum keys per level.

    Returns:
        Root :class:`ObjectNode`.

    Raises:
        InvalidSchemaError: If the schema is structurally illegal or
            exceeds the limits.
    """
    if isinstance(schema, ObjectNode):
        validate_schema_node(schema, max_depth=max_depth, max_fields=max_fields)
        return schema
    validate_schema(schema, max_depth=max_depth, max_fields=max_fields)
    return ObjectNode(fields={key: _build(value) for key, value in schema.items()})
