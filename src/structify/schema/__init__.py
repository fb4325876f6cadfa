"""Schema declaration, validation and typed node tree."""
from structify.schema.nodes import (
    ArrayNode,
    ObjectNode,
    PrimitiveNode,
    SchemaNode,
    parse_schema,
    validate_schema_node,
)
from structify.schema.validator import count_schema_fields, validate_schema

__all__ = [
    "ArrayNode",
    "ObjectNode",
    "PrimitiveNode",
    "SchemaNode",
    "count_schema_fields",
    "parse_schema",
    "validate_schema",
    "validate_schema_node",
]
