"""Tests for schema validation and the typed schema tree."""
from __future__ import annotations

from typing import Any

import pytest

from structify.core.enums import SUPPORTED_TYPES, ErrorCode, FieldType
from structify.core.exceptions import InvalidSchemaError
from structify.schema import (
    ArrayNode,
    ObjectNode,
    PrimitiveNode,
    count_schema_fields,
    parse_schema,
    validate_schema,
)


def _nested(levels: int) -> dict[str, Any]:
    """Schema with ``levels`` objects nested below the root."""
    schema: dict[str, Any] = {"leaf": "string"}
    for _ in range(levels):
        schema = {"child": schema}
    return schema


class TestDepthAndFieldLimits:
    """Tests for depth and field-count limits."""

    def test_depth_at_limit_passes(self) -> None:
        validate_schema(_nested(5), max_depth=5)

    def test_six_levels_exceeds_depth_five(self) -> None:
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema(_nested(6), max_depth=5)
        err = exc_info.value
        assert err.code == ErrorCode.INVALID_SCHEMA
        assert err.details == {"maxDepth": 5, "currentDepth": 6}

    def test_array_items_count_as_a_level(self) -> None:
        schema = {"rows": [_nested(1)]}
        validate_schema(schema, max_depth=2)
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema(schema, max_depth=1)
        assert exc_info.value.details["currentDepth"] == 2

    def test_too_many_fields(self) -> None:
        schema = {f"f{i}": "string" for i in range(101)}
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema(schema, max_fields=100)
        assert exc_info.value.details == {"maxFields": 100, "fieldCount": 101}

    def test_field_limit_is_per_level(self) -> None:
        schema = {
            "a": {f"x{i}": "number" for i in range(3)},
            "b": {f"y{i}": "number" for i in range(3)},
        }
        validate_schema(schema, max_fields=3)


class TestFieldDefinitions:
    """Tests for per-field shape checks."""

    def test_valid_schema_passes(self, receipt_schema: dict[str, Any]) -> None:
        validate_schema(receipt_schema)

    @pytest.mark.parametrize("items", [[], ["string", "number"]])
    def test_array_needs_exactly_one_item(self, items: list[Any]) -> None:
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema({"tags": items})
        assert exc_info.value.details == {"key": "tags", "arrayLength": len(items)}

    def test_unsupported_field_type(self) -> None:
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema({"count": "integer"})
        details = exc_info.value.details
        assert details["key"] == "count"
        assert details["type"] == "integer"
        assert details["supportedTypes"] == SUPPORTED_TYPES

    def test_unsupported_array_item_type(self) -> None:
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema({"ids": ["uuid"]})
        assert exc_info.value.details["type"] == "uuid"
        assert "array item" in exc_info.value.message

    def test_unsupported_type_in_nested_object(self) -> None:
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema({"outer": {"inner": "float"}})
        assert exc_info.value.details["key"] == "inner"

    @pytest.mark.parametrize("value", [5, True, None, 1.5])
    def test_malformed_field_definition(self, value: Any) -> None:  # noqa: ANN401
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema({"bad": value})
        assert exc_info.value.details == {"key": "bad", "receivedValue": value}

    @pytest.mark.parametrize("item", [["string"], None, 3])
    def test_malformed_array_item(self, item: Any) -> None:  # noqa: ANN401
        with pytest.raises(InvalidSchemaError) as exc_info:
            validate_schema({"matrix": [item]})
        assert exc_info.value.details["key"] == "matrix"

    def test_root_must_be_mapping(self) -> None:
        with pytest.raises(InvalidSchemaError):
            validate_schema(["string"])

    def test_array_and_object_tags_are_supported(self) -> None:
        validate_schema({"raw_list": "array", "raw_map": "object", "lists": ["array"]})


def test_count_schema_fields(receipt_schema: dict[str, Any]) -> None:
    # items + name/price/taxable + total + date
    assert count_schema_fields(receipt_schema) == 6


class TestParseSchema:
    """Tests for conversion into the typed node tree."""

    def test_builds_typed_tree(self, receipt_schema: dict[str, Any]) -> None:
        root = parse_schema(receipt_schema)
        assert isinstance(root, ObjectNode)
        assert list(root.fields) == ["items", "total", "date"]

        items = root.fields["items"]
        assert isinstance(items, ArrayNode)
        assert isinstance(items.item, ObjectNode)
        assert items.item.fields["price"] == PrimitiveNode(tag=FieldType.NUMBER)
        assert root.fields["date"] == PrimitiveNode(tag=FieldType.DATE)

    def test_array_of_primitive(self) -> None:
        root = parse_schema({"tags": ["string"]})
        assert root.fields["tags"] == ArrayNode(item=PrimitiveNode(tag=FieldType.STRING))

    def test_prebuilt_node_is_returned_as_is(self) -> None:
        node = ObjectNode(fields={"a": PrimitiveNode(tag=FieldType.STRING)})
        assert parse_schema(node) is node

    def test_invalid_schema_raises(self) -> None:
        with pytest.raises(InvalidSchemaError):
            parse_schema({"a": "nope"})

    def test_limits_are_forwarded(self) -> None:
        with pytest.raises(InvalidSchemaError):
            parse_schema({"a": "string", "b": "string"}, max_fields=1)


class TestPrebuiltNodes:
    """Caller-built trees get the same checks as raw schemas."""

    def test_too_deep_prebuilt_tree_rejected(self) -> None:
        node = parse_schema(_nested(9), max_depth=20)
        with pytest.raises(InvalidSchemaError) as exc_info:
            parse_schema(node)
        assert exc_info.value.details == {"maxDepth": 5, "currentDepth": 6}

    def test_too_many_fields_in_prebuilt_tree_rejected(self) -> None:
        node = ObjectNode(
            fields={f"f{i}": PrimitiveNode(tag=FieldType.STRING) for i in range(500)}
        )
        with pytest.raises(InvalidSchemaError) as exc_info:
            parse_schema(node)
        assert exc_info.value.details == {"maxFields": 100, "fieldCount": 500}

    def test_limits_are_forwarded_for_prebuilt_tree(self) -> None:
        node = parse_schema({"a": {"b": "string"}})
        with pytest.raises(InvalidSchemaError):
            parse_schema(node, max_depth=0)

    def test_unknown_tag_rejected(self) -> None:
        node = ObjectNode(fields={"x": PrimitiveNode(tag="nope")})  # type: ignore[arg-type]
        with pytest.raises(InvalidSchemaError) as exc_info:
            parse_schema(node)
        assert exc_info.value.details["key"] == "x"
        assert exc_info.value.details["type"] == "nope"

    def test_unknown_array_item_tag_rejected(self) -> None:
        item = PrimitiveNode(tag="tag")  # type: ignore[arg-type]
        node = ObjectNode(fields={"tags": ArrayNode(item=item)})
        with pytest.raises(InvalidSchemaError, match="array item type"):
            parse_schema(node)

    def test_nested_array_item_rejected(self) -> None:
        inner = ArrayNode(item=PrimitiveNode(tag=FieldType.STRING))
        node = ObjectNode(fields={"grid": ArrayNode(item=inner)})
        with pytest.raises(InvalidSchemaError) as exc_info:
            parse_schema(node)
        assert exc_info.value.details["key"] == "grid"

    def test_plain_string_tags_accepted(self) -> None:
        node = ObjectNode(fields={"x": PrimitiveNode(tag="number")})  # type: ignore[arg-type]
        assert parse_schema(node) is node
