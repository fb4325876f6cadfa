"""Extraction prompt template v1 -- renders a schema and source text."""
from __future__ import annotations

from structify.schema.nodes import ArrayNode, ObjectNode, PrimitiveNode

_SYSTEM_MESSAGE = """You are a precise data extraction system. Your ONLY task is to extract structured data from the provided text according to the given schema.

CRITICAL RULES:
1. Output ONLY valid JSON - no explanations, no markdown, no code blocks
2. Follow the schema exactly - use the exact field names provided
3. For missing data: use null
4. For dates: use ISO-8601 format (YYYY-MM-DD)
5. For numbers: use numeric values without currency symbols or separators
6. For booleans: use true or false
7. Be intelligent about extraction - handle typos, formatting issues, and OCR errors
8. Never make up data - if you cannot find a value, use null
9. Never include any text before or after the JSON object
10. The JSON must be parseable by standard JSON parsers

Your response must be a single valid JSON object, nothing else."""  # noqa: E501

_INDENT = "  "


def render_schema(schema: ObjectNode, indent: int = 0) -> str:
    """Render an object node as the indented schema description.

    Args:
        schema: Object node to render.
        indent: Current nesting level (two spaces per level).

    Returns:
        Multi-line description, one field per line.
    """
    prefix = _INDENT * indent
    lines: list[str] = []

    for key, node in schema.fields.items():
        if isinstance(node, PrimitiveNode):
            lines.append(f'{prefix}"{key}": <{node.tag.value}>')
        elif isinstance(node, ArrayNode):
            if isinstance(node.item, ObjectNode):
                lines.append(f'{prefix}"{key}": [array of objects with structure:')
                lines.append(render_schema(node.item, indent + 1))
                lines.append(f"{prefix}]")
            elif isinstance(node.item, PrimitiveNode):
                lines.append(f'{prefix}"{key}": [array of <{node.item.tag.value}>]')
        else:
            lines.append(f'{prefix}"{key}": {{')
            lines.append(render_schema(node, indent + 1))
            lines.append(f"{prefix}}}")

    return "\n".join(lines)


def build_extraction_prompt(text: str, schema: ObjectNode) -> str:
    """Build the extraction prompt from source text and schema.

    The text is embedded verbatim between triple-quote markers. It is not
    escaped, so text containing the marker can blur the delimiter.

    Args:
        text: Source text to extract from.
        schema: Validated root schema node.

    Returns:
        Complete prompt string for the extraction oracle.
    """
    return f"""{_SYSTEM_MESSAGE}

Extract data from this text according to the schema below.

TEXT TO EXTRACT FROM:
\"\"\"
{text.strip()}
\"\"\"

EXPECTED SCHEMA:
{{
{render_schema(schema)}
}}

RESPONSE (valid JSON only):"""
