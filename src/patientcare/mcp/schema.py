"""Input schema generation for tools/list."""

from __future__ import annotations

from typing import Any

from patientcare.mcp.models import ParamType, ToolDescriptor

_JSON_TYPES: dict[ParamType, str] = {
    ParamType.TEXT: "string",
    ParamType.INTEGER: "integer",
    ParamType.BOOLEAN: "boolean",
    ParamType.DECIMAL: "number",
}


def json_type(param_type: ParamType) -> str:
    """Map a declared parameter type to its JSON Schema type name."""
    return _JSON_TYPES.get(param_type, "string")


def input_schema(tool: ToolDescriptor) -> dict[str, Any]:
    """Build the JSON Schema object describing a tool's arguments.

    The ``required`` key is left out entirely when no parameter is
    required; some strict schema consumers reject an empty list there.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []
    for param in tool.params:
        properties[param.name] = {
            "type": json_type(param.type),
            "description": param.description,
        }
        if param.required:
            required.append(param.name)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def describe_tool(tool: ToolDescriptor) -> dict[str, Any]:
    """Render one tools/list entry."""
    return {
        "name": tool.name,
        "description": tool.description,
        "inputSchema": input_schema(tool),
    }
