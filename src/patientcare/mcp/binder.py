"""Argument binding — raw JSON arguments to a tool's typed parameters.

Binding is all-or-nothing: the first parameter that is missing or cannot
be coerced raises, and no partial argument list is produced.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any

from patientcare.mcp.errors import MissingParameterError, TypeCoercionError
from patientcare.mcp.models import ParamType, ToolDescriptor, ToolParam


def _to_integer(param: ToolParam, value: Any) -> int:
    # bool is a subclass of int; "true" is not a patient ID.
    if isinstance(value, bool):
        raise TypeCoercionError(param.name, "integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise TypeCoercionError(param.name, "integer", value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise TypeCoercionError(param.name, "integer", value) from None
    raise TypeCoercionError(param.name, "integer", value)


def _to_decimal(param: ToolParam, value: Any) -> float:
    if isinstance(value, bool):
        raise TypeCoercionError(param.name, "number", value)
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            raise TypeCoercionError(param.name, "number", value) from None
    else:
        raise TypeCoercionError(param.name, "number", value)
    if not math.isfinite(result):
        raise TypeCoercionError(param.name, "number", value)
    return result


def _to_boolean(param: ToolParam, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
    raise TypeCoercionError(param.name, "boolean", value)


def _to_text(param: ToolParam, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeCoercionError(param.name, "string", value)


_COERCERS: dict[ParamType, Callable[[ToolParam, Any], Any]] = {
    ParamType.TEXT: _to_text,
    ParamType.INTEGER: _to_integer,
    ParamType.BOOLEAN: _to_boolean,
    ParamType.DECIMAL: _to_decimal,
}


def coerce(param: ToolParam, value: Any) -> Any:
    """Convert one raw value to ``param``'s declared type."""
    return _COERCERS.get(param.type, _to_text)(param, value)


def bind(tool: ToolDescriptor, raw_args: Mapping[str, Any]) -> list[Any]:
    """Bind raw request arguments to ``tool``'s parameters, in order.

    Args:
        tool: The tool being called.
        raw_args: The ``arguments`` object from a tools/call request.
            Unknown keys are ignored. A JSON null counts as absent.

    Returns:
        One value per parameter; ``None`` for absent optional parameters.

    Raises:
        MissingParameterError: A required parameter is absent.
        TypeCoercionError: A value cannot be converted to its declared type.
    """
    bound: list[Any] = []
    for param in tool.params:
        value = raw_args.get(param.name)
        if value is None:
            if param.required:
                raise MissingParameterError(param.name)
            bound.append(None)
            continue
        bound.append(coerce(param, value))
    return bound
