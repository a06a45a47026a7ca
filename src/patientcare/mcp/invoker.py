"""Tool invocation — run a handler and turn the outcome into text.

A tool's output is always a JSON text. Failures inside the tool (a
missing record, bad input the handler rejects, an argument that could
not be bound) come back as ``{"error": "..."}`` in that same text rather
than as a JSON-RPC error, so a client always sees "the tool ran and
reported a problem".
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter

from patientcare.mcp.binder import bind
from patientcare.mcp.errors import BindingError
from patientcare.mcp.models import ToolDescriptor
from patientcare.records import RecordError

logger = logging.getLogger(__name__)

# Serializes whatever a handler returns: models, dates, lists, dicts.
_RESULT_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def error_payload(message: str) -> str:
    """Render the ``{"error": ...}`` text used for every tool-level failure."""
    return json.dumps({"error": message})


def serialize_result(result: Any) -> str:
    """Serialize a handler's return value to JSON text.

    Strings are assumed to already be the tool's output and pass through.
    ``None`` becomes ``"{}"``.
    """
    if result is None:
        return "{}"
    if isinstance(result, str):
        return result
    return _RESULT_ADAPTER.dump_json(result).decode("utf-8")


async def invoke(tool: ToolDescriptor, args: Sequence[Any]) -> str:
    """Call ``tool``'s handler with already-bound arguments.

    Handlers may be plain functions or coroutines.

    Returns:
        The serialized result, or an error payload if the handler raised.
    """
    try:
        result = tool.handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return serialize_result(result)
    except (RecordError, ValueError) as e:
        logger.info("Tool %s reported an error: %s", tool.name, e)
        return error_payload(str(e))
    except Exception as e:
        logger.exception("Tool %s failed", tool.name)
        return error_payload(f"Error calling tool: {e}")


async def call_tool(tool: ToolDescriptor, raw_args: Mapping[str, Any]) -> str:
    """Bind ``raw_args`` to ``tool`` and invoke it.

    A binding failure is reported as the tool's output; the handler is
    not called.
    """
    try:
        args = bind(tool, raw_args)
    except BindingError as e:
        logger.info("Could not bind arguments for %s: %s", tool.name, e)
        return error_payload(str(e))
    return await invoke(tool, args)
