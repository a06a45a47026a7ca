"""Tool metadata and JSON-RPC 2.0 envelopes.

Tool descriptors are frozen once built: the registry hands the same
instances to every request, so nothing downstream may mutate them.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Tool metadata
# ---------------------------------------------------------------------------


class ParamType(str, Enum):
    """The closed set of primitive types a tool parameter can declare."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"


class ToolParam(BaseModel):
    """One parameter of a tool, in the order the handler expects it."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    required: bool = True
    type: ParamType = ParamType.TEXT


class ToolDescriptor(BaseModel):
    """A registered tool: its metadata plus the callable that runs it.

    ``handler`` is usually a bound method of a provider instance and is
    called positionally with one value per entry in ``params``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str = ""
    params: tuple[ToolParam, ...] = ()
    handler: Callable[..., Any] = Field(exclude=True, repr=False)


# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message as received over HTTP."""

    jsonrpc: str = "2.0"
    id: Any = None
    method: str | None = None
    params: Any = None


class JsonRpcErrorObject(BaseModel):
    """The ``error`` member of a failed response."""

    code: int
    message: str


class JsonRpcResult(BaseModel):
    """A successful JSON-RPC 2.0 response."""

    jsonrpc: str = "2.0"
    id: Any = None
    result: dict[str, Any]


class JsonRpcErrorResponse(BaseModel):
    """A failed JSON-RPC 2.0 response."""

    jsonrpc: str = "2.0"
    id: Any = None
    error: JsonRpcErrorObject
