"""JSON-RPC dispatcher — routes one envelope to initialize / tools/list / tools/call.

The dispatcher is stateless across requests. Every response echoes the
request ``id`` (``null`` when the request had none), and carries exactly
one of ``result`` or ``error``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from patientcare.config import MCP_PROTOCOL_VERSION, MCP_SERVER_NAME, MCP_SERVER_VERSION
from patientcare.mcp.errors import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)
from patientcare.mcp.invoker import call_tool
from patientcare.mcp.models import (
    JsonRpcErrorObject,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResult,
)
from patientcare.mcp.registry import ToolRegistry
from patientcare.mcp.schema import describe_tool

logger = logging.getLogger(__name__)


class MethodNotFound(Exception):
    """Raised inside a handler to answer with -32601."""


def success(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return JsonRpcResult(id=request_id, result=result).model_dump()


def failure(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return JsonRpcErrorResponse(
        id=request_id,
        error=JsonRpcErrorObject(code=code, message=message),
    ).model_dump()


class JsonRpcDispatcher:
    """Handles decoded JSON-RPC envelopes against a :class:`ToolRegistry`.

    Usage::

        dispatcher = JsonRpcDispatcher(get_registry())
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 1,
                                            "method": "tools/list"})
    """

    def __init__(
        self,
        registry: ToolRegistry,
        protocol_version: str = MCP_PROTOCOL_VERSION,
        server_name: str = MCP_SERVER_NAME,
        server_version: str = MCP_SERVER_VERSION,
    ) -> None:
        self.registry = registry
        self.protocol_version = protocol_version
        self.server_name = server_name
        self.server_version = server_version

    async def handle_raw(self, body: bytes | str) -> dict[str, Any]:
        """Decode a request body and dispatch it.

        A body that is not JSON yields a -32700 parse error with a null id.
        """
        try:
            envelope = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            logger.warning("Rejected request body that is not JSON: %s", e)
            return failure(None, PARSE_ERROR, f"Parse error: {e}")
        return await self.handle(envelope)

    async def handle(self, envelope: Any) -> dict[str, Any]:
        """Dispatch one decoded envelope and build its response."""
        if not isinstance(envelope, dict):
            return failure(None, INVALID_REQUEST, "Invalid Request")

        request_id = envelope.get("id")
        try:
            request = JsonRpcRequest.model_validate(envelope)
        except ValidationError as e:
            logger.warning("Rejected malformed envelope: %s", e)
            return failure(request_id, INVALID_REQUEST, "Invalid Request")

        method = request.method
        logger.debug("Dispatching %s (id=%r)", method, request_id)

        try:
            if method == "initialize":
                result = self.initialize()
            elif method == "tools/list":
                result = self.list_tools()
            elif method == "tools/call":
                result = await self.call_tool(request.params)
            else:
                return failure(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")
        except MethodNotFound as e:
            return failure(request_id, METHOD_NOT_FOUND, f"Method not found: {e}")
        except Exception as e:
            logger.exception("Internal error while handling %s", method)
            return failure(request_id, INTERNAL_ERROR, f"Internal error: {e}")

        return success(request_id, result)

    # --- Protocol methods ---

    def initialize(self) -> dict[str, Any]:
        """Static server metadata; ignores the client's params."""
        return {
            "protocolVersion": self.protocol_version,
            "serverInfo": {
                "name": self.server_name,
                "version": self.server_version,
            },
            "capabilities": {"tools": {}},
        }

    def list_tools(self) -> dict[str, Any]:
        return {"tools": [describe_tool(tool) for tool in self.registry.list()]}

    async def call_tool(self, params: Any) -> dict[str, Any]:
        """Run one tool and wrap its text output as MCP content.

        Raises:
            MethodNotFound: If no tool has the requested name.
            TypeError: If ``params`` or ``arguments`` is not an object.
        """
        if not isinstance(params, dict):
            raise TypeError("tools/call params must be an object")
        name = params.get("name")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise TypeError("tools/call arguments must be an object")

        tool = self.registry.get(name) if isinstance(name, str) else None
        if tool is None:
            raise MethodNotFound(name)

        text = await call_tool(tool, arguments)
        return {"content": [{"type": "text", "text": text}]}
