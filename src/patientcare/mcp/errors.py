"""Error types and JSON-RPC error codes for the tool layer."""

from __future__ import annotations

from typing import Any

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class McpError(Exception):
    """Base error for the tool layer."""


class DuplicateToolError(McpError):
    """Raised when two providers register a tool under the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class BindingError(McpError):
    """Raw request arguments could not be bound to a tool's parameters."""


class MissingParameterError(BindingError):
    """A required parameter was absent (or null) in the request arguments."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required parameter: {name}")


class TypeCoercionError(BindingError):
    """A supplied argument could not be converted to the declared type."""

    def __init__(self, name: str, expected: str, value: Any) -> None:
        self.name = name
        self.expected = expected
        self.value = value
        super().__init__(
            f"Invalid value for parameter '{name}': expected {expected}, got {value!r}"
        )
