"""Tool registry — the build-once table of tools, keyed by name.

Providers declare their tools by calling :meth:`ToolRegistry.register`
from a ``register_tools(registry)`` method. The registry runs every
provider exactly once, on first use, and is read-only afterwards, so
concurrent requests can share it without locking.

Usage::

    registry = ToolRegistry([PatientTools(store), SchedulingTools(store)])
    registry.initialize()
    tool = registry.get("get_patient_by_id")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol

from patientcare.mcp.errors import DuplicateToolError
from patientcare.mcp.models import ToolDescriptor, ToolParam

logger = logging.getLogger(__name__)


class ToolProvider(Protocol):
    """Anything that can declare tools into a registry."""

    def register_tools(self, registry: ToolRegistry) -> None: ...


class ToolRegistry:
    """Maps tool names to :class:`ToolDescriptor` objects.

    Duplicate tool names are rejected with :class:`DuplicateToolError`
    rather than silently overwritten.
    """

    def __init__(self, providers: Iterable[ToolProvider] = ()) -> None:
        self._providers: list[ToolProvider] = list(providers)
        self._tools: dict[str, ToolDescriptor] = {}
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Collect tools from every provider. Only the first call does work."""
        if self._initialized:
            return
        with self._lock:
            # Another thread may have finished the build while we waited.
            if self._initialized:
                return
            try:
                for provider in self._providers:
                    provider.register_tools(self)
            except Exception:
                # A failed build leaves no partial table behind.
                self._tools.clear()
                raise
            self._initialized = True
        logger.info("Tool registry built with %d tool(s)", len(self._tools))

    def register(
        self,
        name: str,
        description: str,
        params: Sequence[ToolParam],
        handler: Callable[..., Any],
    ) -> ToolDescriptor:
        """Add one tool to the registry.

        Args:
            name: Unique tool name, as used in tools/call.
            description: Human readable summary shown by tools/list.
            params: Parameter descriptors, in the handler's positional order.
            handler: Callable invoked with one positional value per param.

        Returns:
            The stored descriptor.

        Raises:
            ValueError: If a name is empty or a parameter name repeats.
            DuplicateToolError: If ``name`` is already registered.
        """
        if self._initialized:
            raise RuntimeError("Tool registry is read-only once initialized")
        if not name:
            raise ValueError("Tool name must not be empty")

        seen: set[str] = set()
        for param in params:
            if not param.name:
                raise ValueError(f"Tool '{name}' declares a parameter with no name")
            if param.name in seen:
                raise ValueError(f"Tool '{name}' declares parameter '{param.name}' twice")
            seen.add(param.name)

        if name in self._tools:
            raise DuplicateToolError(name)

        tool = ToolDescriptor(
            name=name,
            description=description,
            params=tuple(params),
            handler=handler,
        )
        self._tools[name] = tool
        logger.debug("Registered tool %s (%d param(s))", name, len(tool.params))
        return tool

    def list(self) -> list[ToolDescriptor]:
        """Return every tool in registration order."""
        self.initialize()
        return list(self._tools.values())

    def get(self, name: str) -> ToolDescriptor | None:
        """Return the named tool, or None if no such tool exists."""
        self.initialize()
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        self.initialize()
        return name in self._tools

    def __len__(self) -> int:
        self.initialize()
        return len(self._tools)


# --- Module-level singleton ---
# One registry for the whole server process, built over the default
# providers on first use.

_registry: ToolRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ToolRegistry:
    """Get or create the process-wide registry over the default providers."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                from patientcare.tools import default_providers

                _registry = ToolRegistry(default_providers())
    _registry.initialize()
    return _registry


def reset_registry() -> None:
    """Drop the process-wide registry (used by tests)."""
    global _registry  # noqa: PLW0603
    with _registry_lock:
        _registry = None
