"""Configuration for the Patient Care MCP server and bridge.

Loads settings from environment variables (via a .env file or the system
environment). Every setting has a default so the package can be imported
and tested without any environment at all.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists (absent in CI and Docker)
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


def _getenv_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- HTTP server ---
# Where uvicorn binds the FastAPI app that serves the JSON-RPC endpoint.
MCP_HOST: str = os.getenv("MCP_HOST", "127.0.0.1")
MCP_PORT: int = int(os.getenv("MCP_PORT", "8080"))

# --- Bridge ---
# The JSON-RPC endpoint the stdio bridge forwards every request line to.
MCP_URL: str = os.getenv("MCP_URL", "http://localhost:8080/mcp")

# Upper bound on a single forwarded request. A hung server must not stall
# the bridge forever.
BRIDGE_TIMEOUT_SECONDS: float = float(os.getenv("BRIDGE_TIMEOUT_SECONDS", "30"))

# --- Protocol metadata ---
# Returned verbatim by the "initialize" method.
MCP_PROTOCOL_VERSION: str = os.getenv("MCP_PROTOCOL_VERSION", "2024-11-05")
MCP_SERVER_NAME: str = os.getenv("MCP_SERVER_NAME", "patient-care-system")
MCP_SERVER_VERSION: str = os.getenv("MCP_SERVER_VERSION", "1.0.0")

# --- Observability ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- Sample data ---
# When enabled, the server loads a handful of demo patients at startup so
# the tools have something to return.
SEED_SAMPLE_DATA: bool = _getenv_bool("SEED_SAMPLE_DATA", "true")
