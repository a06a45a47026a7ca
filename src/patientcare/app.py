"""FastAPI server — the HTTP entry point for the JSON-RPC tool endpoint.

It exposes two endpoints:

- GET  /health — Simple check that the server is running
- POST /mcp    — One JSON-RPC 2.0 envelope in, one envelope out

JSON-RPC errors travel inside the response envelope; the HTTP status is
always 200.

Run locally with:
    patientcare-server
or:
    uvicorn patientcare.app:app --port 8080
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import click
import uvicorn
from fastapi import Depends, FastAPI, Request

from patientcare.config import LOG_LEVEL, MCP_HOST, MCP_PORT, SEED_SAMPLE_DATA
from patientcare.logging_setup import setup_logging
from patientcare.mcp.dispatcher import JsonRpcDispatcher
from patientcare.mcp.registry import get_registry
from patientcare.records import get_store
from patientcare.seed import seed_sample_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    setup_logging(LOG_LEVEL)
    if SEED_SAMPLE_DATA:
        seed_sample_data(get_store())
    yield


app = FastAPI(
    title="Patient Care MCP Server",
    description="Patient-care operations exposed as JSON-RPC tools",
    version="1.0.0",
    lifespan=lifespan,
)


def get_dispatcher() -> JsonRpcDispatcher:
    """Dependency: a dispatcher over the process-wide tool registry."""
    return JsonRpcDispatcher(get_registry())


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint. Returns 200 if the server is running."""
    return {"status": "ok"}


@app.post("/mcp")
async def mcp(
    request: Request,
    dispatcher: JsonRpcDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """Handle one JSON-RPC request.

    The raw body is decoded here rather than through a pydantic request
    model so that malformed envelopes still get a JSON-RPC error response
    instead of FastAPI's 422.
    """
    body = await request.body()
    return await dispatcher.handle_raw(body)


@click.command()
@click.option("--host", default=MCP_HOST, show_default=True, help="Interface to bind.")
@click.option("--port", default=MCP_PORT, show_default=True, type=int, help="Port to bind.")
@click.option("--log-level", default=LOG_LEVEL, show_default=True, help="Logging level.")
def main(host: str, port: int, log_level: str) -> None:
    """Serve the JSON-RPC tool endpoint over HTTP."""
    setup_logging(log_level)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
