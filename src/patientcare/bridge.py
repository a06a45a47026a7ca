"""Stdio to HTTP bridge for the JSON-RPC tool endpoint.

Lets a line-oriented MCP client (one that launches a server process and
talks to it over stdin/stdout) use the HTTP endpoint served by
``patientcare.app``.

For every non-empty line on stdin the bridge:
1. Checks that the line is JSON
2. POSTs it unchanged to the endpoint (Content-Type: application/json)
3. Writes the response body, whatever the HTTP status, as one line to
   stdout and flushes

Requests are forwarded strictly one at a time, in input order. Transport
failures (connection refused, timeouts, malformed lines) are logged to
stderr and the bridge moves on to the next line; nothing but responses is
ever written to stdout.

Run with:
    patientcare-bridge --url http://localhost:8080/mcp
"""

from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Iterable
from typing import TextIO

import click
import httpx

from patientcare.config import BRIDGE_TIMEOUT_SECONDS, LOG_LEVEL, MCP_URL
from patientcare.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# How much of a bad input line to echo into the diagnostics.
_LINE_PREVIEW = 200


class StdioBridge:
    """Forwards JSON-RPC request lines to an HTTP endpoint.

    Attributes:
        url: The JSON-RPC endpoint every request is POSTed to.
        forwarded: Number of requests that got a response written to stdout.
        failed: Number of lines dropped because of a transport failure.
    """

    def __init__(self, url: str, http: httpx.Client, output: TextIO) -> None:
        self.url = url
        self._http = http
        self._output = output
        self.forwarded = 0
        self.failed = 0

    def forward(self, line: str) -> str:
        """POST one request line and return the response body as one line.

        Raises:
            ValueError: If ``line`` is not JSON.
            httpx.HTTPError: If the request could not be completed.
        """
        json.loads(line)
        response = self._http.post(
            self.url,
            content=line.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        if response.status_code >= 400:
            logger.warning(
                "Endpoint answered HTTP %d; relaying body as is", response.status_code
            )
        # One output line per response. Raw CR/LF can only sit between JSON
        # tokens; U+2028 and friends inside strings must survive.
        return response.text.replace("\r", "").replace("\n", "")

    def handle_line(self, raw: str) -> None:
        """Forward one input line, writing its response or logging the failure."""
        line = raw.strip()
        if not line:
            return

        try:
            body = self.forward(line)
        except ValueError as e:
            self.failed += 1
            logger.error(
                "Skipping malformed request line: %s (line: %r)", e, line[:_LINE_PREVIEW]
            )
            return
        except httpx.TimeoutException as e:
            self.failed += 1
            logger.error("Request to %s timed out: %s", self.url, e)
            return
        except httpx.HTTPError as e:
            self.failed += 1
            logger.error("Error processing request against %s: %s", self.url, e)
            return

        self._output.write(body + "\n")
        self._output.flush()
        self.forwarded += 1

    def serve(self, lines: Iterable[str]) -> None:
        """Handle every line until the input is exhausted."""
        for raw in lines:
            self.handle_line(raw)
        logger.info(
            "Input closed; %d request(s) forwarded, %d failed", self.forwarded, self.failed
        )


@click.command()
@click.option("--url", default=MCP_URL, show_default=True, help="JSON-RPC endpoint URL.")
@click.option(
    "--timeout",
    default=BRIDGE_TIMEOUT_SECONDS,
    show_default=True,
    type=float,
    help="Seconds to wait for each HTTP request.",
)
@click.option("--log-level", default=LOG_LEVEL, show_default=True, help="Logging level.")
def main(url: str, timeout: float, log_level: str) -> None:
    """Relay JSON-RPC requests from stdin to the HTTP endpoint."""
    setup_logging(log_level)
    for stream in (sys.stdin, sys.stdout):
        if isinstance(stream, io.TextIOWrapper) and stream.encoding.lower() != "utf-8":
            stream.reconfigure(encoding="utf-8")

    logger.info("Patient Care MCP bridge started")
    logger.info("Forwarding requests to: %s", url)

    with httpx.Client(timeout=httpx.Timeout(timeout)) as http:
        bridge = StdioBridge(url, http, sys.stdout)
        # One blocking readline() per request; no read-ahead.
        bridge.serve(iter(sys.stdin.readline, ""))


if __name__ == "__main__":
    main()
