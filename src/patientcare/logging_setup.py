"""Logging initialization.

All diagnostics go to stderr. The bridge relies on this: stdout is
reserved for JSON-RPC responses, one per line.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the root logger.

    Safe to call more than once; only the first call installs the handler,
    later calls just adjust the level.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if getattr(setup_logging, "_configured", False):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)

    # noisy lib
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    setup_logging._configured = True  # type: ignore[attr-defined]
