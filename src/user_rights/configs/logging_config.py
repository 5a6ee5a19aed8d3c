from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "WARNING") -> None:
    """
    Structured-enough logging for operators and automation.

    Everything goes to stderr so listing output on stdout stays machine readable.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    handler.setFormatter(formatter)

    # Replace existing handlers to avoid duplicates when commands run back to back.
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
