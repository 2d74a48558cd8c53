"""Logging setup shared by the runner and the demos.

The playground logs through a dedicated ``playground`` logger instead of the
root logger: informational records go to stdout, warnings and errors to
stderr, so the numbered demo lines and diagnostics interleave in order.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, TextIO

ROOT_LOGGER = "playground"
FORMAT = "%(levelname)s:%(name)s:%(message)s"


class MaxLevelFilter(logging.Filter):
    """Allow log records up to a specific level."""

    def __init__(self, *, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


class LazyMessage:
    """Log message whose text is built only when a handler formats it."""

    def __init__(self, supplier: Callable[[], str]) -> None:
        self.supplier = supplier
        self.calls = 0

    def __str__(self) -> str:
        self.calls += 1
        return self.supplier()


def configure_logging(
    level: int | str = logging.INFO,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> logging.Logger:
    """Configure the ``playground`` logger; safe to call more than once."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(level)

    stdout_handler = logging.StreamHandler(stdout or sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(MaxLevelFilter(max_level=logging.INFO))

    stderr_handler = logging.StreamHandler(stderr or sys.stderr)
    stderr_handler.setLevel(logging.WARNING)

    formatter = logging.Formatter(FORMAT)
    stdout_handler.setFormatter(formatter)
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
