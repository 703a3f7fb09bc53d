"""
Logging setup for the kicker-rank console.

Log lines go to stderr; stdout carries only the menu and the rendered
tables, so output can be piped without log noise.

Environment variables:
- LOG_LEVEL: DEBUG|INFO|WARNING|ERROR|CRITICAL (default INFO)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Literal, Optional

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

VERBOSE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(funcName)s | %(message)s"
CONCISE_FORMAT = "%(levelname).1s %(name)s: %(message)s"


def resolve_level(level: Optional[str] = None) -> int:
    """Numeric level for ``level`` or LOG_LEVEL; unknown names mean INFO."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.INFO


def setup_logging(level: Optional[LogLevel] = None, mode: Optional[Literal["test", "prod"]] = None) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Optional level name. If omitted, LOG_LEVEL or INFO is used.
        mode: "test" forces the verbose format; otherwise it follows the level.
    """
    numeric_level = resolve_level(level)
    verbose = mode == "test" or numeric_level <= logging.DEBUG

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else CONCISE_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(numeric_level)

    # aiosqlite logs every statement at DEBUG
    logging.getLogger("aiosqlite").setLevel(logging.DEBUG if verbose and numeric_level <= logging.DEBUG else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
