# tilepath/logging_config.py
from __future__ import annotations

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)s | tilepath.%(module)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logging_configured = False


def _resolve_level() -> int:
    name = os.getenv("TILEPATH_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.INFO


def _configure_logging() -> None:
    global _logging_configured
    if _logging_configured:
        return

    level = _resolve_level()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    handler.setLevel(level)

    package_logger = logging.getLogger("tilepath")
    package_logger.setLevel(level)
    # the handler below is the only output for tilepath records
    package_logger.propagate = False
    # Avoid attaching duplicate handlers if the host app already configured one.
    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        package_logger.addHandler(handler)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured with the tilepath format."""
    _configure_logging()
    return logging.getLogger(name)


__all__ = ["get_logger"]
