"""Logging setup shared by the agent components."""

from __future__ import annotations

__all__ = ["get_logger", "setup_logging"]

import logging
import sys
from typing import Optional

from .config import get_log_level

ROOT_LOGGER_NAME = "apmagent"

_configured = False


def get_logger(component: str) -> logging.Logger:
    """Return the child logger for ``component`` (e.g. ``apmagent.api``)."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")


def setup_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the agent's root logger.

    Only the first call installs a handler; later calls just adjust the level.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, (level or get_log_level()).upper(), logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    ))
    root.addHandler(handler)
    _configured = True
