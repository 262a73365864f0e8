"""Logging helpers with consistent formatting."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.logging import RichHandler

from kvadapter.utils.env import get_env


def _default_level() -> int:
    level = getattr(logging, get_env("KVADAPTER_LOG_LEVEL", default="INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None, *, rich: bool = True) -> logging.Logger:
    """Configure and return a logger under the ``kvadapter`` namespace."""
    logger = logging.getLogger(f"kvadapter.{name}")
    if logger.handlers:
        return logger

    level = _default_level() if level is None else level
    logger.setLevel(level)

    if rich:
        handler: logging.Handler = RichHandler(
            level=level,
            markup=False,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(name)s %(levelname)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logger.addHandler(handler)
    logger.propagate = False
    return logger
