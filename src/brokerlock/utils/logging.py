"""Logging helpers with consistent formatting."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.logging import RichHandler

from brokerlock.utils.env import get_bool_env, get_log_level_env


def get_logger(name: str, level: Optional[int] = None, *, rich: Optional[bool] = None) -> logging.Logger:
    """Configure and return a logger.

    Level and handler default to BROKERLOCK_LOG_LEVEL and BROKERLOCK_RICH_LOGS.
    A logger that already has real handlers is returned untouched. The library
    itself never calls this; applications do, e.g. ``get_logger("brokerlock")``.
    """
    logger = logging.getLogger(name)
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    if level is None:
        level = get_log_level_env("BROKERLOCK_LOG_LEVEL", default=logging.INFO)
    if rich is None:
        rich = get_bool_env("BROKERLOCK_RICH_LOGS", default=True)

    logger.setLevel(level)

    if rich:
        handler: logging.Handler = RichHandler(
            level=level,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=True,
            show_path=False,
        )
        # RichHandler renders time and level itself
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
