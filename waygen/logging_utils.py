"""Mini README: Application-wide logging helpers for Waygen.

Structure:
    * get_logger - factory returning module loggers with baseline setup.
    * configure_root_logger - optional helper to adjust global logging level.

Usage:
    Every module calls ``get_logger(__name__)`` once and keeps the result in
    a module-level ``LOGGER``. The root handler is attached exactly once so
    repeated imports (tests, the web reloader) never duplicate output.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: int = logging.INFO) -> None:
    """Attach a single formatted stream handler to the root logger."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def set_log_level(level: int) -> None:
    """Change the root level after initial configuration (used by the CLI)."""

    configure_root_logger(level)
    logging.getLogger().setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
