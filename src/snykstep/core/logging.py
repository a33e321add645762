"""Logging helpers for snykstep.

All modules obtain their logger via ``get_logger(__name__)``. The CLI calls
``configure_logging`` once, as early as possible.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "snykstep"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger in the snykstep hierarchy.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the snykstep root logger.

    Level resolution: ``quiet`` wins, then ``debug``, then ``verbose``,
    otherwise warnings and above are shown.

    Args:
        debug: Enable debug-level logging.
        verbose: Enable info-level logging.
        quiet: Only show errors.
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace our own handler on repeated calls
    for handler in list(logger.handlers):
        if getattr(handler, "_snykstep_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if debug else LOG_FORMAT))
    handler._snykstep_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
