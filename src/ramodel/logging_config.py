# src/ramodel/logging_config.py

"""
Logging setup for search drivers and scripts.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``ramodel`` namespace and never attach handlers themselves; a driver calls
:func:`setup_logging` once (or again, to reconfigure) to route them.

Examples
--------
>>> import logging
>>> from ramodel.logging_config import setup_logging
>>> logger = setup_logging(logging.WARNING)
>>> logger.name
'ramodel'
"""

from __future__ import annotations
import logging
import sys
from typing import List, Optional

__all__ = [
    "LOG_FORMAT",
    "setup_logging",
]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    *,
    stream=None,
    datefmt: str = "%H:%M:%S",
) -> logging.Logger:
    """
    Configure the ``ramodel`` package logger.

    Parameters
    ----------
    level : int, default=logging.INFO
        Level applied to the logger and to every handler it gets.
    log_file : str, optional
        Also write records to this file (truncated on each call).
    stream : file-like, optional
        Console stream; defaults to ``sys.stdout``.
    datefmt : str, default="%H:%M:%S"
        Timestamp format of :data:`LOG_FORMAT`.

    Returns
    -------
    logging.Logger
        The configured package logger.

    Notes
    -----
    - Handlers installed by an earlier call are removed and closed first, so
      repeated calls neither duplicate output nor leak open files.
    """
    logger = logging.getLogger("ramodel")
    logger.setLevel(level)
    _drop_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=datefmt)
    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging configured at level %s", logging.getLevelName(level))
    return logger
