# === FILE: site_walker/logger.py ===
"""Logging setup for **SiteWalker**.

Log records (fetch failures, crawl summary, retries) go to ``stderr`` and,
optionally, to a rotating log file. Progress lines, one per visited URL, are
not log records: the crawl echoes them to ``stdout`` so that the two streams
can be redirected separately::

      site-walker crawl https://example.com/ > visited.txt 2> errors.log

Import the shared instance with ``from site_walker.logger import logger``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteWalker"

_LevelT = Union[int, str]


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """(Re)configure the project logger, replacing any existing handlers.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path of a rotating logfile (5 MB x 3). *None* → stderr only.
    log_format
        Format string for :class:`logging.Formatter`.
    """
    formatter = logging.Formatter(log_format)
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()

    err = logging.StreamHandler(sys.stderr)
    err.setFormatter(formatter)
    lg.addHandler(err)

    if log_file is not None:
        rotating = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        rotating.setFormatter(formatter)
        lg.addHandler(rotating)

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Positional-argument alias of :func:`configure` used by the CLI."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME"]
