# === FILE: site_mapper/logger.py ===
"""Logging setup for **SiteMapper**.

Every module logs through the ``SiteMapper`` logger::

    from site_mapper.logger import logger
    logger.info("Crawl started")

Importing this module installs no handlers; the CLI calls :func:`init_logging`
once per run. Records go to stderr so that stdout carries only the sitemap.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteMapper"

#: rotate the log file at 5 MiB, keep three old files
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Point the project logger at stderr (and *log_file*, if given) at *level*.

    Handlers from a previous call are replaced, so repeated CLI invocations in
    one process do not duplicate output.
    """
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
            )
        )

    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for old in lg.handlers[:]:
        lg.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


logger: logging.Logger = logging.getLogger(LOGGER_NAME)

__all__ = ["logger", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
