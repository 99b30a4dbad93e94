"""Logging setup.

A running Program owns stdout, so log records must go somewhere else: a file,
or stderr when it is redirected away from the terminal.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ENV_LOG_FILE = "TEACUP_LOG_FILE"
ENV_LOG_LEVEL = "TEACUP_LOG_LEVEL"


def setup_logging(level: str | None = None, log_file: str | None = None, stderr: bool = False) -> None:
    """Configure the "teacup" logger.

    Args:
        level: Log level name; defaults to $TEACUP_LOG_LEVEL or WARNING
        log_file: File to append records to; defaults to $TEACUP_LOG_FILE
        stderr: Also log to stderr (only useful when stderr is redirected)
    """
    level = level or os.environ.get(ENV_LOG_LEVEL, "WARNING")
    log_file = log_file or os.environ.get(ENV_LOG_FILE)

    handlers: list[logging.Handler] = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    if stderr:
        handlers.append(logging.StreamHandler(sys.stderr))

    logger = logging.getLogger("teacup")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
