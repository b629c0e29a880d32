"""
Handler setup for the ``gridknot`` logger tree.

Library modules only create loggers with ``logging.getLogger(__name__)`` and
never attach handlers. The command line calls setup_logging() once at start
up; records then flow to stderr, keeping stdout free for command output.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "gridknot"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _configured(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Send package log records at *level* or above to stderr, and to *log_file*
    when one is given (overwritten on each run).

    Handlers from an earlier call are detached and closed first, so the
    function can be called again to change the level or the log file.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for previous in list(logger.handlers):
        logger.removeHandler(previous)
        previous.close()

    logger.setLevel(level)
    logger.addHandler(_configured(logging.StreamHandler(sys.stderr), level))
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        logger.addHandler(_configured(file_handler, level))

    destination = f"stderr and {log_file}" if log_file else "stderr"
    logger.debug(f"Logging {logging.getLevelName(level)} and above to {destination}")
