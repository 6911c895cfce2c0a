"""
Logging Setup
=============
Routes the diagnostics of every dragsim module (step counts at DEBUG,
truncated runs at WARNING) to stdout and, optionally, a log file.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _attach(logger: logging.Logger, handler: logging.Handler, level: int):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Send simulator log records to the console and an optional file.

    Calling it again replaces the handlers installed by the previous call,
    so the runner can be invoked repeatedly in one process.

    Args:
        level: Threshold for the 'dragsim' logger and its handlers.
        log_file: Path of a log file, overwritten on each run.
    """
    logger = logging.getLogger('dragsim')
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode='w', encoding='utf-8'), level)

    logger.debug("Logging to stdout%s at %s",
                 f" and {log_file}" if log_file else "",
                 logging.getLevelName(level))
    return logger
