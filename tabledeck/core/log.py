"""Logging configuration using loguru.

Tabledeck logs through loguru.  The only stdlib loggers that matter are the
ones behind the S3 snapshot store; those are bridged into loguru and capped
at WARNING so they don't drown out command traces.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

S3_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3")

_CLI_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


class _LoguruBridge(logging.Handler):
    """Re-emit stdlib records through loguru, keeping the originating logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.patch(lambda r: r.update(name=record.name, line=record.lineno)).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at ``level`` and bridge the S3 loggers.

    Safe to call more than once; each call replaces the previous setup.
    """
    level = level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=_CLI_FORMAT)

    bridge = _LoguruBridge()
    for name in S3_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [bridge]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(logging.WARNING)

    logger.debug("Logging initialised (level={})", level)
