"""Centralized logging configuration.

Application code logs through loguru. Records emitted by Django and other
libraries through the standard ``logging`` module are forwarded to the same
sink.
"""

import logging
import sys

from loguru import logger

LOG_FORMAT = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}::{function}:{line}</>",
        "{message}",
    )
)


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(level: str = "INFO") -> None:
    """Install the stdout sink and route stdlib logging into loguru."""
    logger.remove()  # drop the default stderr sink
    logger.add(sys.stdout, format=LOG_FORMAT, level=level.upper())
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
