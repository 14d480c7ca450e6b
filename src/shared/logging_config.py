"""
Loguru setup shared by every entry point.

``LOG_FORMAT=json`` emits one serialized record per line; anything else uses
the colourised console format. The API server also routes the standard
``logging`` records of uvicorn into loguru so all output shares one sink.
"""

import logging
import sys
from typing import Optional

from loguru import logger

from .config import Settings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

STDLIB_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller of the logging call, not this handler
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: Optional[Settings] = None, intercept_stdlib: bool = False) -> None:
    """
    Configure loguru logging.

    Args:
        settings: Settings providing log_level and log_format
        intercept_stdlib: Also capture uvicorn/fastapi standard logging
    """
    settings = settings or get_settings()
    logger.remove()

    if settings.log_format == "json":
        logger.add(sys.stderr, format="{message}", level=settings.log_level, serialize=True)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=settings.log_level)

    if intercept_stdlib:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
        for name in STDLIB_LOGGERS:
            stdlib_logger = logging.getLogger(name)
            stdlib_logger.handlers = []
            stdlib_logger.propagate = True
