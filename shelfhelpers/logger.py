"""
Logging setup for shelfhelpers.
Console output for the user, JSON lines in a log file for debugging.
"""

import logging
import logging.handlers
import os
import sys
from typing import List, Optional

import structlog

LOGGER_NAME = "shelfhelpers"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_FILE_BACKUPS = 3

_handlers: List[logging.Handler] = []


def configure_structlog() -> None:
    """Route structlog through stdlib logging. Safe to call repeatedly."""
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = LOGGER_NAME):
    configure_structlog()
    return structlog.get_logger(name)


def is_logging_configured() -> bool:
    return bool(_handlers)


def setup_logging(log_file: Optional[str] = None, console_level: str = "INFO") -> None:
    """
    Configures structured logging to the console and, if given, to log_file.

    The console only shows messages at console_level and above, the log
    file receives everything down to DEBUG.
    """
    teardown_logging()
    configure_structlog()

    level = getattr(logging, console_level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    # records never reach the root logger's handlers
    logger.propagate = False

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=True),
    ))
    logger.addHandler(console_handler)
    _handlers.append(console_handler)

    if log_file is None:
        return

    os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)

    # Rotating file handler (JSON format)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
    ))
    logger.addHandler(file_handler)
    _handlers.append(file_handler)

    get_logger(__name__).debug("Logging configured", log_file=log_file)


def teardown_logging() -> None:
    """Detach and close the handlers added by setup_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
