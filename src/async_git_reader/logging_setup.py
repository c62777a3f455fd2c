"""Loguru logging setup for async-git-reader.

Library modules log through ``from loguru import logger`` and never configure
handlers themselves. Applications embedding the library call setup_logging()
once at startup.

Usage:
    from async_git_reader.logging_setup import setup_logging, get_logger

    setup_logging(level="DEBUG")
    logger = get_logger(__name__, repo="/srv/project")
    logger.info("Resolving HEAD")
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from .config import LoggingConfig
from .paths import get_logs_dir

# Default console format with colors
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Simple format without colors (for file output)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def setup_logging(
    level: str = "INFO",
    console: bool = True,
    file: bool = False,
    log_dir: Path | str | None = None,
    serialize_file: bool = True,
) -> list[int]:
    """Configure logging with console and file handlers.

    Uses ``enqueue=True`` so handlers are safe to use from async code. Callers
    should ``await logger.complete()`` before exit to drain the queue.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console: Enable console (stderr) output
        file: Enable rotating file output
        log_dir: Directory for log files (default: platform logs directory)
        serialize_file: Use JSON format for file logs

    Returns:
        IDs of the handlers that were added
    """
    # Remove default handler
    logger.remove()
    handler_ids: list[int] = []

    if console:
        handler_ids.append(logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        ))

    if file:
        log_path = Path(log_dir) if log_dir is not None else get_logs_dir()
        log_path.mkdir(parents=True, exist_ok=True)

        handler_ids.append(logger.add(
            str(log_path / "async-git-reader.log"),
            level=level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            serialize=serialize_file,
            enqueue=True,
            backtrace=True,
            diagnose=False,
        ))

    return handler_ids


def setup_logging_from_config(config: LoggingConfig) -> list[int]:
    """Configure logging from the ``logging`` section of Settings."""
    return setup_logging(
        level=config.level,
        console=config.console,
        file=config.file,
        log_dir=config.log_dir,
        serialize_file=config.serialize_file,
    )


def get_logger(name: str, **context: Any) -> "logger":
    """Get a context-bound logger.

    Args:
        name: Logger name (usually __name__)
        **context: Additional context to bind to all log messages
    """
    return logger.bind(name=name, **context)
