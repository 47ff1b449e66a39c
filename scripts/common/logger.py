"""
Logging Configuration for the Defect GT Annotator

Provides a unified logging interface for all modules.
Supports console output with configurable log levels and an optional
log file.

Usage:
    from common.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Loaded Image: scan_000001.png")
"""

import logging
import sys
from pathlib import Path
from typing import Optional


# Default log format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Module-level cache for loggers
_loggers: dict[str, logging.Logger] = {}


def get_logger(
    name: str,
    level: int = logging.INFO,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
) -> logging.Logger:
    """
    Get or create a logger with the specified configuration.

    Args:
        name: Logger name, typically __name__ of the calling module
        level: Logging level (default: logging.INFO)
        log_format: Custom log format string (optional)
        date_format: Custom date format string (optional)

    Returns:
        Configured logging.Logger instance
    """
    # Return cached logger if exists
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers
    if not logger.handlers:
        logger.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        formatter = logging.Formatter(
            fmt=log_format or DEFAULT_FORMAT,
            datefmt=date_format or DEFAULT_DATE_FORMAT,
        )
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)

        # Prevent propagation to root logger to avoid duplicate logs
        logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: int, name: Optional[str] = None) -> None:
    """
    Set the log level for one cached logger, or for all of them.

    Args:
        level: New logging level
        name: Logger name; None applies the level to every cached logger
    """
    names = [name] if name else list(_loggers)
    for logger_name in names:
        if logger_name not in _loggers:
            continue
        _loggers[logger_name].setLevel(level)
        for handler in _loggers[logger_name].handlers:
            handler.setLevel(level)


def add_file_handler(
    log_file: Path,
    name: Optional[str] = None,
    level: int = logging.DEBUG,
    log_format: Optional[str] = None,
) -> None:
    """
    Add a file handler to one cached logger, or to all of them.

    Args:
        log_file: Path to log file
        name: Logger name; None attaches the file to every cached logger
        level: File logging level
        log_format: Custom format for file logs
    """
    names = [n for n in ([name] if name else list(_loggers)) if n in _loggers]
    if not names:
        return

    # Create log directory if needed
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt=log_format or DEFAULT_FORMAT,
            datefmt=DEFAULT_DATE_FORMAT,
        )
    )

    for logger_name in names:
        logger = _loggers[logger_name]
        # The logger level caps what reaches the file handler
        logger.setLevel(min(logger.level, level))
        logger.addHandler(file_handler)
