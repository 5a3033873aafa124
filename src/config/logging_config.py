"""Centralized logging configuration for the freight rates application.

All modules obtain their logger through ``get_logger(__name__)`` so the
format and level are decided in one place.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP clients used by the backend SDK and the UI log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "urllib3")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """Set up logging configuration for the application.

    Configures the root logger with a console handler and an optional file
    handler, and turns down the request-level chatter of HTTP libraries.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file. If None, only console logging.
        format_string: Optional custom format string

    Returns:
        Configured root logger instance

    Example:
        >>> logger = setup_logging(level="DEBUG")
        >>> logger.debug("Loaded 3 rates")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates on re-configuration
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance inheriting the root configuration
    """
    return logging.getLogger(name)


# Initialize logging on module import; LOG_LEVEL overrides the default
_log_file = os.getenv("LOG_FILE")
setup_logging(
    level=os.getenv("LOG_LEVEL", "INFO"),
    log_file=Path(_log_file) if _log_file else None
)
