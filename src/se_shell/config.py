"""
Configuration and Logging Setup

Centralized logging for the shell. Reads LOG_LEVEL from the environment
(main loads .env files) so verbosity can be changed without touching scripts.

Usage:
    from se_shell.config import configure_logging, get_logger

    # Configure at application startup
    configure_logging()

    # Get logger in any module
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from typing import Optional

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

# Valid log levels
VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Third-party loggers that are chatty below WARNING
NOISY_LOGGERS = ("selenium", "urllib3", "PIL", "asyncio")


def get_log_level() -> int:
    """
    Get the log level from LOG_LEVEL environment variable.

    Returns:
        Logging level constant (e.g., logging.INFO)
    """
    level_str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    if level_str not in VALID_LEVELS:
        print(
            f"Warning: Invalid LOG_LEVEL '{level_str}'. "
            f"Valid values: {', '.join(VALID_LEVELS.keys())}. "
            f"Using {DEFAULT_LOG_LEVEL}.",
            file=sys.stderr,
        )
        return VALID_LEVELS[DEFAULT_LOG_LEVEL]

    return VALID_LEVELS[level_str]


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """
    Configure logging for the shell.

    Should be called once at startup, before any command runs.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)
    """
    if level is None:
        level = get_log_level()

    log_format = LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE

    logging.basicConfig(
        level=level,
        format=log_format,
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger("se_shell").setLevel(level)

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (typically called with __name__)."""
    return logging.getLogger(name)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a true/false style environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")
