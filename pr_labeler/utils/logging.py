"""Logging utilities."""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "pr_labeler"

# Set to "1" by GitHub Actions when a job is re-run with debug logging
RUNNER_DEBUG_ENV = "RUNNER_DEBUG"


def resolve_log_level(debug: bool = False) -> int:
    """DEBUG when asked for on the command line or by the Actions runner, else INFO."""
    if debug or os.environ.get(RUNNER_DEBUG_ENV) == "1":
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    level: Optional[int] = None,
    format_str: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging for the labeler.

    Logs go to stdout so they interleave with the Actions job log.

    Args:
        level: Logging level (default: from resolve_log_level)
        format_str: Custom format string

    Returns:
        Configured logger
    """
    if level is None:
        level = resolve_log_level()
    if format_str is None:
        format_str = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
