"""Utility functions."""

from .logging import get_logger, resolve_log_level, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "resolve_log_level",
]
