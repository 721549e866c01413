"""Markdown summary rendering."""

from .formatter import (
    escape_markdown,
    format_bytes,
    format_summary,
    write_job_summary,
)

__all__ = [
    "escape_markdown",
    "format_bytes",
    "format_summary",
    "write_job_summary",
]
