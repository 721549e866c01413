"""I/O collaborators: file analysis and the GitHub API."""

from .file_metrics import (
    AnalysisConfig,
    AnalysisResult,
    DiffFile,
    analyze_files,
    count_lines,
    get_file_size,
    is_binary_file,
    load_complexity_report,
)
from .github_tool import COMMENT_MARKER, GitHubTool

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "DiffFile",
    "analyze_files",
    "count_lines",
    "get_file_size",
    "is_binary_file",
    "load_complexity_report",
    "COMMENT_MARKER",
    "GitHubTool",
]
