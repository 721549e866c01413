"""Per-file measurements and hard-limit violations for the changed files."""

import json
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..errors import Err, FileAnalysisError, Ok, Result
from ..labeling.patterns import DEFAULT_EXCLUDES, is_excluded
from ..models import (
    ComplexityMetrics,
    FileComplexity,
    FileMetric,
    PRMetrics,
    ViolationDetail,
    Violations,
    ViolationSeverity,
    ViolationType,
)
from ..utils.logging import get_logger

logger = get_logger()

SizeLookup = Callable[[str], Optional[int]]

BINARY_EXTENSIONS = {
    # Images
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    # Video and audio
    ".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm", ".mkv", ".m4v",
    ".mp3", ".wav", ".flac", ".aac", ".ogg", ".wma", ".m4a",
    # Archives
    ".zip", ".tar", ".gz", ".bz2", ".xz", ".rar", ".7z", ".jar",
    # Executables and libraries
    ".exe", ".dll", ".so", ".dylib", ".bin", ".app", ".deb", ".rpm",
    ".pyc", ".pyo", ".class", ".o", ".a", ".lib", ".wasm",
    # Fonts and documents
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Databases
    ".db", ".sqlite", ".sqlite3",
}

BINARY_SAMPLE_SIZE = 8192
PRINTABLE_SAMPLE_SIZE = 512
NON_PRINTABLE_RATIO = 0.3


@dataclass
class DiffFile:
    """A changed file as reported by the pull request files API."""
    filename: str
    additions: int = 0
    deletions: int = 0
    status: str = "modified"


@dataclass
class AnalysisConfig:
    """Hard limits applied during file analysis."""
    file_size_limit: int = 100 * 1024
    file_line_limit: int = 500
    max_added_lines: int = 5000
    max_file_count: int = 50
    exclude_patterns: List[str] = field(default_factory=list)
    use_default_excludes: bool = True

    @property
    def effective_excludes(self) -> List[str]:
        base = list(DEFAULT_EXCLUDES) if self.use_default_excludes else []
        return base + [p for p in self.exclude_patterns if p not in base]


@dataclass
class AnalysisResult:
    metrics: PRMetrics
    violations: Violations


def is_binary_file(path: str) -> bool:
    """
    Guess whether a file is binary.

    Known binary extensions win; otherwise the content is sniffed for NUL
    bytes or a high share of non-printable bytes. Unreadable files are
    treated as text.
    """
    base = os.path.basename(path)
    ext = os.path.splitext(base)[1].lower()
    if ext in BINARY_EXTENSIONS or base == ".DS_Store":
        return True

    try:
        with open(path, "rb") as f:
            sample = f.read(BINARY_SAMPLE_SIZE)
    except OSError as e:
        logger.debug(f"Could not read {path} for binary detection: {e}")
        return False

    if not sample:
        return False
    if b"\x00" in sample:
        return True

    head = sample[:PRINTABLE_SAMPLE_SIZE]
    non_printable = sum(
        1 for byte in head
        if (byte < 32 or byte > 126) and byte not in (9, 10, 13)
    )
    return non_printable / len(head) > NON_PRINTABLE_RATIO


def get_file_size(path: str, size_lookup: Optional[SizeLookup] = None) -> Result[int, FileAnalysisError]:
    """
    Size of a file in bytes.

    Uses the local checkout first, then ``size_lookup`` (for example the
    GitHub contents API) when the file is not available locally.
    """
    try:
        if os.path.isfile(path):
            return Ok(os.path.getsize(path))
    except OSError as e:
        logger.debug(f"stat failed for {path}: {e}")

    if size_lookup is not None:
        size = size_lookup(path)
        if size is not None:
            return Ok(size)

    return Err(FileAnalysisError(path, "Failed to get file size using all strategies"))


def count_lines(path: str, max_lines: Optional[int] = None) -> Result[int, FileAnalysisError]:
    """Count lines in a text file, stopping early at ``max_lines``."""
    count = 0
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            for _ in f:
                count += 1
                if max_lines is not None and count >= max_lines:
                    break
    except OSError as e:
        return Err(FileAnalysisError(path, str(e)))
    return Ok(count)


def _collect_file_metric(
    file: DiffFile,
    local_path: str,
    config: AnalysisConfig,
    size_lookup: Optional[SizeLookup],
) -> Result[FileMetric, FileAnalysisError]:
    def lookup(_: str) -> Optional[int]:
        return size_lookup(file.filename) if size_lookup else None

    size = get_file_size(local_path, lookup)
    if size.is_err():
        return size

    # One past the limit is enough to detect a breach
    lines = count_lines(local_path, config.file_line_limit + 1)
    if lines.is_err():
        return lines

    return Ok(FileMetric(
        path=file.filename,
        size=size.value,
        lines=lines.value,
        additions=file.additions,
        deletions=file.deletions,
    ))


def analyze_files(
    files: List[DiffFile],
    config: AnalysisConfig,
    work_dir: str = ".",
    size_lookup: Optional[SizeLookup] = None,
) -> AnalysisResult:
    """
    Measure changed files and record hard-limit violations.

    Args:
        files: Changed files of the PR, in API order
        config: Limits and exclusion settings
        work_dir: Root of the checked-out head revision
        size_lookup: Fallback size probe for files missing locally

    Returns:
        AnalysisResult with PR metrics and violations
    """
    logger.info(f"Analyzing {len(files)} files")

    metrics = PRMetrics(
        total_files=len(files),
        all_files=[f.filename for f in files],
    )
    violations = Violations()
    excludes = config.effective_excludes

    if len(files) > config.max_file_count:
        violations.exceeds_file_count = True
        logger.warning(f"File count {len(files)} exceeds limit {config.max_file_count}")

    for index, file in enumerate(files):
        if index >= config.max_file_count:
            logger.warning(
                f"Reached max file count limit ({config.max_file_count}), skipping remaining files"
            )
            break

        if is_excluded(file.filename, excludes):
            metrics.files_excluded.append(file.filename)
            metrics.excluded_additions += file.additions
            continue

        if file.status == "removed":
            logger.debug(f"Skipping removed file: {file.filename}")
            continue

        local_path = os.path.join(work_dir, file.filename)
        if is_binary_file(local_path):
            metrics.files_skipped_binary.append(file.filename)
            logger.debug(f"Skipping binary file: {file.filename}")
            continue

        result = _collect_file_metric(file, local_path, config, size_lookup)
        if result.is_err():
            metrics.files_with_errors.append(file.filename)
            metrics.excluded_additions += file.additions
            logger.warning(str(result.error))
            continue

        metric = result.value
        metrics.files.append(metric)
        metrics.total_additions += file.additions

        if metric.size > config.file_size_limit:
            violations.large_files.append(ViolationDetail(
                file=file.filename,
                actual_value=metric.size,
                limit=config.file_size_limit,
                violation_type=ViolationType.SIZE,
                severity=ViolationSeverity.CRITICAL,
            ))
            logger.warning(
                f"File {file.filename} exceeds size limit: {metric.size} > {config.file_size_limit}"
            )

        if metric.lines > config.file_line_limit:
            violations.exceeds_file_lines.append(ViolationDetail(
                file=file.filename,
                actual_value=metric.lines,
                limit=config.file_line_limit,
                violation_type=ViolationType.LINES,
                severity=ViolationSeverity.WARNING,
            ))
            logger.warning(
                f"File {file.filename} exceeds line limit: {metric.lines} > {config.file_line_limit}"
            )

    if metrics.total_additions > config.max_added_lines:
        violations.exceeds_additions = True
        logger.warning(
            f"Total additions {metrics.total_additions} exceeds limit {config.max_added_lines}"
        )

    logger.info(
        f"Analysis complete: {len(metrics.files)} files analyzed, "
        f"{len(metrics.files_excluded)} excluded, "
        f"{len(metrics.files_skipped_binary)} binary files skipped"
    )
    return AnalysisResult(metrics=metrics, violations=violations)


def load_complexity_report(path: str) -> Result[ComplexityMetrics, FileAnalysisError]:
    """
    Load a precomputed complexity report.

    Expected JSON: {"maxComplexity": 15, "files": [{"path": ..., "complexity": ...}]}
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        return Err(FileAnalysisError(path, f"Cannot read complexity report: {e}"))

    if not isinstance(data, dict):
        return Err(FileAnalysisError(path, "Complexity report must be a JSON object"))

    files = []
    for entry in data.get("files") or []:
        if isinstance(entry, dict) and "path" in entry and "complexity" in entry:
            files.append(FileComplexity(path=entry["path"], complexity=entry["complexity"]))

    max_complexity = data.get("maxComplexity", data.get("max_complexity"))
    if max_complexity is None:
        max_complexity = max((f.complexity for f in files), default=0)

    return Ok(ComplexityMetrics(max_complexity=max_complexity, files=files))
