"""Data models for PR file metrics and violations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ViolationType(Enum):
    """Kind of per-file limit that was breached."""
    SIZE = "size"
    LINES = "lines"


class ViolationSeverity(Enum):
    """How serious a limit breach is."""
    CRITICAL = "critical"   # File size limit
    WARNING = "warning"     # Line count limit


@dataclass
class FileMetric:
    """Measurements for a single analysed file."""
    path: str
    size: int          # bytes
    lines: int
    additions: int
    deletions: int


@dataclass
class FileComplexity:
    """Precomputed complexity score for one file."""
    path: str
    complexity: float


@dataclass
class ComplexityMetrics:
    """Precomputed complexity report for the PR."""
    max_complexity: float
    files: List[FileComplexity] = field(default_factory=list)


@dataclass
class PRMetrics:
    """Aggregated metrics for a pull request.

    ``files`` holds only analysed files (exclusions, binaries and errors
    removed) while ``all_files`` lists every changed path.
    """
    total_additions: int = 0
    files: List[FileMetric] = field(default_factory=list)
    all_files: List[str] = field(default_factory=list)
    complexity: Optional[ComplexityMetrics] = None

    # Analysis bookkeeping
    total_files: int = 0
    excluded_additions: int = 0
    files_excluded: List[str] = field(default_factory=list)
    files_skipped_binary: List[str] = field(default_factory=list)
    files_with_errors: List[str] = field(default_factory=list)

    @property
    def file_paths(self) -> List[str]:
        """Paths of analysed files, in analysis order."""
        return [f.path for f in self.files]


@dataclass
class ViolationDetail:
    """A single per-file limit breach."""
    file: str
    actual_value: int
    limit: int
    violation_type: ViolationType = ViolationType.SIZE
    severity: ViolationSeverity = ViolationSeverity.CRITICAL


@dataclass
class Violations:
    """Rule breaches detected during file analysis."""
    large_files: List[ViolationDetail] = field(default_factory=list)
    exceeds_file_lines: List[ViolationDetail] = field(default_factory=list)
    exceeds_additions: bool = False
    exceeds_file_count: bool = False

    @property
    def has_violations(self) -> bool:
        return bool(
            self.large_files
            or self.exceeds_file_lines
            or self.exceeds_additions
            or self.exceeds_file_count
        )
