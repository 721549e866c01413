"""Data models for PR labeling."""

from .metrics import (
    ViolationType,
    ViolationSeverity,
    FileMetric,
    FileComplexity,
    ComplexityMetrics,
    PRMetrics,
    ViolationDetail,
    Violations,
)
from .context import CheckState, ChangeType, CIStatus, PRContext
from .decision import ReasonCategory, LabelReasoning, LabelDecisions, LabelUpdate

__all__ = [
    "ViolationType",
    "ViolationSeverity",
    "FileMetric",
    "FileComplexity",
    "ComplexityMetrics",
    "PRMetrics",
    "ViolationDetail",
    "Violations",
    "CheckState",
    "ChangeType",
    "CIStatus",
    "PRContext",
    "ReasonCategory",
    "LabelReasoning",
    "LabelDecisions",
    "LabelUpdate",
]
