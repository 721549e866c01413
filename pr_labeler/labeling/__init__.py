"""Label decision engine and its classifiers.

This package provides:
- decide_labels: the orchestrating decision engine
- classify_size / classify_complexity / classify_categories
- evaluate_risk and helpers
- decide_violation_labels
- namespace resolution for replace/additive label groups
- evaluate_failures: label-based workflow failure control
"""

from .category import CategoryMatch, category_labels, classify_categories
from .complexity import classify_complexity
from .engine import decide_labels
from .failure import evaluate_failures
from .namespace import (
    extract_namespace,
    label_in_namespace,
    matches_namespace_pattern,
    namespaces_to_replace,
    resolve_label_changes,
)
from .patterns import DEFAULT_EXCLUDES, is_excluded, match_pattern, matches_any, validate_pattern
from .risk import (
    RiskEvaluation,
    decide_risk_label,
    detect_change_type,
    evaluate_risk,
    get_risk_affected_files,
    get_risk_reason,
)
from .size import classify_size
from .violations import decide_violation_labels

__all__ = [
    "CategoryMatch",
    "category_labels",
    "classify_categories",
    "classify_complexity",
    "decide_labels",
    "evaluate_failures",
    "extract_namespace",
    "label_in_namespace",
    "matches_namespace_pattern",
    "namespaces_to_replace",
    "resolve_label_changes",
    "DEFAULT_EXCLUDES",
    "is_excluded",
    "match_pattern",
    "matches_any",
    "validate_pattern",
    "RiskEvaluation",
    "decide_risk_label",
    "detect_change_type",
    "evaluate_risk",
    "get_risk_affected_files",
    "get_risk_reason",
    "classify_size",
    "decide_violation_labels",
]
