"""Risk evaluation from file paths, CI status and commit messages.

Decision order (first applicable wins):

1. CI status available and enabled, a check failed      -> risk/high
2. CI available, refactor commit and all checks passed   -> no label
3. CI available, feature commit, core change, no tests   -> risk/high
4. Core change without tests                             -> risk/high
5. Configuration files changed                           -> risk/medium
6. Otherwise                                             -> no label
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import RiskConfig
from ..i18n import Translator
from ..models import ChangeType, PRContext
from .constants import RISK_HIGH, RISK_MEDIUM, UNKNOWN_RISK_REASON
from .patterns import filter_matching, matches_any

# Reason codes, rendered as "reasoning.<code>"
CI_FAILED = "ci_failed"
REFACTOR_SAFE = "refactor_safe"
FEATURE_NO_TESTS = "feature_no_tests"
CORE_NO_TESTS = "core_no_tests"
CONFIG_CHANGED = "config_changed"

_TEST_DIRS = ("tests", "__tests__")
_TEST_FILE_PATTERNS = [
    re.compile(r"\.(test|spec)\.(ts|tsx|js|jsx)$", re.IGNORECASE),
    re.compile(r"(^|/)test_[^/]*\.py$"),
    re.compile(r"_test\.py$"),
]

_COMMIT_PREFIXES = [
    ("refactor", ChangeType.REFACTOR),
    ("fix", ChangeType.FIX),
    ("feat", ChangeType.FEATURE),
    ("docs", ChangeType.DOCS),
    ("test", ChangeType.TEST),
    ("style", ChangeType.STYLE),
    ("chore", ChangeType.CHORE),
]


@dataclass
class RiskFactors:
    """Path-based signals for risk evaluation."""
    has_test_files: bool
    has_core_changes: bool
    has_config_changes: bool


@dataclass
class RiskEvaluation:
    """A risk label (or None) and the code of the rule that decided it."""
    label: Optional[str]
    reason_code: str = ""


def is_test_file(path: str) -> bool:
    """True for files under a tests/ or __tests__/ directory, or named like tests."""
    directories = path.split("/")[:-1]
    if any(part in _TEST_DIRS for part in directories):
        return True
    return any(pattern.search(path) for pattern in _TEST_FILE_PATTERNS)


def detect_change_type(commit_messages: Sequence[str]) -> ChangeType:
    """
    Detect the change type from Conventional Commits subject lines.

    Messages are checked in order; the first one with a known prefix
    (``feat:`` or ``feat(scope):``) decides.
    """
    for message in commit_messages:
        lower = message.strip().lower()
        for prefix, change_type in _COMMIT_PREFIXES:
            if lower.startswith(prefix + ":") or lower.startswith(prefix + "("):
                return change_type
    return ChangeType.UNKNOWN


def analyze_risk_factors(files: Sequence[str], config: RiskConfig) -> RiskFactors:
    return RiskFactors(
        has_test_files=any(is_test_file(f) for f in files),
        has_core_changes=any(matches_any(f, config.core_paths) for f in files),
        has_config_changes=any(matches_any(f, config.config_files) for f in files),
    )


def evaluate_risk(
    files: Sequence[str],
    config: RiskConfig,
    pr_context: Optional[PRContext] = None,
) -> RiskEvaluation:
    """
    Evaluate risk for a set of changed files.

    Args:
        files: Analysed file paths
        config: Risk configuration
        pr_context: Optional CI status and commit messages

    Returns:
        RiskEvaluation with label (None for no risk label) and reason code
    """
    factors = analyze_risk_factors(files, config)
    untested_core = (
        not factors.has_test_files
        and factors.has_core_changes
        and config.high_if_no_tests_for_core
    )

    ci_status = pr_context.ci_status if pr_context else None
    if config.use_ci_status and ci_status is not None:
        if ci_status.any_failed():
            return RiskEvaluation(RISK_HIGH, CI_FAILED)

        change_type = detect_change_type(pr_context.commit_messages)

        if change_type == ChangeType.REFACTOR and ci_status.all_passed():
            return RiskEvaluation(None, REFACTOR_SAFE)

        if change_type == ChangeType.FEATURE and untested_core:
            return RiskEvaluation(RISK_HIGH, FEATURE_NO_TESTS)

    if untested_core:
        return RiskEvaluation(RISK_HIGH, CORE_NO_TESTS)

    if factors.has_config_changes:
        return RiskEvaluation(RISK_MEDIUM, CONFIG_CHANGED)

    return RiskEvaluation(None)


def decide_risk_label(
    files: Sequence[str],
    config: RiskConfig,
    pr_context: Optional[PRContext] = None,
) -> Optional[str]:
    """Risk label for the changed files, or None."""
    return evaluate_risk(files, config, pr_context).label


def get_risk_reason(
    files: Sequence[str],
    config: RiskConfig,
    label: str,
    pr_context: Optional[PRContext] = None,
    translator: Optional[Translator] = None,
) -> str:
    """
    Reason text for a previously decided risk label.

    The evaluation is re-run; if it no longer yields ``label`` the
    sentinel "unknown risk condition" is returned.
    """
    evaluation = evaluate_risk(files, config, pr_context)
    if evaluation.label != label:
        return UNKNOWN_RISK_REASON
    if not evaluation.reason_code:
        return ""
    return (translator or Translator()).t(f"reasoning.{evaluation.reason_code}")


def get_risk_affected_files(files: Sequence[str], config: RiskConfig) -> List[str]:
    """Files matching core paths or config files, deduplicated."""
    affected = filter_matching(files, config.core_paths) + filter_matching(files, config.config_files)
    return list(dict.fromkeys(affected))
