"""Data models for optional PR context (CI results, commit messages)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class CheckState(Enum):
    """Normalised state of a single CI check."""
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    SKIPPED = "skipped"     # skipped / neutral / cancelled-by-design


class ChangeType(Enum):
    """Change type derived from Conventional Commits prefixes."""
    REFACTOR = "refactor"
    FIX = "fix"
    FEATURE = "feature"
    DOCS = "docs"
    TEST = "test"
    STYLE = "style"
    CHORE = "chore"
    UNKNOWN = "unknown"


@dataclass
class CIStatus:
    """Per-check CI results for the PR head commit."""
    checks: Dict[str, CheckState] = field(default_factory=dict)

    def any_failed(self) -> bool:
        """True if at least one check failed."""
        return any(state == CheckState.FAILED for state in self.checks.values())

    def all_passed(self) -> bool:
        """True if every check finished without failing and one passed."""
        states = list(self.checks.values())
        if CheckState.FAILED in states or CheckState.PENDING in states:
            return False
        return CheckState.PASSED in states

    @property
    def failed_checks(self) -> List[str]:
        return [name for name, state in self.checks.items() if state == CheckState.FAILED]


@dataclass
class PRContext:
    """Optional enrichment data that sharpens risk classification."""
    ci_status: Optional[CIStatus] = None
    commit_messages: List[str] = field(default_factory=list)
