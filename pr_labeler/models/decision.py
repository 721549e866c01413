"""Data models for label decisions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ReasonCategory(Enum):
    """Which classifier produced a label."""
    SIZE = "size"
    COMPLEXITY = "complexity"
    CATEGORY = "category"
    RISK = "risk"
    VIOLATION = "violation"


@dataclass
class LabelReasoning:
    """Why a label was chosen.

    ``reason`` is the rendered text; ``reason_code`` and ``params`` keep the
    structured form so a formatter can render it again in another locale.
    """
    label: str
    reason: str
    category: ReasonCategory
    matched_files: List[str] = field(default_factory=list)
    reason_code: str = ""
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LabelDecisions:
    """Engine output: labels to add, namespaces to purge, and reasoning."""
    labels_to_add: List[str] = field(default_factory=list)
    labels_to_remove: List[str] = field(default_factory=list)  # namespace patterns
    reasoning: List[LabelReasoning] = field(default_factory=list)

    def reasoning_for(self, label: str) -> List[LabelReasoning]:
        return [r for r in self.reasoning if r.label == label]


@dataclass
class LabelUpdate:
    """What the applicator actually changed on the PR."""
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
