"""Fixed labels for precomputed rule violations."""

from typing import List, Optional, Tuple

from ..i18n import Translator
from ..models import LabelReasoning, ReasonCategory, Violations
from .constants import EXCESSIVE_CHANGES, LARGE_FILES, TOO_MANY_FILES, TOO_MANY_LINES


def decide_violation_labels(
    violations: Violations,
    translator: Optional[Translator] = None,
) -> Tuple[List[str], List[LabelReasoning]]:
    """
    Map violations to labels.

    The four checks are independent and emitted in a fixed order:
    large-files, too-many-lines, excessive-changes, too-many-files.

    Returns:
        Tuple of (labels, reasoning)
    """
    translator = translator or Translator()
    reasoning: List[LabelReasoning] = []

    def add(label: str, code: str, files: List[str], **params) -> None:
        reasoning.append(LabelReasoning(
            label=label,
            reason=translator.t(f"reasoning.{code}", **params),
            category=ReasonCategory.VIOLATION,
            matched_files=files,
            reason_code=code,
            params=params,
        ))

    if violations.large_files:
        add(LARGE_FILES, "large_files",
            [v.file for v in violations.large_files],
            count=len(violations.large_files))

    if violations.exceeds_file_lines:
        add(TOO_MANY_LINES, "too_many_lines",
            [v.file for v in violations.exceeds_file_lines],
            count=len(violations.exceeds_file_lines))

    if violations.exceeds_additions:
        add(EXCESSIVE_CHANGES, "excessive_changes", [])

    if violations.exceeds_file_count:
        add(TOO_MANY_FILES, "too_many_files", [])

    return [r.label for r in reasoning], reasoning
