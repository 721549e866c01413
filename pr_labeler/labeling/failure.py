"""Label-based workflow failure control."""

from typing import List, Optional, Sequence

from ..config import ActionConfig
from ..i18n import Translator
from .constants import LARGE_FILES, SIZE_LABELS, SIZE_NAMES, TOO_MANY_FILES


def size_rank(label: str) -> int:
    """Position of a size label in SIZE_LABELS, or -1."""
    return SIZE_LABELS.index(label) if label in SIZE_LABELS else -1


def evaluate_failures(
    labels: Sequence[str],
    config: ActionConfig,
    translator: Optional[Translator] = None,
) -> List[str]:
    """
    Decide whether the workflow should fail.

    Args:
        labels: Labels decided for the PR
        config: Parsed action inputs (fail_on_* settings)
        translator: Message translator

    Returns:
        Failure messages; empty when the workflow should pass
    """
    translator = translator or Translator(config.language)
    failures = []

    if config.fail_on_large_files and LARGE_FILES in labels:
        failures.append(translator.t("failure.large_files", label=LARGE_FILES))

    if config.fail_on_too_many_files and TOO_MANY_FILES in labels:
        failures.append(translator.t("failure.too_many_files", label=TOO_MANY_FILES))

    if config.fail_on_pr_size:
        limit = SIZE_NAMES.index(config.fail_on_pr_size)
        for label in labels:
            if size_rank(label) >= limit:
                failures.append(translator.t(
                    "failure.pr_size", label=label, limit=config.fail_on_pr_size
                ))
                break

    return failures
