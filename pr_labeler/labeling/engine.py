"""Label decision engine.

Composes the size, complexity, category, risk and violation classifiers into
one ordered decision, then works out which label namespaces must be purged.
Pure: no I/O, no state between calls, never raises for valid input.
"""

from typing import List, Optional

from ..config import LabelerConfig
from ..i18n import Translator
from ..models import (
    LabelDecisions,
    LabelReasoning,
    PRContext,
    PRMetrics,
    ReasonCategory,
    Violations,
)
from .category import classify_categories
from .complexity import classify_complexity
from .namespace import namespaces_to_replace
from .risk import evaluate_risk, get_risk_affected_files, get_risk_reason
from .size import classify_size
from .violations import decide_violation_labels


def decide_labels(
    metrics: PRMetrics,
    config: LabelerConfig,
    violations: Violations,
    pr_context: Optional[PRContext] = None,
    translator: Optional[Translator] = None,
) -> LabelDecisions:
    """
    Decide which labels a PR should carry.

    Args:
        metrics: PR metrics (additions, analysed files, all files, complexity)
        config: Labeler configuration (pre-validated)
        violations: Violations found during file analysis
        pr_context: Optional CI status and commit messages
        translator: Message translator (defaults to English)

    Returns:
        LabelDecisions ordered as size, complexity, categories, risk,
        violations
    """
    translator = translator or Translator(config.language)
    labels: List[str] = []
    reasoning: List[LabelReasoning] = []

    def add(entry: LabelReasoning) -> None:
        labels.append(entry.label)
        reasoning.append(entry)

    # 1. Size
    if config.size.enabled:
        size_label = classify_size(metrics.total_additions, config.size.thresholds)
        params = {"additions": metrics.total_additions, "label": size_label}
        add(LabelReasoning(
            label=size_label,
            reason=translator.t("reasoning.size", **params),
            category=ReasonCategory.SIZE,
            matched_files=metrics.file_paths,
            reason_code="size",
            params=params,
        ))

    # 2. Complexity
    if metrics.complexity is not None and config.complexity.enabled:
        complexity_label = classify_complexity(
            metrics.complexity.max_complexity, config.complexity.thresholds
        )
        if complexity_label:
            params = {
                "max_complexity": metrics.complexity.max_complexity,
                "level": complexity_label.split("/", 1)[1],
            }
            add(LabelReasoning(
                label=complexity_label,
                reason=translator.t("reasoning.complexity", **params),
                category=ReasonCategory.COMPLEXITY,
                matched_files=[
                    f.path for f in metrics.complexity.files
                    if f.complexity >= config.complexity.thresholds.medium
                ],
                reason_code="complexity",
                params=params,
            ))

    # 3. Categories, on every changed file so excluded paths still count
    if config.category_labeling.enabled:
        for match in classify_categories(metrics.all_files, config.categories):
            params = {"label": match.label}
            add(LabelReasoning(
                label=match.label,
                reason=translator.t("reasoning.category", **params),
                category=ReasonCategory.CATEGORY,
                matched_files=match.matched_files,
                reason_code="category",
                params=params,
            ))

    # 4. Risk
    if config.risk.enabled:
        files = metrics.file_paths
        evaluation = evaluate_risk(files, config.risk, pr_context)
        if evaluation.label:
            add(LabelReasoning(
                label=evaluation.label,
                reason=get_risk_reason(files, config.risk, evaluation.label, pr_context, translator),
                category=ReasonCategory.RISK,
                matched_files=get_risk_affected_files(files, config.risk),
                reason_code=evaluation.reason_code,
            ))

    # 5. Violations
    _, violation_reasoning = decide_violation_labels(violations, translator)
    for entry in violation_reasoning:
        add(entry)

    labels_to_add = list(dict.fromkeys(labels))
    return LabelDecisions(
        labels_to_add=labels_to_add,
        labels_to_remove=namespaces_to_replace(labels_to_add, config.labels.namespace_policies),
        reasoning=reasoning,
    )
