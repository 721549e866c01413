"""Markdown rendering of labeling results for the job summary and PR comment."""

import os
from typing import List, Optional

from ..config import LabelerConfig
from ..i18n import Translator
from ..models import FileMetric, LabelDecisions, PRMetrics, ViolationSeverity, Violations
from ..utils.logging import get_logger

logger = get_logger()

MAX_EVIDENCE_FILES = 5


def format_bytes(size: int) -> str:
    """Human readable size, 1024 based."""
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def format_number(value: int) -> str:
    return f"{value:,}"


def escape_markdown(text: str) -> str:
    """Escape characters that would break a markdown table cell."""
    return text.replace("\\", "\\\\").replace("|", "\\|").replace("\n", " ")


def format_overview(metrics: PRMetrics, t: Translator) -> str:
    rows = [
        (t.t("summary.total_additions"), format_number(metrics.total_additions)),
        (t.t("summary.files_analyzed"), format_number(len(metrics.files))),
        (t.t("summary.files_excluded"), format_number(len(metrics.files_excluded))),
        (t.t("summary.files_binary"), format_number(len(metrics.files_skipped_binary))),
    ]
    if metrics.files_with_errors:
        rows.append((t.t("summary.files_errors"), format_number(len(metrics.files_with_errors))))

    parts = [
        f"### {t.t('summary.overview')}\n",
        f"| {t.t('summary.metric')} | {t.t('summary.value')} |",
        "|------|------|",
    ]
    parts.extend(f"| {name} | {value} |" for name, value in rows)
    parts.append("")
    return "\n".join(parts)


def format_applied_labels(labels: Optional[List[str]], t: Translator) -> str:
    if labels is None:
        return ""

    parts = [f"### {t.t('summary.labels_applied')}\n"]
    if not labels:
        parts.append(t.t("summary.no_labels"))
    else:
        parts.extend(f"- `{label}`" for label in labels)
    parts.append("")
    return "\n".join(parts)


def format_reasoning(decisions: LabelDecisions, t: Translator) -> str:
    if not decisions.reasoning:
        return ""

    parts = [
        f"### {t.t('summary.reasoning')}\n",
        f"| {t.t('summary.label')} | {t.t('summary.reason')} | {t.t('summary.files')} |",
        "|------|------|------|",
    ]
    for entry in decisions.reasoning:
        files = entry.matched_files[:MAX_EVIDENCE_FILES]
        shown = ", ".join(f"`{escape_markdown(f)}`" for f in files)
        if len(entry.matched_files) > MAX_EVIDENCE_FILES:
            shown += f" (+{len(entry.matched_files) - MAX_EVIDENCE_FILES})"
        parts.append(f"| `{entry.label}` | {escape_markdown(entry.reason)} | {shown or '-'} |")
    parts.append("")
    return "\n".join(parts)


def format_violations(violations: Violations, t: Translator) -> str:
    parts = [f"### {t.t('summary.violations')}\n"]
    if not violations.has_violations:
        parts.append(t.t("summary.no_violations"))
        parts.append("")
        return "\n".join(parts)

    for v in violations.large_files:
        parts.append("- " + t.t(
            "summary.violation_large_file",
            file=v.file, actual=format_bytes(v.actual_value), limit=format_bytes(v.limit),
        ))
    for v in violations.exceeds_file_lines:
        parts.append("- " + t.t(
            "summary.violation_lines",
            file=v.file, actual=format_number(v.actual_value), limit=format_number(v.limit),
        ))
    if violations.exceeds_additions:
        parts.append("- " + t.t("summary.violation_additions"))
    if violations.exceeds_file_count:
        parts.append("- " + t.t("summary.violation_file_count"))
    parts.append("")
    return "\n".join(parts)


def _file_status(file: FileMetric, violations: Violations, t: Translator) -> str:
    for v in violations.exceeds_file_lines:
        if v.file == file.path:
            icon = "🚫" if v.severity == ViolationSeverity.CRITICAL else "⚠️"
            return f"{icon} {t.t('summary.status_lines', limit=format_number(v.limit))}"
    for v in violations.large_files:
        if v.file == file.path:
            icon = "🚫" if v.severity == ViolationSeverity.CRITICAL else "⚠️"
            return f"{icon} {t.t('summary.status_size', limit=format_bytes(v.limit))}"
    return f"✅ {t.t('summary.status_ok')}"


def format_file_analysis(
    files: List[FileMetric],
    violations: Violations,
    t: Translator,
    limit: int = 10,
) -> str:
    """Table of the largest analysed files with their limit status."""
    if not files:
        return ""

    headers = [
        t.t("summary.file_name"),
        t.t("summary.size"),
        t.t("summary.lines"),
        t.t("summary.changes"),
        t.t("summary.status"),
    ]
    parts = [
        f"### {t.t('summary.file_analysis')}\n",
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("------" for _ in headers) + "|",
    ]
    for file in sorted(files, key=lambda f: f.size, reverse=True)[:limit]:
        parts.append(
            f"| `{escape_markdown(file.path)}` | {format_bytes(file.size)} | "
            f"{format_number(file.lines)} | +{format_number(file.additions)}/-{format_number(file.deletions)} | "
            f"{_file_status(file, violations, t)} |"
        )
    parts.append("")
    return "\n".join(parts)


def format_improvement_actions(violations: Violations, t: Translator) -> str:
    if not violations.has_violations:
        return ""

    parts = [
        "<details open>",
        f"<summary><strong>💡 {t.t('summary.improvements')}</strong></summary>\n",
        f"{t.t('summary.improvements_intro')}\n",
        f"- {t.t('summary.improvements_split')}",
        f"- {t.t('summary.improvements_refactor')}",
        f"- {t.t('summary.improvements_generated')}",
        "",
        "</details>",
        "",
    ]
    return "\n".join(parts)


def format_failures(failures: List[str], t: Translator) -> str:
    if not failures:
        return ""
    parts = [f"### {t.t('summary.failures')}\n"]
    parts.extend(f"- {message}" for message in failures)
    parts.append("")
    return "\n".join(parts)


def format_summary(
    metrics: PRMetrics,
    violations: Violations,
    decisions: LabelDecisions,
    config: LabelerConfig,
    applied_labels: Optional[List[str]] = None,
    failures: Optional[List[str]] = None,
    translator: Optional[Translator] = None,
) -> str:
    """
    Render the full markdown summary.

    Args:
        metrics: Analysis metrics
        violations: Hard-limit violations
        decisions: Engine output
        config: Effective labeler configuration (title, language)
        applied_labels: Labels present after applying; defaults to decided labels
        failures: Failure control messages
        translator: Message translator

    Returns:
        Markdown document
    """
    t = translator or Translator(config.language)
    if applied_labels is None:
        applied_labels = decisions.labels_to_add

    sections = [
        f"## {config.summary.title}\n",
        format_overview(metrics, t),
        format_applied_labels(applied_labels, t),
        format_reasoning(decisions, t),
        format_violations(violations, t),
        format_file_analysis(metrics.files, violations, t),
        format_improvement_actions(violations, t),
        format_failures(failures or [], t),
    ]
    return "\n".join(section for section in sections if section)


def write_job_summary(markdown: str) -> bool:
    """
    Append markdown to the Actions job summary.

    Returns:
        True if GITHUB_STEP_SUMMARY was set and written
    """
    path = os.environ.get("GITHUB_STEP_SUMMARY")
    if not path:
        logger.debug("GITHUB_STEP_SUMMARY not set, skipping job summary")
        return False

    with open(path, "a", encoding="utf-8") as f:
        f.write(markdown)
        f.write("\n")
    return True
