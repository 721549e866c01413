"""Message tables and the Translator passed into the engine and formatters."""

from typing import Any, Dict

DEFAULT_LANGUAGE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        # Label reasoning
        "reasoning.size": "{additions} additions → {label}",
        "reasoning.complexity": "max complexity {max_complexity} ({level})",
        "reasoning.category": "files match the {label} category patterns",
        "reasoning.ci_failed": "CI failed",
        "reasoning.refactor_safe": "safe refactor",
        "reasoning.feature_no_tests": "feature without tests",
        "reasoning.core_no_tests": "core change without tests",
        "reasoning.config_changed": "config files changed",
        "reasoning.large_files": "{count} file(s) exceed the size limit",
        "reasoning.too_many_lines": "{count} file(s) exceed the line limit",
        "reasoning.excessive_changes": "total additions exceed the limit",
        "reasoning.too_many_files": "too many files changed",
        # Summary
        "summary.overview": "Overview",
        "summary.metric": "Metric",
        "summary.value": "Value",
        "summary.total_additions": "Total additions",
        "summary.files_analyzed": "Files analyzed",
        "summary.files_excluded": "Files excluded",
        "summary.files_binary": "Binary files skipped",
        "summary.files_errors": "Files with errors",
        "summary.labels_applied": "Applied Labels",
        "summary.no_labels": "No labels applied.",
        "summary.reasoning": "Label Reasoning",
        "summary.label": "Label",
        "summary.reason": "Reason",
        "summary.files": "Files",
        "summary.violations": "Violations",
        "summary.no_violations": "All checks passed.",
        "summary.violation_large_file": "`{file}` is {actual} (limit {limit})",
        "summary.violation_lines": "`{file}` has {actual} lines (limit {limit})",
        "summary.violation_additions": "Total additions exceed the PR limit",
        "summary.violation_file_count": "Number of changed files exceeds the PR limit",
        "summary.file_analysis": "File Analysis",
        "summary.file_name": "File",
        "summary.size": "Size",
        "summary.lines": "Lines",
        "summary.changes": "Changes",
        "summary.status": "Status",
        "summary.status_ok": "OK",
        "summary.status_size": "Size > {limit}",
        "summary.status_lines": "Lines > {limit}",
        "summary.improvements": "Improvement Actions",
        "summary.improvements_intro": "Consider the following to keep this PR reviewable:",
        "summary.improvements_split": "Split the PR by feature or by file group",
        "summary.improvements_refactor": "Move large refactorings into their own PR",
        "summary.improvements_generated": "Exclude lock files and generated artifacts",
        "summary.failures": "Workflow Failure",
        # Failure control
        "failure.large_files": "Large files detected ({label})",
        "failure.too_many_files": "Too many files changed ({label})",
        "failure.pr_size": "PR size {label} meets or exceeds the limit size/{limit}",
    },
    "ja": {
        "reasoning.size": "追加行数 {additions} → {label}",
        "reasoning.complexity": "最大複雑度 {max_complexity} ({level})",
        "reasoning.category": "{label} カテゴリのパターンに一致するファイルがあります",
        "reasoning.ci_failed": "CIが失敗しました",
        "reasoning.refactor_safe": "安全なリファクタリング",
        "reasoning.feature_no_tests": "テストのない機能追加",
        "reasoning.core_no_tests": "テストのないコア変更",
        "reasoning.config_changed": "設定ファイルの変更",
        "reasoning.large_files": "{count}件のファイルがサイズ上限を超えています",
        "reasoning.too_many_lines": "{count}件のファイルが行数上限を超えています",
        "reasoning.excessive_changes": "追加行数の合計が上限を超えています",
        "reasoning.too_many_files": "変更ファイル数が多すぎます",
        "summary.overview": "概要",
        "summary.metric": "指標",
        "summary.value": "値",
        "summary.total_additions": "追加行数",
        "summary.files_analyzed": "解析したファイル",
        "summary.files_excluded": "除外したファイル",
        "summary.files_binary": "スキップしたバイナリ",
        "summary.files_errors": "エラーのファイル",
        "summary.labels_applied": "適用されたラベル",
        "summary.no_labels": "適用されたラベルはありません。",
        "summary.reasoning": "ラベルの判定理由",
        "summary.label": "ラベル",
        "summary.reason": "理由",
        "summary.files": "ファイル",
        "summary.violations": "違反",
        "summary.no_violations": "すべてのチェックに合格しました。",
        "summary.violation_large_file": "`{file}` のサイズは {actual} です (上限 {limit})",
        "summary.violation_lines": "`{file}` は {actual} 行です (上限 {limit})",
        "summary.violation_additions": "追加行数の合計がPRの上限を超えています",
        "summary.violation_file_count": "変更ファイル数がPRの上限を超えています",
        "summary.file_analysis": "ファイル分析",
        "summary.file_name": "ファイル",
        "summary.size": "サイズ",
        "summary.lines": "行数",
        "summary.changes": "変更",
        "summary.status": "状態",
        "summary.status_ok": "OK",
        "summary.status_size": "サイズ > {limit}",
        "summary.status_lines": "行数 > {limit}",
        "summary.improvements": "改善アクション",
        "summary.improvements_intro": "レビューしやすいPRにするために:",
        "summary.improvements_split": "機能やファイル群ごとにPRを分割する",
        "summary.improvements_refactor": "大きなリファクタリングは別のPRにする",
        "summary.improvements_generated": "ロックファイルや生成物を除外する",
        "summary.failures": "ワークフローの失敗",
        "failure.large_files": "大きなファイルが検出されました ({label})",
        "failure.too_many_files": "変更ファイル数が多すぎます ({label})",
        "failure.pr_size": "PRサイズ {label} が上限 size/{limit} 以上です",
    },
}


def normalize_language(language: str) -> str:
    """Map a language code like 'ja-JP' to a supported base language."""
    base = (language or "").strip().lower().replace("_", "-").split("-")[0]
    return base if base in MESSAGES else DEFAULT_LANGUAGE


class Translator:
    """Looks up and formats messages for one language."""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = normalize_language(language)

    def t(self, key: str, **params: Any) -> str:
        """Translate ``key``; falls back to English, then to the key itself."""
        template = MESSAGES[self.language].get(key) or MESSAGES[DEFAULT_LANGUAGE].get(key)
        if template is None:
            return key
        return template.format(**params) if params else template
