"""Configuration for PR Insights Labeler."""

from dataclasses import dataclass, field, is_dataclass, replace
from typing import Any, Dict, List, Optional
import json
import os


@dataclass
class SizeThresholds:
    """Additions thresholds, strictly ascending."""
    small: int = 200
    medium: int = 500
    large: int = 1000
    xlarge: int = 3000


@dataclass
class SizeConfig:
    enabled: bool = True
    thresholds: SizeThresholds = field(default_factory=SizeThresholds)


@dataclass
class ComplexityThresholds:
    """Complexity thresholds, strictly ascending."""
    medium: float = 10
    high: float = 20


@dataclass
class ComplexityConfig:
    enabled: bool = True
    thresholds: ComplexityThresholds = field(default_factory=ComplexityThresholds)


@dataclass
class CategoryLabelingConfig:
    enabled: bool = True


@dataclass
class CategoryConfig:
    """A category rule: label applied when any file matches its patterns."""
    label: str
    patterns: List[str]
    exclude: Optional[List[str]] = None
    display_name: Optional[Dict[str, str]] = None  # {"en": ..., "ja": ...}


@dataclass
class RiskConfig:
    enabled: bool = True
    high_if_no_tests_for_core: bool = True
    core_paths: List[str] = field(default_factory=lambda: ["src/**"])
    config_files: List[str] = field(default_factory=lambda: [
        ".github/workflows/**",
        "package.json",
        "tsconfig.json",
        "pyproject.toml",
    ])
    use_ci_status: bool = True


@dataclass
class LabelsConfig:
    create_missing: bool = True
    color: str = "cccccc"
    description: str = ""
    namespace_policies: Dict[str, str] = field(default_factory=lambda: {
        "size/*": "replace",
        "complexity/*": "replace",
        "risk/*": "replace",
        "category/*": "additive",
    })


@dataclass
class SummaryConfig:
    title: str = "PR Insights"


@dataclass
class ExcludeConfig:
    additional: List[str] = field(default_factory=list)
    use_default_excludes: bool = True


@dataclass
class RuntimeConfig:
    fail_on_error: bool = False
    dry_run: bool = False


def default_categories() -> List[CategoryConfig]:
    """Built-in category rules, in evaluation order."""
    return [
        CategoryConfig(
            label="category/tests",
            patterns=["**/__tests__/**", "**/tests/**", "**/*.test.ts", "**/*.test.tsx",
                      "**/test_*.py", "**/*_test.py"],
            display_name={"en": "Test Files", "ja": "テストファイル"},
        ),
        CategoryConfig(
            label="category/ci-cd",
            patterns=[".github/workflows/**", ".github/actions/**"],
            display_name={"en": "CI/CD", "ja": "CI/CD"},
        ),
        CategoryConfig(
            label="category/documentation",
            patterns=["docs/**", "**/*.md"],
            exclude=[".kiro/**", ".claude/**"],
            display_name={"en": "Documentation", "ja": "ドキュメント"},
        ),
        CategoryConfig(
            label="category/config",
            patterns=["**/tsconfig.json", "**/eslint.config.*", "**/.editorconfig",
                      "**/setup.cfg", "**/tox.ini", "**/.pre-commit-config.yaml"],
            display_name={"en": "Configuration", "ja": "設定ファイル"},
        ),
        CategoryConfig(
            label="category/spec",
            patterns=[".kiro/**", "spec/**", "specs/**"],
            display_name={"en": "Specification", "ja": "仕様書"},
        ),
        CategoryConfig(
            label="category/dependency",
            patterns=["**/package.json", "**/pnpm-lock.yaml", "**/yarn.lock",
                      "**/requirements*.txt", "**/pyproject.toml", "**/poetry.lock"],
            display_name={"en": "Dependencies", "ja": "依存関係"},
        ),
    ]


@dataclass
class LabelerConfig:
    """Full labeler configuration consumed by the decision engine."""
    language: str = "en"
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    size: SizeConfig = field(default_factory=SizeConfig)
    complexity: ComplexityConfig = field(default_factory=ComplexityConfig)
    category_labeling: CategoryLabelingConfig = field(default_factory=CategoryLabelingConfig)
    categories: List[CategoryConfig] = field(default_factory=default_categories)
    risk: RiskConfig = field(default_factory=RiskConfig)
    exclude: ExcludeConfig = field(default_factory=ExcludeConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


@dataclass
class ActionInputs:
    """Raw action inputs, as strings, exactly as GitHub passes them."""

    github_token: str = ""
    repo: str = ""
    pr_number: str = ""

    # Hard limits
    file_size_limit: str = "100KB"
    file_lines_limit: str = "500"
    pr_additions_limit: str = "5000"
    pr_files_limit: str = "50"

    # Label selection
    auto_remove_labels: str = "true"
    size_enabled: str = "true"
    size_thresholds: str = '{"small": 200, "medium": 500, "large": 1000, "xlarge": 3000}'
    complexity_enabled: str = "true"
    complexity_thresholds: str = '{"medium": 10, "high": 20}'
    complexity_report: str = ""
    category_enabled: str = "true"
    risk_enabled: str = "true"

    # Behaviour
    skip_draft_pr: str = "true"
    comment_on_pr: str = "auto"
    fail_on_large_files: str = ""
    fail_on_too_many_files: str = ""
    fail_on_pr_size: str = ""
    enable_summary: str = "true"
    additional_exclude_patterns: str = ""
    use_default_excludes: str = "true"
    config_path: str = ".github/pr-labeler.yml"
    language: str = "en"

    @classmethod
    def from_env(cls) -> "ActionInputs":
        """Create inputs from INPUT_* environment variables."""
        defaults = cls()
        values = {}
        for name in defaults.__dataclass_fields__:
            env_name = f"INPUT_{name.upper()}"
            values[name] = os.environ.get(env_name, getattr(defaults, name))

        if not values["github_token"]:
            values["github_token"] = os.environ.get("GITHUB_TOKEN", "")
        if not values["repo"]:
            values["repo"] = os.environ.get("GITHUB_REPOSITORY", "")
        if not values["pr_number"]:
            values["pr_number"] = os.environ.get("PR_NUMBER", "") or _pr_number_from_event()
        return cls(**values)


def _pr_number_from_event() -> str:
    """Read the PR number from the workflow event payload, if any."""
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path or not os.path.exists(event_path):
        return ""
    with open(event_path, encoding="utf-8") as handle:
        payload = json.load(handle)
    number = (payload.get("pull_request") or {}).get("number") or payload.get("number")
    return str(number) if number else ""


@dataclass
class ActionConfig:
    """Parsed action inputs (see parsers.input_mapper.map_action_inputs)."""

    github_token: str = ""
    repo: str = ""
    pr_number: int = 0

    file_size_limit: int = 100 * 1024  # bytes
    file_lines_limit: int = 500
    pr_additions_limit: int = 5000
    pr_files_limit: int = 50

    auto_remove_labels: bool = True
    size_enabled: bool = True
    size_thresholds: SizeThresholds = field(default_factory=SizeThresholds)
    complexity_enabled: bool = True
    complexity_thresholds: ComplexityThresholds = field(default_factory=ComplexityThresholds)
    complexity_report: str = ""
    category_enabled: bool = True
    risk_enabled: bool = True

    skip_draft_pr: bool = True
    comment_on_pr: str = "auto"    # auto, always, never
    fail_on_large_files: bool = False
    fail_on_too_many_files: bool = False
    fail_on_pr_size: str = ""      # "", small, medium, large, xlarge, xxlarge
    enable_summary: bool = True
    additional_exclude_patterns: List[str] = field(default_factory=list)
    use_default_excludes: bool = True
    config_path: str = ".github/pr-labeler.yml"
    language: str = "en"


def build_labeler_config(
    action_config: Optional[ActionConfig] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> LabelerConfig:
    """
    Assemble the effective labeler configuration.

    Layers, last one wins: built-in defaults, action inputs, then the
    overrides parsed from the YAML config file.

    Args:
        action_config: Parsed action inputs
        overrides: Output of parse_labeler_config (section -> values)

    Returns:
        LabelerConfig ready for the decision engine
    """
    config = LabelerConfig()

    if action_config is not None:
        config.language = action_config.language or config.language
        config.size = SizeConfig(
            enabled=action_config.size_enabled,
            thresholds=replace(action_config.size_thresholds),
        )
        config.complexity = ComplexityConfig(
            enabled=action_config.complexity_enabled,
            thresholds=replace(action_config.complexity_thresholds),
        )
        config.category_labeling = CategoryLabelingConfig(enabled=action_config.category_enabled)
        config.risk.enabled = action_config.risk_enabled
        config.exclude = ExcludeConfig(
            additional=list(action_config.additional_exclude_patterns),
            use_default_excludes=action_config.use_default_excludes,
        )

    for key, value in (overrides or {}).items():
        current = getattr(config, key)
        if isinstance(value, dict) and is_dataclass(current):
            if key == "labels" and "namespace_policies" in value:
                value = dict(value)
                value["namespace_policies"] = {
                    **current.namespace_policies,
                    **value["namespace_policies"],
                }
            if key == "exclude" and "additional" in value:
                value = dict(value)
                value["additional"] = current.additional + [
                    p for p in value["additional"] if p not in current.additional
                ]
            setattr(config, key, replace(current, **value))
        else:
            setattr(config, key, value)

    return config


# Default configurations
DEFAULT_LABELER_CONFIG = LabelerConfig()
DEFAULT_ACTION_CONFIG = ActionConfig()
