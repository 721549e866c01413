"""Tests for the size, complexity, category, risk and violation classifiers."""

import pytest

from pr_labeler.config import (
    CategoryConfig,
    ComplexityThresholds,
    RiskConfig,
    SizeThresholds,
    default_categories,
)
from pr_labeler.i18n import Translator
from pr_labeler.labeling import (
    category_labels,
    classify_categories,
    classify_complexity,
    classify_size,
    decide_risk_label,
    decide_violation_labels,
    detect_change_type,
    evaluate_risk,
    get_risk_affected_files,
    get_risk_reason,
)
from pr_labeler.labeling.constants import SIZE_LABELS
from pr_labeler.labeling.risk import CI_FAILED, CORE_NO_TESTS, FEATURE_NO_TESTS, REFACTOR_SAFE, is_test_file
from pr_labeler.models import (
    ChangeType,
    CheckState,
    CIStatus,
    PRContext,
    ViolationDetail,
    Violations,
    ViolationSeverity,
    ViolationType,
)


class TestClassifySize:
    """Tests for size classification."""

    def test_default_buckets(self):
        thresholds = SizeThresholds()
        assert classify_size(0, thresholds) == "size/small"
        assert classify_size(200, thresholds) == "size/small"
        assert classify_size(201, thresholds) == "size/medium"
        assert classify_size(500, thresholds) == "size/medium"
        assert classify_size(1000, thresholds) == "size/large"
        assert classify_size(2999, thresholds) == "size/xlarge"
        assert classify_size(3000, thresholds) == "size/xxlarge"

    def test_additions_equal_to_medium_is_medium(self):
        """Given additions equal to the medium threshold, should be size/medium."""
        # Given
        thresholds = SizeThresholds(small=10, medium=50, large=200, xlarge=1000)

        # When
        label = classify_size(50, thresholds)

        # Then
        assert label == "size/medium"

    def test_monotonic_over_range(self):
        """Given increasing additions, labels should never get smaller."""
        thresholds = SizeThresholds(small=10, medium=50, large=200, xlarge=1000)
        ranks = [SIZE_LABELS.index(classify_size(a, thresholds)) for a in range(0, 1200, 7)]
        assert ranks == sorted(ranks)
        assert set(ranks) == set(range(len(SIZE_LABELS)))


class TestClassifyComplexity:
    """Tests for complexity classification."""

    def test_boundaries(self):
        thresholds = ComplexityThresholds(medium=10, high=20)
        assert classify_complexity(9, thresholds) is None
        assert classify_complexity(10, thresholds) == "complexity/medium"
        assert classify_complexity(15, thresholds) == "complexity/medium"
        assert classify_complexity(20, thresholds) == "complexity/high"


class TestClassifyCategories:
    """Tests for category classification."""

    def test_exclude_wins_over_pattern(self):
        """Given a file matching both pattern and exclude, should not count."""
        # Given
        categories = [CategoryConfig(label="category/docs", patterns=["**/*.md"], exclude=["internal/**"])]

        # When
        matches = classify_categories(["internal/notes.md"], categories)

        # Then
        assert matches == []

    def test_rule_without_matches_contributes_nothing(self):
        categories = [
            CategoryConfig(label="category/docs", patterns=["docs/**"]),
            CategoryConfig(label="category/ci-cd", patterns=[".github/workflows/**"]),
        ]
        matches = classify_categories([".github/workflows/ci.yml"], categories)
        assert [m.label for m in matches] == ["category/ci-cd"]
        assert matches[0].matched_files == [".github/workflows/ci.yml"]

    def test_default_categories(self):
        """Given a typical change set, should match the built-in categories in order."""
        # Given
        files = [
            "tests/test_engine.py",
            ".github/workflows/ci.yml",
            "docs/usage.md",
            ".kiro/specs/labeler.md",
            "package.json",
        ]

        # When
        labels = [m.label for m in classify_categories(files, default_categories())]

        # Then
        assert labels == [
            "category/tests",
            "category/ci-cd",
            "category/documentation",
            "category/spec",
            "category/dependency",
        ]

    def test_category_labels_in_declaration_order(self):
        """Given matches out of declaration order, labels should follow the rules."""
        # Given
        categories = [
            CategoryConfig(label="category/docs", patterns=["**/*.md"], exclude=["internal/**"]),
            CategoryConfig(label="category/tests", patterns=["tests/**"]),
            CategoryConfig(label="category/ci-cd", patterns=[".github/workflows/**"]),
        ]
        files = [".github/workflows/ci.yml", "tests/test_engine.py", "internal/notes.md"]

        # When
        labels = category_labels(files, categories)

        # Then
        assert labels == ["category/tests", "category/ci-cd"]
        assert category_labels(files + ["README.md"], categories)[0] == "category/docs"


class TestRiskHelpers:
    """Tests for test-file and change-type detection."""

    @pytest.mark.parametrize("path,expected", [
        ("tests/test_engine.py", True),
        ("src/__tests__/engine.ts", True),
        ("src/engine.test.ts", True),
        ("src/engine.spec.js", True),
        ("pkg/engine_test.py", True),
        ("test_utils.py", True),
        ("src/contest.py", False),
        ("src/testing/util.py", False),
    ])
    def test_is_test_file(self, path, expected):
        assert is_test_file(path) is expected

    def test_detect_change_type_first_prefixed_message_wins(self):
        messages = ["Merge branch 'main'", "feat(api): add endpoint", "fix: typo"]
        assert detect_change_type(messages) == ChangeType.FEATURE

    def test_detect_change_type_is_case_insensitive(self):
        assert detect_change_type(["Refactor: split module"]) == ChangeType.REFACTOR
        assert detect_change_type(["update stuff"]) == ChangeType.UNKNOWN


class TestEvaluateRisk:
    """Tests for the risk decision order."""

    def _context(self, state: CheckState, *messages: str) -> PRContext:
        return PRContext(ci_status=CIStatus(checks={"build": state}), commit_messages=list(messages))

    def test_ci_failure_is_always_high(self):
        """Given a failed CI check, should be risk/high whatever the paths say."""
        # Given - refactor commit with tests and no core change
        context = self._context(CheckState.FAILED, "refactor: tidy")

        # When
        evaluation = evaluate_risk(["tests/test_a.py"], RiskConfig(), context)

        # Then
        assert evaluation.label == "risk/high"
        assert evaluation.reason_code == CI_FAILED

    def test_refactor_with_green_ci_has_no_label(self):
        """Given a refactor commit and passing CI, should not label even core changes."""
        context = self._context(CheckState.PASSED, "refactor: split engine")
        evaluation = evaluate_risk(["src/engine.ts"], RiskConfig(), context)
        assert evaluation.label is None
        assert evaluation.reason_code == REFACTOR_SAFE

    def test_feature_without_tests(self):
        context = self._context(CheckState.PASSED, "feat: new engine")
        evaluation = evaluate_risk(["src/engine.ts"], RiskConfig(), context)
        assert evaluation.label == "risk/high"
        assert evaluation.reason_code == FEATURE_NO_TESTS

    def test_core_change_without_tests_and_no_context(self):
        """Given core changes, no tests and no PR context, should be risk/high."""
        config = RiskConfig(core_paths=["src/core/**"])
        evaluation = evaluate_risk(["src/core/engine.ts"], config)
        assert evaluation.label == "risk/high"
        assert evaluation.reason_code == CORE_NO_TESTS

    def test_core_change_with_tests_is_not_risky(self):
        assert decide_risk_label(["src/engine.ts", "tests/test_engine.py"], RiskConfig()) is None

    def test_core_rule_can_be_disabled(self):
        config = RiskConfig(high_if_no_tests_for_core=False)
        assert decide_risk_label(["src/engine.ts"], config) is None

    def test_config_change_is_medium(self):
        assert decide_risk_label(["docs/a.md", "package.json"], RiskConfig()) == "risk/medium"

    def test_reason_codes_are_stable(self):
        """Reason codes are part of the output and key the reasoning text."""
        evaluation = evaluate_risk(["package.json"], RiskConfig())
        assert evaluation.reason_code == "config_changed"
        assert [CI_FAILED, REFACTOR_SAFE, FEATURE_NO_TESTS, CORE_NO_TESTS] == [
            "ci_failed", "refactor_safe", "feature_no_tests", "core_no_tests",
        ]
        assert Translator().t(f"reasoning.{evaluation.reason_code}") == "config files changed"

    def test_ci_ignored_when_disabled(self):
        """Given use_ci_status=False, a failed check should not matter."""
        config = RiskConfig(use_ci_status=False)
        context = self._context(CheckState.FAILED)
        assert decide_risk_label(["docs/a.md"], config, context) is None

    def test_pending_ci_is_not_all_passed(self):
        """Given pending checks, a refactor should fall through to path rules."""
        context = PRContext(
            ci_status=CIStatus(checks={"build": CheckState.PASSED, "lint": CheckState.PENDING}),
            commit_messages=["refactor: move"],
        )
        assert decide_risk_label(["src/engine.ts"], RiskConfig(), context) == "risk/high"

    def test_reason_text(self):
        config = RiskConfig(core_paths=["src/core/**"])
        files = ["src/core/engine.ts"]
        assert get_risk_reason(files, config, "risk/high") == "core change without tests"
        assert get_risk_reason(files, config, "risk/high", translator=Translator("ja")) == "テストのないコア変更"

    def test_reason_mismatch_degrades_to_sentinel(self):
        """Given a label the evaluation no longer yields, should return the sentinel."""
        assert get_risk_reason(["docs/a.md"], RiskConfig(), "risk/high") == "unknown risk condition"

    def test_affected_files_deduplicated(self):
        files = ["src/a.ts", "package.json", "docs/a.md", "src/a.ts"]
        assert get_risk_affected_files(files, RiskConfig()) == ["src/a.ts", "package.json"]


class TestViolationLabels:
    """Tests for violation labels."""

    def test_large_files_only(self):
        """Given only a large file violation, should return just auto/large-files."""
        # Given
        violations = Violations(large_files=[
            ViolationDetail(file="a.bin", actual_value=200_000, limit=102_400),
        ])

        # When
        labels, reasoning = decide_violation_labels(violations)

        # Then
        assert labels == ["auto/large-files"]
        assert reasoning[0].matched_files == ["a.bin"]

    def test_fixed_order(self):
        violations = Violations(
            large_files=[ViolationDetail(file="a.bin", actual_value=2, limit=1)],
            exceeds_file_lines=[ViolationDetail(
                file="big.py", actual_value=900, limit=500,
                violation_type=ViolationType.LINES, severity=ViolationSeverity.WARNING,
            )],
            exceeds_additions=True,
            exceeds_file_count=True,
        )
        labels, _ = decide_violation_labels(violations)
        assert labels == [
            "auto/large-files",
            "auto/too-many-lines",
            "auto/excessive-changes",
            "auto/too-many-files",
        ]

    def test_no_violations(self):
        assert decide_violation_labels(Violations()) == ([], [])
