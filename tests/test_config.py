"""Tests for action input parsing, the YAML labeler config and config layering."""

import json

import pytest

from pr_labeler.config import (
    ActionConfig,
    ActionInputs,
    CategoryConfig,
    ComplexityThresholds,
    LabelerConfig,
    SizeThresholds,
    build_labeler_config,
)
from pr_labeler.errors import ConfigurationError, ParseError
from pr_labeler.parsers import (
    load_labeler_config_file,
    map_action_inputs,
    parse_boolean,
    parse_boolean_strict,
    parse_comment_mode,
    parse_complexity_thresholds,
    parse_exclude_patterns,
    parse_labeler_config,
    parse_size,
    parse_size_thresholds,
)


class TestActionInputParsers:
    """Tests for individual input parsers."""

    @pytest.mark.parametrize("value,expected", [
        ("100KB", 102_400),
        ("1.5MB", 1_572_864),
        ("500", 500),
        ("2 kb", 2048),
        ("1GB", 1024 ** 3),
    ])
    def test_parse_size(self, value, expected):
        result = parse_size(value)
        assert result.is_ok()
        assert result.value == expected

    @pytest.mark.parametrize("value", ["", "abc", "10XB", "-5KB"])
    def test_parse_size_invalid(self, value):
        result = parse_size(value)
        assert result.is_err()
        assert isinstance(result.error, ParseError)

    def test_booleans(self):
        assert parse_boolean("TRUE") is True
        assert parse_boolean("maybe") is False
        assert parse_boolean_strict("off").value is False

        result = parse_boolean_strict("maybe", "size_enabled")
        assert result.is_err()
        assert result.error.field == "size_enabled"

    def test_comment_mode(self):
        assert parse_comment_mode("Always") == "always"
        assert parse_comment_mode("never") == "never"
        assert parse_comment_mode("sometimes") == "auto"

    def test_exclude_patterns(self):
        """Given commas, newlines, comments and duplicates, should return clean patterns."""
        value = "dist/**, build/**\n# generated\n\n  dist/**\n*.snap"
        assert parse_exclude_patterns(value) == ["dist/**", "build/**", "*.snap"]

    def test_size_thresholds(self):
        result = parse_size_thresholds('{"small": 10, "medium": 50, "large": 200, "xlarge": 1000}')
        assert result.value == SizeThresholds(small=10, medium=50, large=200, xlarge=1000)

    @pytest.mark.parametrize("value", [
        "not json",
        "[1, 2]",
        '{"small": 10, "medium": 50, "large": 200}',
        '{"small": 100, "medium": 50, "large": 200, "xlarge": 1000}',
        '{"small": -1, "medium": 50, "large": 200, "xlarge": 1000}',
        '{"small": true, "medium": 50, "large": 200, "xlarge": 1000}',
    ])
    def test_size_thresholds_invalid(self, value):
        assert parse_size_thresholds(value).is_err()

    def test_complexity_thresholds(self):
        assert parse_complexity_thresholds('{"medium": 5, "high": 8}').value == ComplexityThresholds(5, 8)
        assert parse_complexity_thresholds('{"medium": 8, "high": 8}').is_err()
        assert parse_complexity_thresholds("{").is_err()


class TestMapActionInputs:
    """Tests for mapping raw inputs to ActionConfig."""

    def test_defaults_map_cleanly(self):
        result = map_action_inputs(ActionInputs(repo="o/r", pr_number="7"))
        assert result.is_ok()
        config = result.value
        assert config.pr_number == 7
        assert config.file_size_limit == 100 * 1024
        assert config.size_thresholds == SizeThresholds()
        assert config.fail_on_pr_size == ""
        assert config.comment_on_pr == "auto"

    def test_invalid_number(self):
        result = map_action_inputs(ActionInputs(file_lines_limit="lots"))
        assert result.is_err()
        assert result.error.field == "file_lines_limit"

    def test_invalid_strict_boolean(self):
        result = map_action_inputs(ActionInputs(risk_enabled="perhaps"))
        assert result.is_err()
        assert result.error.field == "risk_enabled"

    def test_fail_on_pr_size_must_be_known(self):
        result = map_action_inputs(ActionInputs(fail_on_pr_size="huge"))
        assert result.is_err()
        assert "Valid values" in result.error.message

    def test_fail_on_pr_size_requires_size_labels(self):
        """Given size labeling disabled, fail_on_pr_size should be rejected."""
        result = map_action_inputs(ActionInputs(fail_on_pr_size="large", size_enabled="false"))
        assert result.is_err()
        assert "size_enabled" in result.error.message

    def test_fail_on_flags(self):
        result = map_action_inputs(ActionInputs(fail_on_large_files="true", fail_on_pr_size="xlarge"))
        assert result.value.fail_on_large_files is True
        assert result.value.fail_on_too_many_files is False
        assert result.value.fail_on_pr_size == "xlarge"

    def test_threshold_errors_propagate(self):
        result = map_action_inputs(ActionInputs(complexity_thresholds='{"medium": 30, "high": 20}'))
        assert result.is_err()
        assert isinstance(result.error, ParseError)


class TestActionInputsFromEnv:
    """Tests for reading INPUT_* variables."""

    def test_reads_inputs_and_fallbacks(self, monkeypatch, tmp_path):
        # Given
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"pull_request": {"number": 42}}))
        monkeypatch.setenv("INPUT_SIZE_ENABLED", "false")
        monkeypatch.setenv("INPUT_LANGUAGE", "ja")
        monkeypatch.delenv("INPUT_REPO", raising=False)
        monkeypatch.delenv("INPUT_PR_NUMBER", raising=False)
        monkeypatch.delenv("INPUT_GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("PR_NUMBER", raising=False)
        monkeypatch.setenv("GITHUB_REPOSITORY", "octo/repo")
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(event))

        # When
        inputs = ActionInputs.from_env()

        # Then
        assert inputs.size_enabled == "false"
        assert inputs.language == "ja"
        assert inputs.repo == "octo/repo"
        assert inputs.github_token == "secret"
        assert inputs.pr_number == "42"
        assert inputs.file_size_limit == "100KB"


class TestParseLabelerConfig:
    """Tests for YAML labeler config validation."""

    def test_empty_config(self):
        assert parse_labeler_config(None).value == ({}, [])
        assert parse_labeler_config({}).value == ({}, [])

    def test_root_must_be_mapping(self):
        result = parse_labeler_config(["size"])
        assert result.is_err()
        assert result.error.field == "root"

    def test_partial_thresholds_merge_with_defaults(self):
        """Given only medium, other thresholds should come from defaults."""
        result = parse_labeler_config({"size": {"thresholds": {"medium": 300}}})
        overrides, warnings = result.value
        assert overrides["size"]["thresholds"] == SizeThresholds(small=200, medium=300, large=1000, xlarge=3000)
        assert warnings == []

    def test_thresholds_must_ascend_after_merge(self):
        """Given small above the default medium, should name the field path."""
        result = parse_labeler_config({"size": {"thresholds": {"small": 600}}})
        assert result.is_err()
        assert isinstance(result.error, ConfigurationError)
        assert result.error.field == "size.thresholds"
        assert "small (600) must be less than medium (500)" in result.error.message

    def test_complexity_thresholds_must_be_integers(self):
        result = parse_labeler_config({"complexity": {"thresholds": {"high": "lots"}}})
        assert result.error.field == "complexity.thresholds.high"

    def test_language(self):
        assert parse_labeler_config({"language": "ja-JP"}).value[0] == {"language": "ja-JP"}
        assert parse_labeler_config({"language": "fr"}).error.field == "language"

    def test_categories(self):
        raw = {"categories": [{
            "label": "category/backend",
            "patterns": ["./server/**"],
            "exclude": ["server/fixtures/**"],
            "display_name": {"en": "Backend", "ja": "バックエンド"},
        }]}
        overrides, _ = parse_labeler_config(raw).value
        assert overrides["categories"] == [CategoryConfig(
            label="category/backend",
            patterns=["server/**"],
            exclude=["server/fixtures/**"],
            display_name={"en": "Backend", "ja": "バックエンド"},
        )]

    def test_category_with_bad_pattern(self):
        result = parse_labeler_config({"categories": [{"label": "x/y", "patterns": ["/abs/**"]}]})
        assert result.error.field == "categories[0].patterns[0]"

    def test_category_display_name_needs_both_languages(self):
        raw = {"categories": [{"label": "x/y", "patterns": ["**"], "display_name": {"en": "X"}}]}
        assert parse_labeler_config(raw).error.field == "categories[0].display_name.ja"

    def test_namespace_policy_values(self):
        ok = parse_labeler_config({"labels": {"namespace_policies": {"team/*": "replace"}}})
        assert ok.value[0]["labels"] == {"namespace_policies": {"team/*": "replace"}}

        bad = parse_labeler_config({"labels": {"namespace_policies": {"size/*": "merge"}}})
        assert bad.error.field == "labels.namespace_policies.size/*"

    def test_risk_fields(self):
        overrides, _ = parse_labeler_config({"risk": {"use_ci_status": False, "core_paths": ["lib/**"]}}).value
        assert overrides["risk"] == {"use_ci_status": False, "core_paths": ["lib/**"]}
        assert parse_labeler_config({"risk": {"use_ci_status": "yes"}}).error.field == "risk.use_ci_status"

    def test_unknown_keys_warn(self):
        result = parse_labeler_config({"sizes": {}, "runtime": {"dry_run": True, "verbose": True}})
        overrides, warnings = result.value
        assert overrides == {"runtime": {"dry_run": True}}
        assert any("sizes" in w for w in warnings)
        assert any("runtime.verbose" in w for w in warnings)

    def test_camel_case_alias(self):
        overrides, warnings = parse_labeler_config({"categoryLabeling": {"enabled": False}}).value
        assert overrides == {"category_labeling": {"enabled": False}}
        assert warnings == []


class TestLoadLabelerConfigFile:
    """Tests for reading the YAML file."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_labeler_config_file(str(tmp_path / "nope.yml")).value == ({}, [])

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "pr-labeler.yml"
        path.write_text(
            "language: ja\n"
            "size:\n"
            "  thresholds:\n"
            "    small: 50\n"
            "exclude:\n"
            "  additional:\n"
            "    - 'dist/**'\n",
            encoding="utf-8",
        )

        overrides, _ = load_labeler_config_file(str(path)).value

        assert overrides["language"] == "ja"
        assert overrides["size"]["thresholds"].small == 50
        assert overrides["exclude"] == {"additional": ["dist/**"]}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("size: [unclosed\n", encoding="utf-8")
        result = load_labeler_config_file(str(path))
        assert result.is_err()
        assert result.error.field == "config_path"


class TestBuildLabelerConfig:
    """Tests for layering defaults, inputs and file overrides."""

    def test_defaults(self):
        config = build_labeler_config()
        assert config == LabelerConfig()
        assert config.labels.namespace_policies["category/*"] == "additive"

    def test_action_inputs_then_file(self):
        """Given inputs and a file, the file should win where both set a value."""
        # Given
        action = ActionConfig(
            size_thresholds=SizeThresholds(small=1, medium=2, large=3, xlarge=4),
            risk_enabled=False,
            additional_exclude_patterns=["dist/**"],
            language="en",
        )
        overrides = {
            "language": "ja",
            "size": {"thresholds": SizeThresholds(small=5, medium=6, large=7, xlarge=8)},
            "exclude": {"additional": ["build/**", "dist/**"]},
            "labels": {"namespace_policies": {"team/*": "replace"}},
        }

        # When
        config = build_labeler_config(action, overrides)

        # Then
        assert config.language == "ja"
        assert config.size.thresholds.small == 5
        assert config.size.enabled is True
        assert config.risk.enabled is False
        assert config.exclude.additional == ["dist/**", "build/**"]
        assert config.labels.namespace_policies["team/*"] == "replace"
        assert config.labels.namespace_policies["size/*"] == "replace"

    def test_does_not_touch_shared_defaults(self):
        build_labeler_config(overrides={"labels": {"namespace_policies": {"x/*": "replace"}}})
        assert "x/*" not in LabelerConfig().labels.namespace_policies
