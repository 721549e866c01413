"""Tests for failure control, translations and the markdown summary."""

from pr_labeler.config import ActionConfig, LabelerConfig
from pr_labeler.i18n import Translator, normalize_language
from pr_labeler.labeling import decide_labels, evaluate_failures
from pr_labeler.models import FileMetric, PRMetrics, ViolationDetail, Violations, ViolationSeverity, ViolationType
from pr_labeler.summary import format_bytes, format_summary, write_job_summary
from pr_labeler.summary.formatter import escape_markdown


class TestEvaluateFailures:
    """Tests for label-based workflow failure."""

    def test_no_settings_never_fail(self):
        labels = ["size/xxlarge", "auto/large-files", "auto/too-many-files"]
        assert evaluate_failures(labels, ActionConfig()) == []

    def test_large_files(self):
        config = ActionConfig(fail_on_large_files=True)
        assert evaluate_failures(["auto/large-files"], config) == ["Large files detected (auto/large-files)"]
        assert evaluate_failures(["size/small"], config) == []

    def test_too_many_files(self):
        config = ActionConfig(fail_on_too_many_files=True)
        assert len(evaluate_failures(["auto/too-many-files"], config)) == 1

    def test_pr_size_at_or_above_limit(self):
        """Given fail_on_pr_size=large, large and bigger fail, medium passes."""
        config = ActionConfig(fail_on_pr_size="large")
        assert evaluate_failures(["size/medium"], config) == []
        assert len(evaluate_failures(["size/large"], config)) == 1
        assert len(evaluate_failures(["size/xxlarge", "risk/high"], config)) == 1

    def test_messages_translated(self):
        config = ActionConfig(fail_on_pr_size="small", language="ja")
        assert evaluate_failures(["size/medium"], config)[0].startswith("PRサイズ")


class TestTranslator:
    """Tests for language handling."""

    def test_normalize_language(self):
        assert normalize_language("ja-JP") == "ja"
        assert normalize_language("EN_us") == "en"
        assert normalize_language("fr") == "en"
        assert normalize_language("") == "en"

    def test_missing_key_renders_key(self):
        assert Translator("ja").t("no.such.key") == "no.such.key"

    def test_params(self):
        assert Translator().t("reasoning.large_files", count=2) == "2 file(s) exceed the size limit"


def sample_run():
    metrics = PRMetrics(
        total_additions=1200,
        files=[
            FileMetric("src/big.py", size=300_000, lines=900, additions=800, deletions=3),
            FileMetric("src/small.py", size=120, lines=4, additions=4, deletions=0),
        ],
        all_files=["src/big.py", "src/small.py", "yarn.lock"],
        files_excluded=["yarn.lock"],
    )
    violations = Violations(
        large_files=[ViolationDetail("src/big.py", 300_000, 102_400)],
        exceeds_file_lines=[ViolationDetail(
            "src/big.py", 900, 500, ViolationType.LINES, ViolationSeverity.WARNING,
        )],
    )
    return metrics, violations


class TestFormatSummary:
    """Tests for the markdown summary."""

    def test_sections(self):
        """Given a run with violations, should render every section."""
        # Given
        metrics, violations = sample_run()
        config = LabelerConfig()
        decisions = decide_labels(metrics, config, violations)

        # When
        markdown = format_summary(metrics, violations, decisions, config, failures=["boom"])

        # Then
        assert markdown.startswith("## PR Insights")
        assert "### Overview" in markdown
        assert "| Total additions | 1,200 |" in markdown
        assert "- `size/xlarge`" in markdown
        assert "- `auto/large-files`" in markdown
        assert "### Label Reasoning" in markdown
        assert "`src/big.py` has 900 lines (limit 500)" in markdown
        assert "### File Analysis" in markdown
        assert "Improvement Actions" in markdown
        assert "- boom" in markdown
        # Largest file first, flagged on lines
        assert markdown.index("`src/big.py` | 293.0 KB") < markdown.index("`src/small.py` | 120 B")
        assert "⚠️ Lines > 500" in markdown

    def test_clean_run(self):
        metrics = PRMetrics(total_additions=3, files=[FileMetric("a.py", 10, 1, 3, 0)], all_files=["a.py"])
        config = LabelerConfig()
        decisions = decide_labels(metrics, config, Violations())

        markdown = format_summary(metrics, Violations(), decisions, config)

        assert "All checks passed." in markdown
        assert "Improvement Actions" not in markdown
        assert "✅ OK" in markdown

    def test_japanese_summary(self):
        metrics, violations = sample_run()
        config = LabelerConfig(language="ja")
        decisions = decide_labels(metrics, config, violations)

        markdown = format_summary(metrics, violations, decisions, config, applied_labels=[])

        assert "### 概要" in markdown
        assert "適用されたラベルはありません。" in markdown

    def test_helpers(self):
        assert format_bytes(512) == "512 B"
        assert format_bytes(2048) == "2.0 KB"
        assert format_bytes(3 * 1024 * 1024) == "3.0 MB"
        assert escape_markdown("a|b\nc") == "a\\|b c"


class TestWriteJobSummary:
    """Tests for GITHUB_STEP_SUMMARY output."""

    def test_appends_when_set(self, monkeypatch, tmp_path):
        path = tmp_path / "summary.md"
        path.write_text("existing\n")
        monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(path))

        assert write_job_summary("## Hello") is True
        assert path.read_text() == "existing\n## Hello\n"

    def test_skipped_when_unset(self, monkeypatch):
        monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
        assert write_job_summary("## Hello") is False
