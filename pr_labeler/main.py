#!/usr/bin/env python3
"""
PR Insights Labeler - Main Entry Point

Analyzes the files of a GitHub Pull Request and applies size, complexity,
category, risk and violation labels.

Usage:
    python -m pr_labeler.main label --repo owner/repo --pr-number 123
    python -m pr_labeler.main check-config .github/pr-labeler.yml

Or via GitHub Actions, where inputs arrive as INPUT_* environment variables.
"""

import argparse
import dataclasses
import json
import sys
from typing import Any, Dict, Optional

from github import GithubException

from .config import ActionConfig, ActionInputs, LabelerConfig, build_labeler_config
from .errors import GitHubAPIError
from .i18n import Translator
from .labeling import decide_labels, evaluate_failures
from .models import PRContext
from .parsers import load_labeler_config_file, map_action_inputs
from .summary import format_summary, write_job_summary
from .tools import AnalysisConfig, GitHubTool, analyze_files, load_complexity_report
from .utils import get_logger, resolve_log_level, setup_logging


def run_labeler(
    action_config: ActionConfig,
    labeler_config: LabelerConfig,
    github: GitHubTool,
    work_dir: str = ".",
) -> Dict[str, Any]:
    """
    Run the complete labeling pipeline for one PR.

    Args:
        action_config: Parsed action inputs
        labeler_config: Effective labeler configuration
        github: GitHub collaborator bound to the PR
        work_dir: Checkout of the PR head

    Returns:
        Dictionary with run results
    """
    logger = get_logger()
    translator = Translator(labeler_config.language)

    if action_config.skip_draft_pr and github.is_draft:
        logger.info(f"PR #{action_config.pr_number} is a draft, skipping")
        return {"status": "skipped_draft", "labels": [], "failures": []}

    # Analyze changed files
    logger.info("Fetching changed files...")
    files = github.get_diff_files()
    analysis = analyze_files(
        files,
        AnalysisConfig(
            file_size_limit=action_config.file_size_limit,
            file_line_limit=action_config.file_lines_limit,
            max_added_lines=action_config.pr_additions_limit,
            max_file_count=action_config.pr_files_limit,
            exclude_patterns=labeler_config.exclude.additional,
            use_default_excludes=labeler_config.exclude.use_default_excludes,
        ),
        work_dir=work_dir,
        size_lookup=github.get_file_size,
    )
    metrics, violations = analysis.metrics, analysis.violations

    if action_config.complexity_report and labeler_config.complexity.enabled:
        report = load_complexity_report(action_config.complexity_report)
        if report.is_ok():
            metrics.complexity = report.value
        else:
            logger.warning(str(report.error))

    # Optional context for risk classification
    pr_context = None
    if labeler_config.risk.enabled:
        pr_context = PRContext(
            ci_status=github.get_ci_status() if labeler_config.risk.use_ci_status else None,
            commit_messages=github.get_commit_messages(),
        )
        if pr_context.ci_status and pr_context.ci_status.any_failed():
            logger.info(f"Failing checks: {', '.join(pr_context.ci_status.failed_checks)}")

    decisions = decide_labels(metrics, labeler_config, violations, pr_context, translator)
    for entry in decisions.reasoning:
        logger.info(f"{entry.label}: {entry.reason}")

    dry_run = labeler_config.runtime.dry_run
    if dry_run:
        logger.info(f"Dry run: would add {decisions.labels_to_add}, purge {decisions.labels_to_remove}")
        applied = decisions.labels_to_add
    else:
        update = github.apply_label_decisions(
            decisions,
            create_missing=labeler_config.labels.create_missing,
            color=labeler_config.labels.color,
            description=labeler_config.labels.description,
            auto_remove=action_config.auto_remove_labels,
        )
        if update.failed:
            logger.warning(f"Some labels could not be updated: {update.failed}")
        applied = [label for label in decisions.labels_to_add if label not in update.failed]

    failures = evaluate_failures(decisions.labels_to_add, action_config, translator)
    summary = format_summary(
        metrics, violations, decisions, labeler_config,
        applied_labels=applied, failures=failures, translator=translator,
    )

    if action_config.enable_summary:
        write_job_summary(summary)

    if not dry_run:
        post_comment(github, action_config.comment_on_pr, violations.has_violations, summary)

    for message in failures:
        logger.error(message)

    return {
        "status": "failed" if failures else "completed",
        "labels": decisions.labels_to_add,
        "removed_namespaces": decisions.labels_to_remove,
        "failures": failures,
        "summary": summary,
    }


def post_comment(github: GitHubTool, mode: str, has_violations: bool, body: str) -> None:
    """Post, update or clear the summary comment according to ``mode``."""
    logger = get_logger()
    if mode == "never":
        return
    if mode == "always" or has_violations:
        logger.info("Posting summary comment...")
        github.upsert_comment(body)
    elif github.delete_comment():
        logger.info("Removed outdated summary comment")


def load_configs(args) -> Optional[tuple]:
    """Resolve action inputs and the labeler config file; None on error."""
    logger = get_logger()

    inputs = ActionInputs.from_env()
    if args.repo:
        inputs.repo = args.repo
    if args.pr_number:
        inputs.pr_number = str(args.pr_number)
    if args.config:
        inputs.config_path = args.config
    if args.language:
        inputs.language = args.language

    mapped = map_action_inputs(inputs)
    if mapped.is_err():
        logger.error(str(mapped.error))
        return None
    action_config = mapped.value

    loaded = load_labeler_config_file(action_config.config_path)
    if loaded.is_err():
        logger.error(str(loaded.error))
        return None
    overrides, warnings = loaded.value
    for warning in warnings:
        logger.warning(warning)

    labeler_config = build_labeler_config(action_config, overrides)
    if args.dry_run:
        labeler_config.runtime.dry_run = True
    return action_config, labeler_config


def cmd_label(args):
    """Handle 'label' subcommand."""
    setup_logging(level=resolve_log_level(args.debug))
    logger = get_logger()

    configs = load_configs(args)
    if configs is None:
        sys.exit(1)
    action_config, labeler_config = configs

    # Validate
    if not action_config.repo:
        logger.error("Repository required. Use --repo or set GITHUB_REPOSITORY env var")
        sys.exit(1)
    if not action_config.pr_number:
        logger.error("PR number required. Use --pr-number or set PR_NUMBER env var")
        sys.exit(1)

    logger.info(f"Labeling {action_config.repo} PR #{action_config.pr_number}")

    # Run
    try:
        github = GitHubTool(
            repo=action_config.repo,
            pr_number=action_config.pr_number,
            token=action_config.github_token or None,
        )
        result = run_labeler(action_config, labeler_config, github, work_dir=args.work_dir)
    except (GitHubAPIError, GithubException, ValueError) as e:
        logger.exception(f"Labeling failed: {e}")
        sys.exit(1 if labeler_config.runtime.fail_on_error else 0)

    logger.info(f"Labels: {result['labels']}")
    sys.exit(1 if result["failures"] else 0)


def cmd_check_config(args):
    """Handle 'check-config' subcommand."""
    setup_logging(level=resolve_log_level(args.debug))
    logger = get_logger()

    loaded = load_labeler_config_file(args.path)
    if loaded.is_err():
        logger.error(str(loaded.error))
        sys.exit(1)

    overrides, warnings = loaded.value
    for warning in warnings:
        logger.warning(warning)

    config = build_labeler_config(overrides=overrides)
    print(json.dumps(dataclasses.asdict(config), indent=2, ensure_ascii=False))
    sys.exit(0)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="PR Insights Labeler: size, complexity, category and risk labels for pull requests"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # label command
    label_parser = subparsers.add_parser("label", help="Analyze a PR and apply labels")
    label_parser.add_argument(
        "--repo",
        type=str,
        help="Repository in format owner/repo"
    )
    label_parser.add_argument(
        "--pr-number",
        type=int,
        help="Pull request number"
    )
    label_parser.add_argument(
        "--config",
        type=str,
        help="Path to the labeler YAML config (default: .github/pr-labeler.yml)"
    )
    label_parser.add_argument(
        "--work-dir",
        type=str,
        default=".",
        help="Checkout of the PR head (default: current directory)"
    )
    label_parser.add_argument(
        "--language",
        type=str,
        help="Output language (en, ja)"
    )
    label_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Decide labels without changing the PR"
    )
    label_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    # check-config command
    check_parser = subparsers.add_parser(
        "check-config",
        help="Validate a labeler config file and print the effective configuration"
    )
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".github/pr-labeler.yml",
        help="Config file path (default: .github/pr-labeler.yml)"
    )
    check_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    # Route to subcommand
    if args.command == "label":
        cmd_label(args)
    elif args.command == "check-config":
        cmd_check_config(args)
    else:
        # No subcommand - show help
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
