"""Map raw action inputs to a typed ActionConfig."""

from typing import Union

from ..config import ActionConfig, ActionInputs
from ..errors import ConfigurationError, Err, Ok, ParseError, Result
from ..labeling.constants import SIZE_NAMES
from .action_inputs import (
    parse_boolean,
    parse_boolean_strict,
    parse_comment_mode,
    parse_complexity_thresholds,
    parse_exclude_patterns,
    parse_size,
    parse_size_thresholds,
)

MappingError = Union[ConfigurationError, ParseError]


def _parse_int(value: str, field: str, message: str) -> Result[int, ConfigurationError]:
    try:
        return Ok(int(value.strip()))
    except ValueError:
        return Err(ConfigurationError(field, value, message))


def map_action_inputs(inputs: ActionInputs) -> Result[ActionConfig, MappingError]:
    """
    Validate and convert action inputs.

    Returns the first error found; no partial config is produced.
    """
    file_size_limit = parse_size(inputs.file_size_limit)
    if file_size_limit.is_err():
        return file_size_limit

    limits = {}
    for field, message in (
        ("file_lines_limit", "File lines limit must be a number"),
        ("pr_additions_limit", "PR additions limit must be a number"),
        ("pr_files_limit", "PR files limit must be a number"),
    ):
        parsed = _parse_int(getattr(inputs, field), field, message)
        if parsed.is_err():
            return parsed
        limits[field] = parsed.value

    flags = {}
    for field in ("size_enabled", "complexity_enabled", "category_enabled", "risk_enabled"):
        parsed = parse_boolean_strict(getattr(inputs, field), field)
        if parsed.is_err():
            return parsed
        flags[field] = parsed.value

    size_thresholds = parse_size_thresholds(inputs.size_thresholds)
    if size_thresholds.is_err():
        return size_thresholds

    complexity_thresholds = parse_complexity_thresholds(inputs.complexity_thresholds)
    if complexity_thresholds.is_err():
        return complexity_thresholds

    pr_number = 0
    if inputs.pr_number.strip():
        parsed = _parse_int(inputs.pr_number, "pr_number", "PR number must be a number")
        if parsed.is_err():
            return parsed
        pr_number = parsed.value

    # Empty means "not set" for the fail_on_* inputs
    fail_on_large_files = bool(inputs.fail_on_large_files.strip()) and parse_boolean(inputs.fail_on_large_files)
    fail_on_too_many_files = (
        bool(inputs.fail_on_too_many_files.strip()) and parse_boolean(inputs.fail_on_too_many_files)
    )
    fail_on_pr_size = inputs.fail_on_pr_size.strip()

    valid_sizes = [""] + SIZE_NAMES
    if fail_on_pr_size not in valid_sizes:
        return Err(ConfigurationError(
            "fail_on_pr_size",
            fail_on_pr_size,
            f"Invalid fail_on_pr_size value. Valid values: {', '.join(valid_sizes)}",
        ))
    if fail_on_pr_size and not flags["size_enabled"]:
        return Err(ConfigurationError(
            "fail_on_pr_size", fail_on_pr_size, "fail_on_pr_size requires size_enabled to be true"
        ))

    return Ok(ActionConfig(
        github_token=inputs.github_token,
        repo=inputs.repo.strip(),
        pr_number=pr_number,
        file_size_limit=file_size_limit.value,
        file_lines_limit=limits["file_lines_limit"],
        pr_additions_limit=limits["pr_additions_limit"],
        pr_files_limit=limits["pr_files_limit"],
        auto_remove_labels=parse_boolean(inputs.auto_remove_labels),
        size_enabled=flags["size_enabled"],
        size_thresholds=size_thresholds.value,
        complexity_enabled=flags["complexity_enabled"],
        complexity_thresholds=complexity_thresholds.value,
        complexity_report=inputs.complexity_report.strip(),
        category_enabled=flags["category_enabled"],
        risk_enabled=flags["risk_enabled"],
        skip_draft_pr=parse_boolean(inputs.skip_draft_pr),
        comment_on_pr=parse_comment_mode(inputs.comment_on_pr),
        fail_on_large_files=fail_on_large_files,
        fail_on_too_many_files=fail_on_too_many_files,
        fail_on_pr_size=fail_on_pr_size,
        enable_summary=parse_boolean(inputs.enable_summary),
        additional_exclude_patterns=parse_exclude_patterns(inputs.additional_exclude_patterns),
        use_default_excludes=parse_boolean(inputs.use_default_excludes),
        config_path=inputs.config_path.strip(),
        language=inputs.language.strip() or "en",
    ))
