"""Validation of the YAML labeler configuration file.

``parse_labeler_config`` turns the raw mapping loaded from YAML into
overrides for ``build_labeler_config``: a dict keyed by LabelerConfig
section that only carries the fields present in the file.
"""

import os
import re
from dataclasses import fields
from typing import Any, Dict, List, Tuple

import yaml

from ..config import (
    CategoryConfig,
    CategoryLabelingConfig,
    ComplexityThresholds,
    ExcludeConfig,
    LabelsConfig,
    RiskConfig,
    RuntimeConfig,
    SizeThresholds,
)
from ..errors import ConfigurationError, Err, Ok, Result
from ..labeling.namespace import ADDITIVE, NAMESPACE_POLICIES, REPLACE
from ..labeling.patterns import validate_pattern
from ..utils.logging import get_logger

logger = get_logger()

Overrides = Dict[str, Any]
ParsedConfig = Tuple[Overrides, List[str]]

KNOWN_KEYS = [
    "language",
    "summary",
    "size",
    "complexity",
    "category_labeling",
    "categories",
    "risk",
    "exclude",
    "labels",
    "runtime",
]

# camelCase spellings accepted for compatibility with existing config files
KEY_ALIASES = {"categoryLabeling": "category_labeling"}

_LANGUAGE_PATTERN = re.compile(r"^(en|ja)(?:[-_].+)?$", re.IGNORECASE)
_COLOR_PATTERN = re.compile(r"^#?[0-9a-fA-F]{6}$")


class _Invalid(Exception):
    """Internal early exit carrying a ConfigurationError."""

    def __init__(self, error: ConfigurationError):
        super().__init__(str(error))
        self.error = error


def _fail(field: str, value: Any, message: str) -> "_Invalid":
    return _Invalid(ConfigurationError(field, value, message))


def _require_mapping(value: Any, field: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise _fail(field, value, f"{field} must be an object")
    return value


def _require_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise _fail(field, value, f"{field} must be a boolean")
    return value


def _require_string(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise _fail(field, value, f"{field} must be a string")
    return value


def _require_string_list(value: Any, field: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _fail(field, value, f"{field} must be an array of strings")
    return list(value)


def _require_patterns(value: Any, field: str) -> List[str]:
    if not isinstance(value, list):
        raise _fail(field, value, f"{field} must be an array")
    patterns = []
    for index, pattern in enumerate(value):
        validated = validate_pattern(pattern)
        if validated.is_err():
            raise _fail(f"{field}[{index}]", pattern, f"Invalid pattern: {validated.error.message}")
        patterns.append(validated.value)
    return patterns


def _require_threshold(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(field, value, f"{field} must be an integer")
    if value < 0:
        raise _fail(field, value, f"{field} must be non-negative")
    return value


def _check_section_keys(section: Dict[str, Any], name: str, known: List[str], warnings: List[str]) -> None:
    for key in section:
        if key not in known:
            warnings.append(f"Unknown field '{name}.{key}' will be ignored")


def _field_names(cls) -> List[str]:
    return [f.name for f in fields(cls)]


def _parse_language(raw: Any) -> str:
    language = _require_string(raw, "language")
    if not _LANGUAGE_PATTERN.match(language):
        raise _fail(
            "language", raw,
            "language must start with 'en' or 'ja' (e.g., 'en', 'en-US', 'ja', 'ja-JP')",
        )
    return language


def _parse_summary(raw: Any, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, "summary")
    _check_section_keys(section, "summary", ["title"], warnings)
    if "title" not in section:
        return {}
    return {"title": _require_string(section["title"], "summary.title")}


def _parse_size(raw: Any, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, "size")
    _check_section_keys(section, "size", ["enabled", "thresholds"], warnings)
    parsed: Dict[str, Any] = {}

    if "enabled" in section:
        parsed["enabled"] = _require_bool(section["enabled"], "size.enabled")

    if "thresholds" in section:
        thresholds = _require_mapping(section["thresholds"], "size.thresholds")
        names = _field_names(SizeThresholds)
        _check_section_keys(thresholds, "size.thresholds", names, warnings)
        defaults = SizeThresholds()
        values = {
            name: _require_threshold(thresholds[name], f"size.thresholds.{name}")
            if name in thresholds else getattr(defaults, name)
            for name in names
        }
        for lower, upper in zip(names, names[1:]):
            if values[lower] >= values[upper]:
                raise _fail(
                    "size.thresholds",
                    {lower: values[lower], upper: values[upper]},
                    f"size.thresholds.{lower} ({values[lower]}) must be less than {upper} ({values[upper]})",
                )
        parsed["thresholds"] = SizeThresholds(**values)

    return parsed


def _parse_complexity(raw: Any, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, "complexity")
    _check_section_keys(section, "complexity", ["enabled", "thresholds"], warnings)
    parsed: Dict[str, Any] = {}

    if "enabled" in section:
        parsed["enabled"] = _require_bool(section["enabled"], "complexity.enabled")

    if "thresholds" in section:
        thresholds = _require_mapping(section["thresholds"], "complexity.thresholds")
        _check_section_keys(thresholds, "complexity.thresholds", ["medium", "high"], warnings)
        defaults = ComplexityThresholds()
        medium = (
            _require_threshold(thresholds["medium"], "complexity.thresholds.medium")
            if "medium" in thresholds else defaults.medium
        )
        high = (
            _require_threshold(thresholds["high"], "complexity.thresholds.high")
            if "high" in thresholds else defaults.high
        )
        if medium >= high:
            raise _fail(
                "complexity.thresholds",
                {"medium": medium, "high": high},
                f"complexity.thresholds.medium ({medium}) must be less than high ({high})",
            )
        parsed["thresholds"] = ComplexityThresholds(medium=medium, high=high)

    return parsed


def _parse_categories(raw: Any) -> List[CategoryConfig]:
    if not isinstance(raw, list):
        raise _fail("categories", raw, "categories must be an array")

    categories = []
    for index, item in enumerate(raw):
        path = f"categories[{index}]"
        if not isinstance(item, dict):
            raise _fail(path, item, "Category config must be an object")

        label = item.get("label")
        if not isinstance(label, str):
            raise _fail(f"{path}.label", label, "Category label must be a string")

        category = CategoryConfig(
            label=label,
            patterns=_require_patterns(item.get("patterns"), f"{path}.patterns"),
        )

        if item.get("exclude") is not None:
            category.exclude = _require_patterns(item["exclude"], f"{path}.exclude")

        display_name = item.get("display_name")
        if display_name is not None:
            display_name = _require_mapping(display_name, f"{path}.display_name")
            category.display_name = {
                lang: _require_string(display_name.get(lang), f"{path}.display_name.{lang}")
                for lang in ("en", "ja")
            }

        categories.append(category)
    return categories


def _parse_risk(raw: Any, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, "risk")
    _check_section_keys(section, "risk", _field_names(RiskConfig), warnings)
    parsed: Dict[str, Any] = {}
    for name in ("enabled", "high_if_no_tests_for_core", "use_ci_status"):
        if name in section:
            parsed[name] = _require_bool(section[name], f"risk.{name}")
    for name in ("core_paths", "config_files"):
        if name in section:
            parsed[name] = _require_patterns(section[name], f"risk.{name}")
    return parsed


def _parse_labels(raw: Any, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, "labels")
    _check_section_keys(section, "labels", _field_names(LabelsConfig), warnings)
    parsed: Dict[str, Any] = {}

    if "create_missing" in section:
        parsed["create_missing"] = _require_bool(section["create_missing"], "labels.create_missing")
    if "color" in section:
        color = _require_string(section["color"], "labels.color")
        if not _COLOR_PATTERN.match(color):
            raise _fail("labels.color", color, "labels.color must be a 6-digit hex color")
        parsed["color"] = color.lstrip("#")
    if "description" in section:
        parsed["description"] = _require_string(section["description"], "labels.description")

    if "namespace_policies" in section:
        policies = _require_mapping(section["namespace_policies"], "labels.namespace_policies")
        for pattern, policy in policies.items():
            if policy not in NAMESPACE_POLICIES:
                raise _fail(
                    f"labels.namespace_policies.{pattern}", policy,
                    f"Namespace policy must be '{REPLACE}' or '{ADDITIVE}'",
                )
        parsed["namespace_policies"] = dict(policies)

    return parsed


def _parse_flags(raw: Any, name: str, cls, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, name)
    names = _field_names(cls)
    _check_section_keys(section, name, names, warnings)
    return {key: _require_bool(section[key], f"{name}.{key}") for key in names if key in section}


def _parse_exclude(raw: Any, warnings: List[str]) -> Dict[str, Any]:
    section = _require_mapping(raw, "exclude")
    _check_section_keys(section, "exclude", _field_names(ExcludeConfig), warnings)
    parsed: Dict[str, Any] = {}
    if "additional" in section:
        parsed["additional"] = _require_patterns(section["additional"], "exclude.additional")
    if "use_default_excludes" in section:
        parsed["use_default_excludes"] = _require_bool(
            section["use_default_excludes"], "exclude.use_default_excludes"
        )
    return parsed


def parse_labeler_config(raw: Any) -> Result[ParsedConfig, ConfigurationError]:
    """
    Validate a raw labeler configuration mapping.

    Args:
        raw: Mapping loaded from YAML (None is treated as empty)

    Returns:
        Ok((overrides, warnings)) or Err(ConfigurationError) naming the
        offending field path
    """
    if raw is None:
        return Ok(({}, []))
    if not isinstance(raw, dict):
        return Err(ConfigurationError("root", raw, "Configuration must be an object"))

    source = {KEY_ALIASES.get(key, key): value for key, value in raw.items()}
    overrides: Overrides = {}
    warnings: List[str] = []

    try:
        if source.get("language") is not None:
            overrides["language"] = _parse_language(source["language"])
        if source.get("summary") is not None:
            overrides["summary"] = _parse_summary(source["summary"], warnings)
        if source.get("size") is not None:
            overrides["size"] = _parse_size(source["size"], warnings)
        if source.get("complexity") is not None:
            overrides["complexity"] = _parse_complexity(source["complexity"], warnings)
        if source.get("category_labeling") is not None:
            overrides["category_labeling"] = _parse_flags(
                source["category_labeling"], "category_labeling", CategoryLabelingConfig, warnings
            )
        if source.get("categories") is not None:
            overrides["categories"] = _parse_categories(source["categories"])
        if source.get("risk") is not None:
            overrides["risk"] = _parse_risk(source["risk"], warnings)
        if source.get("exclude") is not None:
            overrides["exclude"] = _parse_exclude(source["exclude"], warnings)
        if source.get("labels") is not None:
            overrides["labels"] = _parse_labels(source["labels"], warnings)
        if source.get("runtime") is not None:
            overrides["runtime"] = _parse_flags(source["runtime"], "runtime", RuntimeConfig, warnings)
    except _Invalid as e:
        return Err(e.error)

    for key in raw:
        if KEY_ALIASES.get(key, key) not in KNOWN_KEYS:
            warnings.append(f"Unknown configuration key '{key}' will be ignored")

    return Ok((overrides, warnings))


def load_labeler_config_file(path: str) -> Result[ParsedConfig, ConfigurationError]:
    """
    Load and validate a YAML labeler configuration file.

    A missing file is not an error: built-in defaults apply.
    """
    if not path or not os.path.exists(path):
        logger.info(f"No labeler config at {path!r}, using defaults")
        return Ok(({}, []))

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return Err(ConfigurationError("config_path", path, f"Invalid YAML: {e}"))

    logger.debug(f"Loaded labeler config from {path}")
    return parse_labeler_config(raw)
