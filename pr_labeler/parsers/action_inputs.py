"""Parsing helpers for GitHub Action input strings."""

import json
import re
from typing import List

from ..config import ComplexityThresholds, SizeThresholds
from ..errors import ConfigurationError, Err, Ok, ParseError, Result

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")

_SIZE_UNITS = {
    "": 1,
    "B": 1,
    "KB": 1024,
    "K": 1024,
    "MB": 1024 ** 2,
    "M": 1024 ** 2,
    "GB": 1024 ** 3,
    "G": 1024 ** 3,
}
_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([a-zA-Z]*)$")


def parse_boolean(value: str) -> bool:
    """Lenient boolean: true/1/yes/on, anything else is False."""
    return value.strip().lower() in _TRUE_VALUES


def parse_boolean_strict(value: str, field: str = "boolean") -> Result[bool, ConfigurationError]:
    """Strict boolean: unknown values are a configuration error."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return Ok(True)
    if normalized in _FALSE_VALUES:
        return Ok(False)
    return Err(ConfigurationError(
        field,
        value,
        f'Invalid boolean value: "{value}". Allowed values: true/false/1/0/yes/no/on/off',
    ))


def parse_comment_mode(value: str) -> str:
    """Comment mode: 'always' or 'never', anything else is 'auto'."""
    normalized = value.strip().lower()
    if normalized in ("always", "never"):
        return normalized
    return "auto"


def parse_exclude_patterns(value: str) -> List[str]:
    """Split on commas/newlines, drop blanks and '#' comments, dedupe."""
    patterns = [p.strip() for p in re.split(r"[,\n]", value)]
    patterns = [p for p in patterns if p and not p.startswith("#")]
    return list(dict.fromkeys(patterns))


def parse_size(value: str) -> Result[int, ParseError]:
    """Parse '100KB', '1.5MB', '500' into bytes."""
    match = _SIZE_PATTERN.match(value.strip())
    if not match:
        return Err(ParseError(value, "Invalid size format (expected e.g. 100KB, 1MB)"))

    number, unit = match.group(1), match.group(2).upper()
    if unit not in _SIZE_UNITS:
        return Err(ParseError(value, f"Unknown size unit: {match.group(2)}"))
    return Ok(int(float(number) * _SIZE_UNITS[unit]))


def _load_json_object(value: str, what: str) -> Result[dict, ParseError]:
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return Err(ParseError(value, f"Invalid JSON for {what}"))
    if not isinstance(parsed, dict):
        return Err(ParseError(value, f"{what} must be a JSON object"))
    return Ok(parsed)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_size_thresholds(value: str) -> Result[SizeThresholds, ParseError]:
    """Parse '{"small": .., "medium": .., "large": .., "xlarge": ..}'."""
    loaded = _load_json_object(value, "size thresholds")
    if loaded.is_err():
        return loaded
    parsed = loaded.value

    keys = ("small", "medium", "large", "xlarge")
    if not all(_is_number(parsed.get(k)) for k in keys):
        return Err(ParseError(value, "Missing or invalid required size thresholds (small, medium, large, xlarge)"))
    if any(parsed[k] < 0 for k in keys):
        return Err(ParseError(value, "Size threshold values must be non-negative"))

    for lower, upper in zip(keys, keys[1:]):
        if parsed[lower] >= parsed[upper]:
            return Err(ParseError(
                value,
                f"size.thresholds.{lower} ({parsed[lower]}) must be less than {upper} ({parsed[upper]})",
            ))

    return Ok(SizeThresholds(**{k: parsed[k] for k in keys}))


def parse_complexity_thresholds(value: str) -> Result[ComplexityThresholds, ParseError]:
    """Parse '{"medium": .., "high": ..}'."""
    loaded = _load_json_object(value, "complexity thresholds")
    if loaded.is_err():
        return loaded
    parsed = loaded.value

    if not (_is_number(parsed.get("medium")) and _is_number(parsed.get("high"))):
        return Err(ParseError(value, "Missing or invalid required complexity thresholds (medium, high)"))
    if parsed["medium"] < 0 or parsed["high"] < 0:
        return Err(ParseError(value, "Complexity threshold values must be non-negative"))
    if parsed["medium"] >= parsed["high"]:
        return Err(ParseError(
            value,
            f"complexity.thresholds.medium ({parsed['medium']}) must be less than high ({parsed['high']})",
        ))

    return Ok(ComplexityThresholds(medium=parsed["medium"], high=parsed["high"]))
