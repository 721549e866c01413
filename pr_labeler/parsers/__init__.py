"""Parsers for action inputs and the YAML labeler configuration."""

from .action_inputs import (
    parse_boolean,
    parse_boolean_strict,
    parse_comment_mode,
    parse_complexity_thresholds,
    parse_exclude_patterns,
    parse_size,
    parse_size_thresholds,
)
from .input_mapper import map_action_inputs
from .labeler_config import load_labeler_config_file, parse_labeler_config

__all__ = [
    "parse_boolean",
    "parse_boolean_strict",
    "parse_comment_mode",
    "parse_complexity_thresholds",
    "parse_exclude_patterns",
    "parse_size",
    "parse_size_thresholds",
    "map_action_inputs",
    "load_labeler_config_file",
    "parse_labeler_config",
]
