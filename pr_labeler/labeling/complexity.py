"""Complexity classification from a precomputed score."""

from typing import Optional

from ..config import ComplexityThresholds
from .constants import COMPLEXITY_HIGH, COMPLEXITY_MEDIUM


def classify_complexity(complexity: float, thresholds: ComplexityThresholds) -> Optional[str]:
    """Return complexity/high, complexity/medium, or None for low complexity."""
    if complexity >= thresholds.high:
        return COMPLEXITY_HIGH
    if complexity >= thresholds.medium:
        return COMPLEXITY_MEDIUM
    return None
