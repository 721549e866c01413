"""Size classification by number of added lines."""

from ..config import SizeThresholds
from .constants import SIZE_LARGE, SIZE_MEDIUM, SIZE_SMALL, SIZE_XLARGE, SIZE_XXLARGE


def classify_size(additions: int, thresholds: SizeThresholds) -> str:
    """
    Map an additions count to a size label.

    Each of small/medium/large is the inclusive upper bound of its bucket,
    so an additions count equal to the medium threshold is size/medium.
    Reaching the xlarge threshold means size/xxlarge.

    Args:
        additions: Total added lines (post-exclusion)
        thresholds: Pre-validated, strictly ascending thresholds

    Returns:
        One of size/small, size/medium, size/large, size/xlarge, size/xxlarge
    """
    if additions <= thresholds.small:
        return SIZE_SMALL
    if additions <= thresholds.medium:
        return SIZE_MEDIUM
    if additions <= thresholds.large:
        return SIZE_LARGE
    if additions < thresholds.xlarge:
        return SIZE_XLARGE
    return SIZE_XXLARGE
