"""Category classification by file path patterns."""

from dataclasses import dataclass, field
from typing import List, Sequence

from ..config import CategoryConfig
from .patterns import matches_any


@dataclass
class CategoryMatch:
    """A category that matched, with the files that matched it."""
    label: str
    matched_files: List[str] = field(default_factory=list)


def file_matches_category(path: str, category: CategoryConfig) -> bool:
    """A file matches if it hits any pattern and none of the excludes."""
    if not matches_any(path, category.patterns):
        return False
    if category.exclude and matches_any(path, category.exclude):
        return False
    return True


def classify_categories(
    files: Sequence[str],
    categories: Sequence[CategoryConfig],
) -> List[CategoryMatch]:
    """
    Match changed files against category rules.

    Rules are independent: a file may count for several categories. Pass
    the full changed-file list, not the post-exclusion one, so excluded
    paths (e.g. ``.kiro/``) still get categorised.

    Args:
        files: Changed file paths
        categories: Category rules, in declaration order

    Returns:
        Matched categories in declaration order, each with its evidence files
    """
    results = []
    for category in categories:
        matched = [path for path in files if file_matches_category(path, category)]
        if matched:
            results.append(CategoryMatch(label=category.label, matched_files=matched))
    return results


def category_labels(files: Sequence[str], categories: Sequence[CategoryConfig]) -> List[str]:
    """Labels of the matched categories, in declaration order."""
    return [match.label for match in classify_categories(files, categories)]
