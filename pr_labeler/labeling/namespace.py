"""Label namespaces and the replace/additive removal protocol.

The engine only reports *which namespace patterns* must be purged; the
applicator later resolves them against the labels currently on the PR
(``resolve_label_changes``).
"""

from typing import Dict, Iterable, List, Optional, Tuple

from ..models import LabelDecisions
from .patterns import match_pattern

REPLACE = "replace"
ADDITIVE = "additive"
NAMESPACE_POLICIES = (REPLACE, ADDITIVE)


def extract_namespace(label: str) -> Optional[str]:
    """Return the part of ``label`` before its first '/', or None."""
    if "/" not in label:
        return None
    namespace = label.split("/", 1)[0]
    return namespace or None


def _namespace_part(pattern: str) -> str:
    for suffix in ("/**", "/*"):
        if pattern.endswith(suffix):
            return pattern[: -len(suffix)]
    return pattern


def matches_namespace_pattern(namespace: str, pattern: str) -> bool:
    """Check a namespace ('size') against a policy pattern ('size/*')."""
    return match_pattern(namespace, _namespace_part(pattern), dot=True)


def label_in_namespace(label: str, pattern: str) -> bool:
    """Check a concrete label ('size/large') against a policy pattern."""
    namespace = extract_namespace(label)
    return namespace is not None and matches_namespace_pattern(namespace, pattern)


def namespaces_to_replace(labels: Iterable[str], policies: Dict[str, str]) -> List[str]:
    """
    Policy patterns to purge before ``labels`` are applied.

    Only ``replace`` policies are returned; ``additive`` namespaces keep
    their existing labels. Each pattern appears once, in first-seen order.
    """
    patterns: List[str] = []
    for label in labels:
        namespace = extract_namespace(label)
        if namespace is None:
            continue
        for pattern, policy in policies.items():
            if policy != REPLACE or pattern in patterns:
                continue
            if matches_namespace_pattern(namespace, pattern):
                patterns.append(pattern)
    return patterns


def resolve_label_changes(
    current_labels: Iterable[str],
    decisions: LabelDecisions,
) -> Tuple[List[str], List[str]]:
    """
    Turn decisions into concrete label changes for a PR.

    Args:
        current_labels: Labels currently on the PR
        decisions: Engine output

    Returns:
        Tuple of (labels_to_add, labels_to_remove); a label being added is
        never removed.
    """
    current = list(current_labels)
    wanted = set(decisions.labels_to_add)

    to_remove = [
        label for label in current
        if label not in wanted
        and any(label_in_namespace(label, pattern) for pattern in decisions.labels_to_remove)
    ]
    to_add = [label for label in decisions.labels_to_add if label not in current]
    return to_add, to_remove
