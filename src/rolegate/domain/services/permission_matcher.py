"""Match engine - decides whether a permission set satisfies a requirement."""

from collections.abc import Collection, Sequence

from rolegate.domain.value_objects import WILDCARD, MatchMode, split_identifier
from rolegate.domain.value_objects.permission_identifier import (
    action_wildcard,
    resource_wildcard,
)


def matches(required: str, effective: Collection[str]) -> bool:
    """Check one required identifier against an effective permission set.

    Order: exact, global wildcard, "resource:*", "*:action".
    """
    if required in effective:
        return True
    if WILDCARD in effective:
        return True

    parts = split_identifier(required)
    if parts is None:
        return False
    resource, action = parts

    if resource_wildcard(resource) in effective:
        return True
    if action_wildcard(action) in effective:
        return True
    return False


def evaluate(
    required: Sequence[str],
    effective: Collection[str],
    mode: MatchMode = MatchMode.ANY,
) -> bool:
    """Combine per-requirement matches. Empty requirements: ALL passes, ANY fails."""
    results = (matches(r, effective) for r in required)
    if mode == MatchMode.ALL:
        return all(results)
    return any(results)
