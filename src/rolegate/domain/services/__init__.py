"""Pure authorization rules - no I/O."""

from rolegate.domain.services.permission_matcher import evaluate, matches
from rolegate.domain.services.permission_set import collapse_wildcard, union_identifiers

__all__ = [
    "collapse_wildcard",
    "evaluate",
    "matches",
    "union_identifiers",
]
