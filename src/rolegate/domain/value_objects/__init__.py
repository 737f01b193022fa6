"""Domain value objects."""

from rolegate.domain.value_objects.match_mode import MatchMode
from rolegate.domain.value_objects.permission_identifier import (
    WILDCARD,
    is_valid_identifier,
    split_identifier,
)

__all__ = [
    "WILDCARD",
    "MatchMode",
    "is_valid_identifier",
    "split_identifier",
]
