"""Effective permission set algebra."""

from collections.abc import Iterable
from datetime import datetime

from rolegate.domain.entities import UserPermission, UserRole
from rolegate.domain.value_objects import WILDCARD


def union_identifiers(
    direct_grants: Iterable[UserPermission],
    role_assignments: Iterable[UserRole],
    now: datetime,
    *,
    enforce_role_expiry: bool = False,
) -> set[str]:
    """Union of identifiers from direct grants and role-derived grants.

    Expired direct grants are skipped. Role assignments are traversed
    regardless of their own expiry unless enforce_role_expiry is set.
    Grants whose relation was not loaded contribute nothing.
    """
    identifiers: set[str] = set()

    for grant in direct_grants:
        if grant.is_expired(now) or grant.permission is None:
            continue
        identifiers.add(grant.permission.identifier)

    for assignment in role_assignments:
        if enforce_role_expiry and assignment.is_expired(now):
            continue
        if assignment.role is None:
            continue
        identifiers.update(assignment.role.permission_identifiers)

    return identifiers


def collapse_wildcard(identifiers: Iterable[str]) -> frozenset[str]:
    """Collapse to {"*"} when the global wildcard is present."""
    identifiers = frozenset(identifiers)
    if WILDCARD in identifiers:
        return frozenset({WILDCARD})
    return identifiers
