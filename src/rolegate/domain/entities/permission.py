"""Permission entity - a "resource:action" capability."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Permission:
    """Permission - identifier such as "users:read", or the wildcard "*"."""

    id: UUID
    identifier: str
    name: str
    category: str
    description: str | None = None
    active: bool = True
