"""Permission cache port - invalidation hooks used by mutations."""

from typing import Protocol


class PermissionCacheInvalidator(Protocol):
    """Port for dropping cached effective permission sets."""

    def invalidate(self, user_id: str) -> None: ...

    def invalidate_all(self) -> None: ...
