"""Describe user permissions use case."""

from datetime import UTC, datetime

from rolegate.application.dto.permission_detail import (
    DirectPermissionDetail,
    RolePermissionDetail,
    UserPermissionsDetail,
)


class DescribeUserPermissionsUseCase:
    """List direct grants and per-role permissions for a user, uncached.

    Expired role assignments are listed unless enforce_role_expiry is set,
    matching what the resolver grants.
    """

    def __init__(self, unit_of_work_factory: type, *, enforce_role_expiry: bool = False) -> None:
        self._uow_factory = unit_of_work_factory
        self._enforce_role_expiry = enforce_role_expiry

    async def execute(self, user_id: str) -> UserPermissionsDetail:
        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            direct = await uow.user_permissions.list_active_by_user(user_id, now)
            assignments = await uow.user_roles.list_by_user(user_id)

        return UserPermissionsDetail(
            user_id=user_id,
            direct_permissions=[
                DirectPermissionDetail(
                    permission=g.permission,
                    granted_at=g.granted_at,
                    granted_by=g.granted_by,
                    expires_at=g.expires_at,
                )
                for g in direct
                if g.permission is not None and not g.is_expired(now)
            ],
            role_permissions=[
                RolePermissionDetail(
                    role_id=a.role.id,
                    role_name=a.role.name,
                    permissions=list(a.role.permissions),
                )
                for a in assignments
                if a.role is not None
                and not (self._enforce_role_expiry and a.is_expired(now))
            ],
        )
