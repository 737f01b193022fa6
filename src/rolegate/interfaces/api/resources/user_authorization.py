"""User authorization API resources - lookups, grants and role assignments."""

from uuid import UUID

import falcon
import falcon.asgi

from rolegate.application.ports import AuthorizationGuard
from rolegate.application.use_cases.permission.grant_permission import GrantPermissionUseCase
from rolegate.application.use_cases.permission.revoke_permission import (
    RevokePermissionUseCase,
)
from rolegate.application.use_cases.role.assign_role import AssignRoleUseCase
from rolegate.application.use_cases.role.remove_role import RemoveRoleUseCase
from rolegate.application.use_cases.user.describe_user_permissions import (
    DescribeUserPermissionsUseCase,
)
from rolegate.domain.value_objects import MatchMode
from rolegate.interfaces.api.hooks import authorize, authorize_self_or, current_user
from rolegate.interfaces.api.serializers import (
    assignment_to_dict,
    detail_to_dict,
    grant_to_dict,
    parse_datetime,
)

MANAGE_USERS = "users:manage"


class UserPermissionsResource:
    """GET /v1/users/{user_id}/permissions - effective permission identifiers."""

    def __init__(self, guard: AuthorizationGuard) -> None:
        self.guard = guard

    @falcon.before(authorize_self_or(MANAGE_USERS))
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        permissions = await self.guard.get_user_permissions(user_id)
        resp.media = {"userId": user_id, "permissions": permissions}
        resp.status = falcon.HTTP_200


class UserPermissionsDetailResource:
    """GET /v1/users/{user_id}/permissions/detail - direct and role-derived detail."""

    def __init__(
        self,
        guard: AuthorizationGuard,
        describe_user_permissions: DescribeUserPermissionsUseCase,
    ) -> None:
        self.guard = guard
        self._describe = describe_user_permissions

    @falcon.before(authorize_self_or(MANAGE_USERS))
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        detail = await self._describe.execute(user_id)
        resp.media = detail_to_dict(detail)
        resp.status = falcon.HTTP_200


class UserRolesResource:
    """GET /v1/users/{user_id}/roles - names of assigned roles."""

    def __init__(self, guard: AuthorizationGuard) -> None:
        self.guard = guard

    @falcon.before(authorize_self_or(MANAGE_USERS))
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
    ) -> None:
        roles = await self.guard.get_user_roles(user_id)
        resp.media = {"userId": user_id, "roles": roles}
        resp.status = falcon.HTTP_200


class PermissionGrantsResource:
    """POST /v1/users/permissions - grant a permission to a user."""

    def __init__(self, guard: AuthorizationGuard, grant_permission: GrantPermissionUseCase) -> None:
        self.guard = guard
        self._grant = grant_permission

    @falcon.before(authorize(MANAGE_USERS, "permissions:assign", mode=MatchMode.ALL))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Grant permissionId to userId, optionally until expiresAt."""
        user = current_user(req)
        try:
            body = await req.get_media()
            user_id = str(body["userId"])
            permission_id = UUID(str(body["permissionId"]))
            expires_at = parse_datetime(body.get("expiresAt"))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": str(e)}
            return

        grant = await self._grant.execute(user_id, permission_id, user.user_id, expires_at)
        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_201


class PermissionGrantResource:
    """DELETE /v1/users/{user_id}/permissions/{permission_id} - revoke a grant."""

    def __init__(self, guard: AuthorizationGuard, revoke_permission: RevokePermissionUseCase) -> None:
        self.guard = guard
        self._revoke = revoke_permission

    @falcon.before(authorize(MANAGE_USERS, "permissions:revoke", mode=MatchMode.ALL))
    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        permission_id: str,
    ) -> None:
        try:
            pid = UUID(permission_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid permission ID"}
            return

        await self._revoke.execute(user_id, pid)
        resp.status = falcon.HTTP_204


class RoleAssignmentsResource:
    """POST /v1/users/roles - assign a role to a user."""

    def __init__(self, guard: AuthorizationGuard, assign_role: AssignRoleUseCase) -> None:
        self.guard = guard
        self._assign = assign_role

    @falcon.before(authorize(MANAGE_USERS, "roles:assign", mode=MatchMode.ALL))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Assign roleId to userId, optionally until expiresAt."""
        user = current_user(req)
        try:
            body = await req.get_media()
            user_id = str(body["userId"])
            role_id = UUID(str(body["roleId"]))
            expires_at = parse_datetime(body.get("expiresAt"))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": str(e)}
            return

        assignment = await self._assign.execute(user_id, role_id, user.user_id, expires_at)
        resp.media = assignment_to_dict(assignment)
        resp.status = falcon.HTTP_201


class RoleAssignmentResource:
    """DELETE /v1/users/{user_id}/roles/{role_id} - remove a role assignment."""

    def __init__(self, guard: AuthorizationGuard, remove_role: RemoveRoleUseCase) -> None:
        self.guard = guard
        self._remove = remove_role

    @falcon.before(authorize(MANAGE_USERS, "roles:revoke", mode=MatchMode.ALL))
    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        role_id: str,
    ) -> None:
        try:
            rid = UUID(role_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid role ID"}
            return

        await self._remove.execute(user_id, rid)
        resp.status = falcon.HTTP_204
