"""Role API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from rolegate.application.ports import AuthorizationGuard
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.domain.exceptions import NotFoundError
from rolegate.interfaces.api.hooks import authorize
from rolegate.interfaces.api.serializers import role_to_dict, user_to_dict


def _parse_permission_ids(value: object) -> list[UUID]:
    if not isinstance(value, list):
        raise ValueError("permissionIds must be a list")
    return [UUID(str(v)) for v in value]


class RolesResource:
    """GET/POST /v1/roles - list active roles and create roles."""

    def __init__(
        self,
        guard: AuthorizationGuard,
        unit_of_work_factory: type,
        create_role: CreateRoleUseCase,
    ) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory
        self._create = create_role

    @falcon.before(authorize("roles:read"))
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_active()

        resp.media = {"items": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    @falcon.before(authorize("roles:create"))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role with permissions."""
        try:
            body = await req.get_media()
            name = body["name"]
            description = body.get("description")
            permission_ids = _parse_permission_ids(body.get("permissionIds", []))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": str(e)}
            return

        role = await self._create.execute(name, description, permission_ids)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PUT/DELETE /v1/roles/{role_id} - read, update and delete a role."""

    def __init__(
        self,
        guard: AuthorizationGuard,
        unit_of_work_factory: type,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory
        self._update = update_role
        self._delete = delete_role

    @falcon.before(authorize("roles:read"))
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        try:
            rid = UUID(role_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid role ID"}
            return

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(rid)
        if not role:
            raise NotFoundError("Role", role_id)

        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    @falcon.before(authorize("roles:update"))
    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        """Update name/active and, when permissionIds is given, replace permissions."""
        try:
            rid = UUID(role_id)
            body = await req.get_media()
            name = body.get("name")
            active = body.get("active")
            if active is not None and not isinstance(active, bool):
                raise ValueError("active must be a boolean")
            permission_ids = (
                _parse_permission_ids(body["permissionIds"])
                if body.get("permissionIds") is not None
                else None
            )
        except (AttributeError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": str(e)}
            return

        role = await self._update.execute(
            rid, name=name, active=active, permission_ids=permission_ids
        )
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    @falcon.before(authorize("roles:delete"))
    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        try:
            rid = UUID(role_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid role ID"}
            return

        await self._delete.execute(rid)
        resp.status = falcon.HTTP_204


class RoleUsersResource:
    """GET /v1/roles/{role_id}/users - users holding a role."""

    def __init__(self, guard: AuthorizationGuard, unit_of_work_factory: type) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory

    @falcon.before(authorize("roles:read"))
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        try:
            rid = UUID(role_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid role ID"}
            return

        async with self._uow_factory() as uow:
            users = await uow.users.list_by_role(rid)

        resp.media = {"items": [user_to_dict(u) for u in users]}
        resp.status = falcon.HTTP_200
