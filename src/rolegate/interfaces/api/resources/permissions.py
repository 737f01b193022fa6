"""Permission catalogue API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from rolegate.application.ports import AuthorizationGuard
from rolegate.application.use_cases.permission.create_permission import (
    CreatePermissionUseCase,
)
from rolegate.application.use_cases.permission.delete_permission import (
    DeletePermissionUseCase,
)
from rolegate.application.use_cases.permission.update_permission import (
    UpdatePermissionUseCase,
)
from rolegate.domain.exceptions import NotFoundError
from rolegate.interfaces.api.hooks import authenticated, authorize
from rolegate.interfaces.api.serializers import permission_to_dict


class PermissionsResource:
    """GET/POST /v1/permissions - list and create permissions."""

    def __init__(
        self,
        guard: AuthorizationGuard,
        unit_of_work_factory: type,
        create_permission: CreatePermissionUseCase,
    ) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory
        self._create = create_permission

    @falcon.before(authorize("permissions:read"))
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List active permissions, optionally filtered by ?category=."""
        category = req.get_param("category")
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_active(category)

        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200

    @falcon.before(authorize("permissions:create"))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create permission."""
        try:
            body = await req.get_media()
            identifier = body["identifier"]
            name = body["name"]
            category = body["category"]
            description = body.get("description")
        except (AttributeError, KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": f"Missing required field: {e}"}
            return

        permission = await self._create.execute(identifier, name, category, description)
        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_201


class PermissionCategoryResource:
    """GET /v1/permissions/categories/{category} - active permissions in a category."""

    def __init__(self, guard: AuthorizationGuard, unit_of_work_factory: type) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory

    @falcon.before(authenticated)
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        category: str,
    ) -> None:
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_active(category)

        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200


class PermissionResource:
    """GET/PUT/DELETE /v1/permissions/{permission_id} - one catalogue entry."""

    def __init__(
        self,
        guard: AuthorizationGuard,
        unit_of_work_factory: type,
        update_permission: UpdatePermissionUseCase,
        delete_permission: DeletePermissionUseCase,
    ) -> None:
        self.guard = guard
        self._uow_factory = unit_of_work_factory
        self._update = update_permission
        self._delete = delete_permission

    @falcon.before(authorize("permissions:read"))
    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        try:
            pid = UUID(permission_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid permission ID"}
            return

        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(pid)
        if not permission:
            raise NotFoundError("Permission", permission_id)

        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    @falcon.before(authorize("permissions:update"))
    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        """Update identifier, name, category, description and/or active."""
        try:
            pid = UUID(permission_id)
            body = await req.get_media()
            fields = {
                key: body.get(key)
                for key in ("identifier", "name", "category", "description")
            }
            for key, value in fields.items():
                if value is not None and not isinstance(value, str):
                    raise ValueError(f"{key} must be a string")
            active = body.get("active")
            if active is not None and not isinstance(active, bool):
                raise ValueError("active must be a boolean")
        except (AttributeError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": str(e)}
            return

        permission = await self._update.execute(pid, active=active, **fields)
        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    @falcon.before(authorize("permissions:delete"))
    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        try:
            pid = UUID(permission_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Bad Request", "message": "Invalid permission ID"}
            return

        await self._delete.execute(pid)
        resp.status = falcon.HTTP_204
