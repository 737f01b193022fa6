"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from rolegate.application.ports import AuthorizationGuard, PermissionCacheInvalidator
from rolegate.application.use_cases.permission.create_permission import (
    CreatePermissionUseCase,
)
from rolegate.application.use_cases.permission.delete_permission import (
    DeletePermissionUseCase,
)
from rolegate.application.use_cases.permission.grant_permission import GrantPermissionUseCase
from rolegate.application.use_cases.permission.revoke_permission import (
    RevokePermissionUseCase,
)
from rolegate.application.use_cases.permission.update_permission import (
    UpdatePermissionUseCase,
)
from rolegate.application.use_cases.role.assign_role import AssignRoleUseCase
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.remove_role import RemoveRoleUseCase
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.application.use_cases.user.describe_user_permissions import (
    DescribeUserPermissionsUseCase,
)
from rolegate.interfaces.api.errors import register_error_handlers
from rolegate.interfaces.api.resources.health import HealthResource
from rolegate.interfaces.api.resources.permission_cache import PermissionCacheResource
from rolegate.interfaces.api.resources.permissions import (
    PermissionCategoryResource,
    PermissionResource,
    PermissionsResource,
)
from rolegate.interfaces.api.resources.roles import (
    RoleResource,
    RolesResource,
    RoleUsersResource,
)
from rolegate.interfaces.api.resources.user_authorization import (
    PermissionGrantResource,
    PermissionGrantsResource,
    RoleAssignmentResource,
    RoleAssignmentsResource,
    UserPermissionsDetailResource,
    UserPermissionsResource,
    UserRolesResource,
)


@dataclass
class UseCases:
    """Mutation and query use cases exposed over HTTP."""

    grant_permission: GrantPermissionUseCase
    revoke_permission: RevokePermissionUseCase
    create_permission: CreatePermissionUseCase
    update_permission: UpdatePermissionUseCase
    delete_permission: DeletePermissionUseCase
    assign_role: AssignRoleUseCase
    remove_role: RemoveRoleUseCase
    create_role: CreateRoleUseCase
    update_role: UpdateRoleUseCase
    delete_role: DeleteRoleUseCase
    describe_user_permissions: DescribeUserPermissionsUseCase


def build_use_cases(
    unit_of_work_factory: type,
    permission_cache: PermissionCacheInvalidator,
    *,
    enforce_role_expiry: bool = False,
) -> UseCases:
    """Wire every use case to the same store and cache."""
    return UseCases(
        grant_permission=GrantPermissionUseCase(unit_of_work_factory, permission_cache),
        revoke_permission=RevokePermissionUseCase(unit_of_work_factory, permission_cache),
        create_permission=CreatePermissionUseCase(unit_of_work_factory, permission_cache),
        update_permission=UpdatePermissionUseCase(unit_of_work_factory, permission_cache),
        delete_permission=DeletePermissionUseCase(unit_of_work_factory, permission_cache),
        assign_role=AssignRoleUseCase(unit_of_work_factory, permission_cache),
        remove_role=RemoveRoleUseCase(unit_of_work_factory, permission_cache),
        create_role=CreateRoleUseCase(unit_of_work_factory, permission_cache),
        update_role=UpdateRoleUseCase(unit_of_work_factory, permission_cache),
        delete_role=DeleteRoleUseCase(unit_of_work_factory, permission_cache),
        describe_user_permissions=DescribeUserPermissionsUseCase(
            unit_of_work_factory, enforce_role_expiry=enforce_role_expiry
        ),
    )


def create_app(
    guard: AuthorizationGuard,
    unit_of_work_factory: type,
    use_cases: UseCases,
    permission_cache: PermissionCacheInvalidator,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    health = HealthResource()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/permission-cache", PermissionCacheResource(guard, permission_cache))

    app.add_route(
        "/v1/permissions",
        PermissionsResource(guard, unit_of_work_factory, use_cases.create_permission),
    )
    app.add_route(
        "/v1/permissions/{permission_id}",
        PermissionResource(
            guard,
            unit_of_work_factory,
            use_cases.update_permission,
            use_cases.delete_permission,
        ),
    )
    app.add_route(
        "/v1/permissions/categories/{category}",
        PermissionCategoryResource(guard, unit_of_work_factory),
    )

    app.add_route(
        "/v1/roles",
        RolesResource(guard, unit_of_work_factory, use_cases.create_role),
    )
    app.add_route(
        "/v1/roles/{role_id}",
        RoleResource(
            guard, unit_of_work_factory, use_cases.update_role, use_cases.delete_role
        ),
    )
    app.add_route("/v1/roles/{role_id}/users", RoleUsersResource(guard, unit_of_work_factory))

    app.add_route(
        "/v1/users/permissions",
        PermissionGrantsResource(guard, use_cases.grant_permission),
    )
    app.add_route("/v1/users/roles", RoleAssignmentsResource(guard, use_cases.assign_role))
    app.add_route("/v1/users/{user_id}/permissions", UserPermissionsResource(guard))
    app.add_route(
        "/v1/users/{user_id}/permissions/detail",
        UserPermissionsDetailResource(guard, use_cases.describe_user_permissions),
    )
    app.add_route(
        "/v1/users/{user_id}/permissions/{permission_id}",
        PermissionGrantResource(guard, use_cases.revoke_permission),
    )
    app.add_route("/v1/users/{user_id}/roles", UserRolesResource(guard))
    app.add_route(
        "/v1/users/{user_id}/roles/{role_id}",
        RoleAssignmentResource(guard, use_cases.remove_role),
    )
    return app
