"""Falcon before-hooks that enforce authentication and permissions.

Resources using these hooks expose the authorization guard as ``guard``.
"""

import falcon
import falcon.asgi

from rolegate.domain.value_objects import MatchMode
from rolegate.interfaces.api.middleware.auth import RequestUser

FORBIDDEN_MESSAGE = "You do not have permission to access this resource"


def current_user(req: falcon.asgi.Request) -> RequestUser:
    """Authenticated user or 401."""
    user = getattr(req.context, "user", None)
    if not user:
        raise falcon.HTTPUnauthorized(title="Unauthorized", description="User not identified")
    return user


async def authenticated(req, resp, resource, params) -> None:
    current_user(req)


def authorize(*permissions: str, mode: MatchMode = MatchMode.ANY):
    """Require permissions, combined with mode. Denial raises 403."""

    async def hook(req, resp, resource, params) -> None:
        user = current_user(req)
        if not await resource.guard.authorize(user.user_id, list(permissions), mode):
            raise falcon.HTTPForbidden(title="Forbidden", description=FORBIDDEN_MESSAGE)

    return hook


def authorize_self_or(*permissions: str, mode: MatchMode = MatchMode.ANY):
    """Allow a user to act on their own user_id route param, else require permissions."""

    async def hook(req, resp, resource, params) -> None:
        user = current_user(req)
        if params.get("user_id") == user.user_id:
            return
        if not await resource.guard.authorize(user.user_id, list(permissions), mode):
            raise falcon.HTTPForbidden(
                title="Forbidden",
                description="You do not have permission to view other users' authorization data",
            )

    return hook


def require_role(*role_names: str):
    """Require at least one of role_names, by name rather than permission."""

    async def hook(req, resp, resource, params) -> None:
        user = current_user(req)
        if not await resource.guard.has_any_role(user.user_id, role_names):
            raise falcon.HTTPForbidden(
                title="Forbidden",
                description=f"Access restricted to {' or '.join(role_names)}",
            )

    return hook
