"""Permission cache administration resource."""

import falcon
import falcon.asgi

from rolegate.application.ports import AuthorizationGuard, PermissionCacheInvalidator
from rolegate.interfaces.api.hooks import require_role

SUPER_ADMIN = "SUPER_ADMIN"


class PermissionCacheResource:
    """DELETE /v1/permission-cache - drop cached permissions.

    ?userId= limits the flush to one user; without it every entry is cleared.
    """

    def __init__(
        self,
        guard: AuthorizationGuard,
        permission_cache: PermissionCacheInvalidator,
    ) -> None:
        self.guard = guard
        self._permission_cache = permission_cache

    @falcon.before(require_role(SUPER_ADMIN))
    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = req.get_param("userId")
        if user_id:
            self._permission_cache.invalidate(user_id)
        else:
            self._permission_cache.invalidate_all()
        resp.status = falcon.HTTP_204
