"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from rolegate.infrastructure.auth.header_verifier import TrustedHeaderVerifier
from rolegate.infrastructure.permission.authorization_guard import RoleGateAuthorizationGuard
from rolegate.infrastructure.permission.permission_cache import PermissionCache
from rolegate.infrastructure.permission.permission_resolver import StorePermissionResolver
from rolegate.interfaces.api.app import build_use_cases, create_app
from rolegate.interfaces.api.middleware.auth import AuthMiddleware

from tests.conftest import FakeStore


def auth(user_id: str) -> dict[str, str]:
    """Authorization header for user_id (the dev verifier trusts the token)."""
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture
def seeded(store: FakeStore) -> FakeStore:
    """Store with a super admin, a user manager and an editor."""
    for user_id in ("admin", "manager", "editor", "reader"):
        store.add_user(user_id)
    store.assign("admin", store.add_role("SUPER_ADMIN", ["*"]))
    store.assign(
        "manager",
        store.add_role("MANAGER", ["users:manage", "permissions:assign", "roles:read"]),
    )
    store.assign("editor", store.add_role("EDITOR", ["posts:*"]))
    store.grant("editor", "users:read")
    store.add_permission("posts:publish", category="posts")
    return store


@pytest.fixture
def permission_cache(uow_factory) -> PermissionCache:
    return PermissionCache(StorePermissionResolver(uow_factory))


@pytest.fixture
def app(seeded, uow_factory, permission_cache):
    """Falcon ASGI app with every route over the in-memory store."""
    resolver = StorePermissionResolver(uow_factory)
    guard = RoleGateAuthorizationGuard(permission_cache, resolver)
    use_cases = build_use_cases(uow_factory, permission_cache)
    return create_app(
        guard,
        uow_factory,
        use_cases,
        permission_cache,
        middleware=[AuthMiddleware(TrustedHeaderVerifier())],
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
