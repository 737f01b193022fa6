"""Pytest fixtures for RoleGate tests."""

from __future__ import annotations

from collections import Counter
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from rolegate.domain.entities import Permission, Role, User, UserPermission, UserRole


# --- Shared in-memory store ---


class FakeStore:
    """Tables shared by every FakeUnitOfWork created from it."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.permissions: dict[UUID, Permission] = {}
        self.roles: dict[UUID, Role] = {}
        self.role_permissions: dict[UUID, list[UUID]] = {}
        self.user_roles: dict[tuple[str, UUID], UserRole] = {}
        self.user_permissions: dict[tuple[str, UUID], UserPermission] = {}
        self.calls: Counter[str] = Counter()
        self.fail_with: Exception | None = None

    def hit(self, operation: str) -> None:
        """Count a repository call, raising fail_with when set."""
        self.calls[operation] += 1
        if self.fail_with is not None:
            raise self.fail_with

    # helpers for arranging test data

    def add_user(self, user_id: str, name: str | None = None) -> User:
        user = User(id=user_id, name=name or user_id)
        self.users[user_id] = user
        return user

    def add_permission(self, identifier: str, category: str = "general") -> Permission:
        permission = Permission(
            id=uuid4(), identifier=identifier, name=identifier, category=category
        )
        self.permissions[permission.id] = permission
        return permission

    def permission(self, identifier: str) -> Permission:
        for p in self.permissions.values():
            if p.identifier == identifier:
                return p
        return self.add_permission(identifier)

    def add_role(self, name: str, identifiers: Sequence[str] = ()) -> Role:
        role = Role(id=uuid4(), name=name, description=name.title())
        self.roles[role.id] = role
        self.role_permissions[role.id] = [self.permission(i).id for i in identifiers]
        return role

    def grant(
        self, user_id: str, identifier: str, expires_at: datetime | None = None
    ) -> UserPermission:
        permission = self.permission(identifier)
        grant = UserPermission(
            user_id=user_id,
            permission_id=permission.id,
            granted_at=datetime.now(UTC),
            granted_by="seed",
            expires_at=expires_at,
        )
        self.user_permissions[(user_id, permission.id)] = grant
        return grant

    def assign(self, user_id: str, role: Role, expires_at: datetime | None = None) -> UserRole:
        assignment = UserRole(
            user_id=user_id,
            role_id=role.id,
            assigned_at=datetime.now(UTC),
            assigned_by="seed",
            expires_at=expires_at,
        )
        self.user_roles[(user_id, role.id)] = assignment
        return assignment

    def role_with_permissions(self, role_id: UUID) -> Role | None:
        role = self.roles.get(role_id)
        if role is None:
            return None
        return replace(
            role,
            permissions=[
                self.permissions[pid]
                for pid in self.role_permissions.get(role_id, [])
                if pid in self.permissions
            ],
        )


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        self._store.hit("permissions.get_by_id")
        return self._store.permissions.get(permission_id)

    async def get_by_identifier(self, identifier: str) -> Permission | None:
        self._store.hit("permissions.get_by_identifier")
        for p in self._store.permissions.values():
            if p.identifier == identifier:
                return p
        return None

    async def list_active(self, category: str | None = None) -> list[Permission]:
        self._store.hit("permissions.list_active")
        items = [
            p
            for p in self._store.permissions.values()
            if p.active and (category is None or p.category == category)
        ]
        return sorted(items, key=lambda p: (p.category, p.identifier))

    async def list_by_ids(self, permission_ids: Sequence[UUID]) -> list[Permission]:
        self._store.hit("permissions.list_by_ids")
        return [
            self._store.permissions[pid]
            for pid in permission_ids
            if pid in self._store.permissions
        ]

    async def create(self, permission: Permission) -> Permission:
        self._store.hit("permissions.create")
        self._store.permissions[permission.id] = permission
        return permission

    async def update(self, permission: Permission) -> None:
        self._store.hit("permissions.update")
        self._store.permissions[permission.id] = permission

    async def delete(self, permission_id: UUID) -> bool:
        self._store.hit("permissions.delete")
        if self._store.permissions.pop(permission_id, None) is None:
            return False
        for links in self._store.role_permissions.values():
            while permission_id in links:
                links.remove(permission_id)
        for key in [k for k in self._store.user_permissions if k[1] == permission_id]:
            del self._store.user_permissions[key]
        return True


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, role_id: UUID) -> Role | None:
        self._store.hit("roles.get_by_id")
        return self._store.role_with_permissions(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        self._store.hit("roles.get_by_name")
        for role in self._store.roles.values():
            if role.name == name:
                return self._store.role_with_permissions(role.id)
        return None

    async def list_active(self) -> list[Role]:
        self._store.hit("roles.list_active")
        return [
            self._store.role_with_permissions(r.id)
            for r in sorted(self._store.roles.values(), key=lambda r: r.name)
            if r.active
        ]

    async def create(self, role: Role) -> Role:
        self._store.hit("roles.create")
        self._store.roles[role.id] = replace(role, permissions=[])
        self._store.role_permissions[role.id] = [p.id for p in role.permissions]
        return role

    async def update(self, role: Role) -> None:
        self._store.hit("roles.update")
        self._store.roles[role.id] = replace(role, permissions=[])

    async def replace_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        self._store.hit("roles.replace_permissions")
        self._store.role_permissions[role_id] = list(permission_ids)

    async def delete(self, role_id: UUID) -> bool:
        self._store.hit("roles.delete")
        if self._store.roles.pop(role_id, None) is None:
            return False
        self._store.role_permissions.pop(role_id, None)
        for key in [k for k in self._store.user_roles if k[1] == role_id]:
            del self._store.user_roles[key]
        return True


class FakeUserRoleRepository:
    """In-memory user-role repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get(self, user_id: str, role_id: UUID) -> UserRole | None:
        self._store.hit("user_roles.get")
        return self._store.user_roles.get((user_id, role_id))

    async def list_by_user(self, user_id: str) -> list[UserRole]:
        self._store.hit("user_roles.list_by_user")
        return [
            replace(a, role=self._store.role_with_permissions(a.role_id))
            for (uid, _), a in self._store.user_roles.items()
            if uid == user_id
        ]

    async def list_user_ids_by_role(self, role_id: UUID) -> list[str]:
        self._store.hit("user_roles.list_user_ids_by_role")
        return [uid for (uid, rid) in self._store.user_roles if rid == role_id]

    async def upsert(self, user_role: UserRole) -> UserRole:
        self._store.hit("user_roles.upsert")
        key = (user_role.user_id, user_role.role_id)
        existing = self._store.user_roles.get(key)
        if existing:
            user_role = replace(
                existing,
                assigned_at=user_role.assigned_at,
                expires_at=user_role.expires_at,
            )
        self._store.user_roles[key] = user_role
        return replace(user_role)

    async def delete(self, user_id: str, role_id: UUID) -> bool:
        self._store.hit("user_roles.delete")
        return self._store.user_roles.pop((user_id, role_id), None) is not None


class FakeUserPermissionRepository:
    """In-memory user-permission repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get(self, user_id: str, permission_id: UUID) -> UserPermission | None:
        self._store.hit("user_permissions.get")
        return self._store.user_permissions.get((user_id, permission_id))

    async def list_active_by_user(self, user_id: str, now: datetime) -> list[UserPermission]:
        self._store.hit("user_permissions.list_active_by_user")
        return [
            replace(g, permission=self._store.permissions.get(g.permission_id))
            for (uid, _), g in self._store.user_permissions.items()
            if uid == user_id and (g.expires_at is None or g.expires_at > now)
        ]

    async def upsert(self, grant: UserPermission) -> UserPermission:
        self._store.hit("user_permissions.upsert")
        key = (grant.user_id, grant.permission_id)
        existing = self._store.user_permissions.get(key)
        if existing:
            grant = replace(
                existing,
                granted_at=grant.granted_at,
                expires_at=grant.expires_at,
            )
        self._store.user_permissions[key] = grant
        return replace(grant)

    async def delete(self, user_id: str, permission_id: UUID) -> bool:
        self._store.hit("user_permissions.delete")
        return self._store.user_permissions.pop((user_id, permission_id), None) is not None


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(self, user_id: str) -> User | None:
        self._store.hit("users.get_by_id")
        return self._store.users.get(user_id)

    async def list_by_role(self, role_id: UUID) -> list[User]:
        self._store.hit("users.list_by_role")
        return [
            self._store.users[uid]
            for (uid, rid) in self._store.user_roles
            if rid == role_id and uid in self._store.users
        ]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared FakeStore."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.permissions = FakePermissionRepository(self.store)
        self.roles = FakeRoleRepository(self.store)
        self.user_roles = FakeUserRoleRepository(self.store)
        self.user_permissions = FakeUserPermissionRepository(self.store)
        self.users = FakeUserRepository(self.store)
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: FakeStore):
    """Factory yielding a FakeUnitOfWork bound to store on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        yield uow
        await uow.commit()

    return _factory


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    """Fresh in-memory store for each test."""
    return FakeStore()


@pytest.fixture
def uow_factory(store: FakeStore):
    """Factory returning async context manager with FakeUnitOfWork."""
    return make_uow_factory(store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_permission_cache():
    """Mock for PermissionCacheInvalidator - records invalidations."""
    from unittest.mock import MagicMock

    return MagicMock()
