"""API resource tests."""

from uuid import uuid4

from falcon.testing import TestClient

from rolegate.domain.exceptions import StoreError

from tests.api.conftest import auth
from tests.conftest import FakeStore


class TestAuthentication:
    def test_missing_token_is_unauthorized(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/roles")
        assert result.status_code == 401
        assert result.json == {"error": "Unauthorized", "message": "User not identified"}

    def test_non_bearer_header_is_unauthorized(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/roles", headers={"Authorization": "Basic abc"})
        assert result.status_code == 401

    def test_health_needs_no_token(self, client: TestClient) -> None:
        assert client.simulate_get("/v1/health").status_code == 200


class TestUserPermissions:
    def test_user_reads_own_permissions(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert result.status_code == 200
        assert result.json == {"userId": "editor", "permissions": ["posts:*", "users:read"]}

    def test_other_users_need_manage_permission(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/admin/permissions", headers=auth("editor"))
        assert result.status_code == 403
        assert result.json["error"] == "Forbidden"

    def test_manager_reads_other_users(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/editor/roles", headers=auth("manager"))
        assert result.status_code == 200
        assert result.json == {"userId": "editor", "roles": ["EDITOR"]}

    def test_super_admin_permissions_collapse(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/admin/permissions", headers=auth("admin"))
        assert result.json["permissions"] == ["*"]

    def test_unknown_user_has_no_permissions(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/ghost/permissions", headers=auth("admin"))
        assert result.status_code == 200
        assert result.json["permissions"] == []

    def test_permission_detail(self, client: TestClient) -> None:
        result = client.simulate_get(
            "/v1/users/editor/permissions/detail", headers=auth("editor")
        )
        assert result.status_code == 200
        body = result.json
        assert body["userId"] == "editor"
        assert [d["identifier"] for d in body["directPermissions"]] == ["users:read"]
        assert body["rolePermissions"][0]["roleName"] == "EDITOR"
        assert body["rolePermissions"][0]["permissions"][0]["identifier"] == "posts:*"


class TestGrantAndRevoke:
    def test_grant_is_visible_immediately(self, client: TestClient, seeded: FakeStore) -> None:
        reports = seeded.add_permission("reports:read")
        # warm the cache
        client.simulate_get("/v1/users/reader/permissions", headers=auth("reader"))

        result = client.simulate_post(
            "/v1/users/permissions",
            headers=auth("manager"),
            json={"userId": "reader", "permissionId": str(reports.id)},
        )
        assert result.status_code == 201
        assert result.json["userId"] == "reader"
        assert result.json["permission"]["identifier"] == "reports:read"
        assert result.json["expiresAt"] is None

        after = client.simulate_get("/v1/users/reader/permissions", headers=auth("reader"))
        assert after.json["permissions"] == ["reports:read"]

    def test_grant_with_expiry(self, client: TestClient, seeded: FakeStore) -> None:
        reports = seeded.add_permission("reports:read")
        result = client.simulate_post(
            "/v1/users/permissions",
            headers=auth("admin"),
            json={
                "userId": "reader",
                "permissionId": str(reports.id),
                "expiresAt": "2999-01-01T00:00:00Z",
            },
        )
        assert result.status_code == 201
        assert result.json["expiresAt"] == "2999-01-01T00:00:00+00:00"

    def test_grant_requires_all_permissions(self, client: TestClient, seeded: FakeStore) -> None:
        reports = seeded.add_permission("reports:read")
        result = client.simulate_post(
            "/v1/users/permissions",
            headers=auth("editor"),
            json={"userId": "reader", "permissionId": str(reports.id)},
        )
        assert result.status_code == 403

    def test_grant_rejects_malformed_body(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/users/permissions",
            headers=auth("admin"),
            json={"userId": "reader", "permissionId": "not-a-uuid"},
        )
        assert result.status_code == 400
        assert result.json["error"] == "Bad Request"

    def test_grant_unknown_permission(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/users/permissions",
            headers=auth("admin"),
            json={"userId": "reader", "permissionId": str(uuid4())},
        )
        assert result.status_code == 404
        assert result.json["error"] == "Not Found"

    def test_revoke(self, client: TestClient, seeded: FakeStore) -> None:
        users_read = seeded.permission("users:read")
        assert client.simulate_get(
            "/v1/users/editor/permissions", headers=auth("editor")
        ).json["permissions"] == ["posts:*", "users:read"]

        result = client.simulate_delete(
            f"/v1/users/editor/permissions/{users_read.id}", headers=auth("admin")
        )
        assert result.status_code == 204

        after = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert after.json["permissions"] == ["posts:*"]

    def test_revoke_needs_revoke_permission(self, client: TestClient, seeded: FakeStore) -> None:
        users_read = seeded.permission("users:read")
        result = client.simulate_delete(
            f"/v1/users/editor/permissions/{users_read.id}", headers=auth("manager")
        )
        assert result.status_code == 403

    def test_revoke_missing_grant(self, client: TestClient) -> None:
        result = client.simulate_delete(
            f"/v1/users/editor/permissions/{uuid4()}", headers=auth("admin")
        )
        assert result.status_code == 404

    def test_revoke_invalid_id(self, client: TestClient) -> None:
        result = client.simulate_delete(
            "/v1/users/editor/permissions/abc", headers=auth("admin")
        )
        assert result.status_code == 400


class TestRoleAssignments:
    def test_assign_and_remove(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")

        result = client.simulate_post(
            "/v1/users/roles",
            headers=auth("admin"),
            json={"userId": "reader", "roleId": str(editor_role.id)},
        )
        assert result.status_code == 201
        assert result.json["role"]["name"] == "EDITOR"
        assert client.simulate_get(
            "/v1/users/reader/permissions", headers=auth("reader")
        ).json["permissions"] == ["posts:*"]

        result = client.simulate_delete(
            f"/v1/users/reader/roles/{editor_role.id}", headers=auth("admin")
        )
        assert result.status_code == 204
        assert client.simulate_get(
            "/v1/users/reader/permissions", headers=auth("reader")
        ).json["permissions"] == []

    def test_assign_needs_roles_assign(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        result = client.simulate_post(
            "/v1/users/roles",
            headers=auth("manager"),
            json={"userId": "reader", "roleId": str(editor_role.id)},
        )
        assert result.status_code == 403

    def test_assign_unknown_user(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        result = client.simulate_post(
            "/v1/users/roles",
            headers=auth("admin"),
            json={"userId": "ghost", "roleId": str(editor_role.id)},
        )
        assert result.status_code == 404


class TestRoles:
    def test_list_roles(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/roles", headers=auth("manager"))
        assert result.status_code == 200
        names = [r["name"] for r in result.json["items"]]
        assert names == ["EDITOR", "MANAGER", "SUPER_ADMIN"]

    def test_create_role(self, client: TestClient, seeded: FakeStore) -> None:
        publish = seeded.permission("posts:publish")
        result = client.simulate_post(
            "/v1/roles",
            headers=auth("admin"),
            json={"name": "PUBLISHER", "permissionIds": [str(publish.id)]},
        )
        assert result.status_code == 201
        assert result.json["name"] == "PUBLISHER"
        assert result.json["permissions"][0]["identifier"] == "posts:publish"

    def test_create_duplicate_role(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/roles", headers=auth("admin"), json={"name": "EDITOR"}
        )
        assert result.status_code == 409
        assert result.json["error"] == "Conflict"

    def test_create_role_forbidden(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/roles", headers=auth("manager"), json={"name": "X"}
        )
        assert result.status_code == 403

    def test_get_role(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        result = client.simulate_get(f"/v1/roles/{editor_role.id}", headers=auth("manager"))
        assert result.status_code == 200
        assert result.json["permissions"][0]["identifier"] == "posts:*"

    def test_get_role_not_found(self, client: TestClient) -> None:
        assert client.simulate_get(
            f"/v1/roles/{uuid4()}", headers=auth("admin")
        ).status_code == 404
        assert client.simulate_get("/v1/roles/bad", headers=auth("admin")).status_code == 400

    def test_update_role_permissions_reaches_holders(
        self, client: TestClient, seeded: FakeStore
    ) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        publish = seeded.permission("posts:publish")
        client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))

        result = client.simulate_put(
            f"/v1/roles/{editor_role.id}",
            headers=auth("admin"),
            json={"permissionIds": [str(publish.id)]},
        )
        assert result.status_code == 200
        assert [p["identifier"] for p in result.json["permissions"]] == ["posts:publish"]

        after = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert after.json["permissions"] == ["posts:publish", "users:read"]

    def test_update_role_rejects_non_boolean_active(
        self, client: TestClient, seeded: FakeStore
    ) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        result = client.simulate_put(
            f"/v1/roles/{editor_role.id}", headers=auth("admin"), json={"active": "no"}
        )
        assert result.status_code == 400

    def test_role_users(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        result = client.simulate_get(
            f"/v1/roles/{editor_role.id}/users", headers=auth("manager")
        )
        assert result.status_code == 200
        assert [u["id"] for u in result.json["items"]] == ["editor"]

    def test_delete_role_reaches_holders(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))

        result = client.simulate_delete(f"/v1/roles/{editor_role.id}", headers=auth("admin"))
        assert result.status_code == 204
        assert editor_role.id not in seeded.roles

        after = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert after.json["permissions"] == ["users:read"]

    def test_delete_role_not_found(self, client: TestClient) -> None:
        assert client.simulate_delete(
            f"/v1/roles/{uuid4()}", headers=auth("admin")
        ).status_code == 404
        assert client.simulate_delete("/v1/roles/bad", headers=auth("admin")).status_code == 400

    def test_delete_role_forbidden(self, client: TestClient, seeded: FakeStore) -> None:
        editor_role = next(r for r in seeded.roles.values() if r.name == "EDITOR")
        result = client.simulate_delete(f"/v1/roles/{editor_role.id}", headers=auth("manager"))
        assert result.status_code == 403
        assert editor_role.id in seeded.roles


class TestPermissionCatalogue:
    def test_list_by_category(self, client: TestClient) -> None:
        result = client.simulate_get(
            "/v1/permissions", params={"category": "posts"}, headers=auth("admin")
        )
        assert result.status_code == 200
        assert [p["identifier"] for p in result.json["items"]] == ["posts:publish"]

    def test_category_route_only_needs_authentication(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/permissions/categories/posts", headers=auth("reader"))
        assert result.status_code == 200
        assert len(result.json["items"]) == 1

    def test_list_requires_read_permission(self, client: TestClient) -> None:
        assert client.simulate_get("/v1/permissions", headers=auth("reader")).status_code == 403

    def test_create_permission(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/permissions",
            headers=auth("admin"),
            json={"identifier": "reports:export", "name": "Export", "category": "reports"},
        )
        assert result.status_code == 201
        assert result.json["identifier"] == "reports:export"

    def test_create_permission_invalid_identifier(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/permissions",
            headers=auth("admin"),
            json={"identifier": "reports", "name": "Reports", "category": "reports"},
        )
        assert result.status_code == 400
        assert result.json["error"] == "Validation Error"

    def test_create_permission_missing_field(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/permissions", headers=auth("admin"), json={"identifier": "a:b"}
        )
        assert result.status_code == 400
        assert result.json["error"] == "Bad Request"

    def test_get_permission(self, client: TestClient, seeded: FakeStore) -> None:
        publish = seeded.permission("posts:publish")
        result = client.simulate_get(f"/v1/permissions/{publish.id}", headers=auth("admin"))
        assert result.status_code == 200
        assert result.json["identifier"] == "posts:publish"

    def test_get_permission_not_found(self, client: TestClient) -> None:
        result = client.simulate_get(f"/v1/permissions/{uuid4()}", headers=auth("admin"))
        assert result.status_code == 404
        assert result.json["error"] == "Not Found"
        assert client.simulate_get(
            "/v1/permissions/bad", headers=auth("admin")
        ).status_code == 400

    def test_rename_permission_reaches_grantees(
        self, client: TestClient, seeded: FakeStore
    ) -> None:
        users_read = seeded.permission("users:read")
        client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))

        result = client.simulate_put(
            f"/v1/permissions/{users_read.id}",
            headers=auth("admin"),
            json={"identifier": "users:view", "description": "See user profiles"},
        )
        assert result.status_code == 200
        assert result.json["identifier"] == "users:view"
        assert result.json["category"] == "general"

        after = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert after.json["permissions"] == ["posts:*", "users:view"]

    def test_update_permission_rejects_bad_types(
        self, client: TestClient, seeded: FakeStore
    ) -> None:
        publish = seeded.permission("posts:publish")
        for body in ({"active": "no"}, {"name": 5}):
            result = client.simulate_put(
                f"/v1/permissions/{publish.id}", headers=auth("admin"), json=body
            )
            assert result.status_code == 400
            assert result.json["error"] == "Bad Request"

    def test_update_permission_conflict(self, client: TestClient, seeded: FakeStore) -> None:
        publish = seeded.permission("posts:publish")
        result = client.simulate_put(
            f"/v1/permissions/{publish.id}",
            headers=auth("admin"),
            json={"identifier": "users:read"},
        )
        assert result.status_code == 409

    def test_update_permission_forbidden(self, client: TestClient, seeded: FakeStore) -> None:
        publish = seeded.permission("posts:publish")
        result = client.simulate_put(
            f"/v1/permissions/{publish.id}", headers=auth("manager"), json={"name": "X"}
        )
        assert result.status_code == 403

    def test_delete_permission_reaches_grantees(
        self, client: TestClient, seeded: FakeStore
    ) -> None:
        users_read = seeded.permission("users:read")
        client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))

        result = client.simulate_delete(f"/v1/permissions/{users_read.id}", headers=auth("admin"))
        assert result.status_code == 204
        assert users_read.id not in seeded.permissions

        after = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert after.json["permissions"] == ["posts:*"]

    def test_delete_permission_not_found(self, client: TestClient) -> None:
        result = client.simulate_delete(f"/v1/permissions/{uuid4()}", headers=auth("admin"))
        assert result.status_code == 404

    def test_delete_permission_forbidden(self, client: TestClient, seeded: FakeStore) -> None:
        publish = seeded.permission("posts:publish")
        result = client.simulate_delete(f"/v1/permissions/{publish.id}", headers=auth("manager"))
        assert result.status_code == 403
        assert publish.id in seeded.permissions


class TestPermissionCacheFlush:
    def test_flush_one_user_picks_up_out_of_band_change(
        self, client: TestClient, seeded: FakeStore
    ) -> None:
        before = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert before.json["permissions"] == ["posts:*", "users:read"]
        seeded.grant("editor", "reports:read")

        stale = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert stale.json["permissions"] == ["posts:*", "users:read"]

        result = client.simulate_delete(
            "/v1/permission-cache", params={"userId": "editor"}, headers=auth("admin")
        )
        assert result.status_code == 204

        after = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert after.json["permissions"] == ["posts:*", "reports:read", "users:read"]

    def test_flush_all(self, client: TestClient, seeded: FakeStore, permission_cache) -> None:
        client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        client.simulate_get("/v1/users/manager/permissions", headers=auth("manager"))

        result = client.simulate_delete("/v1/permission-cache", headers=auth("admin"))
        assert result.status_code == 204
        assert permission_cache.get("editor") is None
        assert permission_cache.get("manager") is None

    def test_flush_requires_super_admin_role(self, client: TestClient) -> None:
        result = client.simulate_delete("/v1/permission-cache", headers=auth("manager"))
        assert result.status_code == 403
        assert result.json["error"] == "Forbidden"


class TestStoreErrors:
    def test_store_failure_is_500(self, client: TestClient, seeded: FakeStore) -> None:
        seeded.fail_with = StoreError("connection refused")
        result = client.simulate_get("/v1/users/editor/permissions", headers=auth("editor"))
        assert result.status_code == 500
        assert result.json["error"] == "Store Error"
