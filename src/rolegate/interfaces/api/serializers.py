"""Entity to JSON-ready dict conversion (camelCase keys)."""

from datetime import UTC, datetime

from rolegate.application.dto.permission_detail import UserPermissionsDetail
from rolegate.domain.entities import Permission, Role, User, UserPermission, UserRole


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def permission_to_dict(p: Permission) -> dict:
    return {
        "id": str(p.id),
        "identifier": p.identifier,
        "name": p.name,
        "description": p.description,
        "category": p.category,
        "active": p.active,
    }


def role_to_dict(r: Role) -> dict:
    return {
        "id": str(r.id),
        "name": r.name,
        "description": r.description,
        "active": r.active,
        "permissions": [
            {"id": str(p.id), "identifier": p.identifier, "name": p.name}
            for p in r.permissions
        ],
    }


def user_to_dict(u: User) -> dict:
    return {
        "id": u.id,
        "email": u.email,
        "login": u.login,
        "name": u.name,
        "active": u.active,
    }


def grant_to_dict(g: UserPermission) -> dict:
    return {
        "userId": g.user_id,
        "permissionId": str(g.permission_id),
        "permission": permission_to_dict(g.permission) if g.permission else None,
        "grantedAt": _iso(g.granted_at),
        "expiresAt": _iso(g.expires_at),
    }


def assignment_to_dict(a: UserRole) -> dict:
    return {
        "userId": a.user_id,
        "roleId": str(a.role_id),
        "role": role_to_dict(a.role) if a.role else None,
        "assignedAt": _iso(a.assigned_at),
        "expiresAt": _iso(a.expires_at),
    }


def detail_to_dict(d: UserPermissionsDetail) -> dict:
    return {
        "userId": d.user_id,
        "directPermissions": [
            {
                "id": str(dp.permission.id),
                "identifier": dp.permission.identifier,
                "name": dp.permission.name,
                "category": dp.permission.category,
                "grantedAt": _iso(dp.granted_at),
                "grantedBy": dp.granted_by,
                "expiresAt": _iso(dp.expires_at),
            }
            for dp in d.direct_permissions
        ],
        "rolePermissions": [
            {
                "roleId": str(rp.role_id),
                "roleName": rp.role_name,
                "permissions": [
                    {
                        "id": str(p.id),
                        "identifier": p.identifier,
                        "name": p.name,
                        "category": p.category,
                    }
                    for p in rp.permissions
                ],
            }
            for rp in d.role_permissions
        ],
    }
