"""Seed default permission catalogue and roles.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PERMISSIONS = [
    ("*", "Full access", "admin"),
    ("users:create", "Create users", "users"),
    ("users:read", "Read users", "users"),
    ("users:update", "Update users", "users"),
    ("users:delete", "Delete users", "users"),
    ("users:list", "List users", "users"),
    ("users:export", "Export users", "users"),
    ("users:manage", "Manage user authorization", "users"),
    ("roles:create", "Create roles", "admin"),
    ("roles:read", "Read roles", "admin"),
    ("roles:update", "Update roles", "admin"),
    ("roles:delete", "Delete roles", "admin"),
    ("roles:assign", "Assign roles to users", "admin"),
    ("roles:revoke", "Remove roles from users", "admin"),
    ("permissions:create", "Create permissions", "admin"),
    ("permissions:read", "Read permissions", "admin"),
    ("permissions:update", "Update permissions", "admin"),
    ("permissions:delete", "Delete permissions", "admin"),
    ("permissions:assign", "Grant permissions to users", "admin"),
    ("permissions:revoke", "Revoke permissions from users", "admin"),
    ("permissions:manage", "Manage permissions", "admin"),
]

ROLES = {
    "SUPER_ADMIN": ("Full system access", ["*"]),
    "ADMIN": (
        "System administrator",
        [identifier for identifier, _, _ in PERMISSIONS if identifier != "*"],
    ),
    "MANAGER": (
        "User management",
        ["users:list", "users:read", "users:update", "users:create"],
    ),
    "USER": ("Regular user - read only", ["users:read"]),
}


def upgrade() -> None:
    permission = sa.table(
        "permission",
        sa.column("id", sa.UUID()),
        sa.column("identifier", sa.String()),
        sa.column("name", sa.String()),
        sa.column("category", sa.String()),
    )
    op.execute(
        permission.insert().values(
            [
                {"id": sa.func.gen_random_uuid(), "identifier": i, "name": n, "category": c}
                for i, n, c in PERMISSIONS
            ]
        )
    )

    for name, (description, identifiers) in ROLES.items():
        op.execute(
            sa.text(
                "INSERT INTO role (id, name, description) VALUES (gen_random_uuid(), :name, :description)"
            ).bindparams(name=name, description=description)
        )
        op.execute(
            sa.text(
                "INSERT INTO role_permission (role_id, permission_id) "
                "SELECT r.id, p.id FROM role r, permission p "
                "WHERE r.name = :name AND p.identifier = ANY(:identifiers)"
            ).bindparams(
                sa.bindparam("identifiers", type_=sa.ARRAY(sa.String())),
                name=name,
                identifiers=identifiers,
            )
        )


def downgrade() -> None:
    op.execute(
        sa.text("DELETE FROM role WHERE name = ANY(:names)").bindparams(
            sa.bindparam("names", type_=sa.ARRAY(sa.String())),
            names=list(ROLES),
        )
    )
    op.execute(
        sa.text("DELETE FROM permission WHERE identifier = ANY(:identifiers)").bindparams(
            sa.bindparam("identifiers", type_=sa.ARRAY(sa.String())),
            identifiers=[identifier for identifier, _, _ in PERMISSIONS],
        )
    )
