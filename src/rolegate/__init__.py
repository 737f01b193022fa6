"""RoleGate - role and permission based authorization service."""

__version__ = "0.1.0"
