"""Domain exceptions."""


class RoleGateError(Exception):
    """Base exception for RoleGate."""

    pass


class NotFoundError(RoleGateError):
    """Referenced user, permission, role or grant does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")


class ValidationError(RoleGateError):
    """Validation failed for input data."""

    pass


class StoreError(RoleGateError):
    """Underlying persistence operation failed."""

    pass


class ConflictError(StoreError):
    """Write violated a uniqueness constraint."""

    pass
