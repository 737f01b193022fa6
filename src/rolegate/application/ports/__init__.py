"""Application ports - interfaces for external adapters."""

from rolegate.application.ports.authorization_guard import AuthorizationGuard
from rolegate.application.ports.credential_verifier import CredentialVerifier, VerifiedUser
from rolegate.application.ports.permission_cache import PermissionCacheInvalidator
from rolegate.application.ports.permission_resolver import PermissionResolver
from rolegate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AuthorizationGuard",
    "CredentialVerifier",
    "PermissionCacheInvalidator",
    "PermissionResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "VerifiedUser",
]
