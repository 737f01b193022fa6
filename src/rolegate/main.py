"""Application entry point and composition root."""

import logging

import uvicorn
from falcon.asgi import App

from rolegate import __version__
from rolegate.config import Settings, get_settings
from rolegate.infrastructure.auth.header_verifier import TrustedHeaderVerifier
from rolegate.infrastructure.auth.keycloak_verifier import KeycloakCredentialVerifier
from rolegate.infrastructure.permission.authorization_guard import RoleGateAuthorizationGuard
from rolegate.infrastructure.permission.permission_cache import PermissionCache
from rolegate.infrastructure.permission.permission_resolver import StorePermissionResolver
from rolegate.infrastructure.persistence.postgres.connection import create_pool
from rolegate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from rolegate.interfaces.api.app import build_use_cases, create_app
from rolegate.interfaces.api.middleware.auth import AuthMiddleware
from rolegate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_verifier(settings: Settings):
    """Keycloak when a client secret is configured, trusted tokens in development."""
    if settings.keycloak_client_secret:
        return KeycloakCredentialVerifier(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
    if settings.environment == "production":
        raise RuntimeError("KEYCLOAK_CLIENT_SECRET is required in production")
    logger.warning("No Keycloak secret configured, trusting bearer tokens as user ids")
    return TrustedHeaderVerifier()


def create_rolegate_app(settings: Settings | None = None) -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(settings)
    uow_factory = create_uow_factory(pool)

    resolver = StorePermissionResolver(
        uow_factory,
        enforce_role_expiry=settings.enforce_role_expiry,
    )
    permission_cache = PermissionCache(
        resolver,
        ttl_seconds=settings.permission_cache_ttl_seconds,
        max_entries=settings.permission_cache_max_entries,
    )
    guard = RoleGateAuthorizationGuard(permission_cache, resolver)
    use_cases = build_use_cases(
        uow_factory,
        permission_cache,
        enforce_role_expiry=settings.enforce_role_expiry,
    )

    return create_app(
        guard,
        uow_factory,
        use_cases,
        permission_cache,
        middleware=[
            PoolLifespanMiddleware(pool, permission_cache),
            AuthMiddleware(create_verifier(settings)),
        ],
    )


def main() -> None:
    """CLI entry point - run uvicorn server."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("RoleGate v%s starting (%s)", __version__, settings.environment)
    app = create_rolegate_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
