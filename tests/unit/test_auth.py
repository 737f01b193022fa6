"""Unit tests for credential verifiers and the auth middleware."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from keycloak.exceptions import KeycloakError

from rolegate.application.ports import VerifiedUser
from rolegate.infrastructure.auth.header_verifier import TrustedHeaderVerifier
from rolegate.infrastructure.auth.keycloak_verifier import KeycloakCredentialVerifier
from rolegate.interfaces.api.middleware.auth import AuthMiddleware


@pytest.mark.asyncio
async def test_trusted_verifier() -> None:
    verifier = TrustedHeaderVerifier()
    assert await verifier.verify(" u1 ") == VerifiedUser(user_id="u1")
    assert await verifier.verify("  ") is None


@pytest.fixture
def keycloak():
    with patch("rolegate.infrastructure.auth.keycloak_verifier.KeycloakOpenID") as cls:
        client = cls.return_value
        client.a_introspect = AsyncMock()
        yield client


def _keycloak_verifier() -> KeycloakCredentialVerifier:
    return KeycloakCredentialVerifier("http://kc", "realm", "client", "secret")


@pytest.mark.asyncio
async def test_keycloak_active_token(keycloak) -> None:
    keycloak.a_introspect.return_value = {
        "active": True,
        "sub": "abc",
        "email": "a@example.com",
        "preferred_username": "alice",
    }

    user = await _keycloak_verifier().verify("token")

    assert user == VerifiedUser(user_id="abc", email="a@example.com", username="alice")
    keycloak.a_introspect.assert_awaited_once_with("token")
    keycloak.introspect.assert_not_called()


@pytest.mark.asyncio
async def test_keycloak_inactive_token(keycloak) -> None:
    keycloak.a_introspect.return_value = {"active": False}
    assert await _keycloak_verifier().verify("token") is None


@pytest.mark.asyncio
async def test_keycloak_error_rejects_token(keycloak) -> None:
    keycloak.a_introspect.side_effect = KeycloakError("unreachable")
    assert await _keycloak_verifier().verify("token") is None


def _request(header: str | None):
    req = MagicMock()
    req.context = SimpleNamespace()
    req.get_header.return_value = header
    return req


@pytest.mark.asyncio
async def test_middleware_sets_user() -> None:
    middleware = AuthMiddleware(TrustedHeaderVerifier())
    req = _request("Bearer u1")

    await middleware.process_request(req, MagicMock())

    assert req.context.user.user_id == "u1"


@pytest.mark.asyncio
async def test_middleware_awaits_verifier() -> None:
    verifier = MagicMock()
    verifier.verify = AsyncMock(return_value=VerifiedUser(user_id="abc", username="alice"))
    req = _request("Bearer tok")

    await AuthMiddleware(verifier).process_request(req, MagicMock())

    verifier.verify.assert_awaited_once_with("tok")
    assert req.context.user.username == "alice"


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [None, "", "Token u1", "Bearer "])
async def test_middleware_leaves_user_empty(header) -> None:
    middleware = AuthMiddleware(TrustedHeaderVerifier())
    req = _request(header)

    await middleware.process_request(req, MagicMock())

    assert req.context.user is None
