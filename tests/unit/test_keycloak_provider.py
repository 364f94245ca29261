"""Unit tests for the Keycloak identity provider."""

from unittest.mock import MagicMock

import pytest
from keycloak.exceptions import KeycloakError

from permitdesk.infrastructure.auth.keycloak_provider import (
    KeycloakIdentityProvider,
    user_from_token_info,
)


def _provider(keycloak: MagicMock, access_token: str | None = "at", refresh_token: str | None = "rt"):
    return KeycloakIdentityProvider(
        server_url="http://kc",
        realm="permits",
        client_id="permitdesk",
        access_token=access_token,
        refresh_token=refresh_token,
        keycloak=keycloak,
    )


def test_inactive_token_has_no_user() -> None:
    assert user_from_token_info({"active": False, "sub": "u1"}) is None


def test_token_info_maps_to_user() -> None:
    user = user_from_token_info(
        {"active": True, "sub": "u1", "email": "a@example.com", "preferred_username": "alice"}
    )
    assert user.identity == "u1"
    assert user.full_name == "alice"
    assert user.fallback_name == "alice"


@pytest.mark.asyncio
async def test_current_user_introspects_token() -> None:
    keycloak = MagicMock()
    keycloak.introspect.return_value = {"active": True, "sub": "u1", "name": "Alice Smith"}

    user = await _provider(keycloak).current_user()

    keycloak.introspect.assert_called_once_with("at")
    assert user.full_name == "Alice Smith"


@pytest.mark.asyncio
async def test_introspection_error_means_logged_out() -> None:
    keycloak = MagicMock()
    keycloak.introspect.side_effect = KeycloakError("down")
    assert await _provider(keycloak).current_user() is None


@pytest.mark.asyncio
async def test_sign_out_forgets_tokens() -> None:
    keycloak = MagicMock()
    provider = _provider(keycloak)

    await provider.sign_out()

    keycloak.logout.assert_called_once_with("rt")
    assert await provider.current_user() is None
    keycloak.introspect.assert_not_called()
