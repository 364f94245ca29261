"""Keycloak OIDC identity provider for a session's tokens."""

import asyncio
import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from permitdesk.application.ports import AuthenticatedUser

logger = logging.getLogger("permitdesk.auth")


def user_from_token_info(token_info: dict) -> AuthenticatedUser | None:
    """Map an introspection response to the authenticated user, None when inactive."""
    if not token_info.get("active"):
        return None
    subject = token_info.get("sub")
    if not subject:
        return None
    return AuthenticatedUser(
        identity=subject,
        email=token_info.get("email"),
        full_name=token_info.get("name") or token_info.get("preferred_username"),
    )


class KeycloakIdentityProvider:
    """Keycloak OIDC - introspects the session's access token and signs out."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        access_token: str | None = None,
        refresh_token: str | None = None,
        keycloak: KeycloakOpenID | None = None,
    ) -> None:
        self._keycloak = keycloak or KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._access_token = access_token
        self._refresh_token = refresh_token

    async def current_user(self) -> AuthenticatedUser | None:
        """Validate the access token and return user info, or None."""
        if not self._access_token:
            return None
        try:
            token_info = await asyncio.to_thread(self._keycloak.introspect, self._access_token)
        except KeycloakError as exc:
            logger.warning("Token introspection failed: %s", exc)
            return None
        return user_from_token_info(token_info)

    async def sign_out(self) -> None:
        """End the Keycloak session and forget the tokens."""
        refresh_token = self._refresh_token
        self._access_token = None
        self._refresh_token = None
        if not refresh_token:
            return
        try:
            await asyncio.to_thread(self._keycloak.logout, refresh_token)
        except KeycloakError as exc:
            logger.warning("Keycloak logout failed: %s", exc)
