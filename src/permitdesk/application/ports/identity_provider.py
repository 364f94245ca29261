"""Identity provider port - authentication collaborator."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class AuthenticatedUser:
    """Identity and display hints from the authentication record."""

    identity: str
    email: str | None = None
    full_name: str | None = None

    @property
    def fallback_name(self) -> str:
        if self.full_name:
            return self.full_name
        if self.email:
            return self.email.split("@")[0]
        return "User"


class IdentityProvider(Protocol):
    """Port for the current authenticated identity."""

    async def current_user(self) -> AuthenticatedUser | None: ...

    async def sign_out(self) -> None: ...
