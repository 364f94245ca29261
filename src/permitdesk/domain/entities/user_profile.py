"""User profile entity."""

from dataclasses import dataclass

from permitdesk.domain.value_objects import Role


def initials_for(name: str) -> str:
    """First letters of the first two words, upper-cased."""
    return "".join(part[0] for part in name.split()[:2]).upper()


@dataclass
class UserProfile:
    """UserProfile - display data and role of an authenticated identity."""

    identity: str
    display_name: str
    role: Role = Role.USER
    email: str | None = None
    avatar: str | None = None
