"""Resolved access profile - session scoped view of a user's grants."""

from dataclasses import dataclass, field

from permitdesk.domain.entities.capability_flags import CapabilityFlags
from permitdesk.domain.entities.page_access import PageAccessEntry
from permitdesk.domain.entities.user_profile import UserProfile
from permitdesk.domain.value_objects import PageId, Role


@dataclass(frozen=True)
class ResolvedAccessProfile:
    """Profile, page grants and capabilities resolved at session start.

    Rebuilt wholesale on refresh, never patched field by field.
    """

    profile: UserProfile
    page_access: dict[PageId, PageAccessEntry] = field(default_factory=dict)
    capabilities: CapabilityFlags = field(default_factory=CapabilityFlags)

    @property
    def identity(self) -> str:
        return self.profile.identity

    @property
    def role(self) -> Role:
        return self.profile.role

    @property
    def is_admin(self) -> bool:
        return self.profile.role == Role.ADMIN

    def actor_metadata(self) -> dict[str, str | None]:
        """Name and email attached to audit entries written by this actor."""
        return {"user_name": self.profile.display_name, "user_email": self.profile.email}
