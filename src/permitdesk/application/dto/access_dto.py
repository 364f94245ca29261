"""Access resolution DTOs."""

from dataclasses import dataclass, field

from permitdesk.domain.entities import ResolvedAccessProfile
from permitdesk.domain.exceptions import PermitDeskError


@dataclass
class AccessResolution:
    """Output of a resolver run: the profile, or None when logged out."""

    profile: ResolvedAccessProfile | None
    warnings: list[PermitDeskError] = field(default_factory=list)
    seeded_access: bool = False
    seeded_capabilities: bool = False
    profile_unverified: bool = False
