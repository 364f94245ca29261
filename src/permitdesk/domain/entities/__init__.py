"""Domain entities."""

from permitdesk.domain.entities.access_profile import ResolvedAccessProfile
from permitdesk.domain.entities.capability_flags import CapabilityFlags
from permitdesk.domain.entities.history_entry import HistoryEntry, LoginRecord
from permitdesk.domain.entities.page_access import PageAccessEntry
from permitdesk.domain.entities.permit import Permit
from permitdesk.domain.entities.user_profile import UserProfile

__all__ = [
    "CapabilityFlags",
    "HistoryEntry",
    "LoginRecord",
    "PageAccessEntry",
    "Permit",
    "ResolvedAccessProfile",
    "UserProfile",
]
