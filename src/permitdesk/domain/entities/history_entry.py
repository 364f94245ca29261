"""History entry - immutable audit record."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

PERMIT_ENTITY = "permit"
AUTH_ENTITY = "auth"
USER_ENTITY = "user"


@dataclass(frozen=True)
class HistoryEntry:
    """Who did what to which subject, and when."""

    id: UUID
    subject_id: str
    action: str
    actor_identity: str | None
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    entity_type: str = PERMIT_ENTITY


@dataclass(frozen=True)
class LoginRecord:
    """Login attempt of an identity."""

    id: UUID
    identity: str
    login_at: datetime
    success: bool = True
    display_name: str | None = None
    email: str | None = None
