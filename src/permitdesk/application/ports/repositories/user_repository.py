"""User repository port."""

from datetime import datetime
from typing import Protocol

from permitdesk.domain.entities import UserProfile


class UserRepository(Protocol):
    """Port for user profile persistence."""

    async def get_by_identity(self, identity: str) -> UserProfile | None: ...

    async def upsert(self, profile: UserProfile) -> UserProfile: ...

    async def touch_login(
        self, identity: str, login_at: datetime, avatar: str | None = None
    ) -> None: ...
