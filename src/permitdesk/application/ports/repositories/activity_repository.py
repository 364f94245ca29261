"""User activity and login repository port."""

from typing import Protocol

from permitdesk.domain.entities import HistoryEntry, LoginRecord


class ActivityRepository(Protocol):
    """Append-only port for user_login and user_activity.

    Lists are newest first; on equal timestamps the later insert comes first.
    """

    async def record_login(self, record: LoginRecord) -> None: ...

    async def append(self, entry: HistoryEntry) -> HistoryEntry: ...

    async def list_for_identity(self, identity: str) -> list[HistoryEntry]: ...
