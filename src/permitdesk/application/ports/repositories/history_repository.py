"""Permit history repository port."""

from typing import Protocol

from permitdesk.domain.entities import HistoryEntry


class HistoryRepository(Protocol):
    """Append-only port for permit history.

    Lists are newest first; on equal timestamps the later insert comes first.
    """

    async def append(self, entry: HistoryEntry) -> HistoryEntry: ...

    async def append_batch(self, entries: list[HistoryEntry]) -> None: ...

    async def list_for_subject(self, subject_id: str) -> list[HistoryEntry]: ...
