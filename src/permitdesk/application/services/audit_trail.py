"""Audit trail recorder - append-only history of permits and logins."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from permitdesk.domain.entities import HistoryEntry, LoginRecord
from permitdesk.domain.entities.history_entry import AUTH_ENTITY, PERMIT_ENTITY
from permitdesk.domain.exceptions import AuditWriteFailed, StoreError

logger = logging.getLogger("permitdesk.audit")

LOGIN_ACTION = "login"


def utc_now() -> datetime:
    return datetime.now(UTC)


class AuditTrailRecorder:
    """Appends history entries. Never edits or removes, never deduplicates."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    def entry(
        self,
        subject_id: object,
        action: str,
        actor_identity: str | None,
        metadata: dict[str, Any] | None = None,
        entity_type: str = PERMIT_ENTITY,
    ) -> HistoryEntry:
        """Build an entry stamped with the current time."""
        return HistoryEntry(
            id=uuid4(),
            subject_id=str(subject_id),
            action=action,
            actor_identity=actor_identity,
            timestamp=self._clock(),
            metadata=dict(metadata or {}),
            entity_type=entity_type,
        )

    async def record(
        self,
        subject_id: object,
        action: str,
        actor_identity: str | None,
        metadata: dict[str, Any] | None = None,
    ) -> HistoryEntry:
        """Append one entry to the history of permit subject_id."""
        entry = self.entry(subject_id, action, actor_identity, metadata)
        try:
            async with self._uow_factory() as uow:
                await uow.history.append(entry)
        except StoreError as exc:
            raise AuditWriteFailed(f"Could not record '{action}' for {entry.subject_id}") from exc
        logger.debug("Recorded %s '%s' by %s", entry.subject_id, action, actor_identity)
        return entry

    async def record_many(self, entries: list[HistoryEntry]) -> None:
        """Append several permit entries in one unit of work."""
        if not entries:
            return
        try:
            async with self._uow_factory() as uow:
                await uow.history.append_batch(entries)
        except StoreError as exc:
            raise AuditWriteFailed(f"Could not record {len(entries)} history entries") from exc

    async def record_login(
        self,
        identity: str,
        display_name: str | None = None,
        email: str | None = None,
        success: bool = True,
    ) -> HistoryEntry:
        """Append a login row and a login activity entry for identity."""
        now = self._clock()
        record = LoginRecord(
            id=uuid4(),
            identity=identity,
            login_at=now,
            success=success,
            display_name=display_name,
            email=email,
        )
        entry = HistoryEntry(
            id=uuid4(),
            subject_id=identity,
            action=LOGIN_ACTION,
            actor_identity=identity,
            timestamp=now,
            metadata={"user_name": display_name, "user_email": email},
            entity_type=AUTH_ENTITY,
        )
        try:
            async with self._uow_factory() as uow:
                await uow.activity.record_login(record)
                await uow.activity.append(entry)
        except StoreError as exc:
            raise AuditWriteFailed(f"Could not record login for {identity}") from exc
        return entry

    async def history_for(self, subject_id: object) -> list[HistoryEntry]:
        """Entries of a permit, newest first as ordered by the store."""
        async with self._uow_factory() as uow:
            return await uow.history.list_for_subject(str(subject_id))

    async def record_activity(
        self,
        actor_identity: str,
        action: str,
        entity_type: str,
        entity_id: object,
        metadata: dict[str, Any] | None = None,
    ) -> HistoryEntry:
        """Append a user activity entry: actor did action on an entity."""
        entry = self.entry(entity_id, action, actor_identity, metadata, entity_type)
        try:
            async with self._uow_factory() as uow:
                await uow.activity.append(entry)
        except StoreError as exc:
            raise AuditWriteFailed(f"Could not record activity '{action}' of {actor_identity}") from exc
        return entry
