"""In-memory fakes for PermitDesk tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime
from uuid import UUID

from permitdesk.application.ports import AuthenticatedUser
from permitdesk.domain.entities import (
    CapabilityFlags,
    HistoryEntry,
    LoginRecord,
    PageAccessEntry,
    Permit,
    UserProfile,
)
from permitdesk.domain.exceptions import NotFound, StoreError
from permitdesk.domain.value_objects import PageId, PermitStatus


class _Failing:
    """Mixin - methods named in fail_on raise StoreError."""

    def __init__(self) -> None:
        self.fail_on: set[str] = set()

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise StoreError(f"{type(self).__name__}.{method} failed")


# --- Fake repositories ---


class FakeUserRepository(_Failing):
    """In-memory user repository."""

    def __init__(self) -> None:
        super().__init__()
        self._by_identity: dict[str, UserProfile] = {}
        self.last_login: dict[str, datetime] = {}

    async def get_by_identity(self, identity: str) -> UserProfile | None:
        self._check("get_by_identity")
        profile = self._by_identity.get(identity)
        return replace(profile) if profile else None

    async def upsert(self, profile: UserProfile) -> UserProfile:
        self._check("upsert")
        self._by_identity[profile.identity] = replace(profile)
        return profile

    async def touch_login(
        self, identity: str, login_at: datetime, avatar: str | None = None
    ) -> None:
        self._check("touch_login")
        self.last_login[identity] = login_at
        profile = self._by_identity.get(identity)
        if profile and avatar:
            profile.avatar = avatar

    def add(self, profile: UserProfile) -> None:
        """Helper to add profile for tests."""
        self._by_identity[profile.identity] = profile


class FakePermissionRepository(_Failing):
    """In-memory page access, capability and settings rows."""

    def __init__(self) -> None:
        super().__init__()
        self.access: dict[str, dict[PageId, PageAccessEntry]] = {}
        self.capabilities: dict[str, CapabilityFlags] = {}
        self.settings: dict[str, dict] = {}
        self.upserts = 0

    async def list_page_access(self, identity: str) -> list[PageAccessEntry]:
        self._check("list_page_access")
        return list(self.access.get(identity, {}).values())

    async def get_capabilities(self, identity: str) -> CapabilityFlags | None:
        self._check("get_capabilities")
        return self.capabilities.get(identity)

    async def upsert_page_access(
        self,
        identity: str,
        entries: list[PageAccessEntry],
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        self._check("upsert_page_access")
        self.upserts += 1
        rows = self.access.setdefault(identity, {})
        for entry in entries:
            rows[PageId(entry.page)] = entry

    async def upsert_capabilities(
        self,
        identity: str,
        flags: CapabilityFlags,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        self._check("upsert_capabilities")
        self.upserts += 1
        self.capabilities[identity] = flags

    async def upsert_settings(
        self,
        identity: str,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        self._check("upsert_settings")
        self.settings[identity] = {"user_name": display_name, "user_email": email}


class FakeHistoryRepository(_Failing):
    """In-memory append-only permit history."""

    def __init__(self) -> None:
        super().__init__()
        self.entries: list[HistoryEntry] = []

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        self._check("append")
        self.entries.append(entry)
        return entry

    async def append_batch(self, entries: list[HistoryEntry]) -> None:
        self._check("append_batch")
        self.entries.extend(entries)

    async def list_for_subject(self, subject_id: str) -> list[HistoryEntry]:
        self._check("list_for_subject")
        items = [e for e in reversed(self.entries) if e.subject_id == subject_id]
        return sorted(items, key=lambda e: e.timestamp, reverse=True)

    def for_subject(self, subject_id: object) -> list[HistoryEntry]:
        """Helper - entries of a subject in insertion order."""
        return [e for e in self.entries if e.subject_id == str(subject_id)]

    def drop_subject(self, subject_id: object) -> None:
        """Cascade helper used by the permit repository."""
        self.entries = [e for e in self.entries if e.subject_id != str(subject_id)]


class FakeActivityRepository(_Failing):
    """In-memory user_login and user_activity."""

    def __init__(self) -> None:
        super().__init__()
        self.logins: list[LoginRecord] = []
        self.entries: list[HistoryEntry] = []

    async def record_login(self, record: LoginRecord) -> None:
        self._check("record_login")
        self.logins.append(record)

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        self._check("append")
        self.entries.append(entry)
        return entry

    async def list_for_identity(self, identity: str) -> list[HistoryEntry]:
        items = [e for e in reversed(self.entries) if e.actor_identity == identity]
        return sorted(items, key=lambda e: e.timestamp, reverse=True)


class FakePermitRepository(_Failing):
    """In-memory permit repository. Delete cascades to history."""

    def __init__(self, history: FakeHistoryRepository) -> None:
        super().__init__()
        self._by_id: dict[UUID, Permit] = {}
        self._history = history
        self._next_code = 1

    async def get_by_id(self, permit_id: UUID) -> Permit | None:
        self._check("get_by_id")
        permit = self._by_id.get(permit_id)
        return replace(permit) if permit else None

    async def list(self, *, status: PermitStatus | None = None) -> list[Permit]:
        self._check("list")
        items = [replace(p) for p in self._by_id.values()]
        if status is not None:
            items = [p for p in items if p.status == status]
        items.sort(key=lambda p: p.created_at or p.last_updated_at, reverse=True)
        return items

    async def create(self, permit: Permit) -> Permit:
        self._check("create")
        if permit.permit_code is None:
            permit = replace(permit, permit_code=f"PRM-{self._next_code:03d}")
            self._next_code += 1
        self._by_id[permit.id] = replace(permit)
        return permit

    async def create_batch(self, permits: list[Permit]) -> list[Permit]:
        self._check("create_batch")
        return [await self.create(p) for p in permits]

    async def update(self, permit: Permit) -> None:
        self._check("update")
        self._by_id[permit.id] = replace(permit)

    async def update_status(self, permit: Permit) -> None:
        self._check("update_status")
        stored = self._by_id.get(permit.id)
        if stored is None:
            raise NotFound("Permit", str(permit.id))
        self._by_id[permit.id] = replace(
            stored,
            status=permit.status,
            uploaded=permit.uploaded,
            last_updated_at=permit.last_updated_at,
            updated_by=permit.updated_by,
        )

    async def delete(self, permit_id: UUID) -> None:
        self._check("delete")
        self._by_id.pop(permit_id, None)
        self._history.drop_subject(permit_id)

    def add(self, permit: Permit) -> Permit:
        """Helper to add permit for tests."""
        self._by_id[permit.id] = replace(permit)
        return permit

    def stored(self, permit_id: UUID) -> Permit | None:
        return self._by_id.get(permit_id)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.permissions = FakePermissionRepository()
        self.history = FakeHistoryRepository()
        self.activity = FakeActivityRepository()
        self.permits = FakePermitRepository(self.history)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def shared_uow_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


class FakeIdentityProvider:
    """Identity provider returning a fixed user."""

    def __init__(self, user: AuthenticatedUser | None = None) -> None:
        self.user = user
        self.signed_out = False

    async def current_user(self) -> AuthenticatedUser | None:
        return self.user

    async def sign_out(self) -> None:
        self.signed_out = True
        self.user = None
