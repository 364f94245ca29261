"""Pytest fixtures for PermitDesk tests."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

from permitdesk.application.ports import AuthenticatedUser
from permitdesk.application.services.audit_trail import AuditTrailRecorder
from permitdesk.application.services.permission_store import PermissionStore
from permitdesk.domain.entities import Permit, ResolvedAccessProfile, UserProfile
from permitdesk.domain.policy_catalog import defaults_for
from permitdesk.domain.value_objects import PermitStatus, Role

from tests.fakes import FakeIdentityProvider, FakeUnitOfWork, shared_uow_factory

NOW = datetime(2026, 10, 18, 15, 30, tzinfo=UTC)
TODAY = NOW.date()


def make_profile(
    role: Role = Role.STAFF,
    identity: str = "user-1",
    page_access: dict | None = None,
    capabilities=None,
) -> ResolvedAccessProfile:
    """Resolved profile with role defaults unless overridden."""
    defaults = defaults_for(role)
    return ResolvedAccessProfile(
        profile=UserProfile(
            identity=identity,
            display_name=f"{role.value.title()} User",
            role=role,
            email=f"{identity}@example.com",
        ),
        page_access=defaults.access_map() if page_access is None else page_access,
        capabilities=defaults.capabilities if capabilities is None else capabilities,
    )


def make_permit(
    status: PermitStatus = PermitStatus.PENDING,
    departure_in: int = 5,
    guest_name: str = "Michael Anderson",
    created_at: datetime | None = None,
) -> Permit:
    return Permit(
        id=uuid4(),
        guest_name=guest_name,
        arrival_date=TODAY - timedelta(days=3),
        departure_date=TODAY + timedelta(days=departure_in),
        status=status,
        uploaded=status == PermitStatus.UPLOADED,
        last_updated_at=NOW - timedelta(days=1),
        updated_by="someone",
        created_at=created_at or NOW - timedelta(days=3),
    )


def fixed_clock() -> datetime:
    return NOW


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return shared_uow_factory(fake_uow)


@pytest.fixture
def audit_trail(uow_factory) -> AuditTrailRecorder:
    return AuditTrailRecorder(uow_factory, clock=fixed_clock)


@pytest.fixture
def permission_store(uow_factory) -> PermissionStore:
    return PermissionStore(uow_factory)


@pytest.fixture
def auth_user() -> AuthenticatedUser:
    return AuthenticatedUser(identity="auth-42", email="jane.doe@example.com", full_name=None)


@pytest.fixture
def identity_provider(auth_user) -> FakeIdentityProvider:
    return FakeIdentityProvider(auth_user)


@pytest.fixture
def today() -> date:
    return TODAY
