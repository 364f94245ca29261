"""Unit tests for permit use cases."""

from datetime import timedelta

import pytest

from permitdesk.application.dto.permit_dto import (
    PermitCreateInput,
    PermitOutcome,
    PermitUpdateInput,
)
from permitdesk.application.services.audit_trail import AuditTrailRecorder
from permitdesk.application.use_cases.permit.create_permit import (
    CreatePermitUseCase,
    ImportPermitsUseCase,
)
from permitdesk.application.use_cases.permit.delete_permit import DeletePermitUseCase
from permitdesk.application.use_cases.permit.get_permit import GetPermitUseCase, ListPermitsUseCase
from permitdesk.application.use_cases.permit.pending_uploads import ListPendingUploadsUseCase
from permitdesk.application.use_cases.permit.permit_history import GetPermitHistoryUseCase
from permitdesk.application.use_cases.permit.update_permit import UpdatePermitUseCase
from permitdesk.domain.exceptions import (
    InvalidTransition,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from permitdesk.domain.value_objects import PermitStatus, Role

from tests.conftest import NOW, TODAY, fixed_clock, make_permit, make_profile


def _input(name: str = "Sofia Rossi", days: int = 4) -> PermitCreateInput:
    return PermitCreateInput(
        guest_name=name,
        arrival_date=TODAY,
        departure_date=TODAY + timedelta(days=days),
    )


# --- Create / import ---


@pytest.mark.asyncio
async def test_create_permit_records_history(uow_factory, audit_trail, fake_uow) -> None:
    use_case = CreatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)

    outcome = await use_case.execute(make_profile(Role.STAFF), _input("  Sofia Rossi "))

    permit = outcome.permit
    assert permit.guest_name == "Sofia Rossi"
    assert permit.status == PermitStatus.PENDING
    assert permit.permit_code == "PRM-001"
    assert permit.created_at == NOW
    [entry] = fake_uow.history.for_subject(permit.id)
    assert entry.action == "Permit created"


@pytest.mark.asyncio
async def test_create_requires_tracker_create(uow_factory, audit_trail) -> None:
    use_case = CreatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)
    with pytest.raises(PermissionDenied):
        await use_case.execute(make_profile(Role.ANALYST), _input())


@pytest.mark.asyncio
async def test_create_rejects_departure_before_arrival(uow_factory, audit_trail) -> None:
    use_case = CreatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)
    with pytest.raises(ValidationError):
        await use_case.execute(make_profile(), _input(days=-1))


@pytest.mark.asyncio
async def test_import_records_one_entry_per_permit(uow_factory, audit_trail, fake_uow) -> None:
    use_case = ImportPermitsUseCase(uow_factory, audit_trail, clock=fixed_clock)

    permits, warnings = await use_case.execute(
        make_profile(Role.ADMIN), [_input("A B"), _input("C D")]
    )

    assert warnings == []
    assert len(permits) == 2
    for permit in permits:
        [entry] = fake_uow.history.for_subject(permit.id)
        assert entry.action == "Permit created (import)"


@pytest.mark.asyncio
async def test_import_requires_capability(uow_factory, audit_trail) -> None:
    use_case = ImportPermitsUseCase(uow_factory, audit_trail, clock=fixed_clock)
    with pytest.raises(PermissionDenied):
        await use_case.execute(make_profile(Role.MANAGER), [_input()])


# --- Update ---


@pytest.mark.asyncio
async def test_update_details_only(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit())
    use_case = UpdatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)

    outcome = await use_case.execute(
        make_profile(), permit.id, PermitUpdateInput(nationality="IT")
    )

    assert outcome.permit.nationality == "IT"
    assert outcome.permit.status == PermitStatus.PENDING
    [entry] = fake_uow.history.for_subject(permit.id)
    assert entry.action == "Permit details updated"


@pytest.mark.asyncio
async def test_update_with_status_change(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit(PermitStatus.APPROVED))
    use_case = UpdatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)

    outcome = await use_case.execute(
        make_profile(), permit.id, PermitUpdateInput(status=PermitStatus.UPLOADED)
    )

    assert outcome.permit.uploaded is True
    [entry] = fake_uow.history.for_subject(permit.id)
    assert entry.action == "Status updated to Uploaded"


@pytest.mark.asyncio
async def test_update_rejects_invalid_status(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit(PermitStatus.REJECTED))
    use_case = UpdatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)

    with pytest.raises(InvalidTransition):
        await use_case.execute(make_profile(), permit.id, PermitUpdateInput(status="uploaded"))
    assert fake_uow.history.entries == []


@pytest.mark.asyncio
async def test_update_rejects_blank_name(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit())
    use_case = UpdatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)

    with pytest.raises(ValidationError):
        await use_case.execute(make_profile(), permit.id, PermitUpdateInput(guest_name="  "))


# --- Delete / read ---


@pytest.mark.asyncio
async def test_delete_cascades_history(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit())
    await audit_trail.record(permit.id, "Permit created", "u1")
    admin = make_profile(Role.ADMIN, identity="admin-1")

    await DeletePermitUseCase(uow_factory, audit_trail).execute(admin, permit.id)

    assert fake_uow.permits.stored(permit.id) is None
    assert fake_uow.history.for_subject(permit.id) == []
    [activity] = await fake_uow.activity.list_for_identity("admin-1")
    assert activity.action == "permit_deleted"
    assert activity.subject_id == str(permit.id)


@pytest.mark.asyncio
async def test_delete_requires_tracker_delete(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit())
    with pytest.raises(PermissionDenied):
        await DeletePermitUseCase(uow_factory, audit_trail).execute(
            make_profile(Role.MANAGER), permit.id
        )
    assert fake_uow.permits.stored(permit.id) is not None


@pytest.mark.asyncio
async def test_get_missing_permit(uow_factory) -> None:
    with pytest.raises(NotFound):
        await GetPermitUseCase(uow_factory).execute(make_profile(), make_permit().id)


@pytest.mark.asyncio
async def test_history_newest_first(uow_factory, fake_uow) -> None:
    times = iter([NOW - timedelta(minutes=5), NOW])
    recorder = AuditTrailRecorder(uow_factory, clock=lambda: next(times))
    permit = fake_uow.permits.add(make_permit())
    await recorder.record(permit.id, "Permit created", "u1")
    await recorder.record(permit.id, "Status updated to Approved", "u1")

    history = await GetPermitHistoryUseCase(uow_factory, recorder).execute(
        make_profile(Role.VIEWER), permit.id
    )

    assert [e.action for e in history] == ["Status updated to Approved", "Permit created"]


@pytest.mark.asyncio
async def test_list_filters_by_status(uow_factory, fake_uow) -> None:
    approved = fake_uow.permits.add(make_permit(PermitStatus.APPROVED))
    fake_uow.permits.add(make_permit())

    permits = await ListPermitsUseCase(uow_factory).execute(make_profile(), "approved")

    assert [p.id for p in permits] == [approved.id]


@pytest.mark.asyncio
async def test_list_newest_first(uow_factory, fake_uow) -> None:
    older = fake_uow.permits.add(make_permit(created_at=NOW - timedelta(days=2)))
    newer = fake_uow.permits.add(make_permit(created_at=NOW - timedelta(hours=1)))

    permits = await ListPermitsUseCase(uow_factory).execute(make_profile())

    assert [p.id for p in permits] == [newer.id, older.id]


@pytest.mark.asyncio
async def test_pending_uploads(uow_factory, fake_uow) -> None:
    soon = fake_uow.permits.add(make_permit(departure_in=1))
    fake_uow.permits.add(make_permit(PermitStatus.UPLOADED, departure_in=1))
    later = fake_uow.permits.add(make_permit(PermitStatus.APPROVED, departure_in=6))
    fake_uow.permits.add(make_permit(departure_in=10))

    items = await ListPendingUploadsUseCase(uow_factory, clock=fixed_clock).execute(make_profile())

    assert [i.permit.id for i in items] == [soon.id, later.id]
    assert items[0].is_urgent is True


# --- Unknown status values ---


@pytest.mark.asyncio
async def test_update_with_unknown_status(uow_factory, audit_trail, fake_uow) -> None:
    permit = fake_uow.permits.add(make_permit())
    use_case = UpdatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)

    with pytest.raises(InvalidTransition):
        await use_case.execute(make_profile(), permit.id, PermitUpdateInput(status="archived"))
    assert fake_uow.permits.stored(permit.id).status == PermitStatus.PENDING


@pytest.mark.asyncio
async def test_create_with_unknown_status(uow_factory, audit_trail, fake_uow) -> None:
    use_case = CreatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock)
    data = _input()
    data.status = "archived"

    with pytest.raises(ValidationError, match="archived"):
        await use_case.execute(make_profile(), data)
    assert await fake_uow.permits.list() == []


@pytest.mark.asyncio
async def test_list_with_unknown_status(uow_factory) -> None:
    with pytest.raises(ValidationError):
        await ListPermitsUseCase(uow_factory).execute(make_profile(), "archived")


@pytest.mark.asyncio
async def test_create_returns_permit_outcome(uow_factory, audit_trail) -> None:
    outcome = await CreatePermitUseCase(uow_factory, audit_trail, clock=fixed_clock).execute(
        make_profile(), _input()
    )
    assert type(outcome) is PermitOutcome
    assert outcome.warnings == []
