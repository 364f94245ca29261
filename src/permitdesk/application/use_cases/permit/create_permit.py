"""Create and import permit use cases."""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from permitdesk.application.dto.permit_dto import PermitCreateInput, PermitOutcome
from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import AuditTrailRecorder, utc_now
from permitdesk.domain.entities import Permit, ResolvedAccessProfile
from permitdesk.domain.exceptions import AuditWriteFailed, PermitDeskError, StoreError, TransitionPersistFailed
from permitdesk.domain.value_objects import PageId, PermitStatus
from permitdesk.domain.workflow import PERMIT_CREATED, PERMIT_IMPORTED

logger = logging.getLogger("permitdesk.permits")


def _new_permit(data: PermitCreateInput, actor_identity: str, now: datetime) -> Permit:
    status = PermitStatus(data.status)
    return Permit(
        id=uuid4(),
        guest_name=data.guest_name.strip(),
        arrival_date=data.arrival_date,
        departure_date=data.departure_date,
        status=status,
        uploaded=status == PermitStatus.UPLOADED,
        last_updated_at=now,
        updated_by=actor_identity,
        permit_code=data.permit_code,
        nationality=data.nationality,
        passport_no=data.passport_no,
        created_at=now,
        created_by=actor_identity,
    )


class CreatePermitUseCase:
    """Create a permit by manual entry."""

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_trail: AuditTrailRecorder,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_trail
        self._clock = clock

    async def execute(
        self, actor: ResolvedAccessProfile, input_data: PermitCreateInput
    ) -> PermitOutcome:
        """Create permit. Actor needs create access to the tracker."""
        access_gate.require_page_flag(actor, PageId.TRACKER, "create")
        input_data.validate()
        permit = _new_permit(input_data, actor.identity, self._clock())

        try:
            async with self._uow_factory() as uow:
                permit = await uow.permits.create(permit)
        except StoreError as exc:
            raise TransitionPersistFailed("Could not create permit") from exc

        outcome = PermitOutcome(permit=permit)
        try:
            await self._audit.record(permit.id, PERMIT_CREATED, actor.identity, actor.actor_metadata())
        except AuditWriteFailed as exc:
            logger.warning("Permit %s created without history: %s", permit.id, exc)
            outcome.warnings.append(exc)
        return outcome


class ImportPermitsUseCase:
    """Create permits from rows already parsed by the import collaborator."""

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_trail: AuditTrailRecorder,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_trail
        self._clock = clock

    async def execute(
        self, actor: ResolvedAccessProfile, rows: list[PermitCreateInput]
    ) -> tuple[list[Permit], list[PermitDeskError]]:
        """Insert all rows in one unit of work. Actor needs the import capability."""
        access_gate.require_capability(actor, "can_import_data")
        if not rows:
            return [], []
        for row in rows:
            row.validate()

        now = self._clock()
        permits = [_new_permit(row, actor.identity, now) for row in rows]
        try:
            async with self._uow_factory() as uow:
                permits = await uow.permits.create_batch(permits)
        except StoreError as exc:
            raise TransitionPersistFailed(f"Bulk import of {len(rows)} permits failed") from exc

        warnings: list[PermitDeskError] = []
        entries = [
            self._audit.entry(p.id, PERMIT_IMPORTED, actor.identity, actor.actor_metadata())
            for p in permits
        ]
        try:
            await self._audit.record_many(entries)
        except AuditWriteFailed as exc:
            logger.warning("Imported %d permits without history: %s", len(permits), exc)
            warnings.append(exc)
        logger.info("Imported %d permits by %s", len(permits), actor.identity)
        return permits, warnings
