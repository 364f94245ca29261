"""Update permit details use case."""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from permitdesk.application.dto.permit_dto import PermitOutcome, PermitUpdateInput
from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import AuditTrailRecorder, utc_now
from permitdesk.application.use_cases.permit.get_permit import load_permit
from permitdesk.domain.entities import ResolvedAccessProfile
from permitdesk.domain.exceptions import (
    AuditWriteFailed,
    StoreError,
    TransitionPersistFailed,
    ValidationError,
)
from permitdesk.domain.value_objects import PageId, PermitStatus
from permitdesk.domain.workflow import (
    PERMIT_DETAILS_UPDATED,
    check_transition,
    parse_status,
    status_action,
)

logger = logging.getLogger("permitdesk.permits")


class UpdatePermitUseCase:
    """Edit guest and date fields, optionally changing status in the same save."""

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
        self,
        actor: ResolvedAccessProfile,
        permit_id: object,
        input_data: PermitUpdateInput,
    ) -> PermitOutcome:
        access_gate.require_page_flag(actor, PageId.TRACKER, "edit")
        current = await load_permit(self._uow_factory, permit_id)

        changes = {
            name: value
            for name, value in (
                ("guest_name", input_data.guest_name),
                ("arrival_date", input_data.arrival_date),
                ("departure_date", input_data.departure_date),
                ("nationality", input_data.nationality),
                ("passport_no", input_data.passport_no),
            )
            if value is not None
        }
        status_changed = False
        new_status = parse_status(input_data.status) if input_data.status is not None else None
        if new_status is not None and new_status != current.status:
            check_transition(current.status, new_status)
            changes["status"] = new_status
            changes["uploaded"] = new_status == PermitStatus.UPLOADED
            status_changed = True

        updated = replace(current, **changes, last_updated_at=self._clock(), updated_by=actor.identity)
        if not updated.guest_name.strip():
            raise ValidationError("Guest name is required")
        if updated.departure_date < updated.arrival_date:
            raise ValidationError("Departure date is before arrival date")

        try:
            async with self._uow_factory() as uow:
                await uow.permits.update(updated)
        except StoreError as exc:
            raise TransitionPersistFailed(f"Could not save permit {current.id}") from exc

        action = status_action(updated.status) if status_changed else PERMIT_DETAILS_UPDATED
        outcome = PermitOutcome(permit=updated)
        try:
            await self._audit.record(updated.id, action, actor.identity, actor.actor_metadata())
        except AuditWriteFailed as exc:
            logger.warning("Permit %s saved without history: %s", updated.id, exc)
            outcome.warnings.append(exc)
        return outcome
