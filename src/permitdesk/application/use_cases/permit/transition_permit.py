"""Permit workflow engine - validated status transitions with history."""

import logging
from collections.abc import Callable
from datetime import datetime

from permitdesk.application.dto.permit_dto import TransitionOutcome
from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import AuditTrailRecorder, utc_now
from permitdesk.application.use_cases.permit.get_permit import load_permit
from permitdesk.domain.entities import Permit, ResolvedAccessProfile
from permitdesk.domain.exceptions import (
    AuditWriteFailed,
    StoreError,
    TransitionPersistFailed,
)
from permitdesk.domain.value_objects import PageId, PermitStatus
from permitdesk.domain.workflow import apply_transition, parse_status, status_action

logger = logging.getLogger("permitdesk.permits")


class PermitWorkflowEngine:
    """Move a permit between statuses.

    The new state is returned only after the store confirmed the write. The
    history append that follows is best effort: a failure is reported in the
    outcome's warnings and does not undo the transition.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        audit_trail: AuditTrailRecorder,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_trail
        self._clock = clock

    async def transition(
        self,
        permit: Permit,
        new_status: PermitStatus | str,
        actor: ResolvedAccessProfile,
    ) -> TransitionOutcome:
        """Change permit status. Actor needs edit access to the tracker."""
        access_gate.require_page_flag(actor, PageId.TRACKER, "edit")
        new_status = parse_status(new_status)
        updated = apply_transition(permit, new_status, actor.identity, self._clock())

        try:
            async with self._uow_factory() as uow:
                await uow.permits.update_status(updated)
        except StoreError as exc:
            logger.error("Status update of permit %s failed: %s", permit.id, exc)
            raise TransitionPersistFailed(f"Could not save status of permit {permit.id}") from exc

        outcome = TransitionOutcome(permit=updated)
        try:
            await self._audit.record(
                updated.id, status_action(new_status), actor.identity, actor.actor_metadata()
            )
        except AuditWriteFailed as exc:
            logger.warning("Permit %s moved to %s without history: %s", permit.id, new_status.value, exc)
            outcome.warnings.append(exc)
        logger.info("Permit %s: %s -> %s by %s", permit.id, permit.status, new_status.value, actor.identity)
        return outcome

    async def transition_by_id(
        self,
        permit_id: object,
        new_status: PermitStatus | str,
        actor: ResolvedAccessProfile,
    ) -> TransitionOutcome:
        """Load the permit and transition it."""
        permit = await load_permit(self._uow_factory, permit_id)
        return await self.transition(permit, new_status, actor)
