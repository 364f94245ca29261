"""Delete permit use case."""

import logging

from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import AuditTrailRecorder
from permitdesk.application.use_cases.permit.get_permit import load_permit
from permitdesk.domain.entities import ResolvedAccessProfile
from permitdesk.domain.entities.history_entry import PERMIT_ENTITY
from permitdesk.domain.exceptions import AuditWriteFailed, StoreError, TransitionPersistFailed
from permitdesk.domain.value_objects import PageId

logger = logging.getLogger("permitdesk.permits")

PERMIT_DELETED = "permit_deleted"


class DeletePermitUseCase:
    """Hard delete a permit. Its history goes with it (cascade)."""

    def __init__(self, unit_of_work_factory: type, audit_trail: AuditTrailRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_trail

    async def execute(self, actor: ResolvedAccessProfile, permit_id: object) -> None:
        """Delete permit. Actor needs delete access to the tracker."""
        access_gate.require_page_flag(actor, PageId.TRACKER, "delete")
        permit = await load_permit(self._uow_factory, permit_id)

        try:
            async with self._uow_factory() as uow:
                await uow.permits.delete(permit.id)
        except StoreError as exc:
            raise TransitionPersistFailed(f"Could not delete permit {permit.id}") from exc

        # the permit history is gone with the permit, so this goes to user activity
        metadata = {**actor.actor_metadata(), "permit_code": permit.permit_code}
        try:
            await self._audit.record_activity(
                actor.identity, PERMIT_DELETED, PERMIT_ENTITY, permit.id, metadata
            )
        except AuditWriteFailed as exc:
            logger.warning("Deletion of permit %s was not recorded: %s", permit.id, exc)
        logger.info("Permit %s deleted by %s", permit.id, actor.identity)
