"""Permit history use case."""

from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import AuditTrailRecorder
from permitdesk.application.use_cases.permit.get_permit import load_permit
from permitdesk.domain.entities import HistoryEntry, ResolvedAccessProfile
from permitdesk.domain.value_objects import PageId


class GetPermitHistoryUseCase:
    """History entries of a permit, newest first."""

    def __init__(self, unit_of_work_factory: type, audit_trail: AuditTrailRecorder) -> None:
        self._uow_factory = unit_of_work_factory
        self._audit = audit_trail

    async def execute(self, actor: ResolvedAccessProfile, permit_id: object) -> list[HistoryEntry]:
        access_gate.require_page_flag(actor, PageId.TRACKER, "view")
        permit = await load_permit(self._uow_factory, permit_id)
        return await self._audit.history_for(permit.id)
