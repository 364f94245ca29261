"""Pending uploads use case - prioritised view for the dashboard."""

from collections.abc import Callable
from datetime import datetime

from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import utc_now
from permitdesk.domain.entities import ResolvedAccessProfile
from permitdesk.domain.urgency import PendingUpload, pending_uploads
from permitdesk.domain.value_objects import PageId


class ListPendingUploadsUseCase:
    """Permits not uploaded yet that depart within the next week."""

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(self, actor: ResolvedAccessProfile) -> list[PendingUpload]:
        access_gate.require_page_flag(actor, PageId.DASHBOARD, "view")
        async with self._uow_factory() as uow:
            permits = await uow.permits.list()
        return pending_uploads(permits, self._clock())
