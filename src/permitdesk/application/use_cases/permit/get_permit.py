"""Get and list permit use cases."""

from uuid import UUID

from permitdesk.application.services import access_gate
from permitdesk.domain.entities import Permit, ResolvedAccessProfile
from permitdesk.domain.exceptions import NotFound, ValidationError
from permitdesk.domain.value_objects import PageId, PermitStatus


async def load_permit(unit_of_work_factory: type, permit_id: object) -> Permit:
    """Fetch permit by id or raise NotFound."""
    try:
        key = permit_id if isinstance(permit_id, UUID) else UUID(str(permit_id))
    except ValueError:
        raise NotFound("Permit", str(permit_id)) from None
    async with unit_of_work_factory() as uow:
        permit = await uow.permits.get_by_id(key)
    if not permit:
        raise NotFound("Permit", str(permit_id))
    return permit


class GetPermitUseCase:
    """Get a single permit."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: ResolvedAccessProfile, permit_id: object) -> Permit:
        access_gate.require_page_flag(actor, PageId.TRACKER, "view")
        return await load_permit(self._uow_factory, permit_id)


class ListPermitsUseCase:
    """List permits, newest first, optionally filtered by status."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: ResolvedAccessProfile, status: PermitStatus | str | None = None
    ) -> list[Permit]:
        access_gate.require_page_flag(actor, PageId.TRACKER, "view")
        if status:
            try:
                status = PermitStatus(status)
            except ValueError as exc:
                raise ValidationError(f"Unknown permit status: {status}") from exc
        else:
            status = None
        async with self._uow_factory() as uow:
            return await uow.permits.list(status=status)
