"""Permit repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from permitdesk.domain.entities import Permit
from permitdesk.domain.value_objects import PermitStatus


class PermitRepository(Protocol):
    """Port for permit persistence."""

    async def get_by_id(self, permit_id: UUID) -> Permit | None: ...

    async def list(self, *, status: PermitStatus | None = None) -> list[Permit]: ...

    async def create(self, permit: Permit) -> Permit: ...

    async def create_batch(self, permits: list[Permit]) -> list[Permit]: ...

    async def update(self, permit: Permit) -> None: ...

    async def update_status(self, permit: Permit) -> None: ...

    async def delete(self, permit_id: UUID) -> None: ...
