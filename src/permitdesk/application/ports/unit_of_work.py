"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from permitdesk.application.ports.repositories.activity_repository import (
    ActivityRepository,
)
from permitdesk.application.ports.repositories.history_repository import (
    HistoryRepository,
)
from permitdesk.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from permitdesk.application.ports.repositories.permit_repository import PermitRepository
from permitdesk.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def permits(self) -> PermitRepository: ...

    @property
    def history(self) -> HistoryRepository: ...

    @property
    def activity(self) -> ActivityRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
