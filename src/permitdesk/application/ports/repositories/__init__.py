"""Repository ports."""

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

__all__ = [
    "ActivityRepository",
    "HistoryRepository",
    "PermissionRepository",
    "PermitRepository",
    "UserRepository",
]
