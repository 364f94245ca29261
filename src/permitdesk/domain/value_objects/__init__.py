"""Domain value objects."""

from permitdesk.domain.value_objects.page_id import PageId
from permitdesk.domain.value_objects.permit_status import PermitStatus
from permitdesk.domain.value_objects.role import Role

__all__ = [
    "PageId",
    "PermitStatus",
    "Role",
]
