"""Permit entity."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from permitdesk.domain.value_objects import PermitStatus


@dataclass
class Permit:
    """Permit - guest stay permit tracked through the upload workflow."""

    id: UUID
    guest_name: str
    arrival_date: date
    departure_date: date
    status: PermitStatus
    uploaded: bool
    last_updated_at: datetime
    updated_by: str | None = None
    permit_code: str | None = None
    nationality: str | None = None
    passport_no: str | None = None
    created_at: datetime | None = None
    created_by: str | None = None
