"""Permit DTOs."""

from dataclasses import dataclass, field
from datetime import date

from permitdesk.domain.entities import Permit
from permitdesk.domain.exceptions import PermitDeskError, ValidationError
from permitdesk.domain.value_objects import PermitStatus


@dataclass
class PermitCreateInput:
    """Input for creating a permit, by hand or from a parsed import row."""

    guest_name: str
    arrival_date: date
    departure_date: date
    status: PermitStatus = PermitStatus.PENDING
    permit_code: str | None = None
    nationality: str | None = None
    passport_no: str | None = None

    def validate(self) -> None:
        if not self.guest_name or not self.guest_name.strip():
            raise ValidationError("Guest name is required")
        if self.departure_date < self.arrival_date:
            raise ValidationError("Departure date is before arrival date")
        try:
            PermitStatus(self.status)
        except ValueError as exc:
            raise ValidationError(f"Unknown permit status: {self.status}") from exc


@dataclass
class PermitUpdateInput:
    """Editable permit fields. None leaves the field unchanged."""

    guest_name: str | None = None
    arrival_date: date | None = None
    departure_date: date | None = None
    status: PermitStatus | None = None
    nationality: str | None = None
    passport_no: str | None = None


@dataclass
class PermitOutcome:
    """Permit after a confirmed write, plus non-fatal warnings."""

    permit: Permit
    warnings: list[PermitDeskError] = field(default_factory=list)


@dataclass
class TransitionOutcome(PermitOutcome):
    """Permit after a confirmed status change."""
