"""Departure urgency of permits still waiting for upload."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from permitdesk.domain.entities import Permit
from permitdesk.domain.value_objects import PermitStatus

PENDING_WINDOW_DAYS = 7
URGENT_THRESHOLD_DAYS = 2


@dataclass(frozen=True)
class PendingUpload:
    """Permit in the pending-upload view with its urgency."""

    permit: Permit
    days_until_departure: int
    is_urgent: bool


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_until_departure(permit: Permit, now: date | datetime) -> int:
    """Whole days from now, truncated to midnight, to the departure date."""
    return (_as_date(permit.departure_date) - _as_date(now)).days


def is_urgent(days: int) -> bool:
    return days <= URGENT_THRESHOLD_DAYS


def pending_uploads(permits: Iterable[Permit], now: date | datetime) -> list[PendingUpload]:
    """Permits not uploaded yet and departing within the window, soonest first."""
    items = []
    for permit in permits:
        if permit.status == PermitStatus.UPLOADED:
            continue
        days = days_until_departure(permit, now)
        if 0 <= days <= PENDING_WINDOW_DAYS:
            items.append(PendingUpload(permit=permit, days_until_departure=days, is_urgent=is_urgent(days)))
    items.sort(key=lambda item: item.days_until_departure)
    return items
