"""Permit status state machine."""

from dataclasses import replace
from datetime import datetime

from permitdesk.domain.entities import Permit
from permitdesk.domain.exceptions import InvalidTransition
from permitdesk.domain.value_objects import PermitStatus

ALLOWED_TRANSITIONS: dict[PermitStatus, frozenset[PermitStatus]] = {
    PermitStatus.PENDING: frozenset({PermitStatus.APPROVED, PermitStatus.REJECTED}),
    PermitStatus.APPROVED: frozenset({PermitStatus.UPLOADED, PermitStatus.PENDING}),
    PermitStatus.REJECTED: frozenset({PermitStatus.PENDING}),
    PermitStatus.UPLOADED: frozenset({PermitStatus.PENDING}),
}

PERMIT_CREATED = "Permit created"
PERMIT_IMPORTED = "Permit created (import)"
PERMIT_DETAILS_UPDATED = "Permit details updated"


def parse_status(value: PermitStatus | str) -> PermitStatus:
    """Coerce a target status, unknown values raise InvalidTransition."""
    try:
        return PermitStatus(value)
    except ValueError as exc:
        raise InvalidTransition(f"Unknown permit status: {value}") from exc


def status_action(status: PermitStatus) -> str:
    """History action text for a status change."""
    return f"Status updated to {PermitStatus(status).label}"


def can_transition(current: PermitStatus, target: PermitStatus | str) -> bool:
    return target in ALLOWED_TRANSITIONS[PermitStatus(current)]


def check_transition(current: PermitStatus, target: PermitStatus) -> None:
    """Raise InvalidTransition unless current -> target is allowed."""
    target = parse_status(target)
    if not can_transition(current, target):
        raise InvalidTransition(
            f"Cannot move permit from {PermitStatus(current).value} to {target.value}"
        )


def apply_transition(
    permit: Permit, target: PermitStatus, actor_identity: str, now: datetime
) -> Permit:
    """Return a copy of permit in the target status. The input is not modified."""
    target = parse_status(target)
    check_transition(permit.status, target)
    return replace(
        permit,
        status=target,
        uploaded=target == PermitStatus.UPLOADED,
        last_updated_at=now,
        updated_by=actor_identity,
    )
