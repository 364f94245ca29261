"""Permit status values."""

from enum import StrEnum


class PermitStatus(StrEnum):
    """Status of a guest permit."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    UPLOADED = "uploaded"

    @property
    def label(self) -> str:
        """Human readable label, e.g. "Approved"."""
        return self.value.capitalize()
