"""Capability flags - page independent grants."""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class CapabilityFlags:
    """Boolean capabilities held by one identity."""

    can_export_data: bool = False
    can_import_data: bool = False
    can_manage_users: bool = False
    can_view_reports: bool = False
    can_manage_settings: bool = False
    can_approve_requests: bool = False
    can_bulk_operations: bool = False

    @classmethod
    def none(cls) -> "CapabilityFlags":
        return cls()

    @classmethod
    def all(cls) -> "CapabilityFlags":
        return cls(**{f.name: True for f in fields(cls)})

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls)]
