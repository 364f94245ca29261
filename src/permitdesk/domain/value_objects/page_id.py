"""Navigable dashboard pages."""

from enum import StrEnum


class PageId(StrEnum):
    """Pages a user can be granted access to, in navigation order."""

    DASHBOARD = "dashboard"
    TRACKER = "tracker"
    TICKETS = "tickets"
    REPORTS = "reports"
    USERS = "users"
    SETTINGS = "settings"
    SYSTEM_STATUS = "system-status"
