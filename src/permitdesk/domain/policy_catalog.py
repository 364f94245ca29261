"""Default permission bundles per role.

Single source of truth for what a fresh account gets. Nothing else maps a
role to page flags or capabilities.
"""

from dataclasses import dataclass

from permitdesk.domain.entities import CapabilityFlags, PageAccessEntry
from permitdesk.domain.value_objects import PageId, Role

_CORE_PAGES = frozenset({PageId.DASHBOARD, PageId.TRACKER, PageId.TICKETS, PageId.REPORTS})
_MANAGER_LOCKED = frozenset({PageId.SETTINGS, PageId.USERS, PageId.SYSTEM_STATUS})


@dataclass(frozen=True)
class RoleDefaults:
    """Page access matrix and capabilities for one role."""

    page_access: tuple[PageAccessEntry, ...]
    capabilities: CapabilityFlags

    def access_map(self) -> dict[PageId, PageAccessEntry]:
        return {entry.page: entry for entry in self.page_access}


def _matrix(
    view: frozenset[PageId],
    edit: frozenset[PageId] = frozenset(),
    delete: frozenset[PageId] = frozenset(),
) -> tuple[PageAccessEntry, ...]:
    # create follows edit for every role
    return tuple(
        PageAccessEntry(
            page=page,
            can_view=page in view,
            can_edit=page in edit,
            can_delete=page in delete,
            can_create=page in edit,
        )
        for page in PageId
    )


def defaults_for(role: Role | str | None) -> RoleDefaults:
    """Return the default bundle for role. Unknown roles get the USER bundle."""
    role = Role.parse(role)
    all_pages = frozenset(PageId)

    if role is Role.ADMIN:
        return RoleDefaults(
            page_access=_matrix(all_pages, all_pages, all_pages),
            capabilities=CapabilityFlags.all(),
        )
    if role is Role.MANAGER:
        return RoleDefaults(
            page_access=_matrix(
                all_pages - {PageId.SYSTEM_STATUS},
                all_pages - _MANAGER_LOCKED,
            ),
            capabilities=CapabilityFlags(
                can_export_data=True,
                can_view_reports=True,
                can_approve_requests=True,
            ),
        )
    if role is Role.STAFF:
        return RoleDefaults(
            page_access=_matrix(_CORE_PAGES, frozenset({PageId.TRACKER, PageId.TICKETS})),
            capabilities=CapabilityFlags.none(),
        )
    if role is Role.VIEWER:
        return RoleDefaults(
            page_access=_matrix(_CORE_PAGES),
            capabilities=CapabilityFlags(can_view_reports=True),
        )
    if role is Role.ANALYST:
        return RoleDefaults(
            page_access=_matrix(_CORE_PAGES),
            capabilities=CapabilityFlags(can_export_data=True, can_view_reports=True),
        )
    return RoleDefaults(
        page_access=_matrix(
            frozenset({PageId.DASHBOARD, PageId.TRACKER, PageId.TICKETS}),
            frozenset({PageId.TICKETS}),
        ),
        capabilities=CapabilityFlags.none(),
    )


def default_page_access(role: Role | str | None, page: PageId) -> PageAccessEntry:
    """Default entry for a single page."""
    return defaults_for(role).access_map()[PageId(page)]
