"""Access gate - page and capability predicates over a resolved profile.

Admins pass every check. A page missing from the resolved map falls back to
the role default from the policy catalog, never to full access.
"""

from permitdesk.domain.entities import ResolvedAccessProfile
from permitdesk.domain.exceptions import PermissionDenied
from permitdesk.domain.policy_catalog import default_page_access
from permitdesk.domain.value_objects import PageId

PAGE_FLAGS = ("view", "edit", "delete", "create")


def page_flag(profile: ResolvedAccessProfile | None, page: PageId | str, flag: str) -> bool:
    """Whether profile holds flag (view, edit, delete, create) on page."""
    if flag not in PAGE_FLAGS:
        raise ValueError(f"Unknown page flag: {flag}")
    if profile is None:
        return False
    if profile.is_admin:
        return True
    try:
        page = PageId(page)
    except ValueError:
        return False
    entry = profile.page_access.get(page)
    if entry is None:
        entry = default_page_access(profile.role, page)
    return entry.flag(flag)


def can_view_page(profile: ResolvedAccessProfile | None, page: PageId | str) -> bool:
    return page_flag(profile, page, "view")


def can_edit_page(profile: ResolvedAccessProfile | None, page: PageId | str) -> bool:
    return page_flag(profile, page, "edit")


def can_create_page(profile: ResolvedAccessProfile | None, page: PageId | str) -> bool:
    return page_flag(profile, page, "create")


def can_delete_page(profile: ResolvedAccessProfile | None, page: PageId | str) -> bool:
    return page_flag(profile, page, "delete")


def has_capability(profile: ResolvedAccessProfile | None, name: str) -> bool:
    """Whether profile holds capability name, e.g. "can_export_data"."""
    if profile is None:
        return False
    if profile.is_admin:
        return True
    return bool(getattr(profile.capabilities, name))


def visible_pages(profile: ResolvedAccessProfile | None) -> list[PageId]:
    """Pages to show in navigation, in navigation order."""
    return [page for page in PageId if can_view_page(profile, page)]


def require_page_flag(profile: ResolvedAccessProfile | None, page: PageId | str, flag: str) -> None:
    if not page_flag(profile, page, flag):
        raise PermissionDenied(f"User does not have {flag} access to {page}")


def require_capability(profile: ResolvedAccessProfile | None, name: str) -> None:
    if not has_capability(profile, name):
        raise PermissionDenied(f"User does not have capability {name}")
