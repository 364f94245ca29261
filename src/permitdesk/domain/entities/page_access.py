"""Page access entry - per-page grant for one identity."""

from dataclasses import dataclass

from permitdesk.domain.value_objects import PageId


@dataclass(frozen=True)
class PageAccessEntry:
    """Flags granted on a single page."""

    page: PageId
    can_view: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_create: bool = False

    def flag(self, name: str) -> bool:
        """Look up a flag by name (view, edit, delete, create)."""
        return bool(getattr(self, f"can_{name}"))
