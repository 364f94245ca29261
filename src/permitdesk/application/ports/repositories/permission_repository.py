"""Permission repository port."""

from typing import Protocol

from permitdesk.domain.entities import CapabilityFlags, PageAccessEntry


class PermissionRepository(Protocol):
    """Port for page access, capability and settings rows of a user."""

    async def list_page_access(self, identity: str) -> list[PageAccessEntry]: ...

    async def get_capabilities(self, identity: str) -> CapabilityFlags | None: ...

    async def upsert_page_access(
        self,
        identity: str,
        entries: list[PageAccessEntry],
        display_name: str | None = None,
        email: str | None = None,
    ) -> None: ...

    async def upsert_capabilities(
        self,
        identity: str,
        flags: CapabilityFlags,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None: ...

    async def upsert_settings(
        self,
        identity: str,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None: ...
