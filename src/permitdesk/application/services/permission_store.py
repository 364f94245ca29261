"""Permission store - read and idempotent upsert of a user's grants."""

import logging

from permitdesk.domain.entities import CapabilityFlags, PageAccessEntry
from permitdesk.domain.exceptions import (
    PermissionFetchFailed,
    PermissionWriteFailed,
    StoreError,
)
from permitdesk.domain.policy_catalog import defaults_for
from permitdesk.domain.value_objects import Role

logger = logging.getLogger("permitdesk.access")


class PermissionStore:
    """Gateway over the permission repository.

    Reads return None when nothing is persisted for the identity. Store
    failures are raised as PermissionFetchFailed / PermissionWriteFailed.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def fetch_access(self, identity: str) -> list[PageAccessEntry] | None:
        """Persisted page access rows, or None when there are none."""
        try:
            async with self._uow_factory() as uow:
                entries = await uow.permissions.list_page_access(identity)
        except StoreError as exc:
            raise PermissionFetchFailed(f"Could not load page access for {identity}") from exc
        return entries or None

    async def fetch_capabilities(self, identity: str) -> CapabilityFlags | None:
        """Persisted capability flags, or None when there is no row."""
        try:
            async with self._uow_factory() as uow:
                return await uow.permissions.get_capabilities(identity)
        except StoreError as exc:
            raise PermissionFetchFailed(f"Could not load capabilities for {identity}") from exc

    async def upsert_access(
        self,
        identity: str,
        entries: list[PageAccessEntry],
        *,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        """Insert or update one row per (identity, page)."""
        try:
            async with self._uow_factory() as uow:
                await uow.permissions.upsert_page_access(
                    identity, list(entries), display_name=display_name, email=email
                )
        except StoreError as exc:
            raise PermissionWriteFailed(f"Could not save page access for {identity}") from exc
        logger.debug("Upserted %d page access rows for %s", len(entries), identity)

    async def upsert_capabilities(
        self,
        identity: str,
        flags: CapabilityFlags,
        *,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        """Insert or update the capability row of identity."""
        try:
            async with self._uow_factory() as uow:
                await uow.permissions.upsert_capabilities(
                    identity, flags, display_name=display_name, email=email
                )
        except StoreError as exc:
            raise PermissionWriteFailed(f"Could not save capabilities for {identity}") from exc

    async def ensure_settings(
        self,
        identity: str,
        *,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        try:
            async with self._uow_factory() as uow:
                await uow.permissions.upsert_settings(
                    identity, display_name=display_name, email=email
                )
        except StoreError as exc:
            raise PermissionWriteFailed(f"Could not save settings for {identity}") from exc

    async def replace_for_role(
        self,
        identity: str,
        role: Role,
        *,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        """Overwrite both access and capabilities with the role defaults.

        Only for explicit administrative actions. Session resolution never
        calls this.
        """
        defaults = defaults_for(role)
        try:
            async with self._uow_factory() as uow:
                await uow.permissions.upsert_page_access(
                    identity, list(defaults.page_access), display_name=display_name, email=email
                )
                await uow.permissions.upsert_capabilities(
                    identity, defaults.capabilities, display_name=display_name, email=email
                )
        except StoreError as exc:
            raise PermissionWriteFailed(f"Could not reset permissions for {identity}") from exc
        logger.info("Reset permissions of %s to %s defaults", identity, Role.parse(role).value)
