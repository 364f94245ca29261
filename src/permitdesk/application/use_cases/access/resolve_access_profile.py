"""Resolve access profile use case."""

import logging
from collections.abc import Callable
from datetime import datetime

from permitdesk.application.dto.access_dto import AccessResolution
from permitdesk.application.ports import AuthenticatedUser, IdentityProvider
from permitdesk.application.services.audit_trail import AuditTrailRecorder, utc_now
from permitdesk.application.services.permission_store import PermissionStore
from permitdesk.domain.entities import ResolvedAccessProfile, UserProfile
from permitdesk.domain.entities.user_profile import initials_for
from permitdesk.domain.exceptions import (
    AuditWriteFailed,
    PermissionFetchFailed,
    PermissionWriteFailed,
    StoreError,
)
from permitdesk.domain.policy_catalog import defaults_for
from permitdesk.domain.value_objects import Role

logger = logging.getLogger("permitdesk.access")


class AccessProfileResolver:
    """Build the session's access profile, seeding defaults for new users.

    Persisted page access and capabilities are used verbatim. Role defaults
    are written only when nothing is persisted, so an administrator's
    customisation survives every later login.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        identity_provider: IdentityProvider,
        permission_store: PermissionStore,
        audit_trail: AuditTrailRecorder,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._identity_provider = identity_provider
        self._store = permission_store
        self._audit = audit_trail
        self._clock = clock

    async def execute(self) -> AccessResolution:
        """Resolve the profile of the current identity."""
        auth_user = await self._identity_provider.current_user()
        if auth_user is None:
            logger.info("No authenticated identity, resolving logged-out session")
            return AccessResolution(profile=None)

        resolution = AccessResolution(profile=None)
        profile = await self._load_profile(auth_user, resolution)
        defaults = defaults_for(profile.role)
        identity = profile.identity
        owner = {"display_name": profile.display_name, "email": profile.email}
        # role unknown after a failed profile read, so nothing is seeded or overwritten
        may_write = not resolution.profile_unverified

        # a failed read falls back to defaults for this session without writing them
        try:
            entries = await self._store.fetch_access(identity)
        except PermissionFetchFailed as exc:
            logger.warning("Page access fetch failed for %s, using role defaults: %s", identity, exc)
            resolution.warnings.append(exc)
            entries = list(defaults.page_access)
        if entries is None and not may_write:
            entries = list(defaults.page_access)
        elif entries is None:
            entries = list(defaults.page_access)
            resolution.seeded_access = True
            try:
                await self._store.upsert_access(identity, entries, **owner)
            except PermissionWriteFailed as exc:
                logger.warning("Seeding page access failed for %s: %s", identity, exc)
                resolution.warnings.append(exc)
            else:
                logger.info("Seeded %s page access for %s", profile.role.value, identity)

        try:
            capabilities = await self._store.fetch_capabilities(identity)
        except PermissionFetchFailed as exc:
            logger.warning("Capability fetch failed for %s, using role defaults: %s", identity, exc)
            resolution.warnings.append(exc)
            capabilities = defaults.capabilities
        if capabilities is None and not may_write:
            capabilities = defaults.capabilities
        elif capabilities is None:
            capabilities = defaults.capabilities
            resolution.seeded_capabilities = True
            try:
                await self._store.upsert_capabilities(identity, capabilities, **owner)
            except PermissionWriteFailed as exc:
                logger.warning("Seeding capabilities failed for %s: %s", identity, exc)
                resolution.warnings.append(exc)

        if may_write:
            try:
                await self._store.ensure_settings(identity, **owner)
            except PermissionWriteFailed as exc:
                logger.warning("Settings row could not be ensured for %s: %s", identity, exc)
                resolution.warnings.append(exc)

        resolved = ResolvedAccessProfile(
            profile=profile,
            page_access={entry.page: entry for entry in entries},
            capabilities=capabilities,
        )

        try:
            await self._audit.record_login(identity, profile.display_name, profile.email)
        except AuditWriteFailed as exc:
            logger.warning("Login for %s was not recorded: %s", identity, exc)
            resolution.warnings.append(exc)

        resolution.profile = resolved
        return resolution

    async def _load_profile(
        self, auth_user: AuthenticatedUser, resolution: AccessResolution
    ) -> UserProfile:
        identity = auth_user.identity
        stored: UserProfile | None = None
        try:
            async with self._uow_factory() as uow:
                stored = await uow.users.get_by_identity(identity)
        except StoreError as exc:
            logger.warning("Profile lookup failed for %s: %s", identity, exc)
            resolution.warnings.append(PermissionFetchFailed(f"Could not load profile for {identity}"))
            resolution.profile_unverified = True

        if stored is None:
            profile = UserProfile(
                identity=identity,
                display_name=auth_user.fallback_name,
                role=Role.USER,
                email=auth_user.email,
            )
        else:
            profile = UserProfile(
                identity=identity,
                display_name=stored.display_name or auth_user.fallback_name,
                role=Role.parse(stored.role),
                email=stored.email or auth_user.email,
                avatar=stored.avatar,
            )

        backfill = None
        if not profile.avatar and not resolution.profile_unverified:
            backfill = initials_for(profile.display_name)
        try:
            async with self._uow_factory() as uow:
                await uow.users.touch_login(identity, self._clock(), avatar=backfill)
        except StoreError as exc:
            logger.warning("Last login could not be updated for %s: %s", identity, exc)
            resolution.warnings.append(PermissionWriteFailed(f"Could not update login time for {identity}"))
        else:
            if backfill:
                profile.avatar = backfill
        return profile
