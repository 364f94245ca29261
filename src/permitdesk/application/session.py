"""Session context - holds the resolved profile for one login session."""

import logging
from collections.abc import Callable
from datetime import datetime

from permitdesk.application.dto.permit_dto import TransitionOutcome
from permitdesk.application.ports import IdentityProvider
from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import utc_now
from permitdesk.application.use_cases.access.resolve_access_profile import AccessProfileResolver
from permitdesk.application.use_cases.permit.get_permit import ListPermitsUseCase
from permitdesk.application.use_cases.permit.transition_permit import PermitWorkflowEngine
from permitdesk.domain.entities import Permit, ResolvedAccessProfile
from permitdesk.domain.exceptions import IdentityUnavailable, NotFound, PermitDeskError
from permitdesk.domain.urgency import PendingUpload, pending_uploads
from permitdesk.domain.value_objects import PageId, PermitStatus

logger = logging.getLogger("permitdesk.session")


class SessionContext:
    """Explicit replacement for an app-wide access context.

    Created at login and closed at logout. Results of async work that finish
    after close(), or after a newer refresh() started, are dropped.
    """

    def __init__(
        self,
        resolver: AccessProfileResolver,
        identity_provider: IdentityProvider,
        workflow: PermitWorkflowEngine,
        list_permits: ListPermitsUseCase,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._resolver = resolver
        self._identity_provider = identity_provider
        self._workflow = workflow
        self._list_permits = list_permits
        self._clock = clock
        self._profile: ResolvedAccessProfile | None = None
        self._warnings: list[PermitDeskError] = []
        self._permits: dict[str, Permit] = {}
        self._generation = 0
        self._active = True
        self.loading = False

    @property
    def profile(self) -> ResolvedAccessProfile | None:
        return self._profile

    @property
    def warnings(self) -> list[PermitDeskError]:
        return list(self._warnings)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_admin(self) -> bool:
        return self._profile is not None and self._profile.is_admin

    @property
    def permits(self) -> list[Permit]:
        return list(self._permits.values())

    async def start(self) -> ResolvedAccessProfile | None:
        return await self.refresh()

    async def refresh(self) -> ResolvedAccessProfile | None:
        """Resolve the profile again and replace the held one wholesale."""
        self._ensure_active()
        self._generation += 1
        generation = self._generation
        self.loading = True
        try:
            resolution = await self._resolver.execute()
        finally:
            if generation == self._generation:
                self.loading = False
        if not self._is_current(generation):
            logger.debug("Discarding stale profile resolution %d", generation)
            return self._profile
        self._profile = resolution.profile
        self._warnings = list(resolution.warnings)
        if self._profile is None:
            self._permits = {}
        return self._profile

    async def close(self) -> None:
        """Sign out and tear down. Later completions are ignored."""
        if not self._active:
            return
        self._active = False
        self._generation += 1
        self._profile = None
        self._permits = {}
        self._warnings = []
        await self._identity_provider.sign_out()

    def can_view_page(self, page: PageId | str) -> bool:
        return access_gate.can_view_page(self._profile, page)

    def visible_pages(self) -> list[PageId]:
        return access_gate.visible_pages(self._profile)

    def has_capability(self, name: str) -> bool:
        return access_gate.has_capability(self._profile, name)

    async def load_permits(self, status: PermitStatus | str | None = None) -> list[Permit]:
        """Load permits into the session cache."""
        profile = self._require_profile()
        generation = self._generation
        permits = await self._list_permits.execute(profile, status)
        if self._is_current(generation):
            self._permits = {str(p.id): p for p in permits}
        return permits

    async def transition_permit(
        self, permit_id: object, new_status: PermitStatus | str
    ) -> TransitionOutcome:
        """Change status of a cached permit. The cache is updated only after the store confirms."""
        profile = self._require_profile()
        permit = self._permits.get(str(permit_id))
        if permit is None:
            raise NotFound("Permit", str(permit_id))
        generation = self._generation
        outcome = await self._workflow.transition(permit, new_status, profile)
        if self._is_current(generation):
            self._permits[str(permit_id)] = outcome.permit
            self._warnings.extend(outcome.warnings)
        return outcome

    def pending_uploads(self) -> list[PendingUpload]:
        """Prioritised view over the cached permits."""
        return pending_uploads(self._permits.values(), self._clock())

    def _is_current(self, generation: int) -> bool:
        return self._active and generation == self._generation

    def _ensure_active(self) -> None:
        if not self._active:
            raise IdentityUnavailable("Session is closed")

    def _require_profile(self) -> ResolvedAccessProfile:
        self._ensure_active()
        if self._profile is None:
            raise IdentityUnavailable("No authenticated user in this session")
        return self._profile
