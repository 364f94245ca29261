"""Assign role use case."""

from permitdesk.application.services import access_gate
from permitdesk.application.services.audit_trail import AuditTrailRecorder
from permitdesk.application.services.permission_store import PermissionStore
from permitdesk.domain.entities import ResolvedAccessProfile, UserProfile
from permitdesk.domain.entities.history_entry import USER_ENTITY
from permitdesk.domain.exceptions import PermissionWriteFailed, StoreError
from permitdesk.domain.value_objects import Role


class AssignRoleUseCase:
    """Set a user's role and reset their grants to that role's defaults."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_store: PermissionStore,
        audit_trail: AuditTrailRecorder,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._store = permission_store
        self._audit = audit_trail

    async def execute(
        self,
        actor: ResolvedAccessProfile,
        identity: str,
        display_name: str,
        role: Role | str,
        email: str | None = None,
    ) -> UserProfile:
        """Create or update the user profile. Actor must be able to manage users."""
        access_gate.require_capability(actor, "can_manage_users")
        role = Role.parse(role)

        try:
            async with self._uow_factory() as uow:
                existing = await uow.users.get_by_identity(identity)
                profile = UserProfile(
                    identity=identity,
                    display_name=display_name,
                    role=role,
                    email=email,
                    avatar=existing.avatar if existing else None,
                )
                profile = await uow.users.upsert(profile)
        except StoreError as exc:
            raise PermissionWriteFailed(f"Could not save profile of {identity}") from exc

        await self._store.replace_for_role(
            identity, role, display_name=display_name, email=email
        )
        await self._audit.record_activity(
            actor.identity,
            "role_assigned",
            USER_ENTITY,
            identity,
            {**actor.actor_metadata(), "role": role.value},
        )
        return profile
