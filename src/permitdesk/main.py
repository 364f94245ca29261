"""Application entry point and composition root."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from functools import partial
from zoneinfo import ZoneInfo

from permitdesk import __version__
from permitdesk.application.services.audit_trail import AuditTrailRecorder
from permitdesk.application.services.permission_store import PermissionStore
from permitdesk.application.session import SessionContext
from permitdesk.application.use_cases.access.resolve_access_profile import AccessProfileResolver
from permitdesk.application.use_cases.permit.get_permit import ListPermitsUseCase
from permitdesk.application.use_cases.permit.transition_permit import PermitWorkflowEngine
from permitdesk.config import Settings, get_settings
from permitdesk.infrastructure.auth.keycloak_provider import KeycloakIdentityProvider
from permitdesk.infrastructure.persistence.postgres.connection import create_pool, pool_lifespan
from permitdesk.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from permitdesk.logging_setup import setup_logging


def main() -> None:
    """CLI entry point."""
    print(f"PermitDesk v{__version__}")


def build_session_context(
    uow_factory: object,
    identity_provider: object,
    clock: object,
) -> SessionContext:
    """Wire services around an existing unit of work factory."""
    audit_trail = AuditTrailRecorder(uow_factory, clock=clock)
    permission_store = PermissionStore(uow_factory)
    resolver = AccessProfileResolver(
        unit_of_work_factory=uow_factory,
        identity_provider=identity_provider,
        permission_store=permission_store,
        audit_trail=audit_trail,
        clock=clock,
    )
    workflow = PermitWorkflowEngine(
        unit_of_work_factory=uow_factory,
        audit_trail=audit_trail,
        clock=clock,
    )
    return SessionContext(
        resolver=resolver,
        identity_provider=identity_provider,
        workflow=workflow,
        list_permits=ListPermitsUseCase(uow_factory),
        clock=clock,
    )


@asynccontextmanager
async def open_session(
    access_token: str,
    refresh_token: str | None = None,
    settings: Settings | None = None,
) -> AsyncIterator[SessionContext]:
    """Composition root - open the pool, start a session, tear both down on exit."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    identity_provider = KeycloakIdentityProvider(
        server_url=settings.keycloak_url,
        realm=settings.keycloak_realm,
        client_id=settings.keycloak_client_id,
        client_secret=settings.keycloak_client_secret,
        access_token=access_token,
        refresh_token=refresh_token,
    )
    clock = partial(datetime.now, ZoneInfo(settings.timezone))

    async with pool_lifespan(pool):
        session = build_session_context(create_uow_factory(pool), identity_provider, clock)
        await session.start()
        try:
            yield session
        finally:
            await session.close()
