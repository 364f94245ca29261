"""Application ports - interfaces for external adapters."""

from permitdesk.application.ports.identity_provider import (
    AuthenticatedUser,
    IdentityProvider,
)
from permitdesk.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AuthenticatedUser",
    "IdentityProvider",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
