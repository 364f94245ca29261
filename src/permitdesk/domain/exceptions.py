"""Domain exceptions."""


class PermitDeskError(Exception):
    """Base exception for PermitDesk."""

    pass


class PermissionDenied(PermitDeskError):
    """User does not have permission for the requested action."""

    pass


class NotFound(PermitDeskError):
    """Requested resource was not found."""

    pass


class ValidationError(PermitDeskError):
    """Validation failed for input data."""

    pass


class InvalidTransition(ValidationError):
    """Permit status change is not allowed by the workflow."""

    pass


class IdentityUnavailable(PermitDeskError):
    """No authenticated session."""

    pass


class PermissionFetchFailed(PermitDeskError):
    """Permission rows could not be read from the store."""

    pass


class PermissionWriteFailed(PermitDeskError):
    """Permission rows could not be written to the store."""

    pass


class TransitionPersistFailed(PermitDeskError):
    """Permit status change could not be saved."""

    pass


class AuditWriteFailed(PermitDeskError):
    """History entry could not be appended."""

    pass


class StoreError(PermitDeskError):
    """Persistence layer failed to read or write."""

    pass
