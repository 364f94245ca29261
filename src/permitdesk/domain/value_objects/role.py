"""User roles."""

from enum import StrEnum


class Role(StrEnum):
    """Closed set of roles a user profile can hold."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    VIEWER = "viewer"
    ANALYST = "analyst"
    USER = "user"

    @classmethod
    def parse(cls, value: "str | Role | None") -> "Role":
        """Coerce a stored role string, unknown values become USER."""
        if isinstance(value, Role):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.USER
