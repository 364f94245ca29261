"""PermitDesk - access control and permit workflow core."""

__version__ = "0.1.0"
