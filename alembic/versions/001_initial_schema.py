"""Initial schema - users, access rows, permits and audit tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

USER_ROLES = ("admin", "manager", "staff", "viewer", "analyst", "user")
PERMIT_STATUSES = ("pending", "approved", "rejected", "uploaded")
CAPABILITY_COLUMNS = (
    "can_export_data",
    "can_import_data",
    "can_manage_users",
    "can_view_reports",
    "can_manage_settings",
    "can_approve_requests",
    "can_bulk_operations",
)


def _id() -> sa.Column:
    return sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()"))


def _owner() -> list[sa.Column]:
    return [
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(255), nullable=True),
        sa.Column("user_email", sa.String(255), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("auth_user_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("avatar", sa.String(10), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "role IN (" + ", ".join(f"'{r}'" for r in USER_ROLES) + ")", name="ck_users_role"
        ),
    )
    op.create_index("ix_users_auth_user_id", "users", ["auth_user_id"], unique=True)

    op.create_table(
        "user_page_access",
        _id(),
        *_owner(),
        sa.Column("page", sa.String(50), nullable=False),
        sa.Column("can_view", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("can_edit", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("can_delete", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("can_create", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.create_index("ix_user_page_access_user_page", "user_page_access", ["user_id", "page"], unique=True)

    op.create_table(
        "user_permissions",
        _id(),
        *_owner(),
        *[sa.Column(c, sa.Boolean(), nullable=False, server_default=sa.text("false")) for c in CAPABILITY_COLUMNS],
    )
    op.create_index("ix_user_permissions_user_id", "user_permissions", ["user_id"], unique=True)

    op.create_table(
        "user_settings",
        _id(),
        *_owner(),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_settings_user_id", "user_settings", ["user_id"], unique=True)

    op.execute("CREATE SEQUENCE permit_code_seq START 1")
    op.create_table(
        "permits",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("permit_code", sa.String(50), nullable=True),
        sa.Column("guest_name", sa.String(255), nullable=False),
        sa.Column("arrival_date", sa.Date(), nullable=False),
        sa.Column("departure_date", sa.Date(), nullable=False),
        sa.Column("nationality", sa.String(100), nullable=True),
        sa.Column("passport_no", sa.String(50), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("uploaded", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("last_updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in PERMIT_STATUSES) + ")", name="ck_permits_status"
        ),
        sa.CheckConstraint("uploaded = (status = 'uploaded')", name="ck_permits_uploaded"),
    )
    op.create_index("ix_permits_permit_code", "permits", ["permit_code"], unique=True)
    op.create_index("ix_permits_departure_date", "permits", ["departure_date"])

    op.create_table(
        "permit_history",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("seq", sa.BigInteger(), sa.Identity(), nullable=False, unique=True),
        sa.Column("permit_id", sa.UUID(), sa.ForeignKey("permits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("action_by", sa.String(255), nullable=True),
        sa.Column("action_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("metadata", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
    )
    op.create_index("ix_permit_history_permit_action_at", "permit_history", ["permit_id", "action_at"])

    op.create_table(
        "user_login",
        sa.Column("id", sa.UUID(), primary_key=True),
        *_owner(),
        sa.Column("login_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("success", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_index("ix_user_login_user_id", "user_login", ["user_id"])

    op.create_table(
        "user_activity",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("seq", sa.BigInteger(), sa.Identity(), nullable=False, unique=True),
        *_owner(),
        sa.Column("action", sa.String(255), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=True),
        sa.Column("entity_id", sa.String(255), nullable=True),
        sa.Column("metadata", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_activity_user_id", "user_activity", ["user_id"])


def downgrade() -> None:
    op.drop_table("user_activity")
    op.drop_table("user_login")
    op.drop_table("permit_history")
    op.drop_table("permits")
    op.execute("DROP SEQUENCE IF EXISTS permit_code_seq")
    op.drop_table("user_settings")
    op.drop_table("user_permissions")
    op.drop_table("user_page_access")
    op.drop_table("users")
