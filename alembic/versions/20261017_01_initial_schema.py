"""initial portal schema

Revision ID: 20261017_01
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20261017_01"
down_revision = None
branch_labels = None
depends_on = None


def _table_exists(table_name: str) -> bool:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    return table_name in set(inspector.get_table_names())


def upgrade() -> None:
    if not _table_exists("users"):
        op.create_table(
            "users",
            sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("username", sa.String(length=64), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("full_name", sa.String(length=255), nullable=False),
            sa.Column("mobile", sa.String(length=20), nullable=False),
            sa.Column("address", sa.Text(), nullable=False),
            sa.Column("user_type", sa.String(length=16), nullable=False, server_default="citizen"),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
            sa.PrimaryKeyConstraint("user_id"),
        )
        op.create_index("ix_users_username", "users", ["username"], unique=True)
        op.create_index("ix_users_email", "users", ["email"], unique=True)
        op.create_index("ix_users_user_type", "users", ["user_type"], unique=False)

    if not _table_exists("fir"):
        op.create_table(
            "fir",
            sa.Column("fir_id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("fir_number", sa.String(length=32), nullable=False),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
            sa.Column("complainant_name", sa.String(length=255), nullable=False),
            sa.Column("mobile", sa.String(length=20), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("address", sa.Text(), nullable=False),
            sa.Column("crime_type", sa.String(length=64), nullable=False),
            sa.Column("incident_details", sa.Text(), nullable=False),
            sa.Column("incident_date", sa.Date(), nullable=False),
            sa.Column("incident_location", sa.String(length=512), nullable=False),
            sa.Column("status", sa.String(length=32), nullable=False, server_default="Pending"),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("fir_id"),
        )
        op.create_index("ix_fir_fir_number", "fir", ["fir_number"], unique=True)
        op.create_index("ix_fir_user_id", "fir", ["user_id"], unique=False)
        op.create_index("ix_fir_crime_type", "fir", ["crime_type"], unique=False)
        op.create_index("ix_fir_status", "fir", ["status"], unique=False)
        op.create_index("ix_fir_created_at", "fir", ["created_at"], unique=False)

    if not _table_exists("fir_status_history"):
        op.create_table(
            "fir_status_history",
            sa.Column("history_id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("fir_id", sa.Integer(), sa.ForeignKey("fir.fir_id", ondelete="CASCADE"), nullable=False),
            sa.Column("old_status", sa.String(length=32), nullable=True),
            sa.Column("new_status", sa.String(length=32), nullable=False),
            sa.Column("changed_by", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=True),
            sa.Column("remarks", sa.Text(), nullable=False),
            sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("history_id"),
        )
        op.create_index("ix_fir_status_history_fir_id", "fir_status_history", ["fir_id"], unique=False)

    if not _table_exists("complaints"):
        op.create_table(
            "complaints",
            sa.Column("complaint_id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("complaint_number", sa.String(length=32), nullable=False),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
            sa.Column("complainant_name", sa.String(length=255), nullable=False),
            sa.Column("contact", sa.String(length=255), nullable=False),
            sa.Column("complaint_type", sa.String(length=64), nullable=False),
            sa.Column("complaint_details", sa.Text(), nullable=False),
            sa.Column("status", sa.String(length=32), nullable=False, server_default="Pending"),
            sa.Column("resolution_details", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("complaint_id"),
        )
        op.create_index("ix_complaints_complaint_number", "complaints", ["complaint_number"], unique=True)
        op.create_index("ix_complaints_user_id", "complaints", ["user_id"], unique=False)
        op.create_index("ix_complaints_status", "complaints", ["status"], unique=False)
        op.create_index("ix_complaints_created_at", "complaints", ["created_at"], unique=False)

    if not _table_exists("emergency_alerts"):
        op.create_table(
            "emergency_alerts",
            sa.Column("alert_id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
            sa.Column("alert_type", sa.String(length=64), nullable=False),
            sa.Column("latitude", sa.Float(), nullable=True),
            sa.Column("longitude", sa.Float(), nullable=True),
            sa.Column("location_description", sa.Text(), nullable=False),
            sa.Column("status", sa.String(length=16), nullable=False, server_default="active"),
            sa.Column("resolved_by", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=True),
            sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("alert_id"),
        )
        op.create_index("ix_emergency_alerts_user_id", "emergency_alerts", ["user_id"], unique=False)
        op.create_index("ix_emergency_alerts_status", "emergency_alerts", ["status"], unique=False)
        op.create_index("ix_emergency_alerts_created_at", "emergency_alerts", ["created_at"], unique=False)

    if not _table_exists("notifications"):
        op.create_table(
            "notifications",
            sa.Column("notification_id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(
                "user_id",
                sa.Integer(),
                sa.ForeignKey("users.user_id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("notification_type", sa.String(length=32), nullable=False),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("reference_id", sa.Integer(), nullable=True),
            sa.Column("reference_type", sa.String(length=16), nullable=True),
            sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint("notification_id"),
        )
        op.create_index("ix_notifications_user_read", "notifications", ["user_id", "is_read"], unique=False)


def downgrade() -> None:
    for table in (
        "notifications",
        "emergency_alerts",
        "complaints",
        "fir_status_history",
        "fir",
        "users",
    ):
        if _table_exists(table):
            op.drop_table(table)
