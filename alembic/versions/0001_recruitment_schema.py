"""recruitment schema

Revision ID: 0001_recruitment_schema
Revises:
Create Date: 2026-10-19

Creates users, domain memberships, the three task tables and meetings.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import context, op


revision = "0001_recruitment_schema"
down_revision = None
branch_labels = None
depends_on = None

TASK_TABLES = ("tech_tasks", "design_tasks", "management_tasks")


def _is_offline() -> bool:
    try:
        return bool(context.is_offline_mode())
    except NameError:
        return False


def _has_table(name: str) -> bool:
    return sa.inspect(op.get_bind()).has_table(name)


def _create_table_once(name: str, *columns, **kwargs) -> bool:
    if not _is_offline() and _has_table(name):
        return False
    op.create_table(name, *columns, **kwargs)
    return True


def upgrade() -> None:
    if _create_table_once(
        "users",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("username", sa.String(length=128), nullable=False, server_default=""),
        sa.Column("email", sa.String(length=256), nullable=True),
        sa.Column("regno", sa.String(length=32), nullable=True, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False, server_default=""),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("tech", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("design", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("management", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_core", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("mobile", sa.String(length=32), nullable=True),
        sa.Column("email_personal", sa.String(length=256), nullable=True),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_profile_done", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("admin_notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ):
        op.create_index("ix_users_email", "users", ["email"])
        op.create_index("ix_users_created_at", "users", ["created_at"])

    if _create_table_once(
        "user_domains",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=32), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("domain", sa.String(length=16), nullable=False),
        sa.UniqueConstraint("user_id", "domain", name="uq_user_domains_user_domain"),
    ):
        op.create_index("ix_user_domains_user_id", "user_domains", ["user_id"])
        op.create_index("ix_user_domains_domain", "user_domains", ["domain"])

    for table in TASK_TABLES:
        if _create_table_once(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("user_id", sa.String(length=32), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("subdomain_json", sa.Text(), nullable=True),
            sa.Column("answers_json", sa.Text(), nullable=False, server_default="{}"),
            sa.Column("is_done", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        ):
            op.create_index(f"ix_{table}_user_id", table, ["user_id"])
            op.create_index(f"ix_{table}_created_at", table, ["created_at"])

    if _create_table_once(
        "meetings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=32), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("interviewer_emails_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("scheduled_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("gmeet_link", sa.String(length=512), nullable=True),
        sa.Column("google_event_id", sa.String(length=256), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="scheduled"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ):
        op.create_index("ix_meetings_user_id", "meetings", ["user_id"])
        op.create_index("ix_meetings_scheduled_time", "meetings", ["scheduled_time"])


def downgrade() -> None:
    op.drop_table("meetings")
    for table in reversed(TASK_TABLES):
        op.drop_table(table)
    op.drop_table("user_domains")
    op.drop_table("users")
