"""Initial schema: users, roles, projects, timesheets, rejection notes and admin catalogs

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"))]
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")))
    return cols


def upgrade() -> None:
    # --- roles & permissions ---
    op.create_table(
        "permissions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("actions", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_permissions_category", "permissions", ["category"])

    op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("role", sa.String(100), nullable=False),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_roles_role", "roles", ["role"])

    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.Uuid(), sa.ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
    )

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("profile_pic", sa.String(1000), nullable=True),
        sa.Column("reporting_manager_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("role_id", sa.Uuid(), sa.ForeignKey("roles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_reporting_manager_id", "users", ["reporting_manager_id"])
    op.create_index("ix_users_role_id", "users", ["role_id"])

    # --- catalogs ---
    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("time_entry", sa.String(20), nullable=False, server_default="Open Entry"),
        *_timestamps(),
    )

    # --- projects ---
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_name", sa.String(200), nullable=False),
        sa.Column("client_name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("planned_start_date", sa.Date(), nullable=True),
        sa.Column("planned_end_date", sa.Date(), nullable=True),
        sa.Column("actual_start_date", sa.Date(), nullable=True),
        sa.Column("actual_end_date", sa.Date(), nullable=True),
        sa.Column("project_lead_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("billing_model", sa.String(100), nullable=True),
        sa.Column("project_logo", sa.String(1000), nullable=True),
        sa.Column("open_for_time_entry", sa.String(20), nullable=False, server_default="opened"),
        sa.Column("status", sa.String(50), nullable=False, server_default="Not Started"),
        *_timestamps(),
    )
    op.create_index("ix_projects_project_name", "projects", ["project_name"])
    op.create_index("ix_projects_project_lead_id", "projects", ["project_lead_id"])

    op.create_table(
        "project_teams",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "project_team_members",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("team_id", sa.Uuid(), sa.ForeignKey("project_teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("dates", sa.JSON(), nullable=False),
    )
    op.create_index("ix_project_team_members_team_id", "project_team_members", ["team_id"])
    op.create_index("ix_project_team_members_user_id", "project_team_members", ["user_id"])

    # --- timesheets ---
    op.create_table(
        "timesheets",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("task_category_id", sa.Uuid(), sa.ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("task_detail", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("data_sheet", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="in_progress"),
        *_timestamps(),
    )
    op.create_index("ix_timesheets_project_id", "timesheets", ["project_id"])
    op.create_index("ix_timesheets_user_id", "timesheets", ["user_id"])
    op.create_index("ix_timesheets_start_date", "timesheets", ["start_date"])
    op.create_index("ix_timesheets_end_date", "timesheets", ["end_date"])
    op.create_index("ix_timesheets_status", "timesheets", ["status"])

    op.create_table(
        "rejection_notes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("week_start", sa.Date(), nullable=False),
        sa.Column("week_end", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "week_start", "week_end", name="uq_rejection_notes_user_week"),
    )
    op.create_index("ix_rejection_notes_user_id", "rejection_notes", ["user_id"])

    # --- subscriptions ---
    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("subscription_name", sa.String(200), nullable=False),
        sa.Column("provider", sa.String(200), nullable=False),
        sa.Column("license_count", sa.String(50), nullable=False),
        sa.Column("cost", sa.String(50), nullable=False),
        sa.Column("billing_cycle", sa.String(50), nullable=False),
        sa.Column("currency", sa.String(20), nullable=False),
        sa.Column("payment_method", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("next_due_date", sa.Date(), nullable=True),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_subscriptions_subscription_name", "subscriptions", ["subscription_name"], unique=True)

    # --- notifications ---
    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="info"),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(updated=False),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    # --- project status reports ---
    op.create_table(
        "project_status_reports",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("project_lead_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("planned_start_date", sa.Date(), nullable=False),
        sa.Column("planned_end_date", sa.Date(), nullable=False),
        sa.Column("actual_start_date", sa.Date(), nullable=True),
        sa.Column("actual_end_date", sa.Date(), nullable=True),
        sa.Column("reporting_period", sa.Date(), nullable=False),
        sa.Column("progress", sa.String(50), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("accomplishments", sa.Text(), nullable=False),
        sa.Column("goals", sa.Text(), nullable=False),
        sa.Column("blockers", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_project_status_reports_project_id", "project_status_reports", ["project_id"])


def downgrade() -> None:
    for table in (
        "project_status_reports",
        "notifications",
        "subscriptions",
        "rejection_notes",
        "timesheets",
        "project_team_members",
        "project_teams",
        "projects",
        "categories",
        "users",
        "role_permissions",
        "roles",
        "permissions",
    ):
        op.drop_table(table)
