"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the campus events service:
profiles, societies, society_members, events, event_rsvps,
event_checkins, event_reminders.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- profiles ---
    op.create_table(
        "profiles",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("full_name", sa.String(150), nullable=True),
        sa.Column("university", sa.String(150), nullable=True),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- societies ---
    op.create_table(
        "societies",
        sa.Column("society_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("slug", sa.String(150), nullable=False, unique=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.user_id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- society_members ---
    op.create_table(
        "society_members",
        sa.Column("society_id", sa.String(36), sa.ForeignKey("societies.society_id"), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.user_id"), primary_key=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("joined_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("society_id", sa.String(36), sa.ForeignKey("societies.society_id"), nullable=False),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.user_id"), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("location", sa.String(500), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("rsvp_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("allow_guests", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("max_guests_per_rsvp", sa.Integer, nullable=True),
        sa.Column("check_in_enabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("event_code", sa.String(16), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- event_rsvps ---
    op.create_table(
        "event_rsvps",
        sa.Column("rsvp_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.user_id"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="going"),
        sa.Column("guest_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_rsvps_event_user"),
    )
    op.create_index("ix_event_rsvps_event_id", "event_rsvps", ["event_id"])

    # --- event_checkins ---
    op.create_table(
        "event_checkins",
        sa.Column("checkin_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.user_id"), nullable=False),
        sa.Column(
            "rsvp_id", sa.String(36),
            sa.ForeignKey("event_rsvps.rsvp_id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("checked_in_by", sa.String(36), sa.ForeignKey("profiles.user_id"), nullable=False),
        sa.Column("check_in_method", sa.String(10), nullable=False, server_default="manual"),
        sa.Column("guest_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("checked_in_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_checkins_event_user"),
    )
    op.create_index("ix_event_checkins_event_id", "event_checkins", ["event_id"])

    # --- event_reminders ---
    op.create_table(
        "event_reminders",
        sa.Column("reminder_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("profiles.user_id"), nullable=False),
        sa.Column("reminder_type", sa.String(10), nullable=False),
        sa.Column("remind_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "user_id", "reminder_type", name="uq_event_reminders_event_user_type"),
    )
    op.create_index("ix_event_reminders_event_id", "event_reminders", ["event_id"])


def downgrade() -> None:
    op.drop_table("event_reminders")
    op.drop_table("event_checkins")
    op.drop_table("event_rsvps")
    op.drop_table("events")
    op.drop_table("society_members")
    op.drop_table("societies")
    op.drop_table("profiles")
