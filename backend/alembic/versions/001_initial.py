"""
Initial migration - Create all tables

Revision ID: 001_initial
Create Date: 2026-10-19 00:00:00.000000
"""

import sqlalchemy as sa
from alembic import op

# Revision identifiers
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True):
    columns = [sa.Column("created_at", sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(), nullable=False))
    return columns


def upgrade() -> None:
    """Create all tables"""

    # Reference data
    op.create_table(
        "sport_groups",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "sports",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("group_id", sa.Uuid(), sa.ForeignKey("sport_groups.id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("group_name", sa.String(100), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_sports_group_id", "sports", ["group_id"])

    op.create_table(
        "sport_goals",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "event_styles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("color", sa.String(7), nullable=False),
        *_timestamps(updated=False),
    )

    # Profiles
    op.create_table(
        "participants",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("main_sport_id", sa.Uuid(), sa.ForeignKey("sports.id"), nullable=False),
        sa.Column("skill_level", sa.Integer(), nullable=False),
        sa.Column("sport_goal_id", sa.Uuid(), sa.ForeignKey("sport_goals.id"), nullable=False),
        sa.Column("point", sa.Integer()),
        sa.Column("membership_level", sa.String(20)),
        *_timestamps(),
    )

    op.create_table(
        "coaches",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("membership_level", sa.String(20)),
        sa.Column("point", sa.Integer()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("participant_id", sa.Uuid(), sa.ForeignKey("participants.id", ondelete="SET NULL")),
        sa.Column("coach_id", sa.Uuid(), sa.ForeignKey("coaches.id", ondelete="SET NULL")),
        sa.Column("role", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime()),
        sa.Column("failed_login_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("locked_until", sa.DateTime()),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_participant_id", "users", ["participant_id"])
    op.create_index("ix_users_coach_id", "users", ["coach_id"])

    # Venues
    op.create_table(
        "facilities",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text()),
        *_timestamps(updated=False),
    )
    op.create_index("ix_facilities_owner_id", "facilities", ["owner_id"])

    op.create_table(
        "salons",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("facility_id", sa.Uuid(), sa.ForeignKey("facilities.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_salons_facility_id", "salons", ["facility_id"])

    # Clubs & groups
    op.create_table(
        "clubs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("creator_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("photo", sa.JSON()),
        sa.Column("vision", sa.Text()),
        sa.Column("conditions", sa.Text()),
        sa.Column("president_id", sa.Uuid(), sa.ForeignKey("users.id")),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_clubs_creator_id", "clubs", ["creator_id"])
    op.create_index("ix_clubs_name", "clubs", ["name"])

    op.create_table(
        "club_coaches",
        sa.Column("club_id", sa.Uuid(), sa.ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "club_groups",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("coaches.id"), nullable=False),
        sa.Column("club_id", sa.Uuid(), sa.ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("club_name", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("photo", sa.JSON()),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_club_groups_owner_id", "club_groups", ["owner_id"])
    op.create_index("ix_club_groups_club_id", "club_groups", ["club_id"])

    # Events & reservations
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("backup_coach_id", sa.Uuid(), sa.ForeignKey("users.id")),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("club_id", sa.Uuid(), sa.ForeignKey("clubs.id", ondelete="SET NULL")),
        sa.Column("group_id", sa.Uuid(), sa.ForeignKey("club_groups.id", ondelete="SET NULL")),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("event_type", sa.Enum("Indoor", "Outdoor", "Online", name="eventtype"), nullable=False),
        sa.Column("style_id", sa.Uuid(), sa.ForeignKey("event_styles.id"), nullable=False),
        sa.Column("style_name", sa.String(100), nullable=False),
        sa.Column("style_color", sa.String(7), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("secret_id", sa.String(64)),
        sa.Column("sport_group_id", sa.Uuid(), sa.ForeignKey("sport_groups.id"), nullable=False),
        sa.Column("sport_id", sa.Uuid(), sa.ForeignKey("sports.id"), nullable=False),
        sa.Column("price_type", sa.Enum("Manual", "Stable", "Free", name="pricetype"), nullable=False),
        sa.Column("participation_fee", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("facility_id", sa.Uuid(), sa.ForeignKey("facilities.id")),
        sa.Column("salon_id", sa.Uuid(), sa.ForeignKey("salons.id")),
        sa.Column("location", sa.Text()),
        sa.Column("equipment", sa.Text(), nullable=False),
        sa.Column("point", sa.Integer()),
        sa.Column("banner", sa.JSON()),
        sa.Column("photo", sa.JSON()),
        *_timestamps(),
        sa.CheckConstraint("start_time < end_time", name="ck_event_time_order"),
        sa.CheckConstraint("capacity >= 0", name="ck_event_capacity"),
    )
    op.create_index("ix_events_owner_id", "events", ["owner_id"])
    op.create_index("ix_events_backup_coach_id", "events", ["backup_coach_id"])
    op.create_index("ix_events_club_id", "events", ["club_id"])
    op.create_index("ix_events_group_id", "events", ["group_id"])
    op.create_index("ix_events_start_time", "events", ["start_time"])
    op.create_index("ix_events_sport_id", "events", ["sport_id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("participant_id", sa.Uuid(), sa.ForeignKey("participants.id"), nullable=False),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_cancelled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_checked_in", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_wait_listed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_joined", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("check_in_deadline", sa.DateTime(), nullable=False),
        sa.Column("qr", sa.String(255)),
        *_timestamps(),
        sa.UniqueConstraint("participant_id", "event_id", name="uq_reservation_participant_event"),
    )
    op.create_index("ix_reservations_participant_id", "reservations", ["participant_id"])
    op.create_index("ix_reservations_event_id", "reservations", ["event_id"])
    op.create_index("ix_reservations_is_checked_in", "reservations", ["is_checked_in"])

    # Coach certification
    op.create_table(
        "branches",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("coach_id", sa.Uuid(), sa.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False),
        sa.Column("sport_id", sa.Uuid(), sa.ForeignKey("sports.id"), nullable=False),
        sa.Column("branch_order", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("certificate", sa.JSON(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("Pending", "Approved", "Rejected", name="branchstatus"),
            nullable=False,
            server_default="Pending",
        ),
        *_timestamps(),
        sa.UniqueConstraint("coach_id", "branch_order", name="uq_branch_coach_order"),
        sa.UniqueConstraint("coach_id", "sport_id", name="uq_branch_coach_sport"),
    )
    op.create_index("ix_branches_coach_id", "branches", ["coach_id"])
    op.create_index("ix_branches_status", "branches", ["status"])

    # Membership
    op.create_table(
        "join_club_requests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("club_id", sa.Uuid(), sa.ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "club_id", name="uq_join_club_user"),
    )
    op.create_index("ix_join_club_requests_user_id", "join_club_requests", ["user_id"])
    op.create_index("ix_join_club_requests_club_id", "join_club_requests", ["club_id"])

    op.create_table(
        "join_group_requests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("group_id", sa.Uuid(), sa.ForeignKey("club_groups.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "group_id", name="uq_join_group_user"),
    )
    op.create_index("ix_join_group_requests_user_id", "join_group_requests", ["user_id"])
    op.create_index("ix_join_group_requests_group_id", "join_group_requests", ["group_id"])

    op.create_table(
        "invites",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("inviter_id", sa.Uuid(), sa.ForeignKey("coaches.id"), nullable=False),
        sa.Column("invitee_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("club_id", sa.Uuid(), sa.ForeignKey("clubs.id", ondelete="CASCADE")),
        sa.Column("group_id", sa.Uuid(), sa.ForeignKey("club_groups.id", ondelete="CASCADE")),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="CASCADE")),
        *_timestamps(updated=False),
    )
    op.create_index("ix_invites_invitee_id", "invites", ["invitee_id"])

    # Notifications
    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("scope", sa.Enum("user", "global", "role", "group", name="notificationscope"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE")),
        sa.Column("target_role", sa.Integer()),
        sa.Column(
            "notification_type",
            sa.Enum(
                "event_created",
                "event_updated",
                "event_cancelled",
                "reservation_approved",
                "reservation_rejected",
                "reservation_reminder",
                "certificate_approved",
                "certificate_rejected",
                "join_request_approved",
                "join_request_rejected",
                "invite_received",
                "message_received",
                "follow_new_event",
                "system_announcement",
                "maintenance_notice",
                name="notificationtype",
            ),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("data", sa.JSON()),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime()),
        sa.Column(
            "priority",
            sa.Enum("low", "normal", "high", "urgent", name="notificationpriority"),
            nullable=False,
            server_default="normal",
        ),
        sa.Column("action_url", sa.String(500)),
        sa.Column(
            "icon",
            sa.Enum("bell", "check-circle", "x-circle", "calendar", "user", "alert", "info", name="notificationicon"),
        ),
        sa.Column("expires_at", sa.DateTime()),
        sa.Column("created_by", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        *_timestamps(updated=False),
    )
    op.create_index("ix_notifications_notification_type", "notifications", ["notification_type"])
    op.create_index("ix_notifications_user_read_created", "notifications", ["user_id", "is_read", "created_at"])
    op.create_index("ix_notifications_scope_created", "notifications", ["scope", "created_at"])

    op.create_table(
        "notification_targets",
        sa.Column(
            "notification_id", sa.Uuid(), sa.ForeignKey("notifications.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "notification_reads",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "notification_id", sa.Uuid(), sa.ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("read_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("notification_id", "user_id", name="uq_notification_read_user"),
    )
    op.create_index("ix_notification_reads_user_id", "notification_reads", ["user_id"])


def downgrade() -> None:
    """Drop all tables"""
    for table in (
        "notification_reads",
        "notification_targets",
        "notifications",
        "invites",
        "join_group_requests",
        "join_club_requests",
        "branches",
        "reservations",
        "events",
        "club_groups",
        "club_coaches",
        "clubs",
        "salons",
        "facilities",
        "users",
        "coaches",
        "participants",
        "event_styles",
        "sport_goals",
        "sports",
        "sport_groups",
    ):
        op.drop_table(table)

    for enum_name in (
        "eventtype",
        "pricetype",
        "branchstatus",
        "notificationscope",
        "notificationtype",
        "notificationpriority",
        "notificationicon",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
