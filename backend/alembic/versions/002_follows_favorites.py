"""
Add follows and favorites

Revision ID: 002_follows_favorites
Revises: 001_initial
Create Date: 2026-10-19 00:00:00.000000
"""

import sqlalchemy as sa
from alembic import op

# Revision identifiers
revision = "002_follows_favorites"
down_revision = "001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "follows",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("follower_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("coach_id", sa.Uuid(), sa.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=True),
        sa.Column("club_id", sa.Uuid(), sa.ForeignKey("clubs.id", ondelete="CASCADE"), nullable=True),
        sa.Column("group_id", sa.Uuid(), sa.ForeignKey("club_groups.id", ondelete="CASCADE"), nullable=True),
        sa.Column("facility_id", sa.Uuid(), sa.ForeignKey("facilities.id", ondelete="CASCADE"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("follower_id", "coach_id", name="uq_follow_coach"),
        sa.UniqueConstraint("follower_id", "club_id", name="uq_follow_club"),
        sa.UniqueConstraint("follower_id", "group_id", name="uq_follow_group"),
        sa.UniqueConstraint("follower_id", "facility_id", name="uq_follow_facility"),
    )
    op.create_index("ix_follows_follower_id", "follows", ["follower_id"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("coach_id", sa.Uuid(), sa.ForeignKey("coaches.id", ondelete="CASCADE"), nullable=True),
        sa.Column("facility_id", sa.Uuid(), sa.ForeignKey("facilities.id", ondelete="CASCADE"), nullable=True),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "coach_id", name="uq_favorite_coach"),
        sa.UniqueConstraint("user_id", "facility_id", name="uq_favorite_facility"),
        sa.UniqueConstraint("user_id", "event_id", name="uq_favorite_event"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_favorites_user_id", table_name="favorites")
    op.drop_table("favorites")
    op.drop_index("ix_follows_follower_id", table_name="follows")
    op.drop_table("follows")
