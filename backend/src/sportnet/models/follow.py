"""
Follow and Favorite Models
A user follows coaches, clubs, groups and facilities, and bookmarks
coaches, facilities and events. Each row points at exactly one target.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid

from sportnet.database import Base


class Follow(Base):
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "coach_id", name="uq_follow_coach"),
        UniqueConstraint("follower_id", "club_id", name="uq_follow_club"),
        UniqueConstraint("follower_id", "group_id", name="uq_follow_group"),
        UniqueConstraint("follower_id", "facility_id", name="uq_follow_facility"),
    )

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    follower_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Target (one of)
    coach_id = Column(Uuid, ForeignKey("coaches.id", ondelete="CASCADE"), nullable=True)
    club_id = Column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=True)
    group_id = Column(Uuid, ForeignKey("club_groups.id", ondelete="CASCADE"), nullable=True)
    facility_id = Column(Uuid, ForeignKey("facilities.id", ondelete="CASCADE"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Follow(follower='{self.follower_id}')>"


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "coach_id", name="uq_favorite_coach"),
        UniqueConstraint("user_id", "facility_id", name="uq_favorite_facility"),
        UniqueConstraint("user_id", "event_id", name="uq_favorite_event"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    coach_id = Column(Uuid, ForeignKey("coaches.id", ondelete="CASCADE"), nullable=True)
    facility_id = Column(Uuid, ForeignKey("facilities.id", ondelete="CASCADE"), nullable=True)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Favorite(user='{self.user_id}')>"
