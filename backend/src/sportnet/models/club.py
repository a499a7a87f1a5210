"""
Club, ClubGroup, Join Request and Invite Models
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Table, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base

# Coaches (users) attached to a club
club_coaches = Table(
    "club_coaches",
    Base.metadata,
    Column("club_id", Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Club(Base):
    """
    Club Model
    Created by a coach or an admin; must be approved before it accepts members
    """

    __tablename__ = "clubs"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    creator_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    photo = Column(JSON, nullable=True)
    vision = Column(Text)
    conditions = Column(Text)
    president_id = Column(Uuid, ForeignKey("users.id"), nullable=True)
    is_approved = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    creator = relationship("User", foreign_keys=[creator_id])
    president = relationship("User", foreign_keys=[president_id])
    coaches = relationship("User", secondary=club_coaches)
    groups = relationship("ClubGroup", back_populates="club", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Club(name='{self.name}', approved={self.is_approved})>"


class ClubGroup(Base):
    """Training group inside a club, owned by a coach profile"""

    __tablename__ = "club_groups"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    owner_id = Column(Uuid, ForeignKey("coaches.id"), nullable=False, index=True)
    club_id = Column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    club_name = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    photo = Column(JSON, nullable=True)
    is_approved = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    club = relationship("Club", back_populates="groups")
    owner = relationship("Coach")

    def __repr__(self):
        return f"<ClubGroup(name='{self.name}', club='{self.club_name}')>"


class JoinClub(Base):
    __tablename__ = "join_club_requests"
    __table_args__ = (UniqueConstraint("user_id", "club_id", name="uq_join_club_user"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    club_id = Column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    is_approved = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class JoinGroup(Base):
    __tablename__ = "join_group_requests"
    __table_args__ = (UniqueConstraint("user_id", "group_id", name="uq_join_group_user"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Uuid, ForeignKey("club_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    is_approved = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Invite(Base):
    """Invitation from a coach to a user for exactly one club, group or event"""

    __tablename__ = "invites"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    inviter_id = Column(Uuid, ForeignKey("coaches.id"), nullable=False)
    invitee_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    club_id = Column(Uuid, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=True)
    group_id = Column(Uuid, ForeignKey("club_groups.id", ondelete="CASCADE"), nullable=True)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
