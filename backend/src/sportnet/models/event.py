"""
Event Model
A coach-owned session with a fixed capacity
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class EventType(str, enum.Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    ONLINE = "Online"


class PriceType(str, enum.Enum):
    MANUAL = "Manual"
    STABLE = "Stable"
    FREE = "Free"


class Event(Base):
    """
    Event Model
    Capacity is fixed once created
    """

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_event_time_order"),
        CheckConstraint("capacity >= 0", name="ck_event_capacity"),
    )

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Ownership (both are coach users)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    backup_coach_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    club_id = Column(Uuid, ForeignKey("clubs.id", ondelete="SET NULL"), nullable=True, index=True)
    group_id = Column(Uuid, ForeignKey("club_groups.id", ondelete="SET NULL"), nullable=True, index=True)

    # Schedule & capacity
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    capacity = Column(Integer, nullable=False)
    level = Column(Integer, nullable=False)  # 1-10
    event_type = Column(
        SQLEnum(EventType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )

    # Style (denormalised name/color for calendar rendering)
    style_id = Column(Uuid, ForeignKey("event_styles.id"), nullable=False)
    style_name = Column(String(100), nullable=False)
    style_color = Column(String(7), nullable=False)

    # Visibility
    is_private = Column(Boolean, nullable=False, default=False)
    secret_id = Column(String(64), nullable=True)  # Only set for private events, never serialised

    # Sport
    sport_group_id = Column(Uuid, ForeignKey("sport_groups.id"), nullable=False)
    sport_id = Column(Uuid, ForeignKey("sports.id"), nullable=False, index=True)

    # Pricing
    price_type = Column(
        SQLEnum(PriceType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    participation_fee = Column(Float, nullable=False, default=0)
    is_recurring = Column(Boolean, nullable=False, default=False)

    # Location (at least one of the three)
    facility_id = Column(Uuid, ForeignKey("facilities.id"), nullable=True)
    salon_id = Column(Uuid, ForeignKey("salons.id"), nullable=True)
    location = Column(Text, nullable=True)

    equipment = Column(Text, nullable=False)
    point = Column(Integer, nullable=True)

    # Stored file references {"path", "original_name", "mime_type", "size"}
    banner = Column(JSON, nullable=True)
    photo = Column(JSON, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id])
    backup_coach = relationship("User", foreign_keys=[backup_coach_id])
    sport = relationship("Sport")
    reservations = relationship("Reservation", back_populates="event")

    def __repr__(self):
        return f"<Event(name='{self.name}', start='{self.start_time}', capacity={self.capacity})>"

    def is_managed_by(self, user) -> bool:
        """Owner, backup coach or admin"""
        return user.is_admin or self.owner_id == user.id or self.backup_coach_id == user.id
