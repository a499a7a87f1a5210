"""
Reservation Model
One participant's seat (or waitlist slot) in one event
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class Reservation(Base):
    """
    Reservation Model
    Cancellation is a flag; reservations are never deleted
    """

    __tablename__ = "reservations"
    __table_args__ = (UniqueConstraint("participant_id", "event_id", name="uq_reservation_participant_event"),)

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Associations
    participant_id = Column(Uuid, ForeignKey("participants.id"), nullable=False, index=True)
    event_id = Column(Uuid, ForeignKey("events.id"), nullable=False, index=True)

    # Flags
    is_approved = Column(Boolean, default=False, nullable=False)
    is_cancelled = Column(Boolean, default=False, nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)
    is_checked_in = Column(Boolean, default=False, nullable=False, index=True)
    is_wait_listed = Column(Boolean, default=False, nullable=False)
    is_joined = Column(Boolean, default=False, nullable=False)

    # event.start_time - check-in window
    check_in_deadline = Column(DateTime, nullable=False)
    qr = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    participant = relationship("Participant", back_populates="reservations")
    event = relationship("Event", back_populates="reservations")

    def __repr__(self):
        return (
            f"<Reservation(event='{self.event_id}', participant='{self.participant_id}', "
            f"checked_in={self.is_checked_in}, wait_listed={self.is_wait_listed})>"
        )
