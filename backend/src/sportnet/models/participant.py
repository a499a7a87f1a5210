"""
Participant Model
End-user profile that reserves events
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class Participant(Base):
    __tablename__ = "participants"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    name = Column(String(255), nullable=False)
    main_sport_id = Column(Uuid, ForeignKey("sports.id"), nullable=False)
    skill_level = Column(Integer, nullable=False)  # 1-10
    sport_goal_id = Column(Uuid, ForeignKey("sport_goals.id"), nullable=False)
    point = Column(Integer, nullable=True)
    membership_level = Column(String(20), nullable=True)  # Gold, Platinum, Bronze, Silver

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="participant", uselist=False)
    main_sport = relationship("Sport", foreign_keys=[main_sport_id])
    sport_goal = relationship("SportGoal")
    reservations = relationship("Reservation", back_populates="participant")

    def __repr__(self):
        return f"<Participant(name='{self.name}')>"
