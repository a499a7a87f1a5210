"""
Reference Data Models
Sports, sport groups, goals, event styles, facilities and salons
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class SportGroup(Base):
    __tablename__ = "sport_groups"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    sports = relationship("Sport", back_populates="group")

    def __repr__(self):
        return f"<SportGroup(name='{self.name}')>"


class Sport(Base):
    __tablename__ = "sports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    group_id = Column(Uuid, ForeignKey("sport_groups.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    group_name = Column(String(100), nullable=False)  # Denormalised for listings
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    group = relationship("SportGroup", back_populates="sports")

    def __repr__(self):
        return f"<Sport(name='{self.name}', group='{self.group_name}')>"


class SportGoal(Base):
    __tablename__ = "sport_goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class EventStyle(Base):
    __tablename__ = "event_styles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=False)  # "#RGB" or "#RRGGBB"
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Facility(Base):
    """A venue owned by a facility owner; events may take place there"""

    __tablename__ = "facilities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    salons = relationship("Salon", back_populates="facility", cascade="all, delete-orphan")


class Salon(Base):
    """A hall inside a facility"""

    __tablename__ = "salons"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    facility_id = Column(Uuid, ForeignKey("facilities.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    facility = relationship("Facility", back_populates="salons")
