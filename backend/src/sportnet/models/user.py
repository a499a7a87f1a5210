"""
User Model
Represents an account; participant and coach profiles hang off it
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class UserRole(int, enum.Enum):
    """User roles in the system"""

    ADMIN = 0  # Full system access, may act on any resource
    USER = 1  # Regular member (participant, coach, facility owner...)


class User(Base):
    """
    User Model
    Authentication identity plus optional participant/coach profiles
    """

    __tablename__ = "users"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identity
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profiles
    participant_id = Column(Uuid, ForeignKey("participants.id", ondelete="SET NULL"), nullable=True, index=True)
    coach_id = Column(Uuid, ForeignKey("coaches.id", ondelete="SET NULL"), nullable=True, index=True)

    # Role & status
    role = Column(Integer, default=UserRole.USER.value, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Security
    last_login = Column(DateTime, nullable=True)
    failed_login_attempts = Column(Integer, default=0, nullable=False)
    locked_until = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    participant = relationship("Participant", back_populates="user")
    coach = relationship("Coach", back_populates="user")

    def __repr__(self):
        return f"<User(email='{self.email}', role='{self.role}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        """Check if user is an admin"""
        return self.role == UserRole.ADMIN.value
