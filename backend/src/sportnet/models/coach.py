"""
Coach and Branch Models
A coach holds one certification branch per sport; each branch is approved
individually and the coach is verified once every branch is approved
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class BranchStatus(str, enum.Enum):
    """Approval status of a certification branch"""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Coach(Base):
    __tablename__ = "coaches"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    name = Column(String(255), nullable=False)
    membership_level = Column(String(20), nullable=True)
    point = Column(Integer, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="coach", uselist=False)
    branches = relationship(
        "Branch",
        back_populates="coach",
        cascade="all, delete-orphan",
        order_by="Branch.branch_order",
    )

    def __repr__(self):
        return f"<Coach(name='{self.name}', verified={self.is_verified})>"


class Branch(Base):
    """
    Branch Model
    One sport-specific certification record for a coach
    """

    __tablename__ = "branches"
    __table_args__ = (
        UniqueConstraint("coach_id", "branch_order", name="uq_branch_coach_order"),
        UniqueConstraint("coach_id", "sport_id", name="uq_branch_coach_sport"),
    )

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    coach_id = Column(Uuid, ForeignKey("coaches.id", ondelete="CASCADE"), nullable=False, index=True)
    sport_id = Column(Uuid, ForeignKey("sports.id"), nullable=False)
    branch_order = Column(Integer, nullable=False)
    level = Column(Integer, nullable=False)

    # {"path": ..., "original_name": ..., "mime_type": ..., "size": ...}
    certificate = Column(JSON, nullable=False)

    status = Column(
        SQLEnum(BranchStatus, values_callable=lambda x: [e.value for e in x]),
        default=BranchStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    coach = relationship("Coach", back_populates="branches")
    sport = relationship("Sport")

    def __repr__(self):
        return f"<Branch(coach='{self.coach_id}', order={self.branch_order}, status='{self.status}')>"
