"""
Participant Pydantic Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from sportnet.schemas.common import ORMModel, RequestModel


class ParticipantCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    main_sport_id: UUID
    skill_level: int = Field(..., ge=1, le=10)
    sport_goal_id: UUID


class ParticipantUpdate(RequestModel):
    """Schema for editing a participant profile"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    main_sport_id: Optional[UUID] = None
    skill_level: Optional[int] = Field(None, ge=1, le=10)
    sport_goal_id: Optional[UUID] = None


class ParticipantResponse(ORMModel):
    id: UUID
    name: str
    main_sport_id: UUID
    skill_level: int
    sport_goal_id: UUID
    point: Optional[int] = None
    membership_level: Optional[str] = None
    created_at: datetime
