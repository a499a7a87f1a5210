"""
Follow and Favorite Pydantic Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from sportnet.schemas.common import ORMModel, RequestModel


class CoachIdRequest(RequestModel):
    coach_id: UUID


class ClubIdRequest(RequestModel):
    club_id: UUID


class GroupIdRequest(RequestModel):
    group_id: UUID


class FacilityIdRequest(RequestModel):
    facility_id: UUID


class FollowResponse(ORMModel):
    id: UUID
    coach_id: Optional[UUID] = None
    club_id: Optional[UUID] = None
    group_id: Optional[UUID] = None
    facility_id: Optional[UUID] = None
    created_at: datetime


class FavoriteResponse(ORMModel):
    id: UUID
    coach_id: Optional[UUID] = None
    facility_id: Optional[UUID] = None
    event_id: Optional[UUID] = None
    created_at: datetime


class FollowsOverview(BaseModel):
    """Everything the caller follows or bookmarked"""

    follows: List[FollowResponse]
    favorites: List[FavoriteResponse]
