"""
Club Pydantic Schemas
Clubs, groups, join requests and invites
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from sportnet.schemas.common import ORMModel, RequestModel
from sportnet.schemas.user import PublicUserResponse


class ClubCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    vision: Optional[str] = None
    conditions: Optional[str] = None
    president_id: Optional[UUID] = None
    coaches: List[UUID] = []


class ClubUpdate(RequestModel):
    """Schema for editing a club; only provided fields change"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    vision: Optional[str] = None
    conditions: Optional[str] = None
    president_id: Optional[UUID] = None
    coaches: Optional[List[UUID]] = None


class ClubResponse(ORMModel):
    id: UUID
    creator_id: UUID
    name: str
    vision: Optional[str] = None
    conditions: Optional[str] = None
    president_id: Optional[UUID] = None
    coaches: List[PublicUserResponse] = []
    is_approved: bool
    created_at: datetime


class GroupCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class GroupUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class GroupResponse(ORMModel):
    id: UUID
    owner_id: UUID
    club_id: UUID
    club_name: str
    name: str
    description: Optional[str] = None
    is_approved: bool
    created_at: datetime


class ApproveJoinClubRequest(RequestModel):
    user_id: UUID
    club_id: UUID


class ApproveJoinGroupRequest(RequestModel):
    user_id: UUID
    group_id: UUID


class JoinClubResponse(ORMModel):
    id: UUID
    user_id: UUID
    club_id: UUID
    is_approved: bool
    created_at: datetime


class JoinGroupResponse(ORMModel):
    id: UUID
    user_id: UUID
    group_id: UUID
    is_approved: bool
    created_at: datetime


class InviteClubRequest(RequestModel):
    user_id: UUID
    club_id: UUID


class InviteGroupRequest(RequestModel):
    user_id: UUID
    group_id: UUID


class InviteEventRequest(RequestModel):
    user_id: UUID
    event_id: UUID


class InviteResponse(ORMModel):
    id: UUID
    inviter_id: UUID
    invitee_id: UUID
    club_id: Optional[UUID] = None
    group_id: Optional[UUID] = None
    event_id: Optional[UUID] = None
    created_at: datetime
