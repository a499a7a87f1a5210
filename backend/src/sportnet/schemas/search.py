"""
Discovery Pydantic Schemas
Filters for the paginated event, coach and participant listings
"""

from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from sportnet.schemas.branch import CoachResponse
from sportnet.schemas.common import PageRequest


class EventSearch(PageRequest):
    """Newest first unless sortBy is given"""

    search: Optional[str] = Field(None, max_length=100)
    sport_id: Optional[UUID] = None
    sport_group_id: Optional[UUID] = None
    is_private: Optional[bool] = None
    sort_by: Optional[Literal["name", "startTime", "endTime", "sport", "sportGroup"]] = None
    sort_type: Literal["asc", "desc"] = "asc"


class CoachSearch(PageRequest):
    search: Optional[str] = Field(None, max_length=100)
    sport_id: Optional[UUID] = None
    is_verified: Optional[bool] = None


class ParticipantSearch(PageRequest):
    search: Optional[str] = Field(None, max_length=100)
    sport_id: Optional[UUID] = None


class CoachListItem(CoachResponse):
    """Coach in a listing; the branch fields are set when filtering by sport"""

    branch_id: Optional[UUID] = None
    branch_level: Optional[int] = None
