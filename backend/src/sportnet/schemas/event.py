"""
Event Pydantic Schemas
Request and response models for Event endpoints
"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from sportnet.models.event import EventType, PriceType
from sportnet.schemas.common import ORMModel, RequestModel


class EventCreate(RequestModel):
    """Schema for creating a new event"""

    name: str = Field(..., min_length=1, max_length=255)
    club_id: Optional[UUID] = None
    group_id: Optional[UUID] = None

    start_time: datetime
    end_time: datetime
    capacity: int = Field(..., ge=0)
    level: int = Field(..., ge=1, le=10)
    event_type: EventType

    style_id: UUID
    is_private: bool = False

    sport_group_id: UUID
    sport_id: UUID

    price_type: PriceType
    participation_fee: float = Field(0, ge=0)
    is_recurring: bool = False

    facility_id: Optional[UUID] = None
    salon_id: Optional[UUID] = None
    location: Optional[str] = None

    equipment: str = Field(..., min_length=1)
    point: Optional[int] = Field(None, ge=0)

    @field_validator("start_time", "end_time")
    @classmethod
    def to_naive_utc(cls, v):
        """Times are stored as naive UTC"""
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @model_validator(mode="after")
    def check_event_rules(self):
        if self.start_time >= self.end_time:
            raise ValueError("startTime must be before endTime")
        if not (self.facility_id or self.salon_id or self.location):
            raise ValueError("One of facility, salon or location is required")
        if self.price_type == PriceType.FREE:
            self.participation_fee = 0
        return self


class EventResponse(ORMModel):
    """Event as returned by the API; the private secret is never included"""

    id: UUID
    owner_id: UUID
    backup_coach_id: Optional[UUID] = None
    name: str
    club_id: Optional[UUID] = None
    group_id: Optional[UUID] = None
    start_time: datetime
    end_time: datetime
    capacity: int
    level: int
    event_type: EventType
    style_id: UUID
    style_name: str
    style_color: str
    is_private: bool
    sport_group_id: UUID
    sport_id: UUID
    price_type: PriceType
    participation_fee: float
    is_recurring: bool
    facility_id: Optional[UUID] = None
    salon_id: Optional[UUID] = None
    location: Optional[str] = None
    equipment: str
    point: Optional[int] = None
    banner: Optional[Any] = None
    photo: Optional[Any] = None
    created_at: datetime
