"""
Reservation Pydantic Schemas
Request and response models for reservation endpoints
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sportnet.schemas.common import ORMModel, PageRequest, RequestModel
from sportnet.schemas.user import PublicUserResponse


class EventIdRequest(RequestModel):
    """Body of make-reservation, check-in and confirm-payment"""

    event_id: UUID


class ParticipantsFilter(PageRequest):
    """Pagination plus optional flag filters for an event's reservations"""

    is_approved: Optional[bool] = None
    is_cancelled: Optional[bool] = None
    is_paid: Optional[bool] = None
    is_checked_in: Optional[bool] = None
    is_wait_listed: Optional[bool] = None
    is_joined: Optional[bool] = None

    def flag_filters(self) -> dict:
        """Only the flags the caller actually set"""
        return self.model_dump(exclude={"per_page", "page_number"}, exclude_none=True)


class ReservationResponse(ORMModel):
    id: UUID
    participant_id: UUID
    event_id: UUID
    is_approved: bool
    is_cancelled: bool
    is_paid: bool
    is_checked_in: bool
    is_wait_listed: bool
    is_joined: bool
    check_in_deadline: datetime
    qr: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ParticipantSummary(ORMModel):
    id: UUID
    name: str
    skill_level: int
    user: Optional[PublicUserResponse] = None


class EventParticipantResponse(ReservationResponse):
    """Reservation with the participant's name, as listed to the coach"""

    participant: ParticipantSummary


class EventSummary(ORMModel):
    id: UUID
    name: str
    start_time: datetime
    end_time: datetime
    capacity: int


class MyReservationResponse(ReservationResponse):
    event: EventSummary
