"""
Search API Routes
Paginated listings of events, coaches and participants for any signed-in user
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sportnet.database import get_db
from sportnet.dependencies.auth import get_current_user
from sportnet.models.user import User
from sportnet.schemas.common import PaginatedResponse, paginate
from sportnet.schemas.event import EventResponse
from sportnet.schemas.participant import ParticipantResponse
from sportnet.schemas.search import CoachListItem, CoachSearch, EventSearch, ParticipantSearch
from sportnet.services import search_service

router = APIRouter(prefix="/search", tags=["Search"])


@router.post("/events", response_model=PaginatedResponse[EventResponse])
def search_events(query: EventSearch, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    events, total = search_service.search_events(db, query)
    return {"data": events, "pagination": paginate(query, total)}


@router.post("/coaches", response_model=PaginatedResponse[CoachListItem])
def search_coaches(query: CoachSearch, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    coaches, total = search_service.search_coaches(db, query)
    return {"data": coaches, "pagination": paginate(query, total)}


@router.post("/participants", response_model=PaginatedResponse[ParticipantResponse])
def search_participants(
    query: ParticipantSearch, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    participants, total = search_service.search_participants(db, query)
    return {"data": participants, "pagination": paginate(query, total)}
