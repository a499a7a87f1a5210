"""
Event API Routes
Public read access to events
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sportnet.database import get_db
from sportnet.dependencies.auth import get_current_user
from sportnet.models.user import User
from sportnet.schemas.common import ApiResponse
from sportnet.schemas.event import EventResponse
from sportnet.services import event_service

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("/{event_id}", response_model=ApiResponse[EventResponse])
def get_event(event_id: UUID, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get a specific event"""
    return {"data": event_service.get_event(db, event_id)}
