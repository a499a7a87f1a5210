"""
Event Service
Creating, reading and deleting coach events
"""

import logging
import secrets
from uuid import UUID

from sqlalchemy.orm import Session

from sportnet.dependencies.auth import ensure_owner_or_admin
from sportnet.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from sportnet.models.club import Club, ClubGroup
from sportnet.models.event import Event
from sportnet.models.reference import EventStyle, Facility, Salon, Sport, SportGroup
from sportnet.models.reservation import Reservation
from sportnet.models.user import User
from sportnet.schemas.event import EventCreate
from sportnet.services.notification_service import dispatch_notification, notify_event_created

logger = logging.getLogger(__name__)


def _require(db: Session, model, object_id: UUID, label: str):
    obj = db.query(model).filter(model.id == object_id).first()
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def get_event(db: Session, event_id: UUID) -> Event:
    return _require(db, Event, event_id, "Event")


def create_event(db: Session, data: EventCreate, user: User) -> Event:
    """
    Create an event owned by the calling coach

    Raises:
        NotFoundError: a referenced style, sport, venue, club or group does not exist
        BadRequestError: sport does not belong to the sport group
    """
    style = _require(db, EventStyle, data.style_id, "Event style")
    sport_group = _require(db, SportGroup, data.sport_group_id, "Sport group")
    sport = _require(db, Sport, data.sport_id, "Sport")
    if sport.group_id != sport_group.id:
        raise BadRequestError("Sport does not belong to the given sport group")

    if data.facility_id:
        _require(db, Facility, data.facility_id, "Facility")
    if data.salon_id:
        _require(db, Salon, data.salon_id, "Salon")
    if data.club_id:
        _require(db, Club, data.club_id, "Club")
    if data.group_id:
        _require(db, ClubGroup, data.group_id, "Group")

    event = Event(
        **data.model_dump(),
        owner_id=user.id,
        style_name=style.name,
        style_color=style.color,
        secret_id=secrets.token_hex(16) if data.is_private else None,
    )

    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(f"Event {event.id} created by {user.id} with capacity {event.capacity}")

    dispatch_notification(db, notify_event_created, event)
    return event


def delete_event(db: Session, event_id: UUID, user: User) -> None:
    """
    Delete an event nobody has reserved yet

    Raises:
        ForbiddenError: caller is neither the owner nor an admin
        ConflictError: the event already has reservations
    """
    event = get_event(db, event_id)
    ensure_owner_or_admin(event.owner_id == user.id, user, "Only the event owner can delete it")

    reserved = db.query(Reservation).filter(Reservation.event_id == event.id).count()
    if reserved:
        raise ConflictError(f"Event has {reserved} reservation(s) and cannot be deleted")

    db.delete(event)
    db.commit()
    logger.info(f"Event {event_id} deleted by {user.id}")


def join_backup_coach(db: Session, event_id: UUID, user: User) -> Event:
    """
    Attach the calling coach as the event's backup coach

    Raises:
        ForbiddenError: caller owns the event
        ConflictError: event already has a backup coach
    """
    event = get_event(db, event_id)

    if event.owner_id == user.id:
        raise ForbiddenError("The event owner cannot be its backup coach")
    if event.backup_coach_id is not None:
        raise ConflictError("Event already has a backup coach")

    event.backup_coach_id = user.id
    db.commit()
    db.refresh(event)
    return event
