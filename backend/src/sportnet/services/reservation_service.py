"""
Reservation Service
Capacity allocation, check-in, payment and approval of reservations
"""

import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from sportnet.config import settings
from sportnet.exceptions import ConflictError, ForbiddenError, NotFoundError
from sportnet.models.event import Event
from sportnet.models.participant import Participant
from sportnet.models.reservation import Reservation
from sportnet.models.user import User
from sportnet.schemas.common import PageRequest
from sportnet.schemas.reservation import ParticipantsFilter

logger = logging.getLogger(__name__)

DUPLICATE_RESERVATION = "You already have a reservation for this event"
LATE_WINDOW_FULL = "Event is already full and less than 2 days remaining"


class _EventLock:
    __slots__ = ("lock", "__weakref__")

    def __init__(self):
        self.lock = threading.Lock()


class EventLockRegistry:
    """
    One lock per event id

    Entries live only while some request holds or waits on them.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = weakref.WeakValueDictionary()

    @contextmanager
    def hold(self, event_id: UUID):
        with self._guard:
            entry = self._locks.get(event_id)
            if entry is None:
                entry = _EventLock()
                self._locks[event_id] = entry
        with entry.lock:
            yield

    def __len__(self):
        return len(self._locks)


event_locks = EventLockRegistry()


def check_in_window() -> timedelta:
    return timedelta(hours=settings.CHECK_IN_WINDOW_HOURS)


def _lock_event(db: Session, event_id: UUID) -> Event:
    """Load the event with a row lock (FOR UPDATE is a no-op on SQLite)"""
    event = db.query(Event).filter(Event.id == event_id).with_for_update().first()
    if event is None:
        raise NotFoundError("Event not found")
    return event


def _count(db: Session, event_id: UUID, checked_in_only: bool = False) -> int:
    query = db.query(Reservation).filter(Reservation.event_id == event_id)
    if checked_in_only:
        query = query.filter(Reservation.is_checked_in.is_(True))
    return query.count()


def _find_reservation(db: Session, participant_id: UUID, event_id: UUID) -> Optional[Reservation]:
    return (
        db.query(Reservation)
        .filter(Reservation.participant_id == participant_id, Reservation.event_id == event_id)
        .first()
    )


def make_reservation(
    db: Session,
    participant_id: UUID,
    event_id: UUID,
    now: Optional[datetime] = None,
) -> Reservation:
    """
    Create a reservation and decide its disposition

    Inside the check-in window the reservation is checked in immediately,
    unless the checked-in count already reached capacity (Forbidden).
    Before the window every reservation is accepted and the ones over
    capacity are waitlisted.

    Count and insert run under the event's lock and are committed before
    the lock is released.

    Raises:
        NotFoundError: event does not exist
        ConflictError: participant already holds a reservation for the event
        ForbiddenError: event full inside the check-in window
    """
    now = now or datetime.utcnow()
    window = check_in_window()

    with event_locks.hold(event_id):
        try:
            event = _lock_event(db, event_id)

            if _find_reservation(db, participant_id, event_id) is not None:
                raise ConflictError(DUPLICATE_RESERVATION)

            reservation = Reservation(
                participant_id=participant_id,
                event_id=event.id,
                check_in_deadline=event.start_time - window,
            )

            if event.start_time - now < window:
                checked_in = _count(db, event.id, checked_in_only=True)
                if checked_in >= event.capacity:
                    logger.info(f"Reservation refused for event {event.id}: {checked_in}/{event.capacity} checked in")
                    raise ForbiddenError(LATE_WINDOW_FULL)
                reservation.is_checked_in = True
            else:
                total = _count(db, event.id)
                if total >= event.capacity:
                    reservation.is_wait_listed = True

            db.add(reservation)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError(DUPLICATE_RESERVATION)
        except Exception:
            db.rollback()
            raise

    db.refresh(reservation)

    if reservation.is_checked_in:
        disposition = "checked in"
    elif reservation.is_wait_listed:
        disposition = "waitlisted"
    else:
        disposition = "confirmed"
    logger.info(f"Reservation {reservation.id} for event {event_id} {disposition}")

    return reservation


def check_in(db: Session, participant_id: UUID, event_id: UUID) -> Reservation:
    """
    Check a participant in to an event

    Requires a paid, non-waitlisted, non-cancelled reservation. Checking in
    twice is a no-op. The checked-in count never exceeds capacity.

    Raises:
        NotFoundError: event does not exist
        ForbiddenError: no eligible reservation, or the event is full
    """
    with event_locks.hold(event_id):
        try:
            event = _lock_event(db, event_id)
            reservation = _find_reservation(db, participant_id, event_id)

            if (
                reservation is None
                or not reservation.is_paid
                or reservation.is_wait_listed
                or reservation.is_cancelled
            ):
                raise ForbiddenError("A paid reservation that is not on the waitlist is required to check in")

            if not reservation.is_checked_in:
                if _count(db, event.id, checked_in_only=True) >= event.capacity:
                    raise ForbiddenError("Event is already full")
                reservation.is_checked_in = True
                db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(reservation)
    return reservation


def confirm_payment(db: Session, participant_id: UUID, event_id: UUID) -> Reservation:
    """Mark the participant's reservation as paid"""
    reservation = _find_reservation(db, participant_id, event_id)
    if reservation is None:
        raise NotFoundError("Reservation not found")

    if not reservation.is_paid:
        reservation.is_paid = True
        db.commit()
        db.refresh(reservation)

    return reservation


def approve_reservation(db: Session, reservation_id: UUID, user: User) -> Reservation:
    """
    Approve a reservation as the event's owner, backup coach or an admin

    Raises:
        NotFoundError: reservation does not exist
        ForbiddenError: caller does not manage the event
    """
    reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
    if reservation is None:
        raise NotFoundError("Reservation not found")

    if not reservation.event.is_managed_by(user):
        raise ForbiddenError("You are not allowed to approve reservations for this event")

    if not reservation.is_approved:
        reservation.is_approved = True
        db.commit()
        db.refresh(reservation)

    return reservation


def list_event_participants(
    db: Session, event_id: UUID, user: User, filters: ParticipantsFilter
) -> Tuple[List[Reservation], int]:
    """Reservations of an event with participant names, filtered and paginated"""
    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None:
        raise NotFoundError("Event not found")

    if not event.is_managed_by(user):
        raise ForbiddenError("You are not allowed to view participants of this event")

    query = db.query(Reservation).filter(Reservation.event_id == event.id)
    for flag, value in filters.flag_filters().items():
        query = query.filter(getattr(Reservation, flag).is_(value))

    total = query.count()
    reservations = (
        query.options(joinedload(Reservation.participant).joinedload(Participant.user))
        .order_by(Reservation.created_at.asc())
        .offset(filters.skip)
        .limit(filters.per_page)
        .all()
    )
    return reservations, total


def my_reservations(db: Session, participant_id: UUID, page: PageRequest) -> Tuple[List[Reservation], int]:
    query = db.query(Reservation).filter(Reservation.participant_id == participant_id)
    total = query.count()
    reservations = (
        query.options(joinedload(Reservation.event))
        .order_by(Reservation.created_at.desc())
        .offset(page.skip)
        .limit(page.per_page)
        .all()
    )
    return reservations, total
