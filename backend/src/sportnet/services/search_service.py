"""
Search Service
Paginated discovery of events, coaches and participants
"""

from typing import List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from sportnet.exceptions import NotFoundError
from sportnet.models.coach import Branch, Coach
from sportnet.models.event import Event
from sportnet.models.participant import Participant
from sportnet.models.reference import Sport, SportGroup
from sportnet.schemas.search import CoachSearch, EventSearch, ParticipantSearch

EVENT_SORT_COLUMNS = {
    "name": Event.name,
    "startTime": Event.start_time,
    "endTime": Event.end_time,
    "sport": Sport.name,
    "sportGroup": SportGroup.name,
}


def _require_sport(db: Session, sport_id: UUID) -> None:
    if not db.query(Sport.id).filter(Sport.id == sport_id).first():
        raise NotFoundError("Sport not found")


def _term(search) -> str:
    return search.strip() if search else ""


def search_events(db: Session, query: EventSearch) -> Tuple[List[Event], int]:
    """
    Filter events by name, sport, sport group and privacy

    Returns:
        (events on the requested page, total matches)
    """
    q = db.query(Event)
    term = _term(query.search)
    if term:
        q = q.filter(Event.name.icontains(term, autoescape=True))
    if query.sport_id is not None:
        q = q.filter(Event.sport_id == query.sport_id)
    if query.sport_group_id is not None:
        q = q.filter(Event.sport_group_id == query.sport_group_id)
    if query.is_private is not None:
        q = q.filter(Event.is_private == query.is_private)

    total = q.count()

    if query.sort_by is None:
        order = Event.created_at.desc()
    else:
        if query.sort_by == "sport":
            q = q.join(Sport, Sport.id == Event.sport_id)
        elif query.sort_by == "sportGroup":
            q = q.join(SportGroup, SportGroup.id == Event.sport_group_id)
        column = EVENT_SORT_COLUMNS[query.sort_by]
        order = column.desc() if query.sort_type == "desc" else column.asc()

    events = q.order_by(order, Event.id).offset(query.skip).limit(query.per_page).all()
    return events, total


def search_coaches(db: Session, query: CoachSearch) -> Tuple[List[dict], int]:
    """
    Filter coaches by name and verification; with a sport, only coaches
    holding a branch in it, together with that branch's id and level

    Raises:
        NotFoundError: unknown sport
    """
    if query.sport_id is not None:
        _require_sport(db, query.sport_id)
        q = db.query(Coach, Branch).join(Branch, Branch.coach_id == Coach.id).filter(Branch.sport_id == query.sport_id)
    else:
        q = db.query(Coach)

    term = _term(query.search)
    if term:
        q = q.filter(Coach.name.icontains(term, autoescape=True))
    if query.is_verified is not None:
        q = q.filter(Coach.is_verified == query.is_verified)

    total = q.count()
    rows = q.order_by(Coach.created_at.desc(), Coach.id).offset(query.skip).limit(query.per_page).all()

    items = []
    for row in rows:
        coach, branch = row if query.sport_id is not None else (row, None)
        item = {
            "id": coach.id,
            "name": coach.name,
            "membership_level": coach.membership_level,
            "point": coach.point,
            "is_verified": coach.is_verified,
        }
        if branch is not None:
            item["branch_id"] = branch.id
            item["branch_level"] = branch.level
        items.append(item)
    return items, total


def search_participants(db: Session, query: ParticipantSearch) -> Tuple[List[Participant], int]:
    """
    Filter participants by name and main sport

    Raises:
        NotFoundError: unknown sport
    """
    q = db.query(Participant)
    term = _term(query.search)
    if term:
        q = q.filter(Participant.name.icontains(term, autoescape=True))
    if query.sport_id is not None:
        _require_sport(db, query.sport_id)
        q = q.filter(Participant.main_sport_id == query.sport_id)

    total = q.count()
    participants = (
        q.order_by(Participant.created_at.desc(), Participant.id).offset(query.skip).limit(query.per_page).all()
    )
    return participants, total
