"""
Follow Service
Following and bookmarking coaches, clubs, groups, facilities and events
"""

import logging
from typing import List, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sportnet.exceptions import ConflictError, NotFoundError
from sportnet.models.club import Club, ClubGroup
from sportnet.models.coach import Coach
from sportnet.models.event import Event
from sportnet.models.follow import Favorite, Follow
from sportnet.models.reference import Facility
from sportnet.models.user import User

logger = logging.getLogger(__name__)

# target -> (model, column on Follow/Favorite)
FOLLOW_TARGETS = {
    "coach": (Coach, "coach_id"),
    "club": (Club, "club_id"),
    "group": (ClubGroup, "group_id"),
    "facility": (Facility, "facility_id"),
}

FAVORITE_TARGETS = {
    "coach": (Coach, "coach_id"),
    "facility": (Facility, "facility_id"),
    "event": (Event, "event_id"),
}


def _require_target(db: Session, model, target: str, target_id: UUID) -> None:
    if not db.query(model.id).filter(model.id == target_id).first():
        raise NotFoundError(f"{target.capitalize()} not found")


def _save(db: Session, row, message: str):
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(message)
    db.refresh(row)
    return row


def follow(db: Session, user: User, target: str, target_id: UUID) -> Follow:
    """
    Follow a coach, club, group or facility

    Raises:
        NotFoundError: target does not exist
        ConflictError: already following it
    """
    model, column = FOLLOW_TARGETS[target]
    _require_target(db, model, target, target_id)

    message = f"You already follow this {target}"
    existing = db.query(Follow).filter(Follow.follower_id == user.id, getattr(Follow, column) == target_id).first()
    if existing is not None:
        raise ConflictError(message)

    row = _save(db, Follow(follower_id=user.id, **{column: target_id}), message)
    logger.info(f"User {user.id} follows {target} {target_id}")
    return row


def unfollow(db: Session, user: User, target: str, target_id: UUID) -> None:
    """
    Raises:
        NotFoundError: the user does not follow the target
    """
    _, column = FOLLOW_TARGETS[target]
    row = db.query(Follow).filter(Follow.follower_id == user.id, getattr(Follow, column) == target_id).first()
    if row is None:
        raise NotFoundError(f"You do not follow this {target}")

    db.delete(row)
    db.commit()


def add_favorite(db: Session, user: User, target: str, target_id: UUID) -> Favorite:
    """
    Bookmark a coach, facility or event

    Raises:
        NotFoundError: target does not exist
        ConflictError: already in favorites
    """
    model, column = FAVORITE_TARGETS[target]
    _require_target(db, model, target, target_id)

    message = f"You already added this {target} to favorites"
    existing = db.query(Favorite).filter(Favorite.user_id == user.id, getattr(Favorite, column) == target_id).first()
    if existing is not None:
        raise ConflictError(message)

    return _save(db, Favorite(user_id=user.id, **{column: target_id}), message)


def list_follows(db: Session, user: User) -> Tuple[List[Follow], List[Favorite]]:
    follows = db.query(Follow).filter(Follow.follower_id == user.id).order_by(Follow.created_at.desc()).all()
    favorites = db.query(Favorite).filter(Favorite.user_id == user.id).order_by(Favorite.created_at.desc()).all()
    return follows, favorites
