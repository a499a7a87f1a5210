"""
Club Service
Clubs, groups, membership requests and invitations
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from sportnet.dependencies.auth import ensure_owner_or_admin
from sportnet.exceptions import ConflictError, ForbiddenError, NotFoundError
from sportnet.models.club import Club, ClubGroup, Invite, JoinClub, JoinGroup
from sportnet.models.event import Event
from sportnet.models.user import User
from sportnet.schemas.club import ClubCreate, ClubUpdate, GroupCreate, GroupUpdate
from sportnet.services.notification_service import dispatch_notification, notify_invite_received

logger = logging.getLogger(__name__)


def get_club(db: Session, club_id: UUID) -> Club:
    club = db.query(Club).filter(Club.id == club_id).first()
    if club is None:
        raise NotFoundError("Club not found")
    return club


def get_group(db: Session, group_id: UUID) -> ClubGroup:
    group = db.query(ClubGroup).filter(ClubGroup.id == group_id).first()
    if group is None:
        raise NotFoundError("Group not found")
    return group


def _get_user(db: Session, user_id: UUID, label: str = "User") -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"{label} not found")
    return user


def _load_coaches(db: Session, coach_ids: List[UUID]) -> List[User]:
    coaches = db.query(User).filter(User.id.in_(coach_ids)).all() if coach_ids else []
    if len(coaches) != len(set(coach_ids)):
        raise NotFoundError("Some coaches were not found")
    return coaches


# Clubs


def create_club(db: Session, data: ClubCreate, user: User) -> Club:
    """
    Create a club; it needs admin approval before accepting members

    Raises:
        NotFoundError: president or a listed coach does not exist
    """
    if data.president_id is not None:
        _get_user(db, data.president_id, "President")

    club = Club(
        creator_id=user.id,
        name=data.name,
        vision=data.vision,
        conditions=data.conditions,
        president_id=data.president_id,
        is_approved=user.is_admin,
    )
    club.coaches = _load_coaches(db, data.coaches)

    db.add(club)
    db.commit()
    db.refresh(club)
    logger.info(f"Club {club.id} created by {user.id}")
    return club


def update_club(db: Session, club_id: UUID, data: ClubUpdate, user: User) -> Club:
    club = get_club(db, club_id)
    ensure_owner_or_admin(club.creator_id == user.id, user)

    update = data.model_dump(exclude_unset=True)
    if update.get("president_id") is not None:
        _get_user(db, update["president_id"], "President")
    if "coaches" in update:
        club.coaches = _load_coaches(db, update.pop("coaches") or [])

    for field, value in update.items():
        setattr(club, field, value)

    db.commit()
    db.refresh(club)
    return club


def delete_club(db: Session, club_id: UUID, user: User) -> None:
    club = get_club(db, club_id)
    ensure_owner_or_admin(club.creator_id == user.id, user)

    db.delete(club)
    db.commit()
    logger.info(f"Club {club_id} deleted by {user.id}")


# Groups


def create_group(db: Session, club_id: UUID, data: GroupCreate, user: User) -> ClubGroup:
    club = get_club(db, club_id)

    group = ClubGroup(
        owner_id=user.coach_id,
        club_id=club.id,
        club_name=club.name,
        name=data.name,
        description=data.description,
    )
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def update_group(db: Session, group_id: UUID, data: GroupUpdate, user: User) -> ClubGroup:
    group = get_group(db, group_id)
    ensure_owner_or_admin(group.owner_id == user.coach_id, user)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(group, field, value)

    db.commit()
    db.refresh(group)
    return group


def delete_group(db: Session, group_id: UUID, user: User) -> None:
    group = get_group(db, group_id)
    ensure_owner_or_admin(group.owner_id == user.coach_id, user)

    db.delete(group)
    db.commit()


# Membership


def _has_invite(db: Session, user_id: UUID, club_id: Optional[UUID] = None, group_id: Optional[UUID] = None) -> bool:
    query = db.query(Invite.id).filter(Invite.invitee_id == user_id)
    if club_id is not None:
        query = query.filter(Invite.club_id == club_id)
    if group_id is not None:
        query = query.filter(Invite.group_id == group_id)
    return query.first() is not None


def join_club(db: Session, club_id: UUID, user: User) -> JoinClub:
    """
    Request membership of a club

    Approved immediately when the user was invited.

    Raises:
        NotFoundError: club does not exist
        ForbiddenError: club not approved yet
        ConflictError: request already exists
    """
    club = get_club(db, club_id)
    if not club.is_approved:
        raise ForbiddenError("Club is not approved yet")

    if db.query(JoinClub.id).filter(JoinClub.club_id == club.id, JoinClub.user_id == user.id).first():
        raise ConflictError("You have already requested to join this club")

    request = JoinClub(
        user_id=user.id,
        club_id=club.id,
        is_approved=_has_invite(db, user.id, club_id=club.id),
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


def leave_club(db: Session, club_id: UUID, user: User) -> None:
    request = db.query(JoinClub).filter(JoinClub.club_id == club_id, JoinClub.user_id == user.id).first()
    if request is None:
        raise NotFoundError("You are not a member of this club")

    db.delete(request)
    db.commit()


def join_group(db: Session, group_id: UUID, user: User) -> JoinGroup:
    group = get_group(db, group_id)
    if not group.is_approved:
        raise ForbiddenError("Group is not approved yet")

    if db.query(JoinGroup.id).filter(JoinGroup.group_id == group.id, JoinGroup.user_id == user.id).first():
        raise ConflictError("You have already requested to join this group")

    request = JoinGroup(
        user_id=user.id,
        group_id=group.id,
        is_approved=_has_invite(db, user.id, group_id=group.id),
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


def leave_group(db: Session, group_id: UUID, user: User) -> None:
    request = db.query(JoinGroup).filter(JoinGroup.group_id == group_id, JoinGroup.user_id == user.id).first()
    if request is None:
        raise NotFoundError("You are not a member of this group")

    db.delete(request)
    db.commit()


# Invitations


def _create_invite(db: Session, inviter: User, invitee_id: UUID, target_name: str, field: str, target_id: UUID) -> Invite:
    """field is one of club_id, group_id or event_id"""
    _get_user(db, invitee_id)

    duplicate = (
        db.query(Invite.id)
        .filter(Invite.invitee_id == invitee_id, getattr(Invite, field) == target_id)
        .first()
    )
    if duplicate:
        raise ConflictError("User is already invited")

    invite = Invite(inviter_id=inviter.coach_id, invitee_id=invitee_id, **{field: target_id})
    db.add(invite)
    db.commit()
    db.refresh(invite)

    dispatch_notification(db, notify_invite_received, invitee_id, target_name, {field: str(target_id)})
    return invite


def invite_to_club(db: Session, club_id: UUID, invitee_id: UUID, user: User) -> Invite:
    club = get_club(db, club_id)
    if club.creator_id != user.id:
        raise ForbiddenError("Only the club creator can invite members")
    return _create_invite(db, user, invitee_id, club.name, "club_id", club.id)


def invite_to_group(db: Session, group_id: UUID, invitee_id: UUID, user: User) -> Invite:
    group = get_group(db, group_id)
    if group.owner_id != user.coach_id:
        raise ForbiddenError("Only the group owner can invite members")
    return _create_invite(db, user, invitee_id, group.name, "group_id", group.id)


def invite_to_event(db: Session, event_id: UUID, invitee_id: UUID, user: User) -> Invite:
    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None:
        raise NotFoundError("Event not found")
    if not event.is_managed_by(user) or user.coach_id is None:
        raise ForbiddenError("Only the event's coaches can invite participants")
    return _create_invite(db, user, invitee_id, event.name, "event_id", event.id)
