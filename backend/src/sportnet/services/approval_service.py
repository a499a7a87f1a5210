"""
Approval Service
Status transitions for branches, join requests, clubs and groups
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from sportnet.dependencies.auth import ensure_owner_or_admin
from sportnet.exceptions import ConflictError, ForbiddenError, NotFoundError
from sportnet.models.club import Club, ClubGroup, JoinClub, JoinGroup
from sportnet.models.coach import Branch, BranchStatus
from sportnet.models.user import User
from sportnet.services.notification_service import (
    dispatch_notification,
    notify_certificate_approved,
    notify_certificate_rejected,
    notify_join_request_approved,
)

logger = logging.getLogger(__name__)


def set_branch_status(db: Session, branch_id: UUID, new_status: BranchStatus, user: User) -> Branch:
    """
    Approve or reject a pending branch

    Pending moves to Approved or Rejected once. Repeating the same decision
    is a no-op; switching decisions is a conflict. The coach is verified
    when every branch is Approved and unverified on any rejection.

    Raises:
        NotFoundError: branch does not exist
        ForbiddenError: caller is neither the owning coach nor an admin
        ConflictError: branch already carries the other decision
    """
    if new_status == BranchStatus.PENDING:
        raise ConflictError("Branches return to Pending only by resubmission")

    branch = db.query(Branch).filter(Branch.id == branch_id).first()
    if branch is None:
        raise NotFoundError("Branch not found")

    coach = branch.coach
    ensure_owner_or_admin(user.coach_id == coach.id, user, "You are not allowed to review this branch")

    if branch.status == new_status:
        return branch

    if branch.status != BranchStatus.PENDING:
        raise ConflictError(f"Branch is already {branch.status.value}")

    branch.status = new_status
    if new_status == BranchStatus.APPROVED:
        if all(b.status == BranchStatus.APPROVED for b in coach.branches):
            coach.is_verified = True
    else:
        coach.is_verified = False

    db.commit()
    db.refresh(branch)
    logger.info(f"Branch {branch.id} of coach {coach.id} {new_status.value.lower()} by {user.id}")

    if coach.user is not None:
        notify = notify_certificate_approved if new_status == BranchStatus.APPROVED else notify_certificate_rejected
        dispatch_notification(db, notify, coach.user.id, branch)

    return branch


def approve_join_club(db: Session, club_id: UUID, user_id: UUID, user: User) -> JoinClub:
    """Club creator or admin approves a pending join request"""
    club = db.query(Club).filter(Club.id == club_id).first()
    if club is None:
        raise NotFoundError("Club not found")

    ensure_owner_or_admin(club.creator_id == user.id, user, "Only the club creator can approve join requests")

    if not club.is_approved:
        raise ForbiddenError("Club is not approved yet")

    request = db.query(JoinClub).filter(JoinClub.club_id == club.id, JoinClub.user_id == user_id).first()
    if request is None:
        raise NotFoundError("Join request not found")

    if not request.is_approved:
        request.is_approved = True
        db.commit()
        db.refresh(request)
        dispatch_notification(db, notify_join_request_approved, user_id, club.name, {"club_id": str(club.id)})

    return request


def approve_join_group(db: Session, group_id: UUID, user_id: UUID, user: User) -> JoinGroup:
    """Group owner or admin approves a pending join request"""
    group = db.query(ClubGroup).filter(ClubGroup.id == group_id).first()
    if group is None:
        raise NotFoundError("Group not found")

    ensure_owner_or_admin(group.owner_id == user.coach_id, user, "Only the group owner can approve join requests")

    if not group.is_approved:
        raise ForbiddenError("Group is not approved yet")

    request = db.query(JoinGroup).filter(JoinGroup.group_id == group.id, JoinGroup.user_id == user_id).first()
    if request is None:
        raise NotFoundError("Join request not found")

    if not request.is_approved:
        request.is_approved = True
        db.commit()
        db.refresh(request)
        dispatch_notification(db, notify_join_request_approved, user_id, group.name, {"group_id": str(group.id)})

    return request


def approve_club(db: Session, club_id: UUID) -> Club:
    club = db.query(Club).filter(Club.id == club_id).first()
    if club is None:
        raise NotFoundError("Club not found")

    if not club.is_approved:
        club.is_approved = True
        db.commit()
        db.refresh(club)

    return club


def approve_group(db: Session, group_id: UUID) -> ClubGroup:
    group = db.query(ClubGroup).filter(ClubGroup.id == group_id).first()
    if group is None:
        raise NotFoundError("Group not found")

    if not group.is_approved:
        group.is_approved = True
        db.commit()
        db.refresh(group)

    return group
