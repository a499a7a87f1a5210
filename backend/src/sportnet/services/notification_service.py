"""
Notification Service
Creates persisted in-app notifications and answers the per-user inbox
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from sportnet.exceptions import BadRequestError, ForbiddenError, NotFoundError
from sportnet.models.coach import Branch
from sportnet.models.event import Event
from sportnet.models.notification import (
    Notification,
    NotificationIcon,
    NotificationPriority,
    NotificationRead,
    NotificationScope,
    NotificationType,
    notification_targets,
)
from sportnet.models.user import User

logger = logging.getLogger(__name__)


def create_notification(
    db: Session,
    scope: NotificationScope,
    notification_type: NotificationType,
    title: str,
    message: str,
    user_id: Optional[UUID] = None,
    target_role: Optional[int] = None,
    target_users: Optional[List[UUID]] = None,
    data: Optional[Dict[str, Any]] = None,
    priority: NotificationPriority = NotificationPriority.NORMAL,
    action_url: Optional[str] = None,
    icon: Optional[NotificationIcon] = None,
    expires_at: Optional[datetime] = None,
    created_by: Optional[UUID] = None,
) -> Notification:
    """
    Persist a notification

    Raises:
        BadRequestError: addressing fields missing for the given scope
    """
    if scope == NotificationScope.USER and user_id is None:
        raise BadRequestError("user_id is required for user notifications")
    if scope == NotificationScope.ROLE and target_role is None:
        raise BadRequestError("target_role is required for role notifications")
    if scope == NotificationScope.GROUP and not target_users:
        raise BadRequestError("target_users is required for group notifications")

    notification = Notification(
        scope=scope,
        user_id=user_id if scope == NotificationScope.USER else None,
        target_role=target_role if scope == NotificationScope.ROLE else None,
        notification_type=notification_type,
        title=title,
        message=message,
        data=data or {},
        priority=priority,
        action_url=action_url,
        icon=icon,
        expires_at=expires_at,
        created_by=created_by,
    )

    if scope == NotificationScope.GROUP:
        users = db.query(User).filter(User.id.in_(target_users)).all()
        if len(users) != len(set(target_users)):
            raise BadRequestError("Some target users do not exist")
        notification.target_users = users

    db.add(notification)
    db.commit()
    db.refresh(notification)

    logger.info(f"Notification {notification.id} created ({scope.value}, {notification_type.value})")
    return notification


def notify_certificate_approved(db: Session, user_id: UUID, branch: Branch) -> Notification:
    return create_notification(
        db,
        scope=NotificationScope.USER,
        notification_type=NotificationType.CERTIFICATE_APPROVED,
        title="Certificate approved",
        message=f"Your {branch.sport.name} certificate has been approved.",
        user_id=user_id,
        data={"branch_id": str(branch.id), "sport_id": str(branch.sport_id)},
        icon=NotificationIcon.CHECK_CIRCLE,
    )


def notify_certificate_rejected(db: Session, user_id: UUID, branch: Branch) -> Notification:
    return create_notification(
        db,
        scope=NotificationScope.USER,
        notification_type=NotificationType.CERTIFICATE_REJECTED,
        title="Certificate rejected",
        message=f"Your {branch.sport.name} certificate has been rejected. Please submit a new one.",
        user_id=user_id,
        data={"branch_id": str(branch.id), "sport_id": str(branch.sport_id)},
        priority=NotificationPriority.HIGH,
        icon=NotificationIcon.X_CIRCLE,
    )


def notify_join_request_approved(db: Session, user_id: UUID, target_name: str, data: Dict[str, Any]) -> Notification:
    return create_notification(
        db,
        scope=NotificationScope.USER,
        notification_type=NotificationType.JOIN_REQUEST_APPROVED,
        title="Join request approved",
        message=f"Your request to join {target_name} has been approved.",
        user_id=user_id,
        data=data,
        icon=NotificationIcon.USER,
    )


def notify_invite_received(db: Session, user_id: UUID, target_name: str, data: Dict[str, Any]) -> Notification:
    return create_notification(
        db,
        scope=NotificationScope.USER,
        notification_type=NotificationType.INVITE_RECEIVED,
        title="New invitation",
        message=f"You have been invited to {target_name}.",
        user_id=user_id,
        data=data,
        icon=NotificationIcon.BELL,
    )


def notify_event_created(db: Session, event: Event) -> Notification:
    return create_notification(
        db,
        scope=NotificationScope.GLOBAL,
        notification_type=NotificationType.EVENT_CREATED,
        title="New event",
        message=f"{event.name} starts on {event.start_time:%Y-%m-%d %H:%M}.",
        data={"event_id": str(event.id)},
        action_url=f"/events/{event.id}",
        icon=NotificationIcon.CALENDAR,
        created_by=event.owner_id,
    )


def notify_system_announcement(
    db: Session, title: str, message: str, created_by: Optional[UUID] = None
) -> Notification:
    return create_notification(
        db,
        scope=NotificationScope.GLOBAL,
        notification_type=NotificationType.SYSTEM_ANNOUNCEMENT,
        title=title,
        message=message,
        priority=NotificationPriority.HIGH,
        icon=NotificationIcon.INFO,
        created_by=created_by,
    )


def dispatch_notification(db: Session, notify: Callable[..., Notification], *args, **kwargs) -> Optional[Notification]:
    """
    Run a notify_* helper as a side effect

    Failures are logged and the session rolled back; they never reach the caller.
    """
    try:
        return notify(db, *args, **kwargs)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create notification via {getattr(notify, '__name__', notify)}: {str(e)}", exc_info=True)
        return None


# Inbox


def _group_notification_ids(user_id: UUID):
    return select(notification_targets.c.notification_id).where(notification_targets.c.user_id == user_id)


def _visible_filter(user: User):
    """Own user-scoped notifications plus unexpired global, role and group ones"""
    now = datetime.utcnow()
    in_group = Notification.id.in_(_group_notification_ids(user.id))
    return or_(
        and_(Notification.scope == NotificationScope.USER, Notification.user_id == user.id),
        and_(
            Notification.scope != NotificationScope.USER,
            or_(Notification.expires_at.is_(None), Notification.expires_at > now),
            or_(
                Notification.scope == NotificationScope.GLOBAL,
                and_(Notification.scope == NotificationScope.ROLE, Notification.target_role == user.role),
                and_(Notification.scope == NotificationScope.GROUP, in_group),
            ),
        ),
    )


def list_notifications(
    db: Session, user: User, unread_only: bool = False, skip: int = 0, limit: int = 20
) -> Tuple[List[Tuple[Notification, bool, Optional[datetime]]], int]:
    """
    Notifications visible to the user, newest first

    Returns:
        ([(notification, is_read, read_at)], total)
    """
    query = (
        db.query(Notification, NotificationRead.read_at)
        .outerjoin(
            NotificationRead,
            and_(NotificationRead.notification_id == Notification.id, NotificationRead.user_id == user.id),
        )
        .filter(_visible_filter(user))
    )

    if unread_only:
        query = query.filter(
            or_(
                and_(Notification.scope == NotificationScope.USER, Notification.is_read.is_(False)),
                and_(Notification.scope != NotificationScope.USER, NotificationRead.id.is_(None)),
            )
        )

    total = query.count()
    rows = query.order_by(Notification.created_at.desc()).offset(skip).limit(limit).all()

    items = []
    for notification, shared_read_at in rows:
        if notification.scope == NotificationScope.USER:
            items.append((notification, notification.is_read, notification.read_at))
        else:
            items.append((notification, shared_read_at is not None, shared_read_at))
    return items, total


def unread_count(db: Session, user: User) -> int:
    _, total = list_notifications(db, user, unread_only=True, limit=1)
    return total


def _get_visible(db: Session, notification_id: UUID, user: User) -> Notification:
    notification = (
        db.query(Notification).filter(Notification.id == notification_id, _visible_filter(user)).first()
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def _mark(db: Session, notification: Notification, user: User, now: datetime) -> bool:
    """Mark one notification read for the user; False if it already was"""
    if notification.scope == NotificationScope.USER:
        if notification.is_read:
            return False
        notification.is_read = True
        notification.read_at = now
        return True

    exists = (
        db.query(NotificationRead.id)
        .filter(NotificationRead.notification_id == notification.id, NotificationRead.user_id == user.id)
        .first()
    )
    if exists:
        return False
    db.add(NotificationRead(notification_id=notification.id, user_id=user.id, read_at=now))
    return True


def mark_as_read(db: Session, notification_id: UUID, user: User) -> Tuple[Notification, datetime]:
    notification = _get_visible(db, notification_id, user)
    _mark(db, notification, user, datetime.utcnow())
    db.commit()

    if notification.scope == NotificationScope.USER:
        return notification, notification.read_at
    read = (
        db.query(NotificationRead)
        .filter(NotificationRead.notification_id == notification.id, NotificationRead.user_id == user.id)
        .first()
    )
    return notification, read.read_at


def mark_all_as_read(db: Session, user: User) -> int:
    now = datetime.utcnow()
    notifications = db.query(Notification).filter(_visible_filter(user)).all()
    marked = sum(1 for notification in notifications if _mark(db, notification, user, now))
    db.commit()
    return marked


def delete_notification(db: Session, notification_id: UUID, user: User) -> None:
    """Only the recipient of a user-scoped notification may delete it"""
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.scope != NotificationScope.USER or notification.user_id != user.id:
        raise ForbiddenError("You can only delete your own notifications")

    db.delete(notification)
    db.commit()
