"""
Notification API Routes
Per-user inbox and admin announcements
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sportnet.database import get_db
from sportnet.dependencies.auth import get_admin_user, get_current_user
from sportnet.models.user import User
from sportnet.schemas.common import ApiResponse, PaginatedResponse
from sportnet.schemas.notification import (
    AnnouncementCreate,
    NotificationCreate,
    NotificationResponse,
    ReadAllResult,
    UnreadCount,
)
from sportnet.services import notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _serialize(notification, is_read, read_at) -> NotificationResponse:
    return NotificationResponse.model_validate(notification).model_copy(update={"is_read": is_read, "read_at": read_at})


@router.get("", response_model=PaginatedResponse[NotificationResponse])
def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100, alias="perPage"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Notifications addressed to the caller, newest first"""
    items, total = notification_service.list_notifications(
        db, current_user, unread_only=unread_only, skip=(page - 1) * per_page, limit=per_page
    )
    return {
        "data": [_serialize(*item) for item in items],
        "pagination": {
            "page": page,
            "per_page": per_page,
            "total": total,
            "total_pages": (total + per_page - 1) // per_page,
        },
    }


@router.get("/unread-count", response_model=ApiResponse[UnreadCount])
def unread_count(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"data": {"count": notification_service.unread_count(db, current_user)}}


@router.put("/read-all", response_model=ApiResponse[ReadAllResult])
def mark_all_read(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    marked = notification_service.mark_all_as_read(db, current_user)
    return {"message": "All notifications marked as read", "data": {"marked": marked}}


@router.put("/{notification_id}/read", response_model=ApiResponse[NotificationResponse])
def mark_read(notification_id: UUID, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    notification, read_at = notification_service.mark_as_read(db, notification_id, current_user)
    return {"message": "Notification marked as read", "data": _serialize(notification, True, read_at)}


@router.delete("/{notification_id}", response_model=ApiResponse)
def delete_notification(
    notification_id: UUID, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    notification_service.delete_notification(db, notification_id, current_user)
    return {"message": "Notification deleted"}


@router.post("", response_model=ApiResponse[NotificationResponse], status_code=status.HTTP_201_CREATED)
def create_notification(
    data: NotificationCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)
):
    """Create a notification of any scope (admin only)"""
    notification = notification_service.create_notification(db, **data.model_dump(), created_by=admin.id)
    return {"message": "Notification created", "data": notification}


@router.post("/announcement", response_model=ApiResponse[NotificationResponse], status_code=status.HTTP_201_CREATED)
def create_announcement(
    data: AnnouncementCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)
):
    """High-priority notification for every user (admin only)"""
    notification = notification_service.notify_system_announcement(
        db, data.title, data.message, created_by=admin.id
    )
    return {"message": "Announcement published", "data": notification}
