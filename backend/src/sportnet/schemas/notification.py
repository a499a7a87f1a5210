"""
Notification Pydantic Schemas
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from sportnet.models.notification import (
    NotificationIcon,
    NotificationPriority,
    NotificationScope,
    NotificationType,
)
from sportnet.schemas.common import ORMModel, RequestModel


class NotificationCreate(RequestModel):
    """Admin-authored notification of any scope"""

    scope: NotificationScope
    notification_type: NotificationType = NotificationType.SYSTEM_ANNOUNCEMENT
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    user_id: Optional[UUID] = None
    target_role: Optional[int] = None
    target_users: List[UUID] = []
    data: Dict[str, Any] = {}
    priority: NotificationPriority = NotificationPriority.NORMAL
    action_url: Optional[str] = Field(None, max_length=500)
    icon: Optional[NotificationIcon] = None
    expires_at: Optional[datetime] = None


class AnnouncementCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)


class NotificationResponse(ORMModel):
    id: UUID
    scope: NotificationScope
    notification_type: NotificationType
    title: str
    message: str
    data: Optional[Dict[str, Any]] = None
    is_read: bool
    read_at: Optional[datetime] = None
    priority: NotificationPriority
    action_url: Optional[str] = None
    icon: Optional[NotificationIcon] = None
    expires_at: Optional[datetime] = None
    created_at: datetime


class UnreadCount(BaseModel):
    count: int


class ReadAllResult(BaseModel):
    marked: int
