"""
Notification Models
In-app messages addressed to one user, every user, a role, or a list of users
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Index, Integer, String, Table, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from sportnet.database import Base


class NotificationScope(str, enum.Enum):
    """Who a notification is addressed to"""

    USER = "user"
    GLOBAL = "global"
    ROLE = "role"
    GROUP = "group"


class NotificationType(str, enum.Enum):
    """Type of notification"""

    EVENT_CREATED = "event_created"
    EVENT_UPDATED = "event_updated"
    EVENT_CANCELLED = "event_cancelled"
    RESERVATION_APPROVED = "reservation_approved"
    RESERVATION_REJECTED = "reservation_rejected"
    RESERVATION_REMINDER = "reservation_reminder"
    CERTIFICATE_APPROVED = "certificate_approved"
    CERTIFICATE_REJECTED = "certificate_rejected"
    JOIN_REQUEST_APPROVED = "join_request_approved"
    JOIN_REQUEST_REJECTED = "join_request_rejected"
    INVITE_RECEIVED = "invite_received"
    MESSAGE_RECEIVED = "message_received"
    FOLLOW_NEW_EVENT = "follow_new_event"
    SYSTEM_ANNOUNCEMENT = "system_announcement"
    MAINTENANCE_NOTICE = "maintenance_notice"


class NotificationPriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class NotificationIcon(str, enum.Enum):
    BELL = "bell"
    CHECK_CIRCLE = "check-circle"
    X_CIRCLE = "x-circle"
    CALENDAR = "calendar"
    USER = "user"
    ALERT = "alert"
    INFO = "info"


# Recipients of group-scoped notifications
notification_targets = Table(
    "notification_targets",
    Base.metadata,
    Column("notification_id", Uuid, ForeignKey("notifications.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Notification(Base):
    """
    Notification Model
    Read state lives on the row for user scope and in NotificationRead otherwise
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_read_created", "user_id", "is_read", "created_at"),
        Index("ix_notifications_scope_created", "scope", "created_at"),
    )

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Addressing
    scope = Column(
        SQLEnum(NotificationScope, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    target_role = Column(Integer, nullable=True)

    # Content
    notification_type = Column(
        SQLEnum(NotificationType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, default=dict)

    # Read state (user scope)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime, nullable=True)

    priority = Column(
        SQLEnum(NotificationPriority, values_callable=lambda x: [e.value for e in x]),
        default=NotificationPriority.NORMAL,
        nullable=False,
    )
    action_url = Column(String(500), nullable=True)
    icon = Column(
        SQLEnum(NotificationIcon, values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )
    expires_at = Column(DateTime, nullable=True)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    target_users = relationship("User", secondary=notification_targets)

    def __repr__(self):
        return f"<Notification(scope='{self.scope}', type='{self.notification_type}')>"


class NotificationRead(Base):
    """Per-user read marker for global, role and group notifications"""

    __tablename__ = "notification_reads"
    __table_args__ = (UniqueConstraint("notification_id", "user_id", name="uq_notification_read_user"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    notification_id = Column(Uuid, ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    read_at = Column(DateTime, default=datetime.utcnow, nullable=False)
