"""
Pydantic Schemas Package
Exports all request/response schemas
"""

from sportnet.schemas.branch import (
    BranchDescriptor,
    BranchResponse,
    BranchSubmission,
    CoachResponse,
    PendingCoachResponse,
)
from sportnet.schemas.club import (
    ApproveJoinClubRequest,
    ApproveJoinGroupRequest,
    ClubCreate,
    ClubResponse,
    ClubUpdate,
    GroupCreate,
    GroupResponse,
    GroupUpdate,
    InviteClubRequest,
    InviteEventRequest,
    InviteGroupRequest,
    InviteResponse,
    JoinClubResponse,
    JoinGroupResponse,
)
from sportnet.schemas.common import ApiResponse, FileMeta, PageRequest, PaginatedResponse, Pagination
from sportnet.schemas.event import EventCreate, EventResponse
from sportnet.schemas.notification import NotificationCreate, NotificationResponse, UnreadCount
from sportnet.schemas.participant import ParticipantCreate, ParticipantResponse, ParticipantUpdate
from sportnet.schemas.reservation import (
    EventIdRequest,
    EventParticipantResponse,
    MyReservationResponse,
    ParticipantsFilter,
    ReservationResponse,
)
from sportnet.schemas.user import LoginRequest, RegisterRequest, Token, UserResponse

__all__ = [
    # Envelope
    "ApiResponse",
    "PaginatedResponse",
    "Pagination",
    "PageRequest",
    "FileMeta",
    # User
    "RegisterRequest",
    "LoginRequest",
    "Token",
    "UserResponse",
    # Participant
    "ParticipantCreate",
    "ParticipantUpdate",
    "ParticipantResponse",
    # Reservation
    "EventIdRequest",
    "ParticipantsFilter",
    "ReservationResponse",
    "EventParticipantResponse",
    "MyReservationResponse",
    # Branch
    "BranchDescriptor",
    "BranchSubmission",
    "BranchResponse",
    "CoachResponse",
    "PendingCoachResponse",
    # Event
    "EventCreate",
    "EventResponse",
    # Club
    "ClubCreate",
    "ClubUpdate",
    "ClubResponse",
    "GroupCreate",
    "GroupUpdate",
    "GroupResponse",
    "ApproveJoinClubRequest",
    "ApproveJoinGroupRequest",
    "JoinClubResponse",
    "JoinGroupResponse",
    "InviteClubRequest",
    "InviteGroupRequest",
    "InviteEventRequest",
    "InviteResponse",
    # Notification
    "NotificationCreate",
    "NotificationResponse",
    "UnreadCount",
]
