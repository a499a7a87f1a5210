"""
Database Models Package
Exports all SQLAlchemy models
"""

from sportnet.models.club import Club, ClubGroup, Invite, JoinClub, JoinGroup
from sportnet.models.coach import Branch, BranchStatus, Coach
from sportnet.models.event import Event, EventType, PriceType
from sportnet.models.follow import Favorite, Follow
from sportnet.models.notification import Notification, NotificationRead
from sportnet.models.participant import Participant
from sportnet.models.reference import EventStyle, Facility, Salon, Sport, SportGoal, SportGroup
from sportnet.models.reservation import Reservation
from sportnet.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Participant",
    "Coach",
    "Branch",
    "BranchStatus",
    "Event",
    "EventType",
    "PriceType",
    "Reservation",
    "Follow",
    "Favorite",
    "Club",
    "ClubGroup",
    "JoinClub",
    "JoinGroup",
    "Invite",
    "Notification",
    "NotificationRead",
    "Sport",
    "SportGroup",
    "SportGoal",
    "EventStyle",
    "Facility",
    "Salon",
]
