"""
Authentication Dependencies
FastAPI dependencies for protecting routes and resolving the acting profile
"""

from datetime import datetime
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sportnet.database import get_db
from sportnet.exceptions import ForbiddenError, UnauthorizedError
from sportnet.models.user import User
from sportnet.utils.auth import decode_token

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from the bearer token

    Raises:
        UnauthorizedError: missing/invalid token or unknown user
        ForbiddenError: inactive or locked account
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    user_id = decode_token(credentials.credentials)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthorizedError("User not found")

    if not user.is_active:
        raise ForbiddenError("Inactive user account")

    if user.locked_until and user.locked_until > datetime.utcnow():
        raise ForbiddenError("Account is temporarily locked due to multiple failed login attempts")

    return user


async def get_participant_user(current_user: User = Depends(get_current_user)) -> User:
    """Current user, who must own a participant profile"""
    if current_user.participant_id is None:
        raise ForbiddenError("Participant profile required")
    return current_user


async def get_coach_user(current_user: User = Depends(get_current_user)) -> User:
    """Current user, who must own a coach profile"""
    if current_user.coach_id is None:
        raise ForbiddenError("Coach profile required")
    return current_user


async def get_coach_or_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.coach_id is None and not current_user.is_admin:
        raise ForbiddenError("Coach profile required")
    return current_user


async def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """Current user, who must be an admin (role 0)"""
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user


def ensure_owner_or_admin(is_owner: bool, user: User, message: str = "You are not the owner") -> None:
    """
    Shared ownership predicate

    Raises:
        ForbiddenError: user neither owns the resource nor is an admin
    """
    if not (is_owner or user.is_admin):
        raise ForbiddenError(message)
