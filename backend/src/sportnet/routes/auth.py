"""
Authentication Routes
Registration, login with lockout, token refresh and the current user
"""

import logging
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sportnet.config import settings
from sportnet.database import get_db
from sportnet.dependencies.auth import get_current_user
from sportnet.exceptions import ConflictError, ForbiddenError, UnauthorizedError
from sportnet.models.user import User, UserRole
from sportnet.schemas.common import ApiResponse
from sportnet.schemas.user import LoginRequest, RefreshRequest, RegisterRequest, Token, UserResponse
from sportnet.utils.auth import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user

    - **email**: must be unique
    - **password**: min 8 characters, must contain digit and uppercase
    """
    if db.query(User).filter(User.email == user_data.email).first():
        raise ConflictError("Email already registered")

    new_user = User(
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        phone=user_data.phone,
        hashed_password=get_password_hash(user_data.password),
        role=UserRole.USER.value,
        is_active=True,
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    return {"message": "User registered", "data": new_user}


@router.post("/login", response_model=ApiResponse[Token])
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Login with email and password

    Returns access token and refresh token
    """
    user = db.query(User).filter(User.email == login_data.email).first()

    if not user:
        raise UnauthorizedError("Incorrect email or password")

    if user.locked_until and user.locked_until > datetime.utcnow():
        raise ForbiddenError(f"Account locked until {user.locked_until.isoformat()}")

    if not verify_password(login_data.password, user.hashed_password):
        user.failed_login_attempts += 1

        if user.failed_login_attempts >= settings.MAX_FAILED_LOGIN_ATTEMPTS:
            user.locked_until = datetime.utcnow() + timedelta(minutes=settings.ACCOUNT_LOCK_MINUTES)
            db.commit()
            logger.warning(f"Account {user.id} locked after {user.failed_login_attempts} failed logins")
            raise ForbiddenError(
                f"Account locked due to multiple failed login attempts. "
                f"Try again in {settings.ACCOUNT_LOCK_MINUTES} minutes."
            )

        db.commit()
        raise UnauthorizedError("Incorrect email or password")

    if not user.is_active:
        raise ForbiddenError("Account is inactive")

    user.failed_login_attempts = 0
    user.locked_until = None
    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)

    return {
        "data": {
            "access_token": create_access_token(user.id),
            "refresh_token": create_refresh_token(user.id),
            "token_type": "bearer",
            "user": user,
        }
    }


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    return {"data": current_user}


@router.post("/refresh", response_model=ApiResponse[Token])
def refresh(body: RefreshRequest, db: Session = Depends(get_db)):
    """
    Exchange a refresh token for a new token pair

    Only tokens issued with type=refresh are accepted.
    """
    user_id = decode_token(body.refresh_token, expected_type=REFRESH_TOKEN_TYPE)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthorizedError("User not found")
    if not user.is_active:
        raise ForbiddenError("Account is inactive")

    return {
        "data": {
            "access_token": create_access_token(user.id),
            "refresh_token": create_refresh_token(user.id),
            "token_type": "bearer",
            "user": user,
        }
    }
