"""
Authentication Utilities
Password hashing and JWT encoding/decoding
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from sportnet.config import settings
from sportnet.exceptions import UnauthorizedError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(subject: str, token_type: str, expires_delta: timedelta) -> str:
    to_encode = {
        "sub": subject,
        "type": token_type,
        "exp": datetime.utcnow() + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    return _encode(
        str(user_id),
        ACCESS_TOKEN_TYPE,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    return _encode(
        str(user_id),
        REFRESH_TOKEN_TYPE,
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> UUID:
    """
    Decode a JWT and return the user id it was issued for

    Raises:
        UnauthorizedError: expired, malformed or wrong-type token
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        label = "Refresh" if expected_type == REFRESH_TOKEN_TYPE else "Access"
        raise UnauthorizedError(f"{label} token expired")
    except JWTError:
        raise UnauthorizedError("Invalid token")

    if payload.get("type") != expected_type or not payload.get("sub"):
        raise UnauthorizedError("Invalid token")

    try:
        return UUID(payload["sub"])
    except ValueError:
        raise UnauthorizedError("Invalid token")
