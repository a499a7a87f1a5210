"""
User and Authentication Schemas
Pydantic models for request/response validation
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from sportnet.schemas.common import ORMModel, RequestModel


class RegisterRequest(RequestModel):
    """Request schema for registration"""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=20)
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Ensure password meets requirements"""
        if not any(char.isdigit() for char in v):
            raise ValueError("Password must contain at least one digit")
        if not any(char.isupper() for char in v):
            raise ValueError("Password must contain at least one uppercase letter")
        return v


class LoginRequest(RequestModel):
    """Request schema for login"""

    email: EmailStr
    password: str = Field(..., min_length=6)


class RefreshRequest(RequestModel):
    refresh_token: str = Field(..., min_length=1)


class UserResponse(ORMModel):
    """Schema for user response (without sensitive data)"""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    role: int
    participant_id: Optional[UUID]
    coach_id: Optional[UUID]
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime


class PublicUserResponse(ORMModel):
    """User fields other members may see"""

    id: UUID
    first_name: str
    last_name: str


class Token(ORMModel):
    """Response schema for login"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse
