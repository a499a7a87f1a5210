"""
Reference Data Schemas
Sports, sport groups, goals, event styles, facilities and salons
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from sportnet.schemas.common import ORMModel, RequestModel


class NameCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=100)


class SportCreate(NameCreate):
    group_id: UUID


class EventStyleCreate(NameCreate):
    color: str = Field(..., pattern=r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class FacilityCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    owner_id: Optional[UUID] = None


class SalonCreate(RequestModel):
    facility_id: UUID
    name: str = Field(..., min_length=1, max_length=255)


class NamedResponse(ORMModel):
    id: UUID
    name: str
    created_at: datetime


class SportResponse(NamedResponse):
    group_id: UUID
    group_name: str


class EventStyleResponse(NamedResponse):
    color: str


class FacilityResponse(NamedResponse):
    owner_id: UUID
    address: Optional[str] = None


class SalonResponse(NamedResponse):
    facility_id: UUID
