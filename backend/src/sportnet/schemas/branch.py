"""
Branch Pydantic Schemas
Descriptors for the multipart branch submission and branch responses
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, TypeAdapter, model_validator

from sportnet.models.coach import BranchStatus
from sportnet.schemas.common import FileMeta, ORMModel, RequestModel


class BranchDescriptor(RequestModel):
    """
    One branch of a coach's certification set

    Either keeps the certificate already stored for the sport (``certificate``)
    or points at one of the uploaded files by position (``fileIndex``).
    """

    sport: UUID
    branch_order: int = Field(..., ge=1)
    level: int = Field(..., ge=1, le=10)
    certificate: Optional[FileMeta] = None
    file_index: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_certificate_source(self):
        if self.certificate is None and self.file_index is None:
            raise ValueError("Each branch needs a certificate or a fileIndex")
        if self.certificate is not None and self.file_index is not None:
            raise ValueError("A branch cannot have both a certificate and a fileIndex")
        return self


BranchSubmission = TypeAdapter(List[BranchDescriptor])


class BranchSport(ORMModel):
    id: UUID
    name: str
    group_name: str


class BranchResponse(ORMModel):
    id: UUID
    coach_id: UUID
    sport_id: UUID
    sport: BranchSport
    branch_order: int
    level: int
    certificate: FileMeta
    status: BranchStatus
    created_at: datetime
    updated_at: datetime


class CoachResponse(ORMModel):
    id: UUID
    name: str
    membership_level: Optional[str] = None
    point: Optional[int] = None
    is_verified: bool


class PendingCoachResponse(CoachResponse):
    """Coach awaiting review, with every branch"""

    branches: List[BranchResponse]
