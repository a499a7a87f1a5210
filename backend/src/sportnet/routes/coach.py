"""
Coach API Routes
Certification branches, events, reservations, clubs, groups and invitations
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from starlette.datastructures import FormData, UploadFile

from sportnet.database import get_db
from sportnet.dependencies.auth import get_coach_or_admin, get_coach_user, get_current_user
from sportnet.dependencies.uploads import upload_form
from sportnet.exceptions import BadRequestError
from sportnet.models.user import User
from sportnet.schemas.branch import BranchResponse, BranchSubmission
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
from sportnet.schemas.common import ApiResponse, PaginatedResponse, paginate
from sportnet.schemas.event import EventCreate, EventResponse
from sportnet.schemas.reservation import EventParticipantResponse, ParticipantsFilter, ReservationResponse
from sportnet.services import approval_service, branch_service, club_service, event_service, reservation_service

router = APIRouter(prefix="/coach", tags=["Coach"])

CERTIFICATE_FIELD = "coach-certificate"


# Branches


@router.post("/create-branch", response_model=ApiResponse[List[BranchResponse]], status_code=status.HTTP_201_CREATED)
async def create_branch(
    current_user: User = Depends(get_current_user),
    form: FormData = Depends(upload_form),
    db: Session = Depends(get_db),
):
    """
    Replace the caller's certification branches

    Multipart form fields:
    - **data**: `[{"sport", "branchOrder", "level", "certificate" | "fileIndex"}]`
    - **coach-certificate**: new certificate images, referenced by `fileIndex`
    """
    data = form.get("data")
    if not isinstance(data, str):
        raise BadRequestError("Form field 'data' is required")

    certificates = [item for item in form.getlist(CERTIFICATE_FIELD) if isinstance(item, UploadFile)]

    descriptors = BranchSubmission.validate_json(data)
    branches = await branch_service.replace_branches(db, current_user, descriptors, certificates)
    return {"message": "Branches submitted for review", "data": branches}


@router.get("/current-branches", response_model=ApiResponse[List[BranchResponse]])
def current_branches(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"data": branch_service.get_current_branches(db, current_user)}


# Events


@router.post("/create-event", response_model=ApiResponse[EventResponse], status_code=status.HTTP_201_CREATED)
def create_event(data: EventCreate, current_user: User = Depends(get_coach_user), db: Session = Depends(get_db)):
    event = event_service.create_event(db, data, current_user)
    return {"message": "Event created", "data": event}


@router.delete("/delete-event/{event_id}", response_model=ApiResponse)
def delete_event(event_id: UUID, current_user: User = Depends(get_coach_or_admin), db: Session = Depends(get_db)):
    event_service.delete_event(db, event_id, current_user)
    return {"message": "Event deleted"}


@router.post("/join-backup-coach/{event_id}", response_model=ApiResponse[EventResponse])
def join_backup_coach(event_id: UUID, current_user: User = Depends(get_coach_user), db: Session = Depends(get_db)):
    event = event_service.join_backup_coach(db, event_id, current_user)
    return {"message": "Joined as backup coach", "data": event}


@router.post("/event/participants/{event_id}", response_model=PaginatedResponse[EventParticipantResponse])
def event_participants(
    event_id: UUID,
    filters: ParticipantsFilter,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List an event's reservations, filterable by any reservation flag"""
    reservations, total = reservation_service.list_event_participants(db, event_id, current_user, filters)
    return {"data": reservations, "pagination": paginate(filters, total)}


@router.post(
    "/approve-reservation/{request_id}",
    response_model=ApiResponse[ReservationResponse],
    status_code=status.HTTP_201_CREATED,
)
def approve_reservation(request_id: UUID, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    reservation = reservation_service.approve_reservation(db, request_id, current_user)
    return {"message": "Reservation approved", "data": reservation}


# Clubs & groups


@router.post("/create-club", response_model=ApiResponse[ClubResponse], status_code=status.HTTP_201_CREATED)
def create_club(data: ClubCreate, current_user: User = Depends(get_coach_or_admin), db: Session = Depends(get_db)):
    club = club_service.create_club(db, data, current_user)
    return {"message": "Club created", "data": club}


@router.patch("/edit-club/{club_id}", response_model=ApiResponse[ClubResponse])
def edit_club(
    club_id: UUID,
    data: ClubUpdate,
    current_user: User = Depends(get_coach_or_admin),
    db: Session = Depends(get_db),
):
    club = club_service.update_club(db, club_id, data, current_user)
    return {"message": "Club updated", "data": club}


@router.delete("/delete-club/{club_id}", response_model=ApiResponse)
def delete_club(club_id: UUID, current_user: User = Depends(get_coach_or_admin), db: Session = Depends(get_db)):
    club_service.delete_club(db, club_id, current_user)
    return {"message": "Club deleted"}


@router.post("/create-group/{club_id}", response_model=ApiResponse[GroupResponse], status_code=status.HTTP_201_CREATED)
def create_group(
    club_id: UUID,
    data: GroupCreate,
    current_user: User = Depends(get_coach_user),
    db: Session = Depends(get_db),
):
    group = club_service.create_group(db, club_id, data, current_user)
    return {"message": "Group created", "data": group}


@router.post("/edit-group/{group_id}", response_model=ApiResponse[GroupResponse])
def edit_group(
    group_id: UUID,
    data: GroupUpdate,
    current_user: User = Depends(get_coach_or_admin),
    db: Session = Depends(get_db),
):
    group = club_service.update_group(db, group_id, data, current_user)
    return {"message": "Group updated", "data": group}


@router.delete("/delete-group/{group_id}", response_model=ApiResponse)
def delete_group(group_id: UUID, current_user: User = Depends(get_coach_or_admin), db: Session = Depends(get_db)):
    club_service.delete_group(db, group_id, current_user)
    return {"message": "Group deleted"}


@router.post("/approve-join-club", response_model=ApiResponse[JoinClubResponse])
def approve_join_club(
    body: ApproveJoinClubRequest,
    current_user: User = Depends(get_coach_or_admin),
    db: Session = Depends(get_db),
):
    request = approval_service.approve_join_club(db, body.club_id, body.user_id, current_user)
    return {"message": "Join request approved", "data": request}


@router.post("/approve-join-group", response_model=ApiResponse[JoinGroupResponse])
def approve_join_group(
    body: ApproveJoinGroupRequest,
    current_user: User = Depends(get_coach_or_admin),
    db: Session = Depends(get_db),
):
    request = approval_service.approve_join_group(db, body.group_id, body.user_id, current_user)
    return {"message": "Join request approved", "data": request}


# Invitations


@router.post("/invite-club", response_model=ApiResponse[InviteResponse], status_code=status.HTTP_201_CREATED)
def invite_club(body: InviteClubRequest, current_user: User = Depends(get_coach_user), db: Session = Depends(get_db)):
    invite = club_service.invite_to_club(db, body.club_id, body.user_id, current_user)
    return {"message": "Invitation sent", "data": invite}


@router.post("/invite-group", response_model=ApiResponse[InviteResponse], status_code=status.HTTP_201_CREATED)
def invite_group(body: InviteGroupRequest, current_user: User = Depends(get_coach_user), db: Session = Depends(get_db)):
    invite = club_service.invite_to_group(db, body.group_id, body.user_id, current_user)
    return {"message": "Invitation sent", "data": invite}


@router.post("/invite-event", response_model=ApiResponse[InviteResponse], status_code=status.HTTP_201_CREATED)
def invite_event(body: InviteEventRequest, current_user: User = Depends(get_coach_user), db: Session = Depends(get_db)):
    invite = club_service.invite_to_event(db, body.event_id, body.user_id, current_user)
    return {"message": "Invitation sent", "data": invite}
