"""
Participant API Routes
Profile, reservations, check-in, club/group membership, follows and favorites
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sportnet.database import get_db
from sportnet.dependencies.auth import get_current_user, get_participant_user
from sportnet.exceptions import ConflictError, NotFoundError
from sportnet.models.participant import Participant
from sportnet.models.reference import Sport, SportGoal
from sportnet.models.user import User
from sportnet.schemas.club import JoinClubResponse, JoinGroupResponse
from sportnet.schemas.common import ApiResponse, PageRequest, PaginatedResponse, paginate
from sportnet.schemas.follow import (
    ClubIdRequest,
    CoachIdRequest,
    FacilityIdRequest,
    FavoriteResponse,
    FollowResponse,
    FollowsOverview,
    GroupIdRequest,
)
from sportnet.schemas.participant import ParticipantCreate, ParticipantResponse, ParticipantUpdate
from sportnet.schemas.reservation import EventIdRequest, MyReservationResponse, ReservationResponse
from sportnet.services import club_service, follow_service, reservation_service

router = APIRouter(prefix="/participant", tags=["Participant"])


def _check_references(db: Session, sport_id=None, goal_id=None):
    if sport_id is not None and not db.query(Sport.id).filter(Sport.id == sport_id).first():
        raise NotFoundError("Sport not found")
    if goal_id is not None and not db.query(SportGoal.id).filter(SportGoal.id == goal_id).first():
        raise NotFoundError("Sport goal not found")


@router.post("/create-profile", response_model=ApiResponse[ParticipantResponse], status_code=status.HTTP_201_CREATED)
def create_profile(
    data: ParticipantCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create the caller's participant profile"""
    if current_user.participant_id is not None:
        raise ConflictError("Participant profile already exists")

    _check_references(db, data.main_sport_id, data.sport_goal_id)

    participant = Participant(**data.model_dump())
    db.add(participant)
    db.flush()
    current_user.participant_id = participant.id
    db.commit()
    db.refresh(participant)

    return {"message": "Participant profile created", "data": participant}


@router.post("/edit-profile", response_model=ApiResponse[ParticipantResponse])
def edit_profile(
    data: ParticipantUpdate,
    current_user: User = Depends(get_participant_user),
    db: Session = Depends(get_db),
):
    """Update the caller's participant profile"""
    update = data.model_dump(exclude_unset=True, exclude_none=True)
    _check_references(db, update.get("main_sport_id"), update.get("sport_goal_id"))

    participant = current_user.participant
    for field, value in update.items():
        setattr(participant, field, value)

    db.commit()
    db.refresh(participant)
    return {"message": "Participant profile updated", "data": participant}


@router.post(
    "/make-reservation", response_model=ApiResponse[ReservationResponse], status_code=status.HTTP_201_CREATED
)
def make_reservation(
    body: EventIdRequest,
    current_user: User = Depends(get_participant_user),
    db: Session = Depends(get_db),
):
    """
    Reserve a seat in an event

    - inside the check-in window the reservation is checked in at once (403 when full)
    - earlier, reservations over capacity are waitlisted
    """
    reservation = reservation_service.make_reservation(db, current_user.participant_id, body.event_id)
    return {"message": "Reservation created", "data": reservation}


@router.post("/check-in", response_model=ApiResponse[ReservationResponse], status_code=status.HTTP_201_CREATED)
def check_in(
    body: EventIdRequest,
    current_user: User = Depends(get_participant_user),
    db: Session = Depends(get_db),
):
    reservation = reservation_service.check_in(db, current_user.participant_id, body.event_id)
    return {"message": "Checked in", "data": reservation}


@router.post(
    "/confirm-payment", response_model=ApiResponse[ReservationResponse], status_code=status.HTTP_201_CREATED
)
def confirm_payment(
    body: EventIdRequest,
    current_user: User = Depends(get_participant_user),
    db: Session = Depends(get_db),
):
    reservation = reservation_service.confirm_payment(db, current_user.participant_id, body.event_id)
    return {"message": "Payment confirmed", "data": reservation}


@router.post("/my-reservations", response_model=PaginatedResponse[MyReservationResponse])
def my_reservations(
    page: PageRequest,
    current_user: User = Depends(get_participant_user),
    db: Session = Depends(get_db),
):
    reservations, total = reservation_service.my_reservations(db, current_user.participant_id, page)
    return {"data": reservations, "pagination": paginate(page, total)}


@router.post("/join-to-club/{club_id}", response_model=ApiResponse[JoinClubResponse], status_code=status.HTTP_201_CREATED)
def join_club(club_id: UUID, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    request = club_service.join_club(db, club_id, current_user)
    message = "Joined club" if request.is_approved else "Join request sent"
    return {"message": message, "data": request}


@router.post("/leave-club/{club_id}", response_model=ApiResponse)
def leave_club(club_id: UUID, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    club_service.leave_club(db, club_id, current_user)
    return {"message": "Left club"}


@router.post(
    "/join-to-group/{group_id}", response_model=ApiResponse[JoinGroupResponse], status_code=status.HTTP_201_CREATED
)
def join_group(group_id: UUID, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    request = club_service.join_group(db, group_id, current_user)
    message = "Joined group" if request.is_approved else "Join request sent"
    return {"message": message, "data": request}


@router.post("/leave-group/{group_id}", response_model=ApiResponse)
def leave_group(group_id: UUID, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    club_service.leave_group(db, group_id, current_user)
    return {"message": "Left group"}


# Follows & favorites


@router.post("/follow-coach", response_model=ApiResponse[FollowResponse], status_code=status.HTTP_201_CREATED)
def follow_coach(body: CoachIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    return {"message": "Coach followed", "data": follow_service.follow(db, current_user, "coach", body.coach_id)}


@router.post("/unfollow-coach", response_model=ApiResponse)
def unfollow_coach(body: CoachIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    follow_service.unfollow(db, current_user, "coach", body.coach_id)
    return {"message": "Coach unfollowed"}


@router.post("/favorite-coach", response_model=ApiResponse[FavoriteResponse], status_code=status.HTTP_201_CREATED)
def favorite_coach(body: CoachIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    favorite = follow_service.add_favorite(db, current_user, "coach", body.coach_id)
    return {"message": "Coach added to favorites", "data": favorite}


@router.post("/follow-facility", response_model=ApiResponse[FollowResponse], status_code=status.HTTP_201_CREATED)
def follow_facility(
    body: FacilityIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)
):
    return {"message": "Facility followed", "data": follow_service.follow(db, current_user, "facility", body.facility_id)}


@router.post("/unfollow-facility", response_model=ApiResponse)
def unfollow_facility(
    body: FacilityIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)
):
    follow_service.unfollow(db, current_user, "facility", body.facility_id)
    return {"message": "Facility unfollowed"}


@router.post("/favorite-facility", response_model=ApiResponse[FavoriteResponse], status_code=status.HTTP_201_CREATED)
def favorite_facility(
    body: FacilityIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)
):
    favorite = follow_service.add_favorite(db, current_user, "facility", body.facility_id)
    return {"message": "Facility added to favorites", "data": favorite}


@router.post("/favorite-event", response_model=ApiResponse[FavoriteResponse], status_code=status.HTTP_201_CREATED)
def favorite_event(body: EventIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    favorite = follow_service.add_favorite(db, current_user, "event", body.event_id)
    return {"message": "Event added to favorites", "data": favorite}


@router.post("/follow-club", response_model=ApiResponse[FollowResponse], status_code=status.HTTP_201_CREATED)
def follow_club(body: ClubIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    return {"message": "Club followed", "data": follow_service.follow(db, current_user, "club", body.club_id)}


@router.post("/unfollow-club", response_model=ApiResponse)
def unfollow_club(body: ClubIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    follow_service.unfollow(db, current_user, "club", body.club_id)
    return {"message": "Club unfollowed"}


@router.post("/follow-group", response_model=ApiResponse[FollowResponse], status_code=status.HTTP_201_CREATED)
def follow_group(body: GroupIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    return {"message": "Group followed", "data": follow_service.follow(db, current_user, "group", body.group_id)}


@router.post("/unfollow-group", response_model=ApiResponse)
def unfollow_group(body: GroupIdRequest, current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    follow_service.unfollow(db, current_user, "group", body.group_id)
    return {"message": "Group unfollowed"}


@router.get("/follows", response_model=ApiResponse[FollowsOverview])
def my_follows(current_user: User = Depends(get_participant_user), db: Session = Depends(get_db)):
    """Everything the caller follows or added to favorites"""
    follows, favorites = follow_service.list_follows(db, current_user)
    return {"data": {"follows": follows, "favorites": favorites}}
