"""
Reference Data Routes
Sports, sport groups, goals, event styles, facilities and salons
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sportnet.database import get_db
from sportnet.dependencies.auth import get_admin_user
from sportnet.exceptions import NotFoundError
from sportnet.models.reference import EventStyle, Facility, Salon, Sport, SportGoal, SportGroup
from sportnet.models.user import User
from sportnet.schemas.common import ApiResponse
from sportnet.schemas.reference import (
    EventStyleCreate,
    EventStyleResponse,
    FacilityCreate,
    FacilityResponse,
    NameCreate,
    NamedResponse,
    SalonCreate,
    SalonResponse,
    SportCreate,
    SportResponse,
)

router = APIRouter(prefix="/reference-data", tags=["Reference Data"])


def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.get("/sports", response_model=ApiResponse[List[SportResponse]])
def list_sports(db: Session = Depends(get_db)):
    return {"data": db.query(Sport).order_by(Sport.group_name, Sport.name).all()}


@router.post("/sports", response_model=ApiResponse[SportResponse], status_code=status.HTTP_201_CREATED)
def create_sport(data: SportCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    group = db.query(SportGroup).filter(SportGroup.id == data.group_id).first()
    if group is None:
        raise NotFoundError("Sport group not found")
    sport = _save(db, Sport(group_id=group.id, name=data.name, group_name=group.name))
    return {"message": "Sport created", "data": sport}


@router.get("/sport-groups", response_model=ApiResponse[List[NamedResponse]])
def list_sport_groups(db: Session = Depends(get_db)):
    return {"data": db.query(SportGroup).order_by(SportGroup.name).all()}


@router.post("/sport-groups", response_model=ApiResponse[NamedResponse], status_code=status.HTTP_201_CREATED)
def create_sport_group(data: NameCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    return {"message": "Sport group created", "data": _save(db, SportGroup(name=data.name))}


@router.get("/sport-goals", response_model=ApiResponse[List[NamedResponse]])
def list_sport_goals(db: Session = Depends(get_db)):
    return {"data": db.query(SportGoal).order_by(SportGoal.name).all()}


@router.post("/sport-goals", response_model=ApiResponse[NamedResponse], status_code=status.HTTP_201_CREATED)
def create_sport_goal(data: NameCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    return {"message": "Sport goal created", "data": _save(db, SportGoal(name=data.name))}


@router.get("/event-styles", response_model=ApiResponse[List[EventStyleResponse]])
def list_event_styles(db: Session = Depends(get_db)):
    return {"data": db.query(EventStyle).order_by(EventStyle.name).all()}


@router.post("/event-styles", response_model=ApiResponse[EventStyleResponse], status_code=status.HTTP_201_CREATED)
def create_event_style(data: EventStyleCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    style = _save(db, EventStyle(name=data.name, color=data.color))
    return {"message": "Event style created", "data": style}


@router.post("/facilities", response_model=ApiResponse[FacilityResponse], status_code=status.HTTP_201_CREATED)
def create_facility(data: FacilityCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    owner_id = data.owner_id or admin.id
    if not db.query(User.id).filter(User.id == owner_id).first():
        raise NotFoundError("Facility owner not found")
    facility = _save(db, Facility(name=data.name, address=data.address, owner_id=owner_id))
    return {"message": "Facility created", "data": facility}


@router.post("/salons", response_model=ApiResponse[SalonResponse], status_code=status.HTTP_201_CREATED)
def create_salon(data: SalonCreate, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    if not db.query(Facility.id).filter(Facility.id == data.facility_id).first():
        raise NotFoundError("Facility not found")
    salon = _save(db, Salon(facility_id=data.facility_id, name=data.name))
    return {"message": "Salon created", "data": salon}
