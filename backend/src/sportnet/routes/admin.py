"""
Admin API Routes
Coach certificate review and club/group approval
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from sportnet.database import get_db
from sportnet.dependencies.auth import get_admin_user
from sportnet.models.coach import Branch, BranchStatus, Coach
from sportnet.models.user import User
from sportnet.schemas.branch import BranchResponse, PendingCoachResponse
from sportnet.schemas.club import ClubResponse, GroupResponse
from sportnet.schemas.common import ApiResponse, PageRequest, PaginatedResponse, paginate
from sportnet.services import approval_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/coaches/pending", response_model=PaginatedResponse[PendingCoachResponse])
def pending_coaches(page: PageRequest, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    """Coaches with at least one branch awaiting review"""
    query = db.query(Coach).filter(Coach.branches.any(Branch.status == BranchStatus.PENDING))

    total = query.count()
    coaches = (
        query.options(selectinload(Coach.branches).joinedload(Branch.sport))
        .order_by(Coach.updated_at.desc())
        .offset(page.skip)
        .limit(page.per_page)
        .all()
    )
    return {"data": coaches, "pagination": paginate(page, total)}


@router.put("/coaches/branches/{branch_id}/approve", response_model=ApiResponse[BranchResponse])
def approve_branch(branch_id: UUID, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    branch = approval_service.set_branch_status(db, branch_id, BranchStatus.APPROVED, admin)
    return {"message": "Branch approved", "data": branch}


@router.put("/coaches/branches/{branch_id}/reject", response_model=ApiResponse[BranchResponse])
def reject_branch(branch_id: UUID, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    branch = approval_service.set_branch_status(db, branch_id, BranchStatus.REJECTED, admin)
    return {"message": "Branch rejected", "data": branch}


@router.put("/clubs/{club_id}/approve", response_model=ApiResponse[ClubResponse])
def approve_club(club_id: UUID, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    return {"message": "Club approved", "data": approval_service.approve_club(db, club_id)}


@router.put("/groups/{group_id}/approve", response_model=ApiResponse[GroupResponse])
def approve_group(group_id: UUID, admin: User = Depends(get_admin_user), db: Session = Depends(get_db)):
    return {"message": "Group approved", "data": approval_service.approve_group(db, group_id)}
