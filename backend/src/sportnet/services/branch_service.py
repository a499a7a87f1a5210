"""
Branch Service
Atomic replacement of a coach's certification branches
"""

import logging
from collections import Counter
from typing import Dict, List
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.orm import Session, joinedload

from sportnet.exceptions import BadRequestError, ConflictError, NotFoundError
from sportnet.models.coach import Branch, BranchStatus, Coach
from sportnet.models.reference import Sport
from sportnet.models.user import User
from sportnet.schemas.branch import BranchDescriptor
from sportnet.services.storage import remove_files, save_uploads

logger = logging.getLogger(__name__)

CERTIFICATE_DIR = "certificates"


def _check_duplicates(descriptors: List[BranchDescriptor]) -> None:
    sports = Counter(d.sport for d in descriptors)
    orders = Counter(d.branch_order for d in descriptors)

    duplicate_sports = [str(sport) for sport, n in sports.items() if n > 1]
    if duplicate_sports:
        raise ConflictError(f"Duplicate sport in branches: {', '.join(duplicate_sports)}")

    duplicate_orders = [str(order) for order, n in orders.items() if n > 1]
    if duplicate_orders:
        raise ConflictError(f"Duplicate branchOrder in branches: {', '.join(duplicate_orders)}")


def _check_sports_exist(db: Session, descriptors: List[BranchDescriptor]) -> None:
    wanted = {d.sport for d in descriptors}
    found = {row.id for row in db.query(Sport.id).filter(Sport.id.in_(wanted)).all()}
    missing = wanted - found
    if missing:
        raise NotFoundError(f"Sport not found: {', '.join(sorted(str(s) for s in missing))}")


def _check_files(descriptors: List[BranchDescriptor], uploads: List[UploadFile]) -> None:
    indices = [d.file_index for d in descriptors if d.certificate is None]

    if len(uploads) != len(indices):
        raise BadRequestError(
            f"Expected {len(indices)} certificate file(s) for branches without a certificate, received {len(uploads)}"
        )

    if sorted(indices) != list(range(len(uploads))):
        raise BadRequestError("Each uploaded certificate must be referenced by exactly one fileIndex")


def _check_kept_certificates(descriptors: List[BranchDescriptor], current: Dict[UUID, Dict]) -> None:
    for descriptor in descriptors:
        if descriptor.certificate is None:
            continue
        stored = current.get(descriptor.sport)
        if stored is None or stored.get("path") != descriptor.certificate.path:
            raise BadRequestError(f"Certificate does not match the one stored for sport {descriptor.sport}")


def get_current_branches(db: Session, user: User) -> List[Branch]:
    if user.coach_id is None:
        return []
    return (
        db.query(Branch)
        .options(joinedload(Branch.sport))
        .filter(Branch.coach_id == user.coach_id)
        .order_by(Branch.branch_order.asc())
        .all()
    )


async def replace_branches(
    db: Session,
    user: User,
    descriptors: List[BranchDescriptor],
    uploads: List[UploadFile],
) -> List[Branch]:
    """
    Replace every branch of the user's coach profile with a new set

    All checks run before anything is written. New branches start Pending
    and the coach loses verification. Certificates of removed branches are
    unlinked after commit; on failure the new uploads are removed instead.

    Raises:
        BadRequestError: empty submission, file/descriptor mismatch, foreign certificate
        ConflictError: duplicate sport or branchOrder
        NotFoundError: unknown sport
        UploadTimeoutError: saving uploads took too long
    """
    if not descriptors:
        raise BadRequestError("At least one branch is required")

    _check_duplicates(descriptors)
    _check_sports_exist(db, descriptors)
    _check_files(descriptors, uploads)

    coach = user.coach
    current = {branch.sport_id: branch.certificate for branch in coach.branches} if coach else {}
    _check_kept_certificates(descriptors, current)

    saved = await save_uploads(uploads, CERTIFICATE_DIR)

    try:
        if coach is None:
            coach = Coach(name=user.full_name)
            db.add(coach)
            db.flush()
            user.coach_id = coach.id
            logger.info(f"Created coach profile {coach.id} for user {user.id}")

        previous = [branch.certificate for branch in coach.branches]

        # Old rows must be gone before the unique (coach, sport/order) inserts
        coach.branches.clear()
        db.flush()

        for descriptor in sorted(descriptors, key=lambda d: d.branch_order):
            certificate = (
                saved[descriptor.file_index]
                if descriptor.certificate is None
                else descriptor.certificate.model_dump()
            )
            coach.branches.append(
                Branch(
                    sport_id=descriptor.sport,
                    branch_order=descriptor.branch_order,
                    level=descriptor.level,
                    certificate=certificate,
                    status=BranchStatus.PENDING,
                )
            )

        coach.is_verified = False
        db.commit()
    except Exception:
        db.rollback()
        remove_files(saved)
        raise

    kept = {branch.certificate["path"] for branch in coach.branches}
    orphaned = [certificate for certificate in previous if certificate.get("path") not in kept]
    if orphaned:
        remove_files(orphaned)

    logger.info(f"Coach {coach.id} replaced branches: {len(descriptors)} pending")
    return get_current_branches(db, user)
