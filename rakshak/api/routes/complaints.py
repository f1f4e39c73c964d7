"""
API endpoints for citizen grievances.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.auth import UserContext, get_current_user, require_admin
from ...core.db import get_db
from ...core.errors import db_failure
from ...models.complaint import Complaint
from ...schemas.complaint import ComplaintCreate, ComplaintOut, ComplaintStatusUpdate
from ...services.case_lifecycle import change_complaint_status
from ...services.reference_numbers import next_complaint_number


router = APIRouter(prefix="/api/complaint", tags=["complaint"])
logger = logging.getLogger("complaint")

ALL_COMPLAINTS_LIMIT = 100


def _dump(complaints: list[Complaint]) -> list[dict]:
    return [ComplaintOut.model_validate(c).model_dump(mode="json") for c in complaints]


@router.post("/create", status_code=201)
def create_complaint(
    payload: ComplaintCreate,
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        complaint_number = next_complaint_number(db)
        complaint = Complaint(
            complaint_number=complaint_number,
            user_id=user.user_id,
            complainant_name=payload.complainant_name,
            contact=payload.contact,
            complaint_type=payload.complaint_type,
            complaint_details=payload.complaint_details,
            status="Pending",
            resolution_details="",
        )
        db.add(complaint)
        db.commit()
        db.refresh(complaint)
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to submit complaint", exc=exc, extra={"user_id": user.user_id})

    logger.info("Complaint submitted complaint_number=%s user_id=%s", complaint_number, user.user_id)
    return {
        "message": "Complaint submitted successfully",
        "complaint_number": complaint_number,
        "complaint_id": complaint.complaint_id,
    }


@router.get("/all")
def list_all_complaints(
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        query = db.query(Complaint)
        if status:
            query = query.filter(Complaint.status == status)
        complaints = (
            query.order_by(Complaint.created_at.desc(), Complaint.complaint_id.desc())
            .limit(ALL_COMPLAINTS_LIMIT)
            .all()
        )
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch complaints", exc=exc)
    return {"complaints": _dump(complaints)}


@router.get("/my-complaints")
def list_my_complaints(
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        complaints = (
            db.query(Complaint)
            .filter(Complaint.user_id == user.user_id)
            .order_by(Complaint.created_at.desc(), Complaint.complaint_id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch complaints", exc=exc)
    return {"complaints": _dump(complaints)}


@router.get("/track/{complaint_number}")
def track_complaint(
    complaint_number: str,
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        complaint = db.query(Complaint).filter(Complaint.complaint_number == complaint_number).first()
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch complaint", exc=exc)
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")
    if not user.is_staff and complaint.user_id != user.user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    return {"complaint": ComplaintOut.model_validate(complaint).model_dump(mode="json")}


@router.put("/update-status/{complaint_id}")
def update_complaint_status(
    complaint_id: int,
    payload: ComplaintStatusUpdate,
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        complaint = db.get(Complaint, complaint_id)
        if not complaint:
            raise HTTPException(status_code=404, detail="Complaint not found")
        change_complaint_status(
            db,
            complaint,
            new_status=payload.status,
            resolution_details=payload.resolution_details,
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise db_failure(
            db, logger, "Failed to update complaint status", exc=exc, extra={"complaint_id": complaint_id}
        )

    logger.info("Complaint status changed complaint_id=%s to=%s by=%s", complaint_id, payload.status, user.user_id)
    return {"message": "Complaint status updated successfully"}
