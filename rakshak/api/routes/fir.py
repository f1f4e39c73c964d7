"""
API endpoints for First Information Reports.

Citizens file and track their own FIRs; officers and admins list every
FIR and move it through its statuses. Each status change is recorded in
``fir_status_history`` and announced to the complainant.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.auth import UserContext, get_current_user, require_admin
from ...core.db import get_db
from ...core.errors import db_failure
from ...core.pagination import PageParams, page_params, paginate
from ...models.fir import Fir, FirStatusHistory
from ...schemas.fir import FirCreate, FirHistoryOut, FirOut, FirStatusUpdate
from ...services.case_lifecycle import change_fir_status
from ...services.notifications import create_notification
from ...services.reference_numbers import next_fir_number


router = APIRouter(prefix="/api/fir", tags=["fir"])
logger = logging.getLogger("fir")


def _dump(firs: list[Fir]) -> list[dict]:
    return [FirOut.model_validate(f).model_dump(mode="json") for f in firs]


@router.post("/create", status_code=201)
def create_fir(
    payload: FirCreate,
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        fir_number = next_fir_number(db)
        fir = Fir(
            fir_number=fir_number,
            user_id=user.user_id,
            complainant_name=payload.complainant_name,
            mobile=payload.mobile,
            email=payload.email or "",
            address=payload.address,
            crime_type=payload.crime_type,
            incident_details=payload.incident_details,
            incident_date=payload.incident_date,
            incident_location=payload.incident_location,
            status="Pending",
        )
        db.add(fir)
        db.flush()
        create_notification(
            db,
            user_id=user.user_id,
            notification_type="fir_update",
            title="FIR Filed Successfully",
            message=f"Your FIR {fir_number} has been filed successfully",
            reference_id=fir.fir_id,
            reference_type="fir",
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to file FIR", exc=exc, extra={"user_id": user.user_id})

    logger.info("FIR filed fir_number=%s user_id=%s", fir_number, user.user_id)
    return {"message": "FIR filed successfully", "fir_number": fir_number, "fir_id": fir.fir_id}


@router.get("/all")
def list_all_firs(
    response: Response,
    status: Optional[str] = Query(None),
    crime_type: Optional[str] = Query(None),
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        query = db.query(Fir)
        if status:
            query = query.filter(Fir.status == status)
        if crime_type:
            query = query.filter(Fir.crime_type == crime_type)
        firs, total = paginate(query.order_by(Fir.created_at.desc(), Fir.fir_id.desc()), page, response)
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch FIRs", exc=exc)
    return {"firs": _dump(firs), "count": len(firs), "total": total}


@router.get("/my-firs")
def list_my_firs(
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        firs = (
            db.query(Fir)
            .filter(Fir.user_id == user.user_id)
            .order_by(Fir.created_at.desc(), Fir.fir_id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch FIRs", exc=exc)
    return {"firs": _dump(firs)}


@router.get("/track/{fir_number}")
def track_fir(
    fir_number: str,
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        fir = db.query(Fir).filter(Fir.fir_number == fir_number).first()
        if not fir:
            raise HTTPException(status_code=404, detail="FIR not found")
        if not user.is_staff and fir.user_id != user.user_id:
            raise HTTPException(status_code=403, detail="Access denied")
        history = (
            db.query(FirStatusHistory)
            .filter(FirStatusHistory.fir_id == fir.fir_id)
            .order_by(FirStatusHistory.changed_at.desc(), FirStatusHistory.history_id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch FIR", exc=exc, extra={"fir_number": fir_number})
    return {
        "fir": FirOut.model_validate(fir).model_dump(mode="json"),
        "history": [FirHistoryOut.model_validate(h).model_dump(mode="json") for h in history],
    }


@router.put("/update-status/{fir_id}")
def update_fir_status(
    fir_id: int,
    payload: FirStatusUpdate,
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        fir = db.get(Fir, fir_id)
        if not fir:
            raise HTTPException(status_code=404, detail="FIR not found")
        old_status = fir.status
        change_fir_status(
            db,
            fir,
            new_status=payload.status,
            changed_by=user.user_id,
            remarks=payload.remarks,
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to update FIR status", exc=exc, extra={"fir_id": fir_id})

    logger.info(
        "FIR status changed fir_id=%s from=%s to=%s by=%s",
        fir_id,
        old_status,
        payload.status,
        user.user_id,
    )
    return {"message": "FIR status updated successfully"}
