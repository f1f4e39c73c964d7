"""
Dashboard statistics for officers and admins.

Aggregates counts across FIRs, complaints and emergency alerts.
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.auth import UserContext, require_admin
from ...core.db import get_db
from ...core.errors import db_failure
from ...models.complaint import Complaint
from ...models.emergency_alert import EmergencyAlert
from ...models.fir import ACTIVE_FIR_STATUSES, Fir


router = APIRouter(prefix="/api/stats", tags=["stats"])
logger = logging.getLogger("stats")


def _counts_by_status(db: Session, status_col, id_col) -> Dict[str, int]:
    rows = db.query(status_col, func.count(id_col)).group_by(status_col).all()
    return {status: int(count) for status, count in rows}


@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        total_firs = db.query(func.count(Fir.fir_id)).scalar() or 0
        active_firs = (
            db.query(func.count(Fir.fir_id))
            .filter(Fir.status.in_(ACTIVE_FIR_STATUSES))
            .scalar()
            or 0
        )
        pending_complaints = (
            db.query(func.count(Complaint.complaint_id))
            .filter(Complaint.status == "Pending")
            .scalar()
            or 0
        )
        emergency_alerts = (
            db.query(func.count(EmergencyAlert.alert_id))
            .filter(EmergencyAlert.status == "active")
            .scalar()
            or 0
        )
        firs_by_status = _counts_by_status(db, Fir.status, Fir.fir_id)
        complaints_by_status = _counts_by_status(db, Complaint.status, Complaint.complaint_id)
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch statistics", exc=exc)

    return {
        "total_firs": total_firs,
        "active_firs": active_firs,
        "pending_complaints": pending_complaints,
        "emergency_alerts": emergency_alerts,
        "firs_by_status": firs_by_status,
        "complaints_by_status": complaints_by_status,
    }
