"""
API endpoints for SOS alerts.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.auth import UserContext, get_current_user, require_admin
from ...core.db import get_db
from ...core.errors import db_failure
from ...models.emergency_alert import EmergencyAlert
from ...schemas.emergency import EmergencyAlertIn, EmergencyAlertOut, EmergencyStatusUpdate
from ...services.case_lifecycle import change_alert_status


router = APIRouter(prefix="/api/emergency", tags=["emergency"])
logger = logging.getLogger("emergency")


def _dump(alerts: list[EmergencyAlert]) -> list[dict]:
    return [EmergencyAlertOut.model_validate(a).model_dump(mode="json") for a in alerts]


@router.post("/alert", status_code=201)
def raise_alert(
    payload: EmergencyAlertIn,
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        alert = EmergencyAlert(
            user_id=user.user_id,
            alert_type=payload.alert_type,
            latitude=payload.latitude,
            longitude=payload.longitude,
            location_description=payload.location_description or "",
            status="active",
        )
        db.add(alert)
        db.commit()
        db.refresh(alert)
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to send emergency alert", exc=exc, extra={"user_id": user.user_id})

    logger.warning(
        "Emergency alert raised alert_id=%s type=%s user_id=%s lat=%s lon=%s",
        alert.alert_id,
        alert.alert_type,
        user.user_id,
        alert.latitude,
        alert.longitude,
    )
    return {"message": "Emergency alert sent successfully", "alert_id": alert.alert_id}


@router.get("/my-alerts")
def list_my_alerts(
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        alerts = (
            db.query(EmergencyAlert)
            .filter(EmergencyAlert.user_id == user.user_id)
            .order_by(EmergencyAlert.created_at.desc(), EmergencyAlert.alert_id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch emergency alerts", exc=exc)
    return {"alerts": _dump(alerts)}


@router.get("/active")
def list_active_alerts(
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        alerts = (
            db.query(EmergencyAlert)
            .filter(EmergencyAlert.status == "active")
            .order_by(EmergencyAlert.created_at.asc(), EmergencyAlert.alert_id.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch emergency alerts", exc=exc)
    return {"alerts": _dump(alerts), "count": len(alerts)}


@router.put("/update-status/{alert_id}")
def update_alert_status(
    alert_id: int,
    payload: EmergencyStatusUpdate,
    db: Session = Depends(get_db),
    user: UserContext = Depends(require_admin),
) -> dict:
    try:
        alert = db.get(EmergencyAlert, alert_id)
        if not alert:
            raise HTTPException(status_code=404, detail="Emergency alert not found")
        if alert.status == "resolved":
            raise HTTPException(status_code=409, detail="Emergency alert already resolved")
        change_alert_status(db, alert, new_status=payload.status, changed_by=user.user_id)
        db.commit()
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to update emergency alert", exc=exc, extra={"alert_id": alert_id})

    logger.info("Emergency alert alert_id=%s now %s by=%s", alert_id, payload.status, user.user_id)
    return {"message": "Emergency alert updated successfully"}
