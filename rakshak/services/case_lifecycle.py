"""
Status transitions for FIRs, complaints and emergency alerts.

Each helper mutates the record, appends any audit rows and queues the
owner notification. Callers commit.
"""

from __future__ import annotations

import datetime

from sqlalchemy.orm import Session

from ..models.complaint import Complaint
from ..models.emergency_alert import EmergencyAlert
from ..models.fir import Fir, FirStatusHistory
from .notifications import create_notification


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def change_fir_status(
    db: Session,
    fir: Fir,
    *,
    new_status: str,
    changed_by: int,
    remarks: str | None = None,
) -> FirStatusHistory:
    old_status = fir.status
    fir.status = new_status
    fir.updated_at = _now()
    entry = FirStatusHistory(
        fir_id=fir.fir_id,
        old_status=old_status,
        new_status=new_status,
        changed_by=changed_by,
        remarks=remarks or "",
        changed_at=_now(),
    )
    db.add(entry)
    create_notification(
        db,
        user_id=fir.user_id,
        notification_type="fir_update",
        title="FIR Status Updated",
        message=f"Your FIR {fir.fir_number} status changed to {new_status}",
        reference_id=fir.fir_id,
        reference_type="fir",
    )
    return entry


def change_complaint_status(
    db: Session,
    complaint: Complaint,
    *,
    new_status: str,
    resolution_details: str | None = None,
) -> None:
    complaint.status = new_status
    complaint.resolution_details = resolution_details or ""
    complaint.updated_at = _now()
    create_notification(
        db,
        user_id=complaint.user_id,
        notification_type="complaint_update",
        title="Complaint Status Updated",
        message=f"Your complaint {complaint.complaint_number} status changed to {new_status}",
        reference_id=complaint.complaint_id,
        reference_type="complaint",
    )


def change_alert_status(
    db: Session,
    alert: EmergencyAlert,
    *,
    new_status: str,
    changed_by: int,
) -> None:
    alert.status = new_status
    if new_status == "resolved":
        alert.resolved_by = changed_by
        alert.resolved_at = _now()
    else:
        alert.resolved_by = None
        alert.resolved_at = None
    create_notification(
        db,
        user_id=alert.user_id,
        notification_type="emergency_update",
        title="Emergency Alert Update",
        message=f"Your emergency alert #{alert.alert_id} is now {new_status}",
        reference_id=alert.alert_id,
        reference_type="emergency",
    )
