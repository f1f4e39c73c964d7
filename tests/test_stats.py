from datetime import date

from rakshak.core.db import SessionLocal
from rakshak.models.complaint import Complaint
from rakshak.models.emergency_alert import EmergencyAlert
from rakshak.models.fir import Fir


def _seed(user_id: int) -> None:
    with SessionLocal() as db:
        for i, status in enumerate(["Pending", "Active", "Under Investigation", "Closed", "Rejected"]):
            db.add(
                Fir(
                    fir_number=f"FIR00000000{i}",
                    user_id=user_id,
                    complainant_name="Asha",
                    mobile="1",
                    email="",
                    address="addr",
                    crime_type="Theft",
                    incident_details="details",
                    incident_date=date(2026, 10, 1),
                    incident_location="loc",
                    status=status,
                )
            )
        for i, status in enumerate(["Pending", "Pending", "Resolved"]):
            db.add(
                Complaint(
                    complaint_number=f"CMP00000000{i}",
                    user_id=user_id,
                    complainant_name="Asha",
                    contact="x",
                    complaint_type="Noise",
                    complaint_details="loud",
                    status=status,
                    resolution_details="",
                )
            )
        db.add(EmergencyAlert(user_id=user_id, alert_type="SOS", location_description="", status="active"))
        db.add(EmergencyAlert(user_id=user_id, alert_type="SOS", location_description="", status="resolved"))
        db.commit()


def test_dashboard_counts(client, citizen, admin):
    _seed(citizen["user_id"])
    resp = client.get("/api/stats/dashboard", headers=admin["headers"])
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_firs"] == 5
    assert data["active_firs"] == 3
    assert data["pending_complaints"] == 2
    assert data["emergency_alerts"] == 1
    assert data["firs_by_status"]["Closed"] == 1
    assert data["complaints_by_status"] == {"Pending": 2, "Resolved": 1}


def test_dashboard_empty(client, officer):
    data = client.get("/api/stats/dashboard", headers=officer["headers"]).json()
    assert data["total_firs"] == 0
    assert data["emergency_alerts"] == 0
    assert data["firs_by_status"] == {}


def test_dashboard_staff_only(client, citizen):
    resp = client.get("/api/stats/dashboard", headers=citizen["headers"])
    assert resp.status_code == 403
    assert resp.json() == {"error": "Admin access required"}
