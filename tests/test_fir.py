import re

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from rakshak.api.routes import fir as fir_routes
from rakshak.core.db import SessionLocal
from rakshak.models.complaint import COMPLAINT_STATUSES
from rakshak.models.emergency_alert import STAFF_ALERT_STATUSES
from rakshak.models.fir import FIR_STATUSES, Fir, FirStatusHistory
from rakshak.models.notification import Notification
from rakshak.schemas.complaint import ComplaintStatusUpdate
from rakshak.schemas.emergency import EmergencyStatusUpdate
from rakshak.schemas.fir import FirStatusUpdate


FIR_PAYLOAD = {
    "complainant_name": "Asha Verma",
    "mobile": "9876543210",
    "address": "12 MG Road, Pune",
    "crime_type": "Theft",
    "incident_details": "Bicycle stolen from parking lot",
    "incident_date": "2026-10-01",
    "incident_location": "MG Road parking",
}


def _file_fir(client, headers, **overrides) -> dict:
    resp = client.post("/api/fir/create", json={**FIR_PAYLOAD, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_fir_returns_number_and_notifies(client, citizen):
    body = _file_fir(client, citizen["headers"])
    assert body["message"] == "FIR filed successfully"
    assert re.fullmatch(r"FIR\d{9}", body["fir_number"])

    with SessionLocal() as db:
        fir = db.get(Fir, body["fir_id"])
        assert fir.status == "Pending"
        assert fir.user_id == citizen["user_id"]
        assert fir.email == ""
        notes = db.query(Notification).filter(Notification.user_id == citizen["user_id"]).all()
        assert len(notes) == 1
        assert notes[0].title == "FIR Filed Successfully"
        assert notes[0].message == f"Your FIR {body['fir_number']} has been filed successfully"
        assert notes[0].reference_id == fir.fir_id
        assert notes[0].reference_type == "fir"


def test_create_fir_missing_fields(client, citizen):
    payload = {k: v for k, v in FIR_PAYLOAD.items() if k != "incident_location"}
    resp = client.post("/api/fir/create", json=payload, headers=citizen["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "All required fields must be filled"
    assert "incident_location" in resp.json()["fields"]


def test_create_fir_database_failure_is_reported(client, citizen, monkeypatch):
    def _boom(db):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(fir_routes, "next_fir_number", _boom)
    resp = client.post("/api/fir/create", json=FIR_PAYLOAD, headers=citizen["headers"])
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to file FIR"}


def test_my_firs_lists_only_own(client, citizen, other_citizen):
    mine = _file_fir(client, citizen["headers"])
    _file_fir(client, other_citizen["headers"])

    resp = client.get("/api/fir/my-firs", headers=citizen["headers"])
    assert resp.status_code == 200
    numbers = [f["fir_number"] for f in resp.json()["firs"]]
    assert numbers == [mine["fir_number"]]


def test_track_fir_owner_and_staff_only(client, citizen, other_citizen, officer):
    filed = _file_fir(client, citizen["headers"])
    path = f"/api/fir/track/{filed['fir_number']}"

    own = client.get(path, headers=citizen["headers"])
    assert own.status_code == 200
    assert own.json()["fir"]["fir_id"] == filed["fir_id"]
    assert own.json()["history"] == []

    other = client.get(path, headers=other_citizen["headers"])
    assert other.status_code == 403
    assert other.json() == {"error": "Access denied"}

    staff = client.get(path, headers=officer["headers"])
    assert staff.status_code == 200


def test_track_unknown_fir(client, citizen):
    resp = client.get("/api/fir/track/FIR000000000", headers=citizen["headers"])
    assert resp.status_code == 404
    assert resp.json() == {"error": "FIR not found"}


def test_all_firs_requires_staff(client, citizen):
    resp = client.get("/api/fir/all", headers=citizen["headers"])
    assert resp.status_code == 403
    assert resp.json() == {"error": "Admin access required"}


def test_all_firs_filters_and_paginates(client, citizen, admin):
    _file_fir(client, citizen["headers"], crime_type="Theft")
    _file_fir(client, citizen["headers"], crime_type="Assault")
    _file_fir(client, citizen["headers"], crime_type="Theft")

    resp = client.get("/api/fir/all", headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["count"] == 3
    assert resp.headers["X-Total-Count"] == "3"

    theft = client.get("/api/fir/all?crime_type=Theft", headers=admin["headers"])
    assert theft.json()["count"] == 2
    assert {f["crime_type"] for f in theft.json()["firs"]} == {"Theft"}

    page = client.get("/api/fir/all?limit=2&offset=2", headers=admin["headers"])
    assert page.json()["count"] == 1
    assert page.json()["total"] == 3

    pending = client.get("/api/fir/all?status=Closed", headers=admin["headers"])
    assert pending.json()["count"] == 0


def test_all_firs_limit_is_capped(client, citizen, admin, monkeypatch):
    monkeypatch.setenv("API_MAX_PAGE_SIZE", "2")
    for _ in range(3):
        _file_fir(client, citizen["headers"])
    resp = client.get("/api/fir/all?limit=100", headers=admin["headers"])
    assert resp.json()["count"] == 2
    assert resp.headers["X-Limit"] == "2"


def test_all_firs_rejects_negative_offset(client, admin):
    resp = client.get("/api/fir/all?offset=-1", headers=admin["headers"])
    assert resp.status_code == 400


def test_update_status_records_history_and_notifies(client, citizen, officer):
    filed = _file_fir(client, citizen["headers"])
    resp = client.put(
        f"/api/fir/update-status/{filed['fir_id']}",
        json={"status": "Under Investigation", "remarks": "Assigned to SI Patil"},
        headers=officer["headers"],
    )
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"message": "FIR status updated successfully"}

    client.put(
        f"/api/fir/update-status/{filed['fir_id']}",
        json={"status": "Closed"},
        headers=officer["headers"],
    )

    tracked = client.get(f"/api/fir/track/{filed['fir_number']}", headers=citizen["headers"]).json()
    assert tracked["fir"]["status"] == "Closed"
    history = tracked["history"]
    assert [(h["old_status"], h["new_status"]) for h in history] == [
        ("Under Investigation", "Closed"),
        ("Pending", "Under Investigation"),
    ]
    assert history[1]["remarks"] == "Assigned to SI Patil"
    assert history[0]["remarks"] == ""
    assert history[0]["changed_by"] == officer["user_id"]

    with SessionLocal() as db:
        messages = [
            n.message
            for n in db.query(Notification)
            .filter(Notification.user_id == citizen["user_id"])
            .order_by(Notification.notification_id)
            .all()
        ]
    assert messages[-1] == f"Your FIR {filed['fir_number']} status changed to Closed"
    assert len(messages) == 3


def test_update_status_rejects_unknown_status(client, citizen, admin):
    filed = _file_fir(client, citizen["headers"])
    resp = client.put(
        f"/api/fir/update-status/{filed['fir_id']}",
        json={"status": "Teleported"},
        headers=admin["headers"],
    )
    assert resp.status_code == 400
    with SessionLocal() as db:
        assert db.query(FirStatusHistory).count() == 0


def test_update_status_missing_fir(client, admin):
    resp = client.put("/api/fir/update-status/999", json={"status": "Active"}, headers=admin["headers"])
    assert resp.status_code == 404


def test_update_status_requires_staff(client, citizen):
    filed = _file_fir(client, citizen["headers"])
    resp = client.put(
        f"/api/fir/update-status/{filed['fir_id']}",
        json={"status": "Closed"},
        headers=citizen["headers"],
    )
    assert resp.status_code == 403


def test_every_stored_status_is_accepted_for_updates():
    for status in FIR_STATUSES:
        assert FirStatusUpdate(status=status).status == status
    for status in COMPLAINT_STATUSES:
        assert ComplaintStatusUpdate(status=status).status == status
    for status in STAFF_ALERT_STATUSES:
        assert EmergencyStatusUpdate(status=status).status == status
    with pytest.raises(ValidationError):
        EmergencyStatusUpdate(status="active")
