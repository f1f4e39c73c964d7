import random
import re
from datetime import date

from rakshak.core.db import SessionLocal
from rakshak.models.fir import Fir
from rakshak.services import reference_numbers
from rakshak.services.reference_numbers import (
    format_reference_number,
    generate_reference_number,
    next_complaint_number,
    next_fir_number,
)


def test_format_uses_last_six_digits_and_padded_suffix():
    assert format_reference_number("FIR", 1760700123456, 7) == "FIR123456007"
    assert format_reference_number("CMP", 1760700123456, 999) == "CMP123456999"


def test_generate_with_fixed_clock():
    number = generate_reference_number("FIR", clock=lambda: 1760700.654321, rng=random.Random(3))
    assert number.startswith("FIR700654")
    assert re.fullmatch(r"FIR\d{9}", number)


def test_next_numbers_have_prefixes():
    with SessionLocal() as db:
        assert next_fir_number(db).startswith("FIR")
        assert next_complaint_number(db).startswith("CMP")


def test_clash_draws_a_new_number(citizen, monkeypatch):
    with SessionLocal() as db:
        db.add(
            Fir(
                fir_number="FIR111111111",
                user_id=citizen["user_id"],
                complainant_name="Asha",
                mobile="1",
                email="",
                address="addr",
                crime_type="Theft",
                incident_details="details",
                incident_date=date(2026, 10, 1),
                incident_location="loc",
                status="Pending",
            )
        )
        db.commit()

    drawn = iter(["FIR111111111", "FIR222222222"])
    monkeypatch.setattr(reference_numbers, "generate_reference_number", lambda prefix, rng=None: next(drawn))
    with SessionLocal() as db:
        assert next_fir_number(db) == "FIR222222222"
