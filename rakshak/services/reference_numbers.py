"""
Public reference numbers for FIRs and complaints.

A number is the record prefix, the last six digits of the current epoch
milliseconds and a zero-padded three digit random suffix, e.g.
``FIR483920071``. Numbers are unique per table; a clash draws a new one.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..models.complaint import Complaint
from ..models.fir import Fir


FIR_PREFIX = "FIR"
COMPLAINT_PREFIX = "CMP"
MAX_ATTEMPTS = 5

logger = logging.getLogger("reference-numbers")


def format_reference_number(prefix: str, epoch_ms: int, suffix: int) -> str:
    stamp = str(epoch_ms)[-6:]
    return f"{prefix}{stamp}{suffix % 1000:03d}"


def generate_reference_number(
    prefix: str,
    *,
    clock: Callable[[], float] = time.time,
    rng: Optional[random.Random] = None,
) -> str:
    rand = rng or random
    return format_reference_number(prefix, int(clock() * 1000), rand.randrange(1000))


def _allocate(db: Session, prefix: str, column, *, rng: Optional[random.Random] = None) -> str:
    candidate = generate_reference_number(prefix, rng=rng)
    for _ in range(MAX_ATTEMPTS - 1):
        taken = db.query(column).filter(column == candidate).first()
        if not taken:
            return candidate
        logger.warning("Reference number clash prefix=%s number=%s", prefix, candidate)
        candidate = generate_reference_number(prefix, rng=rng)
    # Unique constraint is the last line; an insert clash surfaces as a 500.
    return candidate


def next_fir_number(db: Session, *, rng: Optional[random.Random] = None) -> str:
    return _allocate(db, FIR_PREFIX, Fir.fir_number, rng=rng)


def next_complaint_number(db: Session, *, rng: Optional[random.Random] = None) -> str:
    return _allocate(db, COMPLAINT_PREFIX, Complaint.complaint_number, rng=rng)
