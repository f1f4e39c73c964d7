"""
SQLAlchemy model base class for the Rakshak portal backend.

This package defines ORM models for citizens and staff, FIRs and their
status history, complaints, emergency alerts and in-app notifications.
All models inherit from the declarative `Base` defined here.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass


from .user import User  # noqa: E402,F401
from .fir import Fir, FirStatusHistory  # noqa: E402,F401
from .complaint import Complaint  # noqa: E402,F401
from .emergency_alert import EmergencyAlert  # noqa: E402,F401
from .notification import Notification  # noqa: E402,F401

__all__ = [
    "Base",
    "utcnow",

    # Accounts
    "User",

    # Case records
    "Fir",
    "FirStatusHistory",
    "Complaint",
    "EmergencyAlert",

    # Notifications
    "Notification",
]
