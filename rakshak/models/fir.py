"""
ORM models for First Information Reports and their status history.
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from . import Base, utcnow


FIR_STATUSES = (
    "Pending",
    "Active",
    "Under Investigation",
    "Charge Sheet Filed",
    "Closed",
    "Rejected",
)
# Statuses counted as "active" on the dashboard.
ACTIVE_FIR_STATUSES = ("Pending", "Active", "Under Investigation")


class Fir(Base):
    __tablename__ = "fir"

    fir_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fir_number: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.user_id"), index=True)
    complainant_name: Mapped[str] = mapped_column(String(255))
    mobile: Mapped[str] = mapped_column(String(20))
    email: Mapped[str] = mapped_column(String(255), default="")
    address: Mapped[str] = mapped_column(Text)
    crime_type: Mapped[str] = mapped_column(String(64), index=True)
    incident_details: Mapped[str] = mapped_column(Text)
    incident_date: Mapped[date] = mapped_column(Date)
    incident_location: Mapped[str] = mapped_column(String(512))
    status: Mapped[str] = mapped_column(String(32), default="Pending", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class FirStatusHistory(Base):
    __tablename__ = "fir_status_history"

    history_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fir_id: Mapped[int] = mapped_column(Integer, ForeignKey("fir.fir_id", ondelete="CASCADE"), index=True)
    old_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    new_status: Mapped[str] = mapped_column(String(32))
    changed_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.user_id"), nullable=True)
    remarks: Mapped[str] = mapped_column(Text, default="")
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
