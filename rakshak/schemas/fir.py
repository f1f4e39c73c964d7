"""
Pydantic schemas for FIR filing, tracking and status updates.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.fir import FIR_STATUSES


FirStatus = Literal[FIR_STATUSES]


class FirCreate(BaseModel):
    complainant_name: str = Field(..., min_length=1, max_length=255)
    mobile: str = Field(..., min_length=1, max_length=20)
    email: Optional[str] = Field(default=None, max_length=255)
    address: str = Field(..., min_length=1)
    crime_type: str = Field(..., min_length=1, max_length=64)
    incident_details: str = Field(..., min_length=1)
    incident_date: date
    incident_location: str = Field(..., min_length=1, max_length=512)

    model_config = ConfigDict(str_strip_whitespace=True)


class FirStatusUpdate(BaseModel):
    status: FirStatus
    remarks: Optional[str] = None


class FirOut(BaseModel):
    fir_id: int
    fir_number: str
    user_id: int
    complainant_name: str
    mobile: str
    email: str
    address: str
    crime_type: str
    incident_details: str
    incident_date: date
    incident_location: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FirHistoryOut(BaseModel):
    history_id: int
    fir_id: int
    old_status: Optional[str]
    new_status: str
    changed_by: Optional[int]
    remarks: str
    changed_at: datetime

    model_config = ConfigDict(from_attributes=True)
