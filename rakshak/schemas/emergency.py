"""
Pydantic schemas for emergency alerts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.emergency_alert import STAFF_ALERT_STATUSES


class EmergencyAlertIn(BaseModel):
    alert_type: str = Field(..., min_length=1, max_length=64)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    location_description: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class EmergencyStatusUpdate(BaseModel):
    status: Literal[STAFF_ALERT_STATUSES]


class EmergencyAlertOut(BaseModel):
    alert_id: int
    user_id: int
    alert_type: str
    latitude: Optional[float]
    longitude: Optional[float]
    location_description: str
    status: str
    resolved_by: Optional[int] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
