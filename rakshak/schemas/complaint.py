"""
Pydantic schemas for grievances.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.complaint import COMPLAINT_STATUSES


ComplaintStatus = Literal[COMPLAINT_STATUSES]


class ComplaintCreate(BaseModel):
    complainant_name: str = Field(..., min_length=1, max_length=255)
    contact: str = Field(..., min_length=1, max_length=255)
    complaint_type: str = Field(..., min_length=1, max_length=64)
    complaint_details: str = Field(..., min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True)


class ComplaintStatusUpdate(BaseModel):
    status: ComplaintStatus
    resolution_details: Optional[str] = None


class ComplaintOut(BaseModel):
    complaint_id: int
    complaint_number: str
    user_id: int
    complainant_name: str
    contact: str
    complaint_type: str
    complaint_details: str
    status: str
    resolution_details: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
