"""
Pydantic schemas for registration, login and the account profile.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterIn(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=256)
    full_name: str = Field(..., min_length=1, max_length=255)
    mobile: str = Field(..., min_length=1, max_length=20)
    address: Optional[str] = None

    # Passwords are stored exactly as typed; login compares them unstripped.
    @field_validator("username", "email", "full_name", "mobile", "address", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginIn(BaseModel):
    # Accepts either the username or the email address.
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserSummary(BaseModel):
    user_id: int
    username: str
    full_name: str
    email: str
    user_type: str

    model_config = ConfigDict(from_attributes=True)


class UserProfileOut(UserSummary):
    mobile: str
    address: str
    created_at: datetime
    last_login: Optional[datetime] = None
