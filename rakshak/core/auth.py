"""
Bearer token authentication and role gates shared by protected routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, Depends
from ..models.user import STAFF_TYPES
from .security import TokenError, decode_access_token


@dataclass
class UserContext:
    user_id: int
    username: str
    user_type: str

    @property
    def is_staff(self) -> bool:
        return self.user_type in STAFF_TYPES


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    if not authorization.lower().startswith("bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def get_current_user(authorization: Optional[str] = Header(None)) -> UserContext:
    token = _extract_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Access token required")
    try:
        claims = decode_access_token(token)
    except TokenError:
        raise HTTPException(status_code=403, detail="Invalid or expired token")
    return UserContext(
        user_id=claims["user_id"],
        username=str(claims["sub"]).strip(),
        user_type=str(claims["user_type"]).strip().lower(),
    )


def require_roles(*roles: str, detail: str = "Forbidden"):
    def _dep(user: UserContext = Depends(get_current_user)):
        allowed = {r.strip().lower() for r in roles if r and r.strip()}
        if allowed and user.user_type not in allowed:
            raise HTTPException(status_code=403, detail=detail)
        return user

    return _dep


require_admin = require_roles(*sorted(STAFF_TYPES), detail="Admin access required")
