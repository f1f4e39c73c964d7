"""
Authentication endpoints for the Rakshak portal.

Citizens register with username, email and mobile, then log in with
either their username or email to receive a bearer token.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.auth import UserContext, get_current_user
from ...core.db import get_db
from ...core.errors import db_failure
from ...core.security import create_access_token, hash_password, needs_rehash, verify_password
from ...models.user import User
from ...schemas.auth import LoginIn, RegisterIn, UserProfileOut, UserSummary


router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger("auth")


def _find_by_login(db: Session, login: str) -> User | None:
    value = login.strip().lower()
    return (
        db.query(User)
        .filter(or_(func.lower(User.username) == value, func.lower(User.email) == value))
        .first()
    )


@router.post("/register", status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)) -> dict:
    username = payload.username
    email = payload.email.lower()
    if " " in username:
        raise HTTPException(status_code=400, detail="username cannot contain spaces")
    try:
        existing = (
            db.query(User.user_id)
            .filter(or_(func.lower(User.email) == email, func.lower(User.username) == username.lower()))
            .first()
        )
        if existing:
            raise HTTPException(status_code=400, detail="User already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(payload.password),
            full_name=payload.full_name,
            mobile=payload.mobile,
            address=payload.address or "",
            user_type="citizen",
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same username or email.
        db.rollback()
        raise HTTPException(status_code=400, detail="User already exists")
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Registration failed", exc=exc, extra={"username": username})

    logger.info("Registered citizen user_id=%s username=%s", user.user_id, user.username)
    return {"message": "Registration successful", "user_id": user.user_id}


@router.post("/login")
def login(payload: LoginIn, db: Session = Depends(get_db)) -> dict:
    try:
        user = _find_by_login(db, payload.username)
        if not user or not user.is_active:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        if not verify_password(payload.password, user.password_hash):
            raise HTTPException(status_code=401, detail="Invalid credentials")

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(payload.password)
        user.last_login = datetime.now(timezone.utc)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Login failed", exc=exc)

    token = create_access_token(sub=user.username, user_id=user.user_id, user_type=user.user_type)
    return {
        "message": "Login successful",
        "token": token,
        "token_type": "bearer",
        "user": UserSummary.model_validate(user).model_dump(),
    }


@router.get("/me", response_model=UserProfileOut)
def me(
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> User:
    account = db.get(User, user.user_id)
    if not account or not account.is_active:
        raise HTTPException(status_code=404, detail="User not found")
    return account
