"""
Bootstrap the portal administrator from RAKSHAK_ADMIN_* settings.

An existing account with the same username or email is promoted instead of
duplicated; its password is left untouched.
"""

from __future__ import annotations

import logging
import os

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..core.security import hash_password
from ..models.user import User


logger = logging.getLogger("auth-seed")


def _admin_env(name: str, default: str = "") -> str:
    return (os.getenv(f"RAKSHAK_ADMIN_{name}") or default).strip()


def seed_admin_user(db: Session) -> None:
    username = _admin_env("USERNAME", "admin")
    password = _admin_env("PASSWORD")
    if not username or not password:
        logger.warning("Skipping admin seed: RAKSHAK_ADMIN_USERNAME/RAKSHAK_ADMIN_PASSWORD not set")
        return
    email = _admin_env("EMAIL", f"{username}@rakshak.local").lower()

    account = (
        db.query(User)
        .filter(or_(func.lower(User.username) == username.lower(), func.lower(User.email) == email))
        .first()
    )
    if account is None:
        db.add(
            User(
                username=username,
                email=email,
                password_hash=hash_password(password),
                full_name=_admin_env("FULL_NAME", "Portal Administrator"),
                mobile=_admin_env("MOBILE"),
                address="",
                user_type="admin",
                is_active=True,
            )
        )
        db.commit()
        logger.info("Admin account created username=%s", username)
        return

    if account.user_type == "admin" and account.is_active:
        return
    account.user_type = "admin"
    account.is_active = True
    db.commit()
    logger.info("Promoted user_id=%s username=%s to admin", account.user_id, account.username)
