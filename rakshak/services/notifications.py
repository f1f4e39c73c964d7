"""
In-app notification helpers.

Notifications are written in the same transaction as the change they
describe, so these helpers only add rows and never commit.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.notification import Notification


def create_notification(
    db: Session,
    *,
    user_id: int,
    notification_type: str,
    title: str,
    message: str,
    reference_id: Optional[int] = None,
    reference_type: Optional[str] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        notification_type=notification_type,
        title=title,
        message=message,
        reference_id=reference_id,
        reference_type=reference_type,
        is_read=False,
    )
    db.add(notification)
    return notification


def unread_count(db: Session, user_id: int) -> int:
    return (
        db.query(func.count(Notification.notification_id))
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .scalar()
        or 0
    )
