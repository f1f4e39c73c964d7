"""
In-app notification inbox for the signed-in user.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.auth import UserContext, get_current_user
from ...core.db import get_db
from ...core.errors import db_failure
from ...core.pagination import PageParams, page_params, paginate
from ...models.notification import Notification
from ...schemas.notifications import NotificationOut
from ...services.notifications import unread_count


router = APIRouter(prefix="/api/notifications", tags=["notifications"])
logger = logging.getLogger("notifications")


@router.get("/my")
def my_notifications(
    response: Response,
    unread_only: bool = Query(False),
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        query = db.query(Notification).filter(Notification.user_id == user.user_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        items, _ = paginate(
            query.order_by(Notification.created_at.desc(), Notification.notification_id.desc()), page, response
        )
        unread = unread_count(db, user.user_id)
    except SQLAlchemyError as exc:
        raise db_failure(db, logger, "Failed to fetch notifications", exc=exc, extra={"user_id": user.user_id})
    return {
        "notifications": [NotificationOut.model_validate(n).model_dump(mode="json") for n in items],
        "unread": unread,
    }


@router.put("/{notification_id}/read")
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    user: UserContext = Depends(get_current_user),
) -> dict:
    try:
        notification = db.get(Notification, notification_id)
        if not notification or notification.user_id != user.user_id:
            raise HTTPException(status_code=404, detail="Notification not found")
        if not notification.is_read:
            notification.is_read = True
            db.commit()
    except SQLAlchemyError as exc:
        raise db_failure(
            db, logger, "Failed to update notification", exc=exc, extra={"notification_id": notification_id}
        )
    return {"message": "Notification marked as read", "notification_id": notification_id}
