"""
Health endpoint for load balancers and uptime checks.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ...core import db as db_module
from ...core.errors import log_exception


router = APIRouter(prefix="/api/health", tags=["health"])
logger = logging.getLogger("health")


@router.get("")
def health() -> JSONResponse:
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db_module.ping_database()
    except SQLAlchemyError as exc:
        log_exception(logger, "Database health check failed", exc=exc)
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "database": "unavailable", "timestamp_utc": timestamp},
        )
    return JSONResponse(content={"status": "ok", "database": "connected", "timestamp_utc": timestamp})
