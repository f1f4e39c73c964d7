"""
Shared error-handling helpers for the API.

Every error leaves the service as ``{"error": "<message>"}`` so clients
written against the portal can read one field regardless of the failure.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException


VALIDATION_MESSAGE = "All required fields must be filled"


def _format_extra(extra: dict | None) -> str:
    if not extra:
        return ""
    parts: list[str] = []
    for key, value in extra.items():
        if value is None:
            continue
        parts.append(f"{key}={value}")
    return f" {' '.join(parts)}" if parts else ""


def log_exception(logger: logging.Logger, msg: str, *, extra: dict | None = None, exc: Exception | None = None) -> None:
    """
    Log an exception with context. Uses logger.exception for stack traces.
    """
    suffix = _format_extra(extra)
    if exc is not None:
        logger.error(f"{msg}{suffix}: {exc}", exc_info=exc)
        return
    logger.exception(f"{msg}{suffix}")


def db_failure(
    db: Session,
    logger: logging.Logger,
    message: str,
    *,
    exc: Exception,
    extra: dict | None = None,
) -> HTTPException:
    """
    Roll back the session, log the failure and build the 500 to raise.
    """
    db.rollback()
    log_exception(logger, message, extra=extra, exc=exc)
    return HTTPException(status_code=500, detail=message)


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({_field_name(err.get("loc", ())) for err in exc.errors()})
    return JSONResponse(status_code=400, content={"error": VALIDATION_MESSAGE, "fields": fields})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
