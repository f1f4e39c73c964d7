"""Reject oversized JSON bodies before they reach route handlers."""

from __future__ import annotations

import os
from typing import Optional

from fastapi import HTTPException, Request

DEFAULT_MAX_JSON_BODY_BYTES = 1024 * 1024
BODYLESS_METHODS = {"GET", "HEAD", "OPTIONS", "DELETE"}


def max_json_body_bytes() -> int:
    try:
        val = int(os.getenv("MAX_JSON_BODY_BYTES", str(DEFAULT_MAX_JSON_BODY_BYTES)))
    except ValueError:
        val = DEFAULT_MAX_JSON_BODY_BYTES
    return max(val, 1024)


def _declared_length(request: Request) -> Optional[int]:
    try:
        return int(request.headers["content-length"])
    except (KeyError, ValueError):
        return None


async def enforce_json_body_limit(request: Request) -> None:
    if request.method in BODYLESS_METHODS:
        return
    limit = max_json_body_bytes()
    declared = _declared_length(request)
    if declared is not None and declared > limit:
        raise HTTPException(status_code=413, detail="Payload too large")
    # Chunked uploads carry no Content-Length; measure what actually arrived.
    if declared is None and len(await request.body()) > limit:
        raise HTTPException(status_code=413, detail="Payload too large")
