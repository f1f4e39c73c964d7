"""
In-memory rate limiting (per-process token buckets).

Buckets are keyed by caller (token hash or client address) and route
group. Login and registration get a tighter bucket; SOS alerts are
never throttled.
"""

from __future__ import annotations

import hashlib
import os
import threading
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, Request

from .config import get_app_env


UNTHROTTLED_GROUPS = {"/api/emergency", "/api/health"}
STRICT_GROUPS = {"/api/auth"}


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None:
        return None
    val = raw.strip().lower()
    if val in {"1", "true", "yes"}:
        return True
    if val in {"0", "false", "no"}:
        return False
    return None


def _env_float(name: str, default: float, minimum: float) -> float:
    try:
        val = float(os.getenv(name, str(default)))
    except Exception:
        val = default
    return max(val, minimum)


def rate_limit_enabled() -> bool:
    explicit = _env_bool("RATE_LIMIT_ENABLED")
    if explicit is not None:
        return explicit
    return get_app_env() == "prod"


@dataclass(frozen=True)
class Limit:
    rps: float
    burst: int


def limit_for(group: str) -> Limit:
    if group in STRICT_GROUPS:
        return Limit(
            rps=_env_float("RATE_LIMIT_AUTH_RPS", 1.0, 0.01),
            burst=int(_env_float("RATE_LIMIT_AUTH_BURST", 5, 1)),
        )
    return Limit(
        rps=_env_float("RATE_LIMIT_RPS", 5.0, 0.1),
        burst=int(_env_float("RATE_LIMIT_BURST", 20, 1)),
    )


def path_group(path: str) -> str:
    parts = [p for p in path.split("/") if p]
    if len(parts) >= 2 and parts[0] == "api":
        return f"/api/{parts[1]}"
    if parts:
        return f"/{parts[0]}"
    return "/"


def caller_identity(request: Request, authorization: Optional[str]) -> str:
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        if token:
            return hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]
    return request.client.host if request.client else "unknown"


@dataclass
class Bucket:
    tokens: float
    last_ts: float


class TokenBucketLimiter:
    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets: dict[str, Bucket] = {}

    def allow(self, key: str, limit: Limit) -> tuple[bool, float]:
        """Take one token for ``key``; returns (allowed, seconds until retry)."""
        now = self._clock()
        with self._lock:
            bucket = self._buckets.setdefault(key, Bucket(tokens=float(limit.burst), last_ts=now))
            elapsed = max(0.0, now - bucket.last_ts)
            bucket.tokens = min(float(limit.burst), bucket.tokens + elapsed * limit.rps)
            bucket.last_ts = now
            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                return True, 0.0
            return False, max((1.0 - bucket.tokens) / limit.rps, 0.1)

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()


limiter = TokenBucketLimiter()


def rate_limit_dependency(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> None:
    if not rate_limit_enabled():
        return
    group = path_group(request.url.path)
    if group in UNTHROTTLED_GROUPS:
        return

    key = f"{caller_identity(request, authorization)}:{group}"
    allowed, retry_after = limiter.allow(key, limit_for(group))
    if not allowed:
        raise HTTPException(
            status_code=429,
            detail="Too Many Requests",
            headers={"Retry-After": str(max(1, int(retry_after + 0.999)))},
        )
