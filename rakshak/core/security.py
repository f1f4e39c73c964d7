"""
Password hashing (PBKDF2-SHA256) and HS256 bearer tokens.

Stored hashes look like ``pbkdf2_sha256$<rounds>$<salt>$<hex digest>`` so
the round count can be raised later without invalidating old passwords;
``needs_rehash`` tells the login path when to upgrade one.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

HASH_SCHEME = "pbkdf2_sha256"
MIN_HASH_ROUNDS = 1000
DEFAULT_HASH_ROUNDS = 120000
REQUIRED_CLAIMS = ("sub", "user_id", "user_type", "exp")


class TokenError(ValueError):
    """Raised for any token that must not be trusted."""


def _hash_rounds() -> int:
    try:
        return max(MIN_HASH_ROUNDS, int(os.getenv("RAKSHAK_PASSWORD_HASH_ROUNDS", str(DEFAULT_HASH_ROUNDS))))
    except ValueError:
        return DEFAULT_HASH_ROUNDS


def _pbkdf2(password: str, salt: str, rounds: int) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("ascii"), rounds).hex()


def _split_hash(encoded: str) -> tuple[int, str, str] | None:
    parts = (encoded or "").split("$", 3)
    if len(parts) != 4 or parts[0] != HASH_SCHEME:
        return None
    try:
        rounds = int(parts[1])
    except ValueError:
        return None
    return rounds, parts[2], parts[3]


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    rounds = _hash_rounds()
    salt = secrets.token_hex(16)
    return f"{HASH_SCHEME}${rounds}${salt}${_pbkdf2(password, salt, rounds)}"


def verify_password(password: str, encoded: str) -> bool:
    parsed = _split_hash(encoded)
    if parsed is None:
        return False
    rounds, salt, expected = parsed
    return secrets.compare_digest(_pbkdf2(password or "", salt, rounds), expected)


def needs_rehash(encoded: str) -> bool:
    parsed = _split_hash(encoded)
    return parsed is None or parsed[0] < _hash_rounds()


def _jwt_secret() -> str:
    secret = (os.getenv("RAKSHAK_JWT_SECRET") or "").strip()
    if secret:
        return secret
    env = (os.getenv("RAKSHAK_ENV") or os.getenv("APP_ENV") or "dev").strip().lower()
    if env == "prod":
        return ""
    return "dev-jwt-secret-change-me"


def _jwt_exp_minutes() -> int:
    try:
        return max(1, int(os.getenv("RAKSHAK_JWT_EXP_MIN", "1440")))
    except ValueError:
        return 1440


def _encode_segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_segment(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def _sign(secret: str, signing_input: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def create_access_token(*, sub: str, user_id: int, user_type: str) -> str:
    secret = _jwt_secret()
    if not secret:
        raise RuntimeError("RAKSHAK_JWT_SECRET is required in prod")
    now = datetime.now(timezone.utc)
    claims = {
        "sub": sub,
        "user_id": user_id,
        "user_type": user_type,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=_jwt_exp_minutes())).timestamp()),
    }
    signing_input = f"{_encode_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_encode_segment(claims)}"
    signature = base64.urlsafe_b64encode(_sign(secret, signing_input)).rstrip(b"=").decode("ascii")
    return f"{signing_input}.{signature}"


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature, expiry and required claims; raise TokenError otherwise."""
    secret = _jwt_secret()
    if not secret:
        raise TokenError("JWT secret not configured")
    try:
        header_b64, payload_b64, signature_b64 = token.split(".")
        provided = _decode_segment(signature_b64)
        claims = json.loads(_decode_segment(payload_b64).decode("utf-8"))
        expected = _sign(secret, f"{header_b64}.{payload_b64}")
    except ValueError as exc:
        raise TokenError("Malformed token") from exc
    if not hmac.compare_digest(expected, provided):
        raise TokenError("Invalid signature")
    if not isinstance(claims, dict) or any(claims.get(name) in (None, "") for name in REQUIRED_CLAIMS):
        raise TokenError("Missing claims")
    try:
        exp = int(claims["exp"])
        claims["user_id"] = int(claims["user_id"])
    except (TypeError, ValueError) as exc:
        raise TokenError("Invalid claims") from exc
    if int(datetime.now(timezone.utc).timestamp()) >= exp:
        raise TokenError("Token expired")
    return claims
