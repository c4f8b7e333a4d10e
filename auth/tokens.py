"""
JWT creation and verification.

Tokens are HS256-signed JWTs carrying ``user_id`` and ``email``.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import HTTPException, status

from config.settings import config

_REQUIRED_CLAIMS = ["exp", "user_id", "email"]


def create_token(
    user_id: str,
    email: str,
    *,
    expires_in: Optional[int] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed token containing ``user_id``, ``email`` and expiry."""
    issued_at = now or datetime.now(timezone.utc)
    ttl = timedelta(seconds=expires_in if expires_in is not None else config.jwt_expiry_seconds)
    payload: Dict[str, Any] = {
        "user_id": user_id,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a token; raises ``jwt.InvalidTokenError`` subclasses."""
    return jwt.decode(
        token,
        config.jwt_secret,
        algorithms=[config.jwt_algorithm],
        options={"require": _REQUIRED_CLAIMS},
    )


def verify_token(token: str) -> str:
    """
    Verify token and return ``user_id``.

    Raises ``HTTPException(401)`` on invalid or expired tokens.
    """
    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired.",
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token.",
        )
    return str(payload["user_id"])
