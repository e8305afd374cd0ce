"""
Bearer-token verification.

Users sign in with the external identity provider, which issues HS256 JWTs
whose ``sub`` claim is the user's UUID and whose ``aud`` is
``settings.AUTH_JWT_AUDIENCE``.  This module only verifies those tokens;
``create_access_token`` exists for local development and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import jwt

from compass.core.config import settings


def create_access_token(
    *,
    user_id: UUID,
    email: Optional[str] = None,
    role: str = "authenticated",
    expires_minutes: int = 60,
    secret: Optional[str] = None,
) -> str:
    secret = secret if secret is not None else settings.AUTH_JWT_SECRET
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "aud": settings.AUTH_JWT_AUDIENCE,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=max(1, expires_minutes))).timestamp()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm=settings.AUTH_JWT_ALGORITHM)


def decode_access_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """
    Verify signature, expiry and audience; return the claims.

    Raises ``jwt.InvalidTokenError`` (or a subclass) when the token is
    rejected, and ``ValueError`` when token or secret is blank.
    """
    secret = secret if secret is not None else settings.AUTH_JWT_SECRET
    if not token:
        raise ValueError("token_blank")
    if not secret:
        raise ValueError("jwt_secret_blank")
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.AUTH_JWT_ALGORITHM],
        audience=settings.AUTH_JWT_AUDIENCE,
    )
