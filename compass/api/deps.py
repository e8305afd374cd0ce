"""
Shared FastAPI dependencies.

``get_current_user`` guards every ``/api/v1`` route.  It is attached at
router level, so a missing or rejected token yields 401 before the request
body is even parsed.
"""

import logging
from typing import Optional
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from compass.core.exceptions import AuthenticationError
from compass.core.security import decode_access_token
from compass.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> CurrentUser:
    """Resolve the caller from the ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("missing_token")

    try:
        claims = decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("token_expired") from None
    except (jwt.InvalidTokenError, ValueError) as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise AuthenticationError("invalid_token") from None

    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError:
        raise AuthenticationError("invalid_subject") from None

    return CurrentUser(
        id=user_id,
        email=claims.get("email"),
        role=claims.get("role") or "authenticated",
    )
