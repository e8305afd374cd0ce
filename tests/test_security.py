"""
Unit tests for bearer-token handling (compass.core.security, compass.api.deps).

Tests cover:
- Token creation / verification with the configured secret and audience
- Rejection of blank, tampered, expired and wrong-audience tokens
- get_current_user: claims mapped onto CurrentUser, failures as 401
"""

import time
import uuid

import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from compass.api.deps import get_current_user
from compass.core.config import settings
from compass.core.exceptions import AuthenticationError
from compass.core.security import create_access_token, decode_access_token

from .conftest import USER_ID


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestTokens:
    def test_round_trip_claims(self):
        token = create_access_token(user_id=USER_ID, email="a@b.co")

        claims = decode_access_token(token)

        assert claims["sub"] == str(USER_ID)
        assert claims["aud"] == settings.AUTH_JWT_AUDIENCE
        assert claims["email"] == "a@b.co"
        assert claims["role"] == "authenticated"
        assert claims["exp"] > claims["iat"]

    def test_blank_token_rejected(self):
        with pytest.raises(ValueError, match="token_blank"):
            decode_access_token("")

    def test_blank_secret_rejected(self):
        with pytest.raises(ValueError, match="jwt_secret_blank"):
            create_access_token(user_id=USER_ID, secret="")

    def test_tampered_token_rejected(self):
        token = create_access_token(user_id=USER_ID)
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))

    def test_wrong_audience_rejected(self):
        token = jwt.encode(
            {"sub": str(USER_ID), "aud": "someone-else"},
            settings.AUTH_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidAudienceError):
            decode_access_token(token)

    def test_expired_token_rejected(self):
        token = jwt.encode(
            {"sub": str(USER_ID), "aud": settings.AUTH_JWT_AUDIENCE, "exp": int(time.time()) - 10},
            settings.AUTH_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_valid_token(self):
        token = create_access_token(user_id=USER_ID, email="a@b.co", role="admin")

        user = await get_current_user(_bearer(token))

        assert user.id == USER_ID
        assert user.email == "a@b.co"
        assert user.role == "admin"

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None)
        assert exc_info.value.reason == "missing_token"

    @pytest.mark.asyncio
    async def test_expired(self):
        token = jwt.encode(
            {"sub": str(USER_ID), "aud": settings.AUTH_JWT_AUDIENCE, "exp": int(time.time()) - 10},
            settings.AUTH_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(token))
        assert exc_info.value.reason == "token_expired"

    @pytest.mark.asyncio
    async def test_missing_subject(self):
        token = jwt.encode(
            {"aud": settings.AUTH_JWT_AUDIENCE}, settings.AUTH_JWT_SECRET, algorithm="HS256"
        )
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(token))
        assert exc_info.value.reason == "invalid_subject"

    @pytest.mark.asyncio
    async def test_non_uuid_subject(self):
        token = create_access_token(user_id=uuid.uuid4())
        claims = decode_access_token(token)
        claims["sub"] = "user-42"
        forged = jwt.encode(claims, settings.AUTH_JWT_SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_bearer(forged))
        assert exc_info.value.reason == "invalid_subject"
