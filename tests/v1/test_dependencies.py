# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from marketchat.api.v1.dependencies import get_current_viewer
from marketchat.core.security import create_access_token, decode_subject
from marketchat.core.settings import settings


class TestDecodeSubject:
    """Test the bearer token helpers."""

    def test_round_trip(self):
        token = create_access_token("user-42")
        assert decode_subject(token) == "user-42"

    def test_garbage_token(self):
        assert decode_subject("invalid_token") is None

    def test_expired_token(self):
        token = jwt.encode(
            {"sub": "user-42", "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        assert decode_subject(token) is None

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "user-42"}, "another-secret", algorithm=settings.jwt_algorithm)
        assert decode_subject(token) is None

    def test_missing_subject(self):
        token = jwt.encode({"scope": "chat"}, settings.secret_key, algorithm=settings.jwt_algorithm)
        assert decode_subject(token) is None


class TestGetCurrentViewer:
    """Test the get_current_viewer dependency function."""

    @pytest.mark.asyncio
    async def test_known_user(self, db_session, marketplace):
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer", credentials=create_access_token(marketplace["alice"])
        )

        assert await get_current_viewer(credentials, db_session) == marketplace["alice"]

    @pytest.mark.asyncio
    async def test_invalid_jwt(self, db_session, marketplace):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid_token")

        with pytest.raises(HTTPException) as exc_info:
            await get_current_viewer(credentials, db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Could not validate credentials" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session, marketplace):
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer", credentials=create_access_token("ghost")
        )

        with pytest.raises(HTTPException) as exc_info:
            await get_current_viewer(credentials, db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "User not found"
