"""Tests for JWT token management."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from skillswap.auth.jwt import create_access_token, verify_token
from skillswap.config import get_settings


class TestAccessToken:
    def test_create_and_verify(self):
        token = create_access_token(user_id=1, role="user")
        payload = verify_token(token, expected_type="access")
        assert payload["sub"] == "1"
        assert payload["role"] == "user"
        assert payload["type"] == "access"
        assert payload["iss"] == "skillswap"

    def test_admin_role_claim(self):
        payload = verify_token(create_access_token(user_id=2, role="admin"))
        assert payload["role"] == "admin"

    def test_signed_with_hs256(self):
        header = jwt.get_unverified_header(create_access_token(user_id=1))
        assert header["alg"] == "HS256"

    def test_wrong_type_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "type": "refresh", "iss": settings.jwt_issuer},
            settings.jwt_secret_key,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError, match="Expected token type"):
            verify_token(token, expected_type="access")

    def test_expired_token_rejected(self):
        settings = get_settings()
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "1", "type": "access", "iss": settings.jwt_issuer, "iat": past, "exp": past},
            settings.jwt_secret_key,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError, match="expired"):
            verify_token(token)

    def test_foreign_signature_rejected(self):
        token = jwt.encode(
            {"sub": "1", "type": "access", "iss": "skillswap"},
            "some-other-secret-key-that-is-long-enough",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)

    def test_wrong_issuer_rejected(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "type": "access", "iss": "someone-else"},
            settings.jwt_secret_key,
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)
