"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from contentflow.core.config import get_settings
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import AuthenticationException
from contentflow.infrastructure.security.jwt import create_access_token, decode_access_token
from contentflow.infrastructure.security.password import get_password_hash, verify_password


class TestPassword:
    def test_hash_verifies(self) -> None:
        hashed = get_password_hash("correct horse battery")
        assert hashed != "correct horse battery"
        assert verify_password("correct horse battery", hashed)
        assert not verify_password("wrong", hashed)

    def test_long_passwords_differ_beyond_72_bytes(self) -> None:
        base = "x" * 80
        hashed = get_password_hash(base + "a")
        assert not verify_password(base + "b", hashed)

    def test_malformed_hash_never_matches(self) -> None:
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestAccessToken:
    def test_round_trip(self) -> None:
        token = create_access_token("user-1", "org-1", UserRole.ADMIN)
        claims = decode_access_token(token)
        assert (claims.user_id, claims.organisation_id, claims.role) == (
            "user-1",
            "org-1",
            UserRole.ADMIN,
        )

    def test_expired_token_rejected(self) -> None:
        token = create_access_token(
            "user-1", "org-1", UserRole.USER, expires_delta=timedelta(seconds=-5)
        )
        with pytest.raises(AuthenticationException):
            decode_access_token(token)

    def test_token_signed_with_other_key_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "organisation_id": "org-1", "role": "admin", "exp": 9999999999},
            "some-other-secret",
            algorithm=get_settings().algorithm,
        )
        with pytest.raises(AuthenticationException):
            decode_access_token(token)

    def test_token_without_organisation_rejected(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "user-1", "exp": 9999999999},
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        )
        with pytest.raises(AuthenticationException, match="organisation_id"):
            decode_access_token(token)
