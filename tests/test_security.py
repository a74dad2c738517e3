"""Tests for bearer tokens and password hashing."""

from datetime import timedelta
from uuid import uuid4

import pytest

from app.core.exceptions import UnauthenticatedError
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestAccessToken:
    def test_round_trip_identity(self):
        user_id = uuid4()
        token = create_access_token(user_id, "alice", "alice@example.com")

        user = decode_access_token(token)

        assert user.id == user_id
        assert user.username == "alice"
        assert user.email == "alice@example.com"

    def test_expired_token(self):
        token = create_access_token(
            uuid4(), "alice", "alice@example.com", expires_in=timedelta(seconds=-10)
        )
        with pytest.raises(UnauthenticatedError):
            decode_access_token(token)

    def test_tampered_token(self):
        token = create_access_token(uuid4(), "alice", "alice@example.com")
        with pytest.raises(UnauthenticatedError):
            decode_access_token(
                token[:-4] + ("BBBB" if token.endswith("AAAA") else "AAAA")
            )

    def test_garbage_token(self):
        with pytest.raises(UnauthenticatedError):
            decode_access_token("not-a-jwt")


class TestPasswordHash:
    def test_verify(self):
        hashed = hash_password("s3cret")
        assert hashed.startswith("pbkdf2_sha256$")
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash(self):
        assert not verify_password("s3cret", "plaintext")
