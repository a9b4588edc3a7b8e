"""
Unit Tests for password hashing and access tokens
"""
from datetime import timedelta

from app.core.security import create_access_token, decode_token, get_password_hash, verify_password


class TestPasswordHashing:

    def test_verify_round_trip(self):
        hashed = get_password_hash("testpassword123")
        assert hashed != "testpassword123"
        assert verify_password("testpassword123", hashed)
        assert not verify_password("wrongpassword", hashed)

    def test_salted(self):
        assert get_password_hash("same-password") != get_password_hash("same-password")


class TestAccessTokens:

    def test_subject_round_trip(self):
        payload = decode_token(create_access_token(42))
        assert payload["sub"] == "42"
        assert payload["type"] == "access"

    def test_expired_token_rejected(self):
        token = create_access_token(42, expires_delta=timedelta(minutes=-1))
        assert decode_token(token) is None

    def test_garbage_rejected(self):
        assert decode_token("not-a-token") is None
