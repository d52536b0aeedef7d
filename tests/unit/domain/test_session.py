"""
Unit tests for SessionClaims
"""
import pytest

from app.core.domain.session import SessionClaims


class TestSessionClaims:

    def test_payload_round_trip(self):
        claims = SessionClaims(
            subject="u1@example.com",
            name="U1",
            picture=None,
            is_admin=False,
            issued_at=1000,
            expires_at=4600,
        )
        payload = claims.to_payload()
        assert payload["sub"] == "u1@example.com"
        assert payload["exp"] == 4600
        assert SessionClaims.from_payload(payload) == claims

    def test_is_admin_must_be_boolean_true(self):
        """Test truthy non-boolean values never grant admin"""
        payload = {"sub": "x", "iat": 1, "exp": 2, "is_admin": "true"}
        assert SessionClaims.from_payload(payload).is_admin is False

    def test_expiry(self):
        claims = SessionClaims("x", "", None, False, issued_at=100, expires_at=200)
        assert not claims.is_expired(199)
        assert claims.is_expired(200)
        assert claims.expires_at_datetime.timestamp() == 200

    def test_empty_subject_rejected(self):
        with pytest.raises(ValueError):
            SessionClaims("", "", None, False, issued_at=1, expires_at=2)

    def test_expiry_must_follow_issue(self):
        with pytest.raises(ValueError):
            SessionClaims("x", "", None, False, issued_at=5, expires_at=5)
