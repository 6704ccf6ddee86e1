"""Tests for signed session tokens."""

import pytest
from itsdangerous import URLSafeTimedSerializer

from tests.conftest import SECRET_KEY, make_settings
from viralgif_engine.common.exceptions import ExpiredSessionError, InvalidSessionError
from viralgif_engine.common.security import SESSION_SALT, SessionVerifier, bearer_token


@pytest.fixture
def verifier(settings):
    return SessionVerifier(settings)


class TestSessionVerifier:
    def test_issue_and_verify(self, verifier):
        token = verifier.issue("user-42")
        assert verifier.verify(token) == "user-42"

    def test_tampered_token_rejected(self, verifier):
        token = verifier.issue("user-42")
        with pytest.raises(InvalidSessionError) as exc_info:
            verifier.verify(token[:-2] + "xx")
        assert exc_info.value.code == "INVALID_SESSION"

    def test_other_secret_rejected(self, verifier):
        foreign = SessionVerifier(make_settings(secret_key="another-secret"))
        with pytest.raises(InvalidSessionError):
            verifier.verify(foreign.issue("user-42"))

    def test_garbage_rejected(self, verifier):
        with pytest.raises(InvalidSessionError):
            verifier.verify("not-a-token")

    def test_expired_token(self):
        verifier = SessionVerifier(make_settings(session_ttl=-1))
        with pytest.raises(ExpiredSessionError) as exc_info:
            verifier.verify(verifier.issue("user-42"))
        assert exc_info.value.code == "EXPIRED_SESSION"
        assert exc_info.value.status_code == 401

    def test_payload_without_user_id_rejected(self, verifier):
        serializer = URLSafeTimedSerializer(SECRET_KEY, salt=SESSION_SALT)
        with pytest.raises(InvalidSessionError):
            verifier.verify(serializer.dumps({"sub": "user-42"}))

    def test_non_dict_payload_rejected(self, verifier):
        serializer = URLSafeTimedSerializer(SECRET_KEY, salt=SESSION_SALT)
        with pytest.raises(InvalidSessionError):
            verifier.verify(serializer.dumps(["user-42"]))


class TestBearerToken:
    @pytest.mark.parametrize("header,expected", [
        ("Bearer abc.def", "abc.def"),
        ("bearer   abc ", "abc"),
        ("Basic dXNlcjpwYXNz", None),
        ("Bearer ", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, header, expected):
        assert bearer_token(header) == expected
