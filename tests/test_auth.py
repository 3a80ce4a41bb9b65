import time

import pytest

from bookshelf.auth import SessionAuthenticator, check_password, hash_password
from bookshelf.errors import AuthFailure

SEVEN_DAYS = 7 * 24 * 60 * 60


@pytest.fixture
def authenticator():
    return SessionAuthenticator("auth-test-secret", max_age=SEVEN_DAYS)


def test_hash_password_never_stores_plaintext():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert hashed.startswith("pbkdf2:sha256:600000$")
    assert check_password(hashed, "correct horse")
    assert not check_password(hashed, "wrong horse")
    assert not check_password("", "correct horse")


def test_issue_then_verify_returns_user_id(authenticator):
    token = authenticator.issue(42)

    assert authenticator.verify(token) == 42


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_verify_rejects_missing_or_malformed_tokens(authenticator, token):
    with pytest.raises(AuthFailure):
        authenticator.verify(token)


def test_verify_rejects_tampered_token(authenticator):
    token = authenticator.issue(42)
    tampered = token[:-2] + ("AA" if not token.endswith("AA") else "BB")

    with pytest.raises(AuthFailure):
        authenticator.verify(tampered)


def test_verify_rejects_token_signed_with_another_secret(authenticator):
    token = SessionAuthenticator("some-other-secret").issue(42)

    with pytest.raises(AuthFailure):
        authenticator.verify(token)


def test_token_older_than_seven_days_is_rejected(authenticator, monkeypatch):
    now = time.time()
    with monkeypatch.context() as m:
        m.setattr(time, "time", lambda: now - SEVEN_DAYS - 60)
        token = authenticator.issue(42)

    with pytest.raises(AuthFailure):
        authenticator.verify(token)


def test_token_just_under_seven_days_is_accepted(authenticator, monkeypatch):
    now = time.time()
    with monkeypatch.context() as m:
        m.setattr(time, "time", lambda: now - SEVEN_DAYS + 60)
        token = authenticator.issue(42)

    assert authenticator.verify(token) == 42


def test_non_integer_payload_is_rejected(authenticator):
    token = authenticator._serializer.dumps({"uid": "42"})

    with pytest.raises(AuthFailure):
        authenticator.verify(token)


def test_secret_is_required():
    with pytest.raises(ValueError):
        SessionAuthenticator("")
