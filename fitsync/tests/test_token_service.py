from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from fitsync.application.services.token_service import JwtTokenService
from fitsync.domain.users.entities import User
from fitsync.domain.users.exceptions import ExpiredTokenError, InvalidTokenError

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _user(password_hash: str = "scrypt:32768:8:1$salt$0123456789abcdefXYZ") -> User:
    return User(
        id=42,
        name="Alice",
        email="alice@example.com",
        password_hash=password_hash,
        created_at=NOW,
    )


def test_issue_embeds_subject_and_fingerprint() -> None:
    clock = FakeClock(NOW)
    service = JwtTokenService(secret="s3cret", clock=clock)
    user = _user()

    issued = service.issue(user)
    claims = service.verify(issued.token)

    assert claims.subject == 42
    assert claims.version == user.password_hash[-10:]
    assert claims.issued_at == NOW
    assert claims.expires_at == NOW + timedelta(days=7)
    assert issued.expires_at == claims.expires_at


def test_subject_is_serialized_as_string() -> None:
    service = JwtTokenService(secret="s3cret", clock=FakeClock(NOW))
    token = service.issue(_user()).token

    payload = jwt.decode(token, options={"verify_signature": False})
    assert payload["sub"] == "42"
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600


def test_fingerprint_is_tail_of_password_hash() -> None:
    service = JwtTokenService(secret="s3cret")
    assert service.fingerprint(_user("abcdefghij0123456789")) == "0123456789"


def test_token_expires_after_ttl() -> None:
    clock = FakeClock(NOW)
    service = JwtTokenService(secret="s3cret", clock=clock)
    token = service.issue(_user()).token

    clock.now = NOW + timedelta(days=6, hours=23)
    assert service.verify(token).subject == 42

    clock.now = NOW + timedelta(days=7)
    with pytest.raises(ExpiredTokenError) as excinfo:
        service.verify(token)
    assert excinfo.value.code == "token_expired"


def test_tampered_token_is_invalid() -> None:
    service = JwtTokenService(secret="s3cret", clock=FakeClock(NOW))
    token = service.issue(_user()).token
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError) as excinfo:
        service.verify(tampered)
    assert excinfo.value.code == "invalid_token"


def test_token_signed_with_other_secret_is_invalid() -> None:
    token = JwtTokenService(secret="other", clock=FakeClock(NOW)).issue(_user()).token
    with pytest.raises(InvalidTokenError):
        JwtTokenService(secret="s3cret", clock=FakeClock(NOW)).verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_invalid(token: str) -> None:
    with pytest.raises(InvalidTokenError):
        JwtTokenService(secret="s3cret").verify(token)


def test_missing_version_claim_is_invalid() -> None:
    exp = int((NOW + timedelta(days=1)).timestamp())
    token = jwt.encode(
        {"sub": "42", "iat": int(NOW.timestamp()), "exp": exp}, "s3cret", algorithm="HS256"
    )
    with pytest.raises(InvalidTokenError):
        JwtTokenService(secret="s3cret", clock=FakeClock(NOW)).verify(token)


def test_empty_secret_is_rejected() -> None:
    with pytest.raises(ValueError):
        JwtTokenService(secret="")
